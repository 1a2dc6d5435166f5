import logging
from typing import List, Optional

from app.core.authorization import Actor
from app.core.roles import Role
from app.core.schemas import PaginatedResponse
from app.modules.consumers.schemas import ConsumerCreate, ConsumerUpdate, ConsumerResponse
from app.modules.users.service import AccountService

logger = logging.getLogger(__name__)


class ConsumerService(AccountService):
    label = "Consumer"

    def list_consumers(
        self,
        actor: Actor,
        page: int,
        limit: int,
        offset: int,
        account_status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> PaginatedResponse:
        """Admins see every consumer; resellers see only the ones they referred"""
        referred_by = None if actor.is_admin else actor.id
        return self.list_profiles(
            page, limit, offset,
            with_role=Role.CONSUMER,
            referred_by=referred_by,
            account_status=account_status,
            search=search,
        )

    def product_ids(self, user_id: str) -> List[str]:
        try:
            result = self.supabase.table("user_product_access")\
                .select("product_id")\
                .eq("user_id", user_id)\
                .execute()
            return [row["product_id"] for row in result.data or []]
        except Exception as e:
            logger.warning(f"Could not load product access for {user_id}: {e}")
            return []

    def set_product_access(self, user_id: str, product_ids: List[str]) -> None:
        """Replace the consumer's product access; failures are logged, not raised"""
        try:
            self.admin_supabase.table("user_product_access")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()
            if product_ids:
                self.admin_supabase.table("user_product_access")\
                    .insert([{"user_id": user_id, "product_id": p} for p in product_ids])\
                    .execute()
        except Exception as e:
            logger.warning(f"Failed to update product access for {user_id}: {e}")

    def create_consumer(self, actor: Actor, data: ConsumerCreate) -> ConsumerResponse:
        if actor.is_admin:
            referred_by = data.referred_by
            if referred_by:
                self.ensure_reseller(referred_by)
        else:
            referred_by = actor.id
        profile = self.create_account(
            data, [Role.CONSUMER], referred_by=referred_by, trial_expiry=data.trial_expiry_date
        )
        if data.subscribed_products:
            self.set_product_access(profile.user_id, data.subscribed_products)
        return ConsumerResponse(**profile.model_dump(), subscribed_products=self.product_ids(profile.user_id))

    def get_consumer(self, user_id: str) -> ConsumerResponse:
        profile = self.get_profile(user_id)
        return ConsumerResponse(**profile.model_dump(), subscribed_products=self.product_ids(user_id))

    def update_consumer(self, user_id: str, data: ConsumerUpdate) -> ConsumerResponse:
        extra = None
        if "trial_expiry_date" in data.model_fields_set:
            trial_expiry = data.trial_expiry_date
            extra = {"trial_expiry": trial_expiry.isoformat() if trial_expiry else None}
        profile = self.update_profile(user_id, data, extra=extra)
        if data.subscribed_products is not None:
            self.set_product_access(user_id, data.subscribed_products)
        return ConsumerResponse(**profile.model_dump(), subscribed_products=self.product_ids(user_id))

    def delete_consumer(self, user_id: str) -> bool:
        self.set_product_access(user_id, [])
        return self.delete_account(user_id)
