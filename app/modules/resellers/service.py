from typing import Optional

from app.core.authorization import Actor
from app.core.roles import Role
from app.core.schemas import PaginatedResponse
from app.modules.resellers.schemas import ResellerCreate
from app.modules.users.schemas import ProfileResponse
from app.modules.users.service import AccountService


class ResellerService(AccountService):
    label = "Reseller"

    def list_resellers(
        self,
        actor: Actor,
        page: int,
        limit: int,
        offset: int,
        search: Optional[str] = None,
    ) -> PaginatedResponse:
        """Admins see every reseller; resellers see the ones they referred"""
        referred_by = None if actor.is_admin else actor.id
        return self.list_profiles(page, limit, offset, with_role=Role.RESELLER, referred_by=referred_by, search=search)

    def list_reseller_consumers(
        self,
        reseller_id: str,
        page: int,
        limit: int,
        offset: int,
        search: Optional[str] = None,
    ) -> PaginatedResponse:
        return self.list_profiles(page, limit, offset, with_role=Role.CONSUMER, referred_by=reseller_id, search=search)

    def create_reseller(self, actor: Actor, data: ResellerCreate) -> ProfileResponse:
        if actor.is_admin:
            referred_by = data.referred_by
            if referred_by:
                self.ensure_reseller(referred_by)
        else:
            referred_by = actor.id
        return self.create_account(data, [Role.RESELLER], referred_by=referred_by)
