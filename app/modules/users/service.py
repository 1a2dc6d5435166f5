import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from supabase import Client

from app.config import settings
from app.core.passwords import generate_password
from app.core.roles import AccountStatus, Role, roles_to_storage
from app.core.schemas import PaginatedResponse, paginated_response
from app.core.validation import check_phone, format_phone, is_valid_search_term, is_valid_uuid, sanitize_string
from app.modules.users.schemas import (
    AccountCreate, ProfileResponse, ProfileUpdate, ResetPasswordResponse, UserCreate, UserUpdate,
)

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = (
    "user_id, email, full_name, phone, country, city, avatar_url, role, "
    "account_status, referred_by, trial_expiry, created_at, updated_at"
)
# Columns a profile update may touch; subclasses of ProfileUpdate carry extra non-column fields
PROFILE_FIELDS = set(ProfileUpdate.model_fields)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _error_message(error: Exception) -> str:
    return getattr(error, "message", None) or str(error)


def trial_expiry_for_status(status: AccountStatus, requested: Optional[datetime]) -> Optional[datetime]:
    """Return the new trial expiry for a status change, or None to leave it as is."""
    if status == AccountStatus.EXPIRED_SUBSCRIPTION:
        return _now()
    if status == AccountStatus.ACTIVE:
        return requested or _now() + timedelta(days=settings.trial_extension_days)
    return None


class AccountService:
    """Operations shared by every profile-backed account (users, consumers, resellers)"""

    label = "User"

    def __init__(self, supabase: Client, admin_supabase: Client):
        self.supabase = supabase
        self.admin_supabase = admin_supabase

    def _not_found(self) -> HTTPException:
        return HTTPException(status_code=404, detail=f"{self.label} not found")

    def list_profiles(
        self,
        page: int,
        limit: int,
        offset: int,
        with_role: Optional[Role] = None,
        without_role: Optional[Role] = None,
        referred_by: Optional[str] = None,
        account_status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> PaginatedResponse:
        """List one page of profiles, newest first, with optional filters"""
        search = search.strip() if search else None
        if search and not is_valid_search_term(search):
            raise HTTPException(status_code=400, detail="Invalid search term")
        if account_status:
            try:
                account_status = AccountStatus(account_status).value
            except ValueError:
                raise HTTPException(status_code=400, detail="Invalid account status")
        try:
            query = self.supabase.table("profiles").select(PROFILE_COLUMNS, count="exact")
            if with_role is not None:
                query = query.contains("role", [with_role.value])
            if without_role is not None:
                query = query.not_.contains("role", [without_role.value])
            if referred_by:
                query = query.eq("referred_by", referred_by)
            if account_status:
                query = query.eq("account_status", account_status)
            if search:
                query = query.or_(f"full_name.ilike.%{search}%,email.ilike.%{search}%")
            result = query.order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            rows = [ProfileResponse(**row).model_dump(mode="json") for row in result.data or []]
            return paginated_response(rows, result.count, page, limit, search)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching {self.label.lower()}s: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to fetch {self.label.lower()}s. Please try again.")

    def _fetch_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("profiles")\
            .select(PROFILE_COLUMNS)\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_profile(self, user_id: str) -> ProfileResponse:
        try:
            profile = self._fetch_profile(user_id)
            if profile is None:
                raise self._not_found()
            return ProfileResponse(**profile)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching {self.label.lower()} {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def ensure_reseller(self, user_id: str) -> None:
        """A referrer chosen by an admin must be an existing reseller"""
        try:
            result = self.supabase.table("profiles")\
                .select("user_id")\
                .eq("user_id", user_id)\
                .contains("role", [Role.RESELLER.value])\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error checking referrer {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Internal server error")
        if not result.data:
            raise HTTPException(status_code=400, detail="Referred-by user must be an existing reseller")

    def create_account(
        self,
        data: AccountCreate,
        roles: List[Role],
        referred_by: Optional[str] = None,
        trial_expiry: Optional[datetime] = None,
    ) -> ProfileResponse:
        """Create the auth user, then its profile row; the auth user is removed if the profile fails"""
        try:
            response = self.admin_supabase.auth.admin.create_user({
                "email": data.email,
                "password": data.password,
                "email_confirm": True,
                "user_metadata": {"full_name": data.full_name},
            })
        except Exception as e:
            logger.warning(f"Auth user creation failed for {data.email}: {e}")
            raise HTTPException(status_code=400, detail=_error_message(e))

        user = getattr(response, "user", None)
        if user is None:
            raise HTTPException(status_code=400, detail=f"Failed to create {self.label.lower()}")

        profile = {
            "user_id": user.id,
            "email": data.email,
            "full_name": data.full_name,
            "phone": format_phone(data.phone, data.country),
            "country": data.country,
            "city": sanitize_string(data.city, 100) if data.city else None,
            "role": roles_to_storage(roles),
            "account_status": AccountStatus.ACTIVE.value,
            "referred_by": referred_by,
            "trial_expiry": trial_expiry.isoformat() if trial_expiry else None,
        }
        try:
            result = self.admin_supabase.table("profiles")\
                .upsert(profile, on_conflict="user_id")\
                .execute()
            if not result.data:
                raise RuntimeError("profile upsert returned no rows")
        except Exception as e:
            logger.error(f"Profile creation failed for {user.id}, removing auth user: {e}")
            try:
                self.admin_supabase.auth.admin.delete_user(user.id)
            except Exception as cleanup_error:
                logger.error(f"Failed to remove orphaned auth user {user.id}: {cleanup_error}")
            raise HTTPException(status_code=500, detail=f"Failed to create {self.label.lower()}. Please try again.")

        logger.info(f"{self.label} {user.id} created with roles {profile['role']}")
        return ProfileResponse(**result.data[0])

    def _checked_phone(self, user_id: str, update_data: Dict[str, Any]) -> str:
        """Validate and format a phone against the request's country, or the stored one when omitted"""
        if "country" in update_data:
            country = update_data["country"]
        else:
            profile = self._fetch_profile(user_id)
            if profile is None:
                raise self._not_found()
            country = profile.get("country")
        error = check_phone(update_data["phone"], country)
        if error:
            raise HTTPException(status_code=400, detail=error)
        return format_phone(update_data["phone"], country)

    def update_profile(
        self,
        user_id: str,
        data: ProfileUpdate,
        roles: Optional[List[Role]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> ProfileResponse:
        """Apply the fields present in the request to the profile row"""
        update_data = data.model_dump(exclude_unset=True, include=PROFILE_FIELDS)
        if "city" in update_data and update_data["city"]:
            update_data["city"] = sanitize_string(update_data["city"], 100)
        if roles is not None:
            update_data["role"] = roles_to_storage(roles)
        if extra:
            update_data.update(extra)
        update_data["updated_at"] = _now().isoformat()
        try:
            if update_data.get("phone"):
                update_data["phone"] = self._checked_phone(user_id, update_data)
            result = self.admin_supabase.table("profiles")\
                .update(update_data)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise self._not_found()
            logger.info(f"{self.label} {user_id} updated")
            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating {self.label.lower()} {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to update {self.label.lower()}. Please try again.")

    def delete_account(self, user_id: str) -> bool:
        """Delete the profile row, then the auth user"""
        try:
            result = self.admin_supabase.table("profiles")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise self._not_found()
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting {self.label.lower()} {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to delete {self.label.lower()}. Please try again.")

        try:
            self.admin_supabase.auth.admin.delete_user(user_id)
        except Exception as e:
            # The profile is already gone; the orphaned auth user cannot log in without it
            logger.warning(f"Profile {user_id} deleted but auth user removal failed: {e}")
        logger.info(f"{self.label} {user_id} deleted")
        return True

    def update_account_status(
        self,
        user_id: str,
        status: AccountStatus,
        trial_expiry_date: Optional[datetime] = None,
    ) -> ProfileResponse:
        update_data: Dict[str, Any] = {
            "account_status": status.value,
            "updated_at": _now().isoformat(),
        }
        trial_expiry = trial_expiry_for_status(status, trial_expiry_date)
        if trial_expiry is not None:
            update_data["trial_expiry"] = trial_expiry.isoformat()
        try:
            result = self.admin_supabase.table("profiles")\
                .update(update_data)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise self._not_found()
            logger.info(f"{self.label} {user_id} account status set to {status.value}")
            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating account status for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update account status. Please try again.")

    def reset_password(self, user_id: str, password: Optional[str] = None) -> ResetPasswordResponse:
        """Set a new password, generating a strong one when none is supplied"""
        if not is_valid_uuid(user_id):
            raise HTTPException(status_code=400, detail="Invalid user ID format")
        try:
            response = self.admin_supabase.auth.admin.get_user_by_id(user_id)
            user = getattr(response, "user", None)
        except Exception as e:
            logger.warning(f"Auth lookup failed for {user_id}: {e}")
            user = None
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        if not user.email:
            raise HTTPException(status_code=400, detail="User does not have an email address")

        generated = password is None
        new_password = generate_password(settings.generated_password_length) if generated else password
        try:
            self.admin_supabase.auth.admin.update_user_by_id(user_id, {"password": new_password})
        except Exception as e:
            logger.error(f"Password reset failed for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to reset password. Please try again.")

        logger.info(f"Password reset for {user_id}")
        return ResetPasswordResponse(
            message="Password reset successfully",
            email=user.email,
            temporary_password=new_password if generated else None,
        )


class UserService(AccountService):
    label = "User"

    def list_users(self, page: int, limit: int, offset: int, search: Optional[str] = None) -> PaginatedResponse:
        """Consumers are listed separately; everyone else is a user"""
        return self.list_profiles(page, limit, offset, without_role=Role.CONSUMER, search=search)

    def create_user(self, data: UserCreate) -> ProfileResponse:
        return self.create_account(data, data.roles, trial_expiry=data.trial_expiry_date)

    def update_user(self, user_id: str, data: UserUpdate) -> ProfileResponse:
        return self.update_profile(user_id, data, roles=data.roles)
