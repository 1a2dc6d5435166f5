from typing import Optional

from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_admin_supabase
from app.modules.users.schemas import (
    UserCreate, UserUpdate, AccountStatusUpdate, ProfileEnvelope,
    ResetPasswordRequest, ResetPasswordResponse
)
from app.modules.users.service import UserService
from app.core.activity import ActivityAction
from app.core.authorization import USERS, Operation
from app.core.dependencies import RequestContext, require_admin, require_resource_access
from app.core.schemas import MessageResponse, PaginatedResponse
from app.core.validation import validate_pagination
from supabase import Client

router = APIRouter(prefix="/admin", tags=["users"])


def get_user_service(
    supabase: Client = Depends(get_supabase),
    admin_supabase: Client = Depends(get_admin_supabase)
) -> UserService:
    return UserService(supabase, admin_supabase)


@router.get("/users", response_model=PaginatedResponse)
async def list_users(
    page: int = 1,
    limit: int = 50,
    search: Optional[str] = None,
    ctx: RequestContext = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """List non-consumer accounts (admin only)"""
    page, limit, offset = validate_pagination(page, limit)
    return service.list_users(page, limit, offset, search)


@router.post("/users/create", response_model=ProfileEnvelope, status_code=201)
async def create_user(
    user_data: UserCreate,
    ctx: RequestContext = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """Create an account with the given roles (admin only)"""
    user = service.create_user(user_data)
    ctx.activity.log(
        ActivityAction.CREATE, "profiles", user.user_id, user_data.model_dump(mode="json", exclude={"password"})
    )
    return ProfileEnvelope(message="User created successfully", data=user)


@router.get("/users/{user_id}", response_model=ProfileEnvelope)
async def get_user(
    user_id: str,
    ctx: RequestContext = Depends(require_resource_access(USERS, Operation.READ)),
    service: UserService = Depends(get_user_service)
):
    return ProfileEnvelope(data=service.get_profile(user_id))


@router.put("/users/{user_id}", response_model=ProfileEnvelope)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    ctx: RequestContext = Depends(require_resource_access(USERS, Operation.UPDATE)),
    service: UserService = Depends(get_user_service)
):
    user = service.update_user(user_id, user_data)
    ctx.activity.log(ActivityAction.UPDATE, "profiles", user_id, user_data.model_dump(mode="json", exclude_unset=True))
    return ProfileEnvelope(message="User updated successfully", data=user)


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    ctx: RequestContext = Depends(require_resource_access(USERS, Operation.DELETE)),
    service: UserService = Depends(get_user_service)
):
    """Delete the profile and the auth user"""
    service.delete_account(user_id)
    ctx.activity.log(ActivityAction.DELETE, "profiles", user_id)
    return MessageResponse(message="User deleted successfully")


@router.patch("/users/{user_id}/account-status", response_model=ProfileEnvelope)
async def update_user_account_status(
    user_id: str,
    status_data: AccountStatusUpdate,
    ctx: RequestContext = Depends(require_resource_access(USERS, Operation.UPDATE)),
    service: UserService = Depends(get_user_service)
):
    user = service.update_account_status(user_id, status_data.account_status, status_data.trial_expiry_date)
    ctx.activity.log(ActivityAction.UPDATE, "profiles", user_id, status_data.model_dump(mode="json", exclude_unset=True))
    return ProfileEnvelope(message="Account status updated successfully", data=user)


@router.post("/reset-password", response_model=ResetPasswordResponse)
async def reset_password(
    request_data: ResetPasswordRequest,
    ctx: RequestContext = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    """Reset any account's password (admin only)"""
    return service.reset_password(request_data.user_id, request_data.password)
