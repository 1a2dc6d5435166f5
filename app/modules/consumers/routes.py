from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from app.database.supabase_client import get_supabase, get_admin_supabase
from app.modules.consumers.schemas import ConsumerCreate, ConsumerUpdate, ConsumerEnvelope
from app.modules.consumers.service import ConsumerService
from app.modules.users.schemas import AccountStatusUpdate, PasswordReset, ProfileEnvelope, ResetPasswordResponse
from app.core.activity import ActivityAction
from app.core.authorization import CONSUMERS, Operation
from app.core.dependencies import RequestContext, require_any_role, require_resource_access
from app.core.roles import Role
from app.core.schemas import MessageResponse, PaginatedResponse
from app.core.validation import validate_pagination
from supabase import Client

router = APIRouter(prefix="/admin/consumers", tags=["consumers"])


def get_consumer_service(
    supabase: Client = Depends(get_supabase),
    admin_supabase: Client = Depends(get_admin_supabase)
) -> ConsumerService:
    return ConsumerService(supabase, admin_supabase)


@router.get("", response_model=PaginatedResponse)
async def list_consumers(
    page: int = 1,
    limit: int = 50,
    account_status: Optional[str] = None,
    search: Optional[str] = None,
    ctx: RequestContext = Depends(require_any_role(Role.RESELLER)),
    service: ConsumerService = Depends(get_consumer_service)
):
    """List consumers (admin: all, reseller: referred by them)"""
    page, limit, offset = validate_pagination(page, limit)
    return service.list_consumers(ctx.actor, page, limit, offset, account_status, search)


@router.post("/create", response_model=ConsumerEnvelope, status_code=201)
async def create_consumer(
    consumer_data: ConsumerCreate,
    ctx: RequestContext = Depends(require_any_role(Role.RESELLER)),
    service: ConsumerService = Depends(get_consumer_service)
):
    """Create a consumer; a reseller caller becomes its referrer"""
    consumer = service.create_consumer(ctx.actor, consumer_data)
    ctx.activity.log(
        ActivityAction.CREATE, "profiles", consumer.user_id,
        consumer_data.model_dump(mode="json", exclude={"password"})
    )
    return ConsumerEnvelope(message="Consumer created successfully", data=consumer)


@router.get("/{consumer_id}", response_model=ConsumerEnvelope)
async def get_consumer(
    consumer_id: str,
    ctx: RequestContext = Depends(require_resource_access(CONSUMERS, Operation.READ)),
    service: ConsumerService = Depends(get_consumer_service)
):
    return ConsumerEnvelope(data=service.get_consumer(consumer_id))


@router.put("/{consumer_id}", response_model=ConsumerEnvelope)
async def update_consumer(
    consumer_id: str,
    consumer_data: ConsumerUpdate,
    ctx: RequestContext = Depends(require_resource_access(CONSUMERS, Operation.UPDATE)),
    service: ConsumerService = Depends(get_consumer_service)
):
    consumer = service.update_consumer(consumer_id, consumer_data)
    ctx.activity.log(
        ActivityAction.UPDATE, "profiles", consumer_id, consumer_data.model_dump(mode="json", exclude_unset=True)
    )
    return ConsumerEnvelope(message="Consumer updated successfully", data=consumer)


@router.delete("/{consumer_id}", response_model=MessageResponse)
async def delete_consumer(
    consumer_id: str,
    ctx: RequestContext = Depends(require_resource_access(CONSUMERS, Operation.DELETE)),
    service: ConsumerService = Depends(get_consumer_service)
):
    service.delete_consumer(consumer_id)
    ctx.activity.log(ActivityAction.DELETE, "profiles", consumer_id)
    return MessageResponse(message="Consumer deleted successfully")


@router.patch("/{consumer_id}/account-status", response_model=ProfileEnvelope)
async def update_consumer_account_status(
    consumer_id: str,
    status_data: AccountStatusUpdate,
    ctx: RequestContext = Depends(require_resource_access(CONSUMERS, Operation.UPDATE)),
    service: ConsumerService = Depends(get_consumer_service)
):
    """Change a consumer's account status (admin only)"""
    if not ctx.actor.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: Admin access required")
    consumer = service.update_account_status(
        consumer_id, status_data.account_status, status_data.trial_expiry_date
    )
    ctx.activity.log(
        ActivityAction.UPDATE, "profiles", consumer_id, status_data.model_dump(mode="json", exclude_unset=True)
    )
    return ProfileEnvelope(message="Account status updated successfully", data=consumer)


@router.post("/{consumer_id}/reset-password", response_model=ResetPasswordResponse)
async def reset_consumer_password(
    consumer_id: str,
    request_data: Optional[PasswordReset] = None,
    ctx: RequestContext = Depends(require_resource_access(CONSUMERS, Operation.UPDATE)),
    service: ConsumerService = Depends(get_consumer_service)
):
    """Reset a consumer's password (admin or referring reseller)"""
    password = request_data.password if request_data else None
    return service.reset_password(consumer_id, password)
