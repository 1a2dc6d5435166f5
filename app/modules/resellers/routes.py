from typing import Optional

from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_admin_supabase
from app.modules.resellers.schemas import ResellerCreate, ResellerUpdate, ResellerEnvelope
from app.modules.resellers.service import ResellerService
from app.modules.users.schemas import PasswordReset, ResetPasswordResponse
from app.core.activity import ActivityAction
from app.core.authorization import RESELLERS, Operation
from app.core.dependencies import RequestContext, require_any_role, require_resource_access
from app.core.roles import Role
from app.core.schemas import MessageResponse, PaginatedResponse
from app.core.validation import validate_pagination
from supabase import Client

router = APIRouter(prefix="/admin/resellers", tags=["resellers"])


def get_reseller_service(
    supabase: Client = Depends(get_supabase),
    admin_supabase: Client = Depends(get_admin_supabase)
) -> ResellerService:
    return ResellerService(supabase, admin_supabase)


@router.get("", response_model=PaginatedResponse)
async def list_resellers(
    page: int = 1,
    limit: int = 50,
    search: Optional[str] = None,
    ctx: RequestContext = Depends(require_any_role(Role.RESELLER)),
    service: ResellerService = Depends(get_reseller_service)
):
    """List resellers (admin: all, reseller: referred by them)"""
    page, limit, offset = validate_pagination(page, limit)
    return service.list_resellers(ctx.actor, page, limit, offset, search)


@router.post("/create", response_model=ResellerEnvelope, status_code=201)
async def create_reseller(
    reseller_data: ResellerCreate,
    ctx: RequestContext = Depends(require_any_role(Role.RESELLER)),
    service: ResellerService = Depends(get_reseller_service)
):
    reseller = service.create_reseller(ctx.actor, reseller_data)
    ctx.activity.log(
        ActivityAction.CREATE, "profiles", reseller.user_id,
        reseller_data.model_dump(mode="json", exclude={"password"})
    )
    return ResellerEnvelope(message="Reseller created successfully", data=reseller)


@router.get("/{reseller_id}", response_model=ResellerEnvelope)
async def get_reseller(
    reseller_id: str,
    ctx: RequestContext = Depends(require_resource_access(RESELLERS, Operation.READ)),
    service: ResellerService = Depends(get_reseller_service)
):
    return ResellerEnvelope(data=service.get_profile(reseller_id))


@router.get("/{reseller_id}/consumers", response_model=PaginatedResponse)
async def list_reseller_consumers(
    reseller_id: str,
    page: int = 1,
    limit: int = 50,
    search: Optional[str] = None,
    ctx: RequestContext = Depends(require_resource_access(RESELLERS, Operation.READ)),
    service: ResellerService = Depends(get_reseller_service)
):
    """Consumers referred by the given reseller"""
    page, limit, offset = validate_pagination(page, limit)
    return service.list_reseller_consumers(reseller_id, page, limit, offset, search)


@router.put("/{reseller_id}", response_model=ResellerEnvelope)
async def update_reseller(
    reseller_id: str,
    reseller_data: ResellerUpdate,
    ctx: RequestContext = Depends(require_resource_access(RESELLERS, Operation.UPDATE)),
    service: ResellerService = Depends(get_reseller_service)
):
    reseller = service.update_profile(reseller_id, reseller_data)
    ctx.activity.log(
        ActivityAction.UPDATE, "profiles", reseller_id, reseller_data.model_dump(mode="json", exclude_unset=True)
    )
    return ResellerEnvelope(message="Reseller updated successfully", data=reseller)


@router.delete("/{reseller_id}", response_model=MessageResponse)
async def delete_reseller(
    reseller_id: str,
    ctx: RequestContext = Depends(require_resource_access(RESELLERS, Operation.DELETE)),
    service: ResellerService = Depends(get_reseller_service)
):
    service.delete_account(reseller_id)
    ctx.activity.log(ActivityAction.DELETE, "profiles", reseller_id)
    return MessageResponse(message="Reseller deleted successfully")


@router.post("/{reseller_id}/reset-password", response_model=ResetPasswordResponse)
async def reset_reseller_password(
    reseller_id: str,
    request_data: Optional[PasswordReset] = None,
    ctx: RequestContext = Depends(require_resource_access(RESELLERS, Operation.UPDATE)),
    service: ResellerService = Depends(get_reseller_service)
):
    password = request_data.password if request_data else None
    return service.reset_password(reseller_id, password)
