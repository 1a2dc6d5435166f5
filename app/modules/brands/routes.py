from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_admin_supabase
from app.modules.brands.schemas import BrandCreate, BrandUpdate, BrandListResponse, BrandEnvelope
from app.modules.brands.service import BrandService
from app.core.activity import ActivityAction
from app.core.authorization import BRANDS, Operation
from app.core.dependencies import RequestContext, get_request_context, require_admin, require_resource_access
from app.core.schemas import MessageResponse
from app.core.validation import validate_pagination
from supabase import Client

router = APIRouter(prefix="/admin/brands", tags=["brands"])


def get_brand_service(
    supabase: Client = Depends(get_supabase),
    admin_supabase: Client = Depends(get_admin_supabase)
) -> BrandService:
    return BrandService(supabase, admin_supabase)


@router.get("", response_model=BrandListResponse)
async def list_brands(
    page: int = 1,
    limit: int = 20,
    ctx: RequestContext = Depends(require_admin),
    service: BrandService = Depends(get_brand_service)
):
    """List all brands with owner e-mails (admin only)"""
    page, limit, offset = validate_pagination(page, limit, default_limit=20)
    return service.list_brands(page, limit, offset)


@router.post("/create", response_model=BrandEnvelope, status_code=201)
async def create_brand(
    brand_data: BrandCreate,
    ctx: RequestContext = Depends(get_request_context),
    service: BrandService = Depends(get_brand_service)
):
    """Create a brand owned by the caller"""
    brand = service.create_brand(brand_data, ctx.actor.id)
    ctx.activity.log(ActivityAction.CREATE, "brands", brand.id, brand_data.model_dump(mode="json"))
    return BrandEnvelope(message="Brand created successfully", data=brand)


@router.get("/{brand_id}", response_model=BrandEnvelope)
async def get_brand(
    brand_id: str,
    ctx: RequestContext = Depends(require_resource_access(BRANDS, Operation.READ)),
    service: BrandService = Depends(get_brand_service)
):
    """Get brand (admin or owner)"""
    return BrandEnvelope(data=service.get_brand(brand_id))


@router.put("/{brand_id}", response_model=BrandEnvelope)
async def update_brand(
    brand_id: str,
    brand_data: BrandUpdate,
    ctx: RequestContext = Depends(require_resource_access(BRANDS, Operation.UPDATE)),
    service: BrandService = Depends(get_brand_service)
):
    """Update brand (admin or owner)"""
    brand = service.update_brand(brand_id, brand_data)
    ctx.activity.log(ActivityAction.UPDATE, "brands", brand_id, brand_data.model_dump(mode="json", exclude_unset=True))
    return BrandEnvelope(message="Brand updated successfully", data=brand)


@router.delete("/{brand_id}", response_model=MessageResponse)
async def delete_brand(
    brand_id: str,
    ctx: RequestContext = Depends(require_resource_access(BRANDS, Operation.DELETE)),
    service: BrandService = Depends(get_brand_service)
):
    """Delete brand (admin or owner)"""
    service.delete_brand(brand_id)
    ctx.activity.log(ActivityAction.DELETE, "brands", brand_id)
    return MessageResponse(message="Brand deleted successfully")
