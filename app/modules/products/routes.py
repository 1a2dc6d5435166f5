from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.products.schemas import ProductCreate, ProductUpdate, ProductEnvelope
from app.modules.products.service import ProductService
from app.core.activity import ActivityAction
from app.core.authorization import PRODUCTS, Operation
from app.core.dependencies import RequestContext, require_admin, require_resource_access
from app.core.schemas import MessageResponse, PaginatedResponse
from app.core.validation import validate_pagination
from supabase import Client

router = APIRouter(prefix="/admin/products", tags=["products"])


def get_product_service(supabase: Client = Depends(get_supabase)) -> ProductService:
    return ProductService(supabase)


@router.get("", response_model=PaginatedResponse)
async def list_products(
    page: int = 1,
    limit: int = 50,
    ctx: RequestContext = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """List products (admin only)"""
    page, limit, offset = validate_pagination(page, limit)
    return service.list_products(page, limit, offset)


@router.post("", response_model=ProductEnvelope, status_code=201)
async def create_product(
    product_data: ProductCreate,
    ctx: RequestContext = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """Create a new product (admin only)"""
    product = service.create_product(product_data)
    ctx.activity.log(ActivityAction.CREATE, "products", product.id, product_data.model_dump(mode="json"))
    return ProductEnvelope(message="Product created successfully", data=product)


@router.get("/{product_id}", response_model=ProductEnvelope)
async def get_product(
    product_id: str,
    ctx: RequestContext = Depends(require_resource_access(PRODUCTS, Operation.READ)),
    service: ProductService = Depends(get_product_service)
):
    """Get product by ID"""
    return ProductEnvelope(data=service.get_product(product_id))


@router.put("/{product_id}", response_model=ProductEnvelope)
async def update_product(
    product_id: str,
    product_data: ProductUpdate,
    ctx: RequestContext = Depends(require_resource_access(PRODUCTS, Operation.UPDATE)),
    service: ProductService = Depends(get_product_service)
):
    """Update a product"""
    product = service.update_product(product_id, product_data)
    ctx.activity.log(
        ActivityAction.UPDATE, "products", product_id, product_data.model_dump(mode="json", exclude_unset=True)
    )
    return ProductEnvelope(message="Product updated successfully", data=product)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    ctx: RequestContext = Depends(require_resource_access(PRODUCTS, Operation.DELETE)),
    service: ProductService = Depends(get_product_service)
):
    """Delete a product"""
    service.delete_product(product_id)
    ctx.activity.log(ActivityAction.DELETE, "products", product_id)
    return MessageResponse(message="Product deleted successfully")
