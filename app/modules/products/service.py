import logging
from datetime import datetime, timezone
from supabase import Client
from app.modules.products.schemas import ProductCreate, ProductUpdate, ProductResponse
from app.core.schemas import PaginatedResponse, paginated_response
from fastapi import HTTPException

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = "id, name, description, created_at, updated_at"


class ProductService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_products(self, page: int, limit: int, offset: int) -> PaginatedResponse:
        """List one page of products, newest first"""
        try:
            result = self.supabase.table("products")\
                .select(PRODUCT_COLUMNS, count="exact")\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return paginated_response(result.data or [], result.count, page, limit)
        except Exception as e:
            logger.error(f"Error fetching products: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch products. Please try again.")

    def get_product(self, product_id: str) -> ProductResponse:
        """Get product by ID"""
        try:
            result = self.supabase.table("products")\
                .select(PRODUCT_COLUMNS)\
                .eq("id", product_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Product not found")

            return ProductResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching product {product_id}: {e}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """Create a new product"""
        try:
            result = self.supabase.table("products").insert({
                "name": product_data.name,
                "description": product_data.description
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create product. Please try again.")

            logger.info(f"Product {result.data[0]['id']} created")
            return ProductResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating product: {e}")
            raise HTTPException(status_code=500, detail="Failed to create product. Please try again.")

    def update_product(self, product_id: str, product_data: ProductUpdate) -> ProductResponse:
        """Update product name and description"""
        try:
            result = self.supabase.table("products")\
                .update({
                    "name": product_data.name,
                    "description": product_data.description,
                    "updated_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", product_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Product not found")

            logger.info(f"Product {product_id} updated")
            return ProductResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating product {product_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update product. Please try again.")

    def delete_product(self, product_id: str) -> bool:
        """Delete product"""
        try:
            result = self.supabase.table("products")\
                .delete()\
                .eq("id", product_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Product not found")

            logger.info(f"Product {product_id} deleted")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting product {product_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to delete product. Please try again.")
