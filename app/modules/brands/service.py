import logging
from datetime import datetime, timezone
from supabase import Client
from app.modules.brands.schemas import BrandCreate, BrandUpdate, BrandResponse, BrandListResponse
from typing import Dict, Iterable, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class BrandService:
    def __init__(self, supabase: Client, admin_supabase: Client):
        self.supabase = supabase
        self.admin_supabase = admin_supabase

    def _owner_emails(self, owner_ids: Iterable[str]) -> Dict[str, Optional[str]]:
        """Map owner user ids to their auth e-mail; unknown owners map to None"""
        emails = {}
        for owner_id in {o for o in owner_ids if o}:
            try:
                response = self.admin_supabase.auth.admin.get_user_by_id(owner_id)
                emails[owner_id] = response.user.email if response and response.user else None
            except Exception as e:
                logger.warning(f"Could not resolve owner {owner_id}: {e}")
                emails[owner_id] = None
        return emails

    def list_brands(self, page: int, limit: int, offset: int) -> BrandListResponse:
        """List one page of brands, newest first, with owner e-mails"""
        try:
            result = self.supabase.table("brands")\
                .select("*", count="exact")\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            brands = result.data or []
            emails = self._owner_emails(b.get("owner_user_id") for b in brands)
            return BrandListResponse(
                page=page,
                limit=limit,
                total=result.count or 0,
                brands=[
                    BrandResponse(**brand, owner_email=emails.get(brand.get("owner_user_id")))
                    for brand in brands
                ],
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching brands: {e}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def create_brand(self, brand_data: BrandCreate, owner_user_id: str) -> BrandResponse:
        """Create a brand owned by the caller"""
        try:
            payload = brand_data.model_dump()
            payload["timezone"] = payload.get("timezone") or "UTC"
            payload["owner_user_id"] = owner_user_id
            result = self.supabase.table("brands").insert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create brand")

            logger.info(f"Brand {result.data[0]['id']} created by {owner_user_id}")
            return BrandResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating brand: {e}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def get_brand(self, brand_id: str) -> BrandResponse:
        """Get brand by ID including the owner's e-mail"""
        try:
            result = self.supabase.table("brands")\
                .select("*")\
                .eq("id", brand_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Brand not found")

            brand = result.data[0]
            emails = self._owner_emails([brand.get("owner_user_id")])
            return BrandResponse(**brand, owner_email=emails.get(brand.get("owner_user_id")))
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching brand {brand_id}: {e}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def update_brand(self, brand_id: str, brand_data: BrandUpdate) -> BrandResponse:
        """Update the fields present in the request"""
        try:
            update_data = brand_data.model_dump(exclude_unset=True)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("brands")\
                .update(update_data)\
                .eq("id", brand_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Brand not found")

            logger.info(f"Brand {brand_id} updated")
            return BrandResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating brand {brand_id}: {e}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def delete_brand(self, brand_id: str) -> bool:
        """Delete brand"""
        try:
            result = self.supabase.table("brands")\
                .delete()\
                .eq("id", brand_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Brand not found")

            logger.info(f"Brand {brand_id} deleted")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting brand {brand_id}: {e}")
            raise HTTPException(status_code=500, detail="Internal server error")
