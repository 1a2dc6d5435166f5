from pydantic import BaseModel, field_validator
from typing import Optional, List, Any
from datetime import datetime

from app.core.validation import sanitize_string


class BrandCreate(BaseModel):
    name: str
    website_url: Optional[str] = None
    niche: Optional[str] = None
    target_market: Optional[str] = None
    timezone: Optional[str] = "UTC"
    brand_colors: Optional[Any] = None
    logo: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        value = sanitize_string(value, 255)
        if not value:
            raise ValueError("Brand name is required")
        return value


class BrandUpdate(BaseModel):
    name: Optional[str] = None
    website_url: Optional[str] = None
    niche: Optional[str] = None
    target_market: Optional[str] = None
    timezone: Optional[str] = None
    brand_colors: Optional[Any] = None
    logo: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = sanitize_string(value, 255)
        if not value:
            raise ValueError("Brand name cannot be empty")
        return value


class BrandResponse(BaseModel):
    id: str
    owner_user_id: Optional[str] = None
    owner_email: Optional[str] = None
    name: str
    website_url: Optional[str] = None
    niche: Optional[str] = None
    target_market: Optional[str] = None
    timezone: Optional[str] = None
    brand_colors: Optional[Any] = None
    logo: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BrandListResponse(BaseModel):
    page: int
    limit: int
    total: int
    brands: List[BrandResponse]


class BrandEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: BrandResponse
