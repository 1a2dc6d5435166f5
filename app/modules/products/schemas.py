from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

from app.core.validation import sanitize_string

MIN_NAME_LENGTH = 2
MIN_DESCRIPTION_LENGTH = 5


class ProductCreate(BaseModel):
    name: str
    description: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = sanitize_string(value, 255)
        if not value:
            raise ValueError("Name is required")
        if len(value) < MIN_NAME_LENGTH:
            raise ValueError(f"Product name must be at least {MIN_NAME_LENGTH} characters long")
        return value

    @field_validator("description")
    @classmethod
    def check_description(cls, value: str) -> str:
        value = sanitize_string(value, 1000)
        if not value:
            raise ValueError("Description is required")
        if len(value) < MIN_DESCRIPTION_LENGTH:
            raise ValueError(f"Product description must be at least {MIN_DESCRIPTION_LENGTH} characters long")
        return value


# Updates replace both fields, same rules as creation
class ProductUpdate(ProductCreate):
    pass


class ProductResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: ProductResponse
