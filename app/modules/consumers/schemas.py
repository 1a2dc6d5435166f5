from pydantic import BaseModel, ValidationInfo, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.validation import check_phone, is_valid_uuid
from app.modules.users.schemas import AccountCreate, ProfileUpdate, ProfileResponse, validate_referrer_id


def _valid_product_ids(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return value
    # Unknown formats are dropped rather than rejected
    return list(dict.fromkeys(p for p in value if is_valid_uuid(p)))


class ConsumerCreate(AccountCreate):
    trial_expiry_date: datetime
    # Only honoured for admins; resellers always become the referrer
    referred_by: Optional[str] = None
    subscribed_products: List[str] = []

    @field_validator("referred_by")
    @classmethod
    def check_referred_by(cls, value: Optional[str]) -> Optional[str]:
        return validate_referrer_id(value)

    @field_validator("subscribed_products")
    @classmethod
    def check_products(cls, value: List[str]) -> List[str]:
        return _valid_product_ids(value)


class ConsumerUpdate(ProfileUpdate):
    country: str
    city: str
    phone: str
    # An explicit null clears the trial
    trial_expiry_date: Optional[datetime] = None
    subscribed_products: Optional[List[str]] = None

    @field_validator("city")
    @classmethod
    def check_city(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("City is required")
        return value.strip()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str, info: ValidationInfo) -> str:
        if not value or not value.strip():
            raise ValueError("Phone number is required")
        error = check_phone(value, info.data.get("country"))
        if error:
            raise ValueError(error)
        return value.strip()

    @field_validator("subscribed_products")
    @classmethod
    def check_products(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _valid_product_ids(value)


class ConsumerResponse(ProfileResponse):
    subscribed_products: List[str] = []


class ConsumerEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: ConsumerResponse
