from pydantic import BaseModel, field_validator
from typing import Optional

from app.modules.users.schemas import AccountCreate, ProfileUpdate, ProfileResponse, validate_referrer_id


class ResellerCreate(AccountCreate):
    # Only honoured for admins; a reseller caller always becomes the referrer
    referred_by: Optional[str] = None

    @field_validator("referred_by")
    @classmethod
    def check_referred_by(cls, value: Optional[str]) -> Optional[str]:
        return validate_referrer_id(value)


class ResellerUpdate(ProfileUpdate):
    pass


class ResellerEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: ProfileResponse
