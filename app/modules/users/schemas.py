from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator
from typing import Optional, List, Any
from datetime import datetime

from app.config import settings
from app.core.roles import AccountStatus, Role, normalize_roles, roles_to_storage
from app.core.validation import (
    check_country, check_email, check_name, check_password, check_phone, is_valid_uuid,
)


def _raise_if(error: Optional[str]) -> None:
    if error:
        raise ValueError(error)


class AccountCreate(BaseModel):
    """Fields shared by every account-creation form"""
    full_name: str
    email: str
    password: str
    country: Optional[str] = None
    city: Optional[str] = None
    # Declared after country: the phone rules depend on it
    phone: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, value: str) -> str:
        _raise_if(check_name(value))
        return value.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        _raise_if(check_email(value))
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        _raise_if(check_password(value, settings.min_password_length))
        return value

    @field_validator("country")
    @classmethod
    def validate_country(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        _raise_if(check_country(value))
        return value.strip()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        _raise_if(check_phone(value, info.data.get("country")))
        return value.strip() if value and value.strip() else None


class UserCreate(AccountCreate):
    roles: List[Role] = Field(default_factory=lambda: [Role.USER])
    trial_expiry_date: Optional[datetime] = Field(default=None, validate_default=True)

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, value: List[Role]) -> List[Role]:
        roles = normalize_roles(value)
        if not roles:
            raise ValueError("At least one role is required")
        return roles

    @field_validator("trial_expiry_date")
    @classmethod
    def trial_required_for_consumers(cls, value: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        if Role.CONSUMER in (info.data.get("roles") or []) and value is None:
            raise ValueError("Trial period is required for consumers")
        return value


class ProfileUpdate(BaseModel):
    """Partial update of the editable profile fields"""
    full_name: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        _raise_if(check_name(value))
        return value.strip()

    @field_validator("country")
    @classmethod
    def validate_country(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        _raise_if(check_country(value))
        return value.strip()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value is None:
            return value
        # Without a country in the request the stored one is checked at update time
        if info.data.get("country") is not None:
            _raise_if(check_phone(value, info.data["country"]))
        return value.strip() or None


class UserUpdate(ProfileUpdate):
    roles: Optional[List[Role]] = None

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, value: Optional[List[Role]]) -> Optional[List[Role]]:
        if value is None:
            return value
        roles = normalize_roles(value)
        if not roles:
            raise ValueError("At least one role is required")
        return roles


class AccountStatusUpdate(BaseModel):
    account_status: AccountStatus
    trial_expiry_date: Optional[datetime] = None


class PasswordReset(BaseModel):
    """A new password; omitted means the server generates one"""
    password: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        _raise_if(check_password(value, settings.min_password_length))
        return value


class ResetPasswordRequest(PasswordReset):
    user_id: str

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("user_id must be a valid non-empty string")
        return value.strip()


class ResetPasswordResponse(BaseModel):
    success: bool = True
    message: str
    email: str
    # Only returned when the server generated the password
    temporary_password: Optional[str] = None


class ProfileResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    avatar_url: Optional[str] = None
    roles: List[str] = []
    account_status: Optional[str] = None
    referred_by: Optional[str] = None
    trial_expiry: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def roles_from_storage(cls, data: Any) -> Any:
        if isinstance(data, dict) and "roles" not in data:
            data = {**data, "roles": roles_to_storage(normalize_roles(data.get("role")))}
        return data

    class Config:
        from_attributes = True


class ProfileEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: ProfileResponse


def validate_referrer_id(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not is_valid_uuid(value):
        raise ValueError("Invalid referred_by ID format")
    return value
