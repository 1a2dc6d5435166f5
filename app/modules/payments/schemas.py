from decimal import Decimal
from pydantic import BaseModel, field_validator
from typing import Union

from app.core.validation import is_valid_uuid


class PaymentLinkRequest(BaseModel):
    amount: Union[Decimal, str]
    invoice_id: str
    user_id: str
    invoice_number: str

    @field_validator("amount")
    @classmethod
    def format_amount(cls, value) -> str:
        # Numbers are rendered with two decimals; strings pass through as written
        if isinstance(value, Decimal):
            if value < 0:
                raise ValueError("Amount must not be negative")
            return f"{value:.2f}"
        if not value.strip():
            raise ValueError("Amount is required")
        return value.strip()

    @field_validator("invoice_id", "user_id")
    @classmethod
    def check_ids(cls, value: str) -> str:
        if not is_valid_uuid(value):
            raise ValueError("Invalid ID format")
        return value

    @field_validator("invoice_number")
    @classmethod
    def check_invoice_number(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Invoice number is required")
        return value.strip()


class PaymentLinkResponse(BaseModel):
    success: bool = True
    url: str
    data: str


class PaymentDecodeRequest(BaseModel):
    data: str


class PaymentDetails(BaseModel):
    amount: str
    invoice_id: str
    user_id: str
    invoice_number: str


class PaymentDecodeResponse(BaseModel):
    success: bool = True
    data: PaymentDetails
