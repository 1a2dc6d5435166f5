import logging
from urllib.parse import quote

from fastapi import HTTPException
from pydantic import ValidationError

from app.config import Settings
from app.core.encryption import PaymentDataError, decrypt_payment_data, encrypt_payment_data
from app.modules.payments.schemas import PaymentLinkRequest, PaymentLinkResponse, PaymentDetails

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, settings: Settings):
        self.settings = settings

    def create_link(self, request: PaymentLinkRequest) -> PaymentLinkResponse:
        """Encrypt the invoice fields into a front-end payment URL"""
        try:
            token = encrypt_payment_data(request.model_dump(), self.settings.payment_encryption_key)
        except PaymentDataError as e:
            logger.error(f"Payment link for invoice {request.invoice_id} failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to encrypt payment data")
        url = f"{self.settings.client_url.rstrip('/')}/payment?data={quote(token, safe='')}"
        logger.info(f"Payment link created for invoice {request.invoice_id}")
        return PaymentLinkResponse(url=url, data=token)

    def decode(self, token: str) -> PaymentDetails:
        try:
            payload = decrypt_payment_data(token, self.settings.payment_encryption_key)
            return PaymentDetails(**{key: str(value) for key, value in payload.items()})
        except (PaymentDataError, ValidationError, TypeError):
            raise HTTPException(status_code=400, detail="Invalid or corrupted payment data")
