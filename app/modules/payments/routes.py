from fastapi import APIRouter, Depends

from app.config import settings
from app.core.dependencies import RequestContext, require_admin
from app.modules.payments.schemas import (
    PaymentLinkRequest, PaymentLinkResponse, PaymentDecodeRequest, PaymentDecodeResponse
)
from app.modules.payments.service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])


def get_payment_service() -> PaymentService:
    return PaymentService(settings)


@router.post("/links", response_model=PaymentLinkResponse, status_code=201)
async def create_payment_link(
    link_data: PaymentLinkRequest,
    ctx: RequestContext = Depends(require_admin),
    service: PaymentService = Depends(get_payment_service)
):
    """Build an encrypted payment link for an invoice (admin only)"""
    return service.create_link(link_data)


@router.post("/decode", response_model=PaymentDecodeResponse)
async def decode_payment_data(
    request_data: PaymentDecodeRequest,
    service: PaymentService = Depends(get_payment_service)
):
    """Decrypt the data parameter of a payment link (public)"""
    return PaymentDecodeResponse(data=service.decode(request_data.data))
