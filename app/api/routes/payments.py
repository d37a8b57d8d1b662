"""
Payments API Routes
Stripe webhook endpoint
"""
import logging

import stripe
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.dependencies import get_payment_gateway
from app.database import get_db
from app.integrations.payments import StripeGateway
from app.services import billing_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    db: Session = Depends(get_db),
    gateway: StripeGateway = Depends(get_payment_gateway),
) -> JSONResponse:
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")

    try:
        event = gateway.construct_event(payload, sig_header)
    except (stripe.SignatureVerificationError, ValueError) as exc:
        logger.error(f"Webhook Error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"status": "Failed", "error": "Webhook signature verification failed."},
        )

    try:
        applied = billing_service.process_webhook_event(db, gateway, event)
    except Exception as exc:
        logger.error(f"Webhook Error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "Failed", "error": "Webhook handler failed."},
        )

    content = {"received": True}
    if not applied:
        content["duplicate"] = True
    return JSONResponse(status_code=status.HTTP_200_OK, content=content)
