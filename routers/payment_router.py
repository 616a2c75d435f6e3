"""
Payment Router - Stripe checkout and webhook endpoints
Webhook is defined FIRST so it always receives the untouched raw body
"""

import logging
from typing import Union

from fastapi import APIRouter, Request, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db, rollback_quietly
from services.billing_service import BillingService
from services.errors import BillingError
from utils.responses import error_response

logger = logging.getLogger(__name__)

payment_router = APIRouter(prefix="/api/payment", tags=["payment"])


class InitiatePaymentRequest(BaseModel):
    user_id: str = Field(alias="userId")
    amount: Union[int, float]


# WEBHOOK ENDPOINT - MUST BE DEFINED FIRST
@payment_router.post("/webhook")
async def stripe_webhook(
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Handle Stripe webhook events with signature verification.

    Returns 200 once the event is verified and applied. A bad signature, a
    missing secret, or a failure while applying the event returns 400 so
    Stripe retries delivery.
    """
    payload = await request.body()
    stripe_signature = request.headers.get("stripe-signature")

    billing_service = BillingService(db)
    try:
        event = billing_service.construct_event(payload, stripe_signature)
        await billing_service.process_webhook(event)
    except Exception as e:
        logger.error(f"Error processing Stripe webhook: {e}", exc_info=True)
        await rollback_quietly(db)
        return PlainTextResponse("Error processing webhook", status_code=400)

    return PlainTextResponse("Webhook received", status_code=200)


@payment_router.post("/initiate")
async def initiate_payment(
    data: InitiatePaymentRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a Stripe Checkout session and hand back its URL.

    Args:
        data: {userId, amount} with amount in dollars
        db: Database session dependency

    Returns:
        {"paymentUrl": str} or 500
    """
    try:
        url = await BillingService(db).create_checkout_session(data.user_id, data.amount)
    except BillingError as e:
        logger.error(f"Error creating checkout session: {e}", exc_info=True)
        return error_response("Error initiating payment")

    return {"paymentUrl": url}
