"""
Billing Service - Stripe Checkout sessions and webhook handling
"""

import logging
from typing import Optional, Union

import stripe
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from crud.user import UserRepository
from database_models import SubscriptionStatus
from services.errors import BillingError, WebhookVerificationError

logger = logging.getLogger(__name__)

CHECKOUT_CURRENCY = "usd"
CHECKOUT_PRODUCT_NAME = "Premium Subscription"
CHECKOUT_COMPLETED = "checkout.session.completed"

# Initialize Stripe client
if settings.stripe_secret_key:
    stripe.api_key = settings.stripe_secret_key
else:
    logger.warning("STRIPE_SECRET_KEY is not set. Stripe functionality will be unavailable.")


def to_minor_units(amount: Union[int, float]) -> int:
    """Convert a major-unit amount (dollars) to Stripe's integer cents."""
    return int(round(amount * 100))


class BillingService:
    """
    Service class for handling billing-related business logic.
    """

    def __init__(self, db: AsyncSession, user_repo: Optional[UserRepository] = None):
        """
        Initialize the billing service.

        Args:
            db: AsyncSession instance for database operations
            user_repo: Optional UserRepository (built from db when omitted)
        """
        self.db = db
        self.user_repo = user_repo or UserRepository(db)

    async def create_checkout_session(self, user_id: str, amount: Union[int, float]) -> str:
        """
        Create a one-off Stripe Checkout session for the premium subscription.

        The caller's user ID travels as client_reference_id so the
        checkout.session.completed webhook can find the user again.

        Args:
            user_id: ID of the paying user
            amount: Charge in major currency units

        Returns:
            The hosted checkout URL

        Raises:
            BillingError: Stripe could not create the session
        """
        frontend_url = settings.frontend_url or "http://localhost:5000"

        try:
            checkout_session = stripe.checkout.Session.create(
                payment_method_types=["card"],
                line_items=[{
                    "price_data": {
                        "currency": CHECKOUT_CURRENCY,
                        "product_data": {"name": CHECKOUT_PRODUCT_NAME},
                        "unit_amount": to_minor_units(amount),
                    },
                    "quantity": 1,
                }],
                mode="payment",
                success_url=f"{frontend_url}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{frontend_url}/payment-cancelled",
                client_reference_id=user_id,
            )
        except Exception as e:
            raise BillingError(f"Failed to create checkout session: {e}") from e

        logger.info(f"Created checkout session {checkout_session.id} for user {user_id}")
        return checkout_session.url

    def construct_event(self, payload: bytes, signature: Optional[str]) -> stripe.Event:
        """
        Verify a webhook payload against STRIPE_WEBHOOK_SECRET.

        Args:
            payload: Raw request body, exactly as received
            signature: Value of the Stripe-Signature header

        Returns:
            The verified Stripe Event

        Raises:
            WebhookVerificationError: secret or header missing, bad signature, or bad payload
        """
        webhook_secret = settings.stripe_webhook_secret
        if not webhook_secret:
            raise WebhookVerificationError("STRIPE_WEBHOOK_SECRET is not configured")
        if not signature:
            raise WebhookVerificationError("Missing Stripe-Signature header")

        try:
            return stripe.Webhook.construct_event(payload, signature, webhook_secret)
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError(f"Invalid webhook signature: {e}") from e
        except ValueError as e:
            raise WebhookVerificationError(f"Invalid webhook payload: {e}") from e

    async def process_webhook(self, event: stripe.Event) -> bool:
        """
        Apply a verified webhook event.

        Only checkout.session.completed does anything: the user named by the
        session's client_reference_id becomes active. Every other event is
        acknowledged untouched.

        Returns:
            True if a user was activated, False otherwise
        """
        event_type = event.type
        logger.info(f"Processing Stripe webhook event: {event_type}")

        if event_type != CHECKOUT_COMPLETED:
            return False

        session = event.data.object
        user_id = getattr(session, "client_reference_id", None)

        user = await self.user_repo.get_user_by_id(user_id)
        if user is None:
            logger.warning(f"Checkout completed for unknown user {user_id!r}")
            return False

        user.subscription_status = SubscriptionStatus.ACTIVE.value
        await self.user_repo.save(user)
        logger.info(f"Activated subscription for user {user_id}")
        return True
