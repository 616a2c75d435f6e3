"""
User Router - subscription status endpoints
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db, rollback_quietly
from services.subscription_service import SubscriptionService
from utils.responses import error_response, message_response

logger = logging.getLogger(__name__)

user_router = APIRouter(prefix="/api/user", tags=["user"])


class UpdateSubscriptionRequest(BaseModel):
    # Numeric statuses are stored as their string form
    model_config = ConfigDict(coerce_numbers_to_str=True, populate_by_name=True)

    user_id: str = Field(alias="userId")
    status: str


@user_router.get("/check-subscription")
async def check_subscription(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """Return the user's subscription status, expiring a lapsed trial on the way"""
    try:
        status = await SubscriptionService(db).check_subscription(user_id)
    except Exception as e:
        logger.error(f"Error checking subscription for user {user_id}: {e}", exc_info=True)
        await rollback_quietly(db)
        return error_response("Error checking subscription")

    if status is None:
        return error_response("User not found", status=404)

    return {"subscriptionStatus": status}


@user_router.post("/update-subscription")
async def update_subscription(
    data: UpdateSubscriptionRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Overwrite the user's subscription status.

    The status is written as given, without validation. An unknown user
    yields a null "user" rather than an error.
    """
    try:
        user = await SubscriptionService(db).update_subscription(data.user_id, data.status)
    except Exception as e:
        logger.error(f"Error updating subscription for user {data.user_id}: {e}", exc_info=True)
        await rollback_quietly(db)
        return error_response("Error updating subscription")

    return message_response(
        "Subscription status updated",
        user=user.to_dict() if user is not None else None,
    )
