"""
Subscription Service for trial expiry and status updates
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from crud.user import UserRepository
from database_models import User, SubscriptionStatus, utcnow

logger = logging.getLogger(__name__)

KNOWN_STATUSES = {status.value for status in SubscriptionStatus}


class SubscriptionService:
    """
    Service for managing user subscription status.
    Handles the lazy trial -> expired transition and explicit status writes.
    """

    def __init__(self, db: AsyncSession, user_repo: Optional[UserRepository] = None):
        """
        Initialize the subscription service with database session and user repository.

        Args:
            db: AsyncSession instance for database operations
            user_repo: UserRepository instance for user operations
        """
        self.db = db
        self.user_repo = user_repo or UserRepository(db)

    @staticmethod
    def is_trial_lapsed(user: User, now: Optional[datetime] = None) -> bool:
        """
        Check whether a user's trial has run out.

        A trial has lapsed when:
        1. subscription_status is still "trial"
        2. trial_end_date is set
        3. the current time is strictly after trial_end_date

        Args:
            user: User object to check
            now: Reference time (naive UTC), defaults to the current time

        Returns:
            True if the user should be moved to "expired"
        """
        if user.subscription_status != SubscriptionStatus.TRIAL.value:
            return False
        if user.trial_end_date is None:
            return False
        now = now or utcnow()
        return now > user.trial_end_date

    async def check_subscription(self, user_id: Optional[str]) -> Optional[str]:
        """
        Return the user's current status, expiring a lapsed trial first.

        Returns:
            The subscription status, or None if the user does not exist
        """
        user = await self.user_repo.get_user_by_id(user_id)
        if user is None:
            return None

        if self.is_trial_lapsed(user):
            user.subscription_status = SubscriptionStatus.EXPIRED.value
            await self.user_repo.save(user)
            logger.info(f"Trial expired for user {user_id}")

        return user.subscription_status

    async def update_subscription(self, user_id: Optional[str], status: str) -> Optional[User]:
        """
        Overwrite the user's status with whatever value was supplied.

        Returns:
            The updated user, or None if the user does not exist
        """
        if status not in KNOWN_STATUSES:
            logger.warning(f"Writing unrecognized subscription status {status!r} for user {user_id}")

        user = await self.user_repo.update_user(user_id, {"subscription_status": status})
        if user is not None:
            logger.info(f"Subscription status for user {user_id} set to {status!r}")
        return user
