"""
UserRepository for database operations on User model
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from config.settings import settings
from database_models import User, SubscriptionStatus, default_trial_end


class UserRepository:
    """
    Repository class for User database operations.
    Encapsulates all database logic for the User model.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            db: AsyncSession instance for database operations
        """
        self.db = db

    async def get_user_by_id(self, user_id: Optional[str]) -> Optional[User]:
        """
        Retrieve a user by ID.

        Args:
            user_id: User's ID (None never matches)

        Returns:
            User object if found, None otherwise
        """
        if not user_id:
            return None
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def create_user(self, user_data: dict) -> User:
        """
        Create a new user in the database.

        Args:
            user_data: Dictionary containing user data. Optional keys:
                - email: str
                - subscription_status: str (defaults to "trial")
                - trial_end_date: datetime (defaults to now + TRIAL_DAYS)
                - trial_days: int (overrides TRIAL_DAYS for the default)

        Returns:
            Created User object
        """
        trial_days = user_data.get("trial_days", settings.trial_days)
        email = user_data.get("email")
        user = User(
            email=email.lower() if email else None,
            subscription_status=user_data.get(
                "subscription_status", SubscriptionStatus.TRIAL.value
            ),
            trial_end_date=user_data.get("trial_end_date", default_trial_end(trial_days)),
        )
        if user_data.get("id"):
            user.id = user_data["id"]
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def save(self, user: User) -> User:
        """
        Persist pending changes on a user. One call is one write.

        Args:
            user: User object that was mutated in place

        Returns:
            The refreshed User object
        """
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def update_user(self, user_id: Optional[str], updates: dict) -> Optional[User]:
        """
        Find a user by ID and apply field updates.

        Args:
            user_id: User's ID
            updates: Dictionary of fields to update (e.g., {"subscription_status": "active"})

        Returns:
            Updated User object, or None when no user has that ID
        """
        user = await self.get_user_by_id(user_id)
        if user is None:
            return None

        for key, value in updates.items():
            if hasattr(user, key):
                setattr(user, key, value)

        return await self.save(user)
