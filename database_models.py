import enum
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import Column, String, DateTime

from database import Base


class SubscriptionStatus(str, enum.Enum):
    TRIAL = "trial"
    ACTIVE = "active"
    EXPIRED = "expired"


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what SQLite hands back on read."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def default_trial_end(trial_days: int) -> datetime:
    return utcnow() + timedelta(days=trial_days)


def _new_user_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    """
    User model carrying the subscription state.

    subscription_status is a plain string column: update-subscription writes
    whatever value the caller sends, so it is not constrained to
    SubscriptionStatus at the database level.
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=_new_user_id)
    email = Column(String, nullable=True, index=True)
    subscription_status = Column(String, nullable=False, default=SubscriptionStatus.TRIAL.value)
    trial_end_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "subscriptionStatus": self.subscription_status,
            "trialEndDate": self.trial_end_date.isoformat() if self.trial_end_date else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
