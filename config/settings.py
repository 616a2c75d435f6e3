"""
Configuration settings for the application
"""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Stripe billing configuration
    stripe_secret_key: Optional[str] = Field(default=None, alias="STRIPE_SECRET_KEY")
    stripe_webhook_secret: Optional[str] = Field(default=None, alias="STRIPE_WEBHOOK_SECRET")

    # Infrastructure configuration
    database_url: Optional[str] = Field(
        default="sqlite+aiosqlite:///./subscriptions.db", alias="DATABASE_URL"
    )
    port: int = Field(default=5000, alias="PORT")
    log_dir: Path = Field(default=Path("./logs"), alias="LOG_DIR")

    # Frontend configuration (checkout redirects land here)
    frontend_url: Optional[str] = Field(default="http://localhost:5000", alias="FRONTEND_URL")

    # Subscription configuration
    trial_days: int = Field(default=7, alias="TRIAL_DAYS")
    subscription_price: int = Field(default=10, alias="SUBSCRIPTION_PRICE")

    # Environment configuration
    env: Optional[str] = Field(default=None, alias="ENV")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


# Instantiate settings object
settings = Settings()

# Determine if we're in production mode
IS_PRODUCTION = bool(settings.env and settings.env.lower() == "production")
