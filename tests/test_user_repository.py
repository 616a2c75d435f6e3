"""
Unit tests for UserRepository operations
"""
from datetime import timedelta

import pytest

from crud.user import UserRepository
from database_models import utcnow


@pytest.mark.asyncio
async def test_create_and_get_user(test_db):
    """
    Test creating a new user and retrieving it by ID.

    This test verifies:
    - New users start on a trial
    - The trial end date defaults to roughly TRIAL_DAYS from now
    - Email is stored lowercased
    """
    user_repo = UserRepository(test_db)

    created_user = await user_repo.create_user({"email": "Trial@Example.com", "trial_days": 14})

    assert created_user.id
    assert created_user.email == "trial@example.com"
    assert created_user.subscription_status == "trial"
    remaining = created_user.trial_end_date - utcnow()
    assert timedelta(days=13) < remaining <= timedelta(days=14)

    retrieved_user = await user_repo.get_user_by_id(created_user.id)
    assert retrieved_user is not None
    assert retrieved_user.id == created_user.id


@pytest.mark.asyncio
async def test_get_user_by_missing_id(test_db):
    user_repo = UserRepository(test_db)
    assert await user_repo.get_user_by_id("nope") is None
    assert await user_repo.get_user_by_id(None) is None


@pytest.mark.asyncio
async def test_update_user_returns_new_record(test_db):
    user_repo = UserRepository(test_db)
    user = await user_repo.create_user({})

    updated = await user_repo.update_user(user.id, {"subscription_status": "expired", "bogus": 1})

    assert updated.subscription_status == "expired"
    assert not hasattr(updated, "bogus")
    assert await user_repo.update_user("missing", {"subscription_status": "active"}) is None
