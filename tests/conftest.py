"""
Pytest configuration and fixtures for testing
"""
import hashlib
import hmac
import time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from database import Base, get_db
from database_models import User


def async_session_factory(db_file):
    """Session factory for a file-backed SQLite test database."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_file}",
        echo=False,
        future=True,
        poolclass=NullPool,
    )
    return engine, async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


def sign_payload(payload: str, secret: str, timestamp: int = None) -> str:
    """Build a Stripe-Signature header the way Stripe signs webhook deliveries."""
    timestamp = timestamp or int(time.time())
    signed_payload = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


@pytest.fixture
def db_file(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
async def test_db(db_file):
    """
    Fixture that provides an isolated SQLite database session for each test.

    This fixture:
    - Creates all tables before the test runs
    - Yields a clean AsyncSession for the test
    - Disposes of the engine after the test completes
    """
    engine, session_factory = async_session_factory(db_file)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def sync_engine(db_file):
    """Synchronous engine on the same file, for seeding and inspecting rows."""
    engine = create_engine(f"sqlite:///{db_file}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def make_user(sync_engine):
    def _make_user(**fields):
        with Session(sync_engine, expire_on_commit=False) as session:
            user = User(**fields)
            session.add(user)
            session.commit()
            return user
    return _make_user


@pytest.fixture
def load_user(sync_engine):
    def _load_user(user_id):
        with Session(sync_engine) as session:
            return session.get(User, user_id)
    return _load_user


@pytest.fixture
def client(db_file, sync_engine):
    """FastAPI TestClient fixture with test database override"""
    from main import app

    _, session_factory = async_session_factory(db_file)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()
