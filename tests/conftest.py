"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, academy settings, fixed clocks,
dashboard signal, fast password hasher and token issuer
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

TZ = "America/Sao_Paulo"


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from backend.boundary.db import models  # noqa: F401
    from backend.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def academy_settings():
    """Academy settings pinned to São Paulo with the default 6h-23h window."""
    from backend.configs.academy import AcademySettings

    return AcademySettings(
        timezone=TZ,
        attendance_open_hour=6,
        attendance_close_hour=23,
        default_invoice_due_day=10,
        default_transaction_category="Outros",
        recent_activity_limit=10,
    )


@pytest.fixture
def auth_settings():
    """Auth settings with the cheapest bcrypt cost."""
    from backend.configs.auth import AuthSettings

    return AuthSettings(
        secret_key="test-secret",
        algorithm="HS256",
        access_token_expire_minutes=60,
        issuer="academy-manager",
        bcrypt_rounds=4,
        min_password_length=6,
    )


@pytest.fixture
def signal():
    """Fresh dashboard signal per test."""
    from backend.core.dashboard_signal import DashboardSignal

    return DashboardSignal()


@pytest.fixture
def local_now() -> datetime:
    """15 March 2025, 10:00 in the academy timezone."""
    return datetime(2025, 3, 15, 10, 0, tzinfo=ZoneInfo(TZ))


@pytest.fixture
def today() -> date:
    return date(2025, 3, 15)


@pytest.fixture
def hasher(auth_settings):
    from backend.boundary.identity import PasswordHasher

    return PasswordHasher(rounds=auth_settings.bcrypt_rounds)


@pytest.fixture
def token_issuer(auth_settings):
    from backend.boundary.identity import TokenIssuer

    return TokenIssuer(
        secret_key=auth_settings.secret_key,
        algorithm=auth_settings.algorithm,
        expire_minutes=auth_settings.access_token_expire_minutes,
        issuer=auth_settings.issuer,
    )
