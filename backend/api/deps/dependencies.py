"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: backend.configs, backend.application, backend.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.application.services import (
    AuthService,
    DashboardService,
    InvoiceService,
    StudentService,
    TransactionService,
    VideoService,
)
from backend.application.services.auth_service import build_hasher, build_token_issuer
from backend.boundary.db import get_async_db
from backend.boundary.identity import PasswordHasher, TokenIssuer
from backend.configs import Settings, get_settings
from backend.core.dashboard_signal import DashboardSignal, dashboard_signal


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_dashboard_signal() -> DashboardSignal:
    """Process-wide dashboard refresh signal."""
    return dashboard_signal


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get cached bcrypt hasher configured from auth settings."""
    return build_hasher(get_settings().auth)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Get cached JWT issuer configured from auth settings."""
    return build_token_issuer(get_settings().auth)


def get_student_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
    signal: DashboardSignal = Depends(get_dashboard_signal),
) -> StudentService:
    """
    Get student service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected)
        signal: Dashboard signal (injected)

    Returns:
        StudentService: Student service instance
    """
    return StudentService(db=db, settings=settings.academy, signal=signal)


def get_transaction_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
    signal: DashboardSignal = Depends(get_dashboard_signal),
) -> TransactionService:
    """
    Get transaction service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected)
        signal: Dashboard signal (injected)

    Returns:
        TransactionService: Transaction service instance
    """
    return TransactionService(db=db, settings=settings.academy, signal=signal)


def get_invoice_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
    signal: DashboardSignal = Depends(get_dashboard_signal),
) -> InvoiceService:
    """
    Get invoice service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected)
        signal: Dashboard signal (injected)

    Returns:
        InvoiceService: Invoice service instance
    """
    return InvoiceService(db=db, settings=settings.academy, signal=signal)


def get_video_service(db: AsyncSession = Depends(get_async_db)) -> VideoService:
    """
    Get video service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        VideoService: Video service instance
    """
    return VideoService(db=db)


def get_dashboard_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
    signal: DashboardSignal = Depends(get_dashboard_signal),
) -> DashboardService:
    """
    Get dashboard service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected)
        signal: Dashboard signal (injected)

    Returns:
        DashboardService: Dashboard service instance
    """
    return DashboardService(db=db, settings=settings.academy, signal=signal)


def get_auth_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected)
        hasher: bcrypt hasher (injected)
        tokens: JWT issuer (injected)

    Returns:
        AuthService: Authentication service instance
    """
    return AuthService(db=db, settings=settings.auth, hasher=hasher, tokens=tokens)
