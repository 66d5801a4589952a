"""
Bootstrap an administrator account.

Usage:
    python -m backend.scripts.create_admin --email admin@academy.com --name Admin --password secret123

Purpose:
- Create the tables if they do not exist yet
- Register the first admin so the API can be used

Dependencies: sqlalchemy, backend.application.services
System role: Operations helper for first deployment
"""

import asyncio
import logging
import sys

from backend.application.services.auth_service import AuthService
from backend.boundary.db import get_async_session_factory
from backend.boundary.db.create_tables import create_all_tables
from backend.configs import get_settings
from backend.core.enums import UserRole
from backend.core.exceptions import AcademyException
from backend.observability import configure_logging, get_logger
from backend.observability.log_utils import log_exception_with_context, log_with_context

logger = get_logger(__name__)

USAGE = "Usage: python -m backend.scripts.create_admin --email EMAIL --name NAME --password PASSWORD"


def _flag(argv: list[str], name: str) -> str | None:
    if name not in argv:
        return None
    idx = argv.index(name)
    return argv[idx + 1] if idx + 1 < len(argv) else None


async def create_admin(email: str, name: str, password: str) -> dict:
    """
    Register an admin account in its own transaction.

    Returns:
        dict: Created user profile

    Raises:
        ConflictError: Email already has an account
        ValidationError: Invalid email, name or password
    """
    await create_all_tables()
    async with get_async_session_factory()() as session:
        try:
            user = await AuthService(session).register(
                email=email,
                password=password,
                name=name,
                role=UserRole.ADMIN,
            )
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    log_with_context(logger, logging.INFO, "Admin account created", user_id=user["id"], email=user["email"])
    return user


def main():
    """CLI entry point."""
    configure_logging(get_settings().log_level)

    email = _flag(sys.argv, "--email")
    name = _flag(sys.argv, "--name")
    password = _flag(sys.argv, "--password")
    if not (email and name and password):
        print(USAGE)
        sys.exit(1)

    try:
        user = asyncio.run(create_admin(email, name, password))
    except AcademyException as e:
        log_exception_with_context(logger, "Admin bootstrap failed", e, email=email)
        print(f"Error: {e.message}")
        sys.exit(1)

    print(f"Admin created: {user['email']} ({user['id']})")


if __name__ == "__main__":
    main()
