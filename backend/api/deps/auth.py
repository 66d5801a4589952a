"""
Request authentication dependencies.

Resolves the bearer token on each request to the signed-in account and
enforces the admin role on management routes.

Dependencies: fastapi, backend.application.services
System role: Route guards
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.application.services import AuthService
from backend.core.enums import UserRole
from backend.core.exceptions import AuthenticationError

from .dependencies import get_auth_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    """
    Signed-in account for the request.

    Raises:
        HTTPException(401): Missing, invalid or expired bearer token
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return await auth_service.authenticate_token(credentials.credentials)
    except AuthenticationError as e:
        logger.warning("Bearer token rejected", extra={"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


async def require_admin(user: dict = Depends(get_current_user)) -> dict:
    """
    Signed-in account, which must be an admin.

    Raises:
        HTTPException(403): Account is not an admin
    """
    if UserRole(user["role"]) is not UserRole.ADMIN:
        logger.warning("Admin route denied", extra={"user_id": str(user["id"])})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user
