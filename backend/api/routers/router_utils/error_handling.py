"""
Domain error handling for routers.

Decorator translating domain exceptions raised by services into
HTTPExceptions with consistent status codes and logging.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from backend.core.exceptions import (
    AcademyException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_domain_errors(func: F) -> F:
    """
    Decorator to handle domain errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context (details of the domain exception)
    - Mapping exception types to HTTP status codes
    - Ensuring uniform error response formats
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"error": str(e), "details": e.details})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": str(e), "details": e.details})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except ConflictError as e:
            logger.warning("Conflicting request", extra={"error": str(e), "details": e.details})
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

        except AuthenticationError as e:
            logger.warning("Authentication failed", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(e),
                headers={"WWW-Authenticate": "Bearer"},
            )

        except AuthorizationError as e:
            logger.warning("Authorization failed", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

        except PydanticValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False),
            )

        except AcademyException as e:
            logger.error("Unhandled domain error", extra={"error": str(e), "details": e.details})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except Exception as e:
            logger.exception("Unexpected failure in request", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
