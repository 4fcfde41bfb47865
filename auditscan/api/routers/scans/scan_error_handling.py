"""
Scan error handling utilities.

Provides a decorator for consistent error handling across scan-related
API endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from auditscan.core.exceptions import (
    IdentityError,
    NotFoundError,
    UnauthorizedError,
    UnsupportedMediaTypeError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_scan_errors(func: F) -> F:
    """
    Decorator to handle scan-related errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context
    - Mapping domain exceptions to HTTP status codes
    - Ensuring uniform error response formats
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except UnauthorizedError as e:
            logger.info("Unauthenticated scan request")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=e.message
            )

        except UnsupportedMediaTypeError as e:
            logger.warning("Unsupported scan payload", extra={"error": e.message})
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail=e.message
            )

        except ValidationError as e:
            logger.warning(
                "Invalid scan request",
                extra={"error": e.message, "field": e.details.get("field")}
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=e.message
            )

        except NotFoundError as e:
            logger.warning(
                "Scan resource not found",
                extra={"error": e.message, "details": e.details}
            )
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=e.message
            )

        except IdentityError as e:
            logger.error("Session could not be resolved", extra={"error": e.message})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure in scan operation",
                extra={"error": str(e)}
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(e) or "Internal Server Error"
            )

    return wrapper  # type: ignore
