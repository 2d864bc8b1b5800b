"""
Route error handling utilities.

A decorator that turns domain exceptions raised by the services into
HTTPExceptions with the matching status code, so every router maps
errors the same way.

Dependencies: fastapi, explorely.core.exceptions
System role: Domain error to HTTP translation
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from explorely.core.exceptions import ExplorelyError

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

SERVER_ERROR_MESSAGE = "Server error"


def handle_errors(func: F) -> F:
    """
    Decorator to transform service errors into HTTPExceptions.

    This centralizes:
    - Logging of errors with their details
    - Mapping ExplorelyError subclasses to their HTTP status codes
    - Hiding unexpected failures behind a generic 500
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ExplorelyError as e:
            logger.warning(
                "Request rejected",
                extra={
                    "endpoint": func.__name__,
                    "error_type": type(e).__name__,
                    "error": e.message,
                    "details": e.details,
                },
            )
            raise HTTPException(status_code=e.status_code, detail=e.message) from e

        except Exception as e:
            logger.exception(
                "Unexpected failure in route",
                extra={"endpoint": func.__name__, "error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=SERVER_ERROR_MESSAGE,
            ) from e

    return wrapper  # type: ignore
