"""API utilities for FastAPI route handling."""

import functools
import logging
from collections.abc import Callable

from fastapi import HTTPException, status

from core.exceptions import (
    DuplicateResourceException,
    JourneyLogException,
    ResourceNotFoundException,
    ValidationException,
)

_STATUS_BY_EXCEPTION: tuple[tuple[type[JourneyLogException], int], ...] = (
    (ValidationException, status.HTTP_400_BAD_REQUEST),
    (ResourceNotFoundException, status.HTTP_404_NOT_FOUND),
    (DuplicateResourceException, status.HTTP_409_CONFLICT),
)


def _status_for(exc: JourneyLogException) -> int | None:
    for exc_type, status_code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return None


def api_route(logger: logging.Logger):
    """
    Decorator for FastAPI endpoints that provides standardized error handling.

    Wraps async endpoint functions with try/except to:
    - Re-raise HTTPException instances as-is
    - Map journey errors to 400/404/409
    - Log and convert everything else to a 500 HTTPException

    Usage:
        @router.get("/api/example")
        @api_route(logger)
        async def my_endpoint():
            # ... business logic ...
            return result
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except JourneyLogException as e:
                status_code = _status_for(e)
                if status_code is None:
                    logger.exception(
                        "Application error in %s: %s",
                        func.__name__,
                        e.message,
                    )
                    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
                else:
                    logger.warning(
                        "%s in %s: %s", type(e).__name__, func.__name__, e.message
                    )
                raise HTTPException(status_code=status_code, detail=e.message) from e
            except Exception as e:
                logger.exception("Unexpected error in %s", func.__name__)
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=str(e),
                ) from e

        return wrapper

    return decorator
