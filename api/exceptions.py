"""
Exception handling for the versions API.

Maps pipeline errors to HTTP responses:
- ConfigurationError, PathResolutionError -> 422
- InvocationFailure -> 502
- anything unexpected inside an endpoint -> 500
"""

import functools
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.exceptions import (
    ConfigurationError,
    InvocationFailure,
    PathResolutionError,
    VersionError,
)

logger = logging.getLogger(__name__)


def error_content(error: str, message: str, **details) -> dict:
    content = {"error": error, "detail": message}
    details = {k: v for k, v in details.items() if v is not None}
    if details:
        content["details"] = details
    return content


async def configuration_error_handler(request: Request, exc: VersionError) -> JSONResponse:
    logger.warning(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content=error_content(type(exc).__name__, str(exc)))


async def invocation_failure_handler(request: Request, exc: InvocationFailure) -> JSONResponse:
    logger.error(f"Invocation failed on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content=error_content(
            "InvocationFailure", str(exc), index=exc.index, path=exc.path, reason=exc.reason
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register pipeline exception handlers on the app."""
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(PathResolutionError, configuration_error_handler)
    app.add_exception_handler(InvocationFailure, invocation_failure_handler)


def safe_endpoint(func):
    """
    Decorator for async endpoints.

    HTTP and pipeline errors pass through to their handlers; any other
    exception is logged and turned into a 500 response.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (HTTPException, VersionError):
            raise
        except Exception as e:
            logger.error(f"Error in {func.__name__}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))

    return wrapper
