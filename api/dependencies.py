"""
Shared FastAPI dependencies for the versions API.
"""

import logging

from fastapi import Depends, HTTPException, Request

from core.invokers import Invoker
from services.version_service import VersionService

logger = logging.getLogger(__name__)


def get_invoker(request: Request) -> Invoker:
    """
    Get the invoker from app state.

    Raises:
        HTTPException: If the invoker is not initialized
    """
    try:
        return request.app.state.invoker
    except AttributeError as e:
        logger.error(f"Invoker not initialized in app state: {e}")
        raise HTTPException(status_code=500, detail="Internal server error: Invoker not initialized")


def get_version_service(invoker: Invoker = Depends(get_invoker)) -> VersionService:
    """Get version service instance."""
    return VersionService(invoker=invoker)
