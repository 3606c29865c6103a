"""
Versions API Router - Plan and produce image versions
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_version_service
from api.exceptions import safe_endpoint
from core.image.geometry import crop
from core.utils.decorators import timer
from schemas import (
    CropRequest,
    CropResponse,
    VersionBatchRequest,
    VersionPlanResponse,
    VersionRunResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/plan")
@safe_endpoint
async def plan_versions(
    request: VersionBatchRequest, version_service=Depends(get_version_service)
) -> VersionPlanResponse:
    """
    Resolve paths and compose commands without producing any file.

    Returns the resolved versions, the command of every version and the
    whole batch rendered as a single shell command.
    """
    composed = version_service.compose(request.image, request.output)
    command = version_service.batch_command(request.image, request.output)

    return VersionPlanResponse(
        versions=[version for version, _ in composed],
        commands=[c.render() for _, c in composed],
        command=command,
    )


@router.post("/run")
@safe_endpoint
async def run_versions(
    request: VersionBatchRequest, version_service=Depends(get_version_service)
) -> VersionRunResponse:
    """Produce every version of the batch."""
    with timer() as t:
        versions = version_service.run(request.image, request.output)

    logger.info(f"Run of {request.image.path}: {len(versions)} versions in {t['ms']} ms")
    return VersionRunResponse(versions=versions, processing_time_ms=t["ms"])


@router.post("/crop")
@safe_endpoint
async def crop_geometry(request: CropRequest) -> CropResponse:
    """Compute the crop geometry for an aspect ratio."""
    geometry = crop(request.image, request.aspect)
    return CropResponse(geometry=geometry.to_geometry() if geometry else None)
