"""
Schemas Package

Pydantic schemas for validation and serialization, shared across all layers:
- API (routers, dependencies)
- Services (batch planning)
- Core (paths, geometry, commands, invokers)
"""

from .common import CamelModel, CropGeometry, Size
from .image import ImageInfo
from .version import (
    CropRequest,
    CropResponse,
    OutputOptions,
    ResolvedVersion,
    VersionBatchRequest,
    VersionPlanResponse,
    VersionRunResponse,
    VersionSpec,
)

__all__ = [
    # Common models
    "CamelModel",
    "CropGeometry",
    "Size",
    # Image models
    "ImageInfo",
    # Version models
    "VersionSpec",
    "OutputOptions",
    "ResolvedVersion",
    # API models
    "VersionBatchRequest",
    "VersionPlanResponse",
    "VersionRunResponse",
    "CropRequest",
    "CropResponse",
]
