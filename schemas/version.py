"""
Version models.

This module contains the models describing requested derivatives:
- VersionSpec: one requested version
- OutputOptions: batch-wide options and the ordered versions
- ResolvedVersion: a version with its computed output path
- Request and response models of the versions API
"""

from typing import List, Optional

from pydantic import Field

from .common import CamelModel
from .image import ImageInfo


class VersionSpec(CamelModel):
    """One requested derivative of the source image"""

    suffix: str = Field(..., description="Appended to the source basename")
    prefix: Optional[str] = Field(None, description="Overrides the batch prefix")
    max_width: int = Field(..., gt=0, description="Bounding box width")
    max_height: int = Field(..., gt=0, description="Bounding box height")
    aspect: Optional[str] = Field(None, description="Target aspect ratio W:H")
    format: Optional[str] = Field(None, description="Output format (file extension)")
    quality: Optional[int] = Field(None, ge=1, le=100, description="Encoder quality")
    flatten: bool = Field(False, description="Flatten transparency against background")
    background: Optional[str] = Field(None, description="Background colour for flatten")
    path: Optional[str] = Field(None, description="Explicit output path")


class OutputOptions(CamelModel):
    """Batch-wide output options"""

    path: Optional[str] = Field(None, description="Output directory for every version")
    prefix: str = Field("", description="Default basename prefix")
    quality: Optional[int] = Field(None, ge=1, le=100, description="Encoder quality")
    allow_upscale: bool = Field(False, description="Allow versions larger than the source")
    versions: List[VersionSpec] = Field(default_factory=list)


class ResolvedVersion(VersionSpec):
    """Version with its computed output path, returned to the caller"""

    path: str = Field(..., description="Computed output path")


class VersionBatchRequest(CamelModel):
    """Request to plan or run a batch of versions"""

    image: ImageInfo
    output: OutputOptions


class VersionPlanResponse(CamelModel):
    """Planned versions with the commands that would produce them"""

    versions: List[ResolvedVersion]
    commands: List[str]
    command: str


class VersionRunResponse(CamelModel):
    """Produced versions"""

    versions: List[ResolvedVersion]
    processing_time_ms: int


class CropRequest(CamelModel):
    """Request to compute crop geometry"""

    image: ImageInfo
    aspect: Optional[str] = None


class CropResponse(CamelModel):
    """Crop geometry, or None when no crop is needed"""

    geometry: Optional[str] = None
