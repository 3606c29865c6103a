"""
Source image models.
"""

from pydantic import ConfigDict, Field

from .common import CamelModel, Size


class ImageInfo(CamelModel):
    """Metadata of the decoded source image. Read-only for a whole batch."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Source image path")
    width: int = Field(..., gt=0, description="Source width in pixels")
    height: int = Field(..., gt=0, description="Source height in pixels")

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)

    @property
    def is_portrait(self) -> bool:
        return self.height > self.width
