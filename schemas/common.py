"""
Common models shared by all layers.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both snake_case names and camelCase wire aliases"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Size(CamelModel):
    """Width and height in pixels"""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, description="Width")
    height: int = Field(..., gt=0, description="Height")

    def as_tuple(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class CropGeometry(CamelModel):
    """
    Crop rectangle cut from the source before resizing.

    Renders as the ``WxH+X+Y`` geometry accepted by ImageMagick.
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, description="Crop width")
    height: int = Field(..., gt=0, description="Crop height")
    offset_x: int = Field(0, ge=0, description="Left edge")
    offset_y: int = Field(0, ge=0, description="Top edge")

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom) box for Pillow."""
        return (
            self.offset_x,
            self.offset_y,
            self.offset_x + self.width,
            self.offset_y + self.height,
        )

    def to_geometry(self) -> str:
        return f"{self.width}x{self.height}+{self.offset_x}+{self.offset_y}"

    def __str__(self) -> str:
        return self.to_geometry()
