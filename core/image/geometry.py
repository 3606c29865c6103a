"""
Crop geometry calculations.

Computes the centred crop rectangle that gives an image a target aspect
ratio. The ratio follows the orientation of the image: on a portrait image
"3:2" and "2:3" both describe a crop that is 2 wide and 3 high.
"""

import logging
import re
from typing import Optional, Tuple

from core.exceptions import InvalidAspectRatio
from schemas import CropGeometry, ImageInfo

logger = logging.getLogger(__name__)

_ASPECT_RE = re.compile(r"\s*(\d+)\s*:\s*(\d+)\s*")


def parse_aspect(value: str) -> Tuple[int, int]:
    """
    Parse an aspect ratio string.

    Args:
        value: Ratio of the form "W:H"

    Returns:
        Tuple of (W, H), both positive

    Raises:
        InvalidAspectRatio: If the string is malformed or a side is zero
    """
    m = _ASPECT_RE.fullmatch(value)
    if not m:
        raise InvalidAspectRatio(value)
    w = int(m.group(1))
    h = int(m.group(2))
    if w <= 0 or h <= 0:
        raise InvalidAspectRatio(value, "W and H must be > 0")
    return (w, h)


def oriented_ratio(image: ImageInfo, ratio: Tuple[int, int]) -> Tuple[int, int]:
    """Turn a ratio so its long side lies along the long side of the image."""
    long_side, short_side = max(ratio), min(ratio)
    if image.is_portrait:
        return (short_side, long_side)
    return (long_side, short_side)


def crop(image: ImageInfo, aspect: Optional[str] = None) -> Optional[CropGeometry]:
    """
    Compute the crop that gives an image the requested aspect ratio.

    The surplus is trimmed equally from both sides of the long axis, so the
    offset is rounded down and the kept extent is the rest of the image.

    Args:
        image: Source image metadata
        aspect: Target ratio "W:H"; None or blank means no crop

    Returns:
        CropGeometry, or None when no crop is needed

    Raises:
        InvalidAspectRatio: If a ratio is given but malformed

    Example:
        >>> str(crop(ImageInfo(path="a.jpg", width=5184, height=2623), "3:2"))
        '3936x2623+624+0'
    """
    if aspect is None or not aspect.strip():
        return None

    ratio_w, ratio_h = oriented_ratio(image, parse_aspect(aspect))
    width, height = image.width, image.height

    # Cross-multiplied to stay in integers
    image_side = width * ratio_h
    target_side = height * ratio_w

    if image_side == target_side:
        return None

    if image_side > target_side:
        offset_x = (image_side - target_side) // (2 * ratio_h)
        if offset_x == 0:
            return None
        geometry = CropGeometry(
            width=width - 2 * offset_x, height=height, offset_x=offset_x, offset_y=0
        )
    else:
        offset_y = (target_side - image_side) // (2 * ratio_w)
        if offset_y == 0:
            return None
        geometry = CropGeometry(
            width=width, height=height - 2 * offset_y, offset_x=0, offset_y=offset_y
        )

    logger.debug(f"Crop {width}x{height} to {aspect}: {geometry}")
    return geometry
