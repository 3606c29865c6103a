"""
Resize calculations.

Handles fit-within-bounds resizing: scale an image so both sides fit a
bounding box while keeping its aspect ratio, never enlarging it unless asked.
"""

import logging
from typing import Tuple

from schemas import Size

logger = logging.getLogger(__name__)


def fit_within(
    width: int,
    height: int,
    max_width: int,
    max_height: int,
    allow_upscale: bool = False,
) -> Tuple[Size, Size]:
    """
    Fit working dimensions into a bounding box.

    Args:
        width: Working width (after crop)
        height: Working height (after crop)
        max_width: Bounding box width
        max_height: Bounding box height
        allow_upscale: If True, images smaller than the box are enlarged

    Returns:
        Tuple of (box, size). ``box`` is the bounding box handed to the
        engine; it equals the working dimensions when the image already fits
        and upscaling is not allowed, which makes the resize a no-op.
        ``size`` is the exact output size.
    """
    scale = min(max_width / width, max_height / height)

    if scale >= 1 and not allow_upscale:
        working = Size(width=width, height=height)
        return working, working

    box = Size(width=max_width, height=max_height)
    size = Size(
        width=max(1, min(max_width, int(round(width * scale)))),
        height=max(1, min(max_height, int(round(height * scale)))),
    )
    logger.debug(f"Fit {width}x{height} into {box}: {size} (scale {scale:.4f})")
    return box, size
