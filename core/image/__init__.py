"""
Image calculations.

This package provides the geometry behind every version:
- geometry: Aspect ratio parsing and crop rectangles
- processors: Fit-within-bounds resizing
"""

from core.image.geometry import crop, oriented_ratio, parse_aspect
from core.image.processors import fit_within

__all__ = ["crop", "oriented_ratio", "parse_aspect", "fit_within"]
