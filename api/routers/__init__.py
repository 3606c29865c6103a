"""
API Routers for Image Versions
"""

from . import versions

__all__ = ["versions"]
