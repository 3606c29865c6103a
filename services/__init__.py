"""
Service layer - batch planning on top of the core calculations.
"""

from .version_service import VersionService, run

__all__ = ["VersionService", "run"]
