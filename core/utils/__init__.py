"""
Utility modules for core functionality.

Modules:
- decorators: Timing helpers (timer)
"""

from .decorators import timer

__all__ = ["timer"]
