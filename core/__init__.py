"""
Core modules for Image Versions

Public calculations:
- path: derive a version's output path
- crop: crop geometry for a target aspect ratio
- compose_version: transformation command of one version
"""

from .commands import TransformCommand, compose_version, render_batch
from .exceptions import (
    ConfigurationError,
    InvalidAspectRatio,
    InvalidBackground,
    InvocationFailure,
    MissingBackground,
    PathResolutionError,
    VersionError,
)
from .image.geometry import crop
from .invokers import Invoker, MagickInvoker, PillowInvoker, SourceHandle, create_invoker
from .paths import resolve_path

path = resolve_path

__all__ = [
    "path",
    "resolve_path",
    "crop",
    "compose_version",
    "render_batch",
    "TransformCommand",
    "Invoker",
    "PillowInvoker",
    "MagickInvoker",
    "SourceHandle",
    "create_invoker",
    "VersionError",
    "ConfigurationError",
    "InvalidAspectRatio",
    "InvalidBackground",
    "MissingBackground",
    "PathResolutionError",
    "InvocationFailure",
]
