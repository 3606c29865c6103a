"""
Output path resolution for image versions.

Derives the path of a version from the source path: the basename gets a
prefix and a suffix, the extension may be replaced by an output format and the
directory may be replaced by an output directory. Pure string work, no I/O.
"""

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Optional, Type

from core.exceptions import PathResolutionError

logger = logging.getLogger(__name__)


def _path_flavour(path: str) -> Type[PurePath]:
    """Windows flavour only for paths written with backslashes alone."""
    if "\\" in path and "/" not in path:
        return PureWindowsPath
    return PurePosixPath


def resolve_path(
    source_path: str,
    prefix: str = "",
    suffix: str = "",
    format: Optional[str] = None,
    path: Optional[str] = None,
) -> str:
    """
    Derive a new path from a source path.

    Args:
        source_path: Path of the source image (absolute or relative)
        prefix: Prepended to the basename
        suffix: Appended to the basename, before the extension
        format: Replacement extension, with or without leading dot
        path: Replacement directory

    Returns:
        New path. Relative sources stay relative and absolute sources stay
        absolute unless a directory override is given, in which case the
        result is rooted at the override.

    Raises:
        PathResolutionError: If the source path is empty, has an empty
            basename or has no extension

    Example:
        >>> resolve_path("/foo/bar/baz.jpg", prefix="im-", path="/tmp")
        '/tmp/im-baz.jpg'
    """
    if not source_path or not source_path.strip():
        raise PathResolutionError(source_path, "empty path")

    flavour = _path_flavour(source_path)
    source = flavour(source_path)

    if not source.suffix:
        raise PathResolutionError(source_path, "no extension")
    if not source.stem:
        raise PathResolutionError(source_path, "empty basename")

    extension = format.lstrip(".") if format else source.suffix.lstrip(".")
    if not extension:
        raise PathResolutionError(source_path, f"invalid format {format!r}")

    directory = flavour(path) if path else source.parent
    new_path = directory / f"{prefix or ''}{source.stem}{suffix or ''}.{extension}"

    logger.debug(f"Resolved {source_path} -> {new_path}")
    return str(new_path)
