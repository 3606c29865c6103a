"""
Constants and configuration values for the image versions pipeline.
Centralizes all magic numbers and configuration constants.
"""

from enum import Enum


class VersionConstants:
    """Constants related to version commands."""

    # Prefix of the in-memory registered copy of the decoded source
    MEMORY_REFERENCE_PREFIX = "mpr:"

    # Sink used to terminate a single-process batch command
    NULL_OUTPUT = "null:"

    # Default shell command of the single-process batch
    DEFAULT_BATCH_BINARY = "convert"

    # Quality only changes the encoding of these formats
    LOSSY_FORMATS = {"jpg", "jpeg", "webp", "avif", "heic", "jxl"}

    # Pillow cannot store an alpha channel in these formats
    NON_ALPHA_FORMATS = {"jpg", "jpeg", "bmp"}


class EngineConstants:
    """Constants related to the transformation engines."""

    # Time allowed for one engine invocation
    DEFAULT_TIMEOUT_SECONDS = 30.0

    # ImageMagick binaries, preferred first
    MAGICK_BINARIES = ["magick", "convert"]

    # Persistent pixel cache format holding the decoded source
    SOURCE_CACHE_NAME = "source.mpc"
    TEMP_DIR_PREFIX = "image-versions-"


class EngineBackend(str, Enum):
    """Available transformation engines"""

    PILLOW = "pillow"
    MAGICK = "magick"
