"""
Exceptions raised by the version pipeline.

Configuration problems (bad aspect ratio, missing background, bad paths) are
raised while a batch is composed, before anything is written. Invocation
failures come from the transformation engine while a batch runs.
"""

from typing import Optional


class VersionError(Exception):
    """Base class for all version pipeline errors"""


class ConfigurationError(VersionError):
    """A version specification can not be turned into a command"""


class InvalidAspectRatio(ConfigurationError, ValueError):
    """Aspect ratio string is present but not of the form W:H"""

    def __init__(self, value: str, reason: str = "expected W:H"):
        self.value = value
        super().__init__(f"Invalid aspect ratio {value!r} ({reason})")


class MissingBackground(ConfigurationError):
    """Flatten was requested without a background colour"""

    def __init__(self, suffix: Optional[str] = None):
        self.suffix = suffix
        target = f" for version {suffix!r}" if suffix else ""
        super().__init__(f"Flatten requested without a background colour{target}")


class InvalidBackground(ConfigurationError, ValueError):
    """Background colour can not be parsed"""

    def __init__(self, background: str, suffix: Optional[str] = None):
        self.background = background
        self.suffix = suffix
        target = f" for version {suffix!r}" if suffix else ""
        super().__init__(f"Unknown background colour {background!r}{target}")


class PathResolutionError(VersionError, ValueError):
    """Source path can not be split into directory, basename and extension"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot resolve path {path!r}: {reason}")


class InvocationFailure(VersionError):
    """The transformation engine failed to produce a version"""

    def __init__(self, reason: str, path: Optional[str] = None, index: Optional[int] = None):
        self.reason = reason
        self.path = path
        self.index = index
        super().__init__(reason)

    def for_version(self, index: int, path: str) -> "InvocationFailure":
        """Attach the position and destination of the failed version."""
        self.index = index
        self.path = path
        self.args = (f"Version {index} ({path}) failed: {self.reason}",)
        return self
