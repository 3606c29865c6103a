"""
Transformation engines executing version commands.

An invoker decodes the source once per batch into a read-only source handle,
runs one command per version against that handle and releases it at the end:

- PillowInvoker: in-process, the handle holds the decoded Pillow image
- MagickInvoker: ImageMagick subprocesses, the handle is a pixel cache file
"""

import logging
import shutil
import subprocess
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Optional

from PIL import Image, ImageColor

from core.commands import CropStep, FlattenStep, QualityStep, ResizeStep, TransformCommand
from core.constants import EngineBackend, EngineConstants, VersionConstants
from core.exceptions import InvocationFailure
from schemas import ImageInfo

logger = logging.getLogger(__name__)


@dataclass
class SourceHandle:
    """Decoded source shared read-only by every version of one batch"""

    image: ImageInfo
    reference: str
    resource: Any = None


class Invoker(ABC):
    """Executes transformation commands against a decoded source"""

    @abstractmethod
    def open(self, image: ImageInfo) -> SourceHandle:
        """Decode the source once."""

    @abstractmethod
    def invoke(self, handle: SourceHandle, command: TransformCommand) -> str:
        """Produce one version and return its path."""

    @abstractmethod
    def close(self, handle: SourceHandle) -> None:
        """Release the decoded source."""

    @contextmanager
    def source(self, image: ImageInfo) -> Iterator[SourceHandle]:
        """Open the source for the duration of a block."""
        handle = self.open(image)
        try:
            yield handle
        finally:
            self.close(handle)
            logger.debug(f"Released source {image.path}")


def ensure_parent_dir(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


class PillowInvoker(Invoker):
    """In-process engine built on Pillow"""

    def open(self, image: ImageInfo) -> SourceHandle:
        try:
            decoded = Image.open(image.path)
            decoded.load()
        except (OSError, Image.DecompressionBombError) as e:
            raise InvocationFailure(f"Cannot decode {image.path}: {e}") from e

        if decoded.size != (image.width, image.height):
            logger.warning(
                f"Decoded size {decoded.width}x{decoded.height} of {image.path} "
                f"differs from metadata {image.width}x{image.height}"
            )

        logger.info(f"Decoded source {image.path} ({decoded.mode} {decoded.width}x{decoded.height})")
        return SourceHandle(image=image, reference=image.path, resource=decoded)

    def invoke(self, handle: SourceHandle, command: TransformCommand) -> str:
        source: Image.Image = handle.resource
        working = source
        derived: List[Image.Image] = []

        try:
            for step in command.operations:
                if isinstance(step, FlattenStep):
                    working = self._flatten(working, step.background)
                elif isinstance(step, CropStep):
                    working = working.crop(step.geometry.box)
                elif isinstance(step, ResizeStep):
                    if working.size == step.size.as_tuple():
                        continue
                    working = working.resize(step.size.as_tuple(), Image.Resampling.LANCZOS)
                else:
                    continue
                derived.append(working)

            self._write(working, command)

        except InvocationFailure:
            raise
        except (OSError, ValueError, KeyError, Image.DecompressionBombError) as e:
            raise InvocationFailure(f"Cannot write {command.destination}: {e}") from e
        finally:
            # Never close the shared source, only the copies made from it
            for image in derived:
                image.close()

        return command.destination

    def close(self, handle: SourceHandle) -> None:
        if handle.resource is not None:
            handle.resource.close()
            handle.resource = None

    @staticmethod
    def _flatten(image: Image.Image, background: str) -> Image.Image:
        rgba = image.convert("RGBA")
        canvas = Image.new("RGBA", rgba.size, ImageColor.getcolor(background, "RGBA"))
        canvas.alpha_composite(rgba)
        rgba.close()
        return canvas.convert("RGB")

    @staticmethod
    def _write(image: Image.Image, command: TransformCommand) -> None:
        extension = command.format
        pil_format = Image.registered_extensions().get(f".{extension}")
        if pil_format is None:
            raise InvocationFailure(f"Unsupported output format: {extension!r}")

        save_kwargs = {"format": pil_format}

        quality = command.find(QualityStep)
        if quality and extension in VersionConstants.LOSSY_FORMATS:
            save_kwargs["quality"] = quality.quality

        if extension in VersionConstants.NON_ALPHA_FORMATS and image.mode not in ("RGB", "L", "CMYK"):
            image = image.convert("RGB")

        ensure_parent_dir(command.destination)
        image.save(command.destination, **save_kwargs)
        logger.debug(f"Wrote {command.destination} ({pil_format} {image.width}x{image.height})")


def detect_magick() -> List[str]:
    """Find the ImageMagick binary, preferring ``magick`` over ``convert``."""
    for name in EngineConstants.MAGICK_BINARIES:
        found = shutil.which(name)
        if found:
            return [found]
    raise RuntimeError("missing ImageMagick (need `magick` or `convert`)")


class MagickInvoker(Invoker):
    """
    Engine running ImageMagick in subprocesses.

    The source is decoded once into an ImageMagick pixel cache (.mpc) that
    every version reads without decoding the original file again.
    """

    def __init__(
        self,
        binary: Optional[List[str]] = None,
        timeout: float = EngineConstants.DEFAULT_TIMEOUT_SECONDS,
    ):
        self.binary = binary or detect_magick()
        self.timeout = timeout

    def open(self, image: ImageInfo) -> SourceHandle:
        temp_dir = tempfile.mkdtemp(prefix=EngineConstants.TEMP_DIR_PREFIX)
        cache = str(Path(temp_dir) / EngineConstants.SOURCE_CACHE_NAME)
        try:
            self._run(self.binary + [image.path, cache])
        except InvocationFailure:
            shutil.rmtree(temp_dir, ignore_errors=True)
            raise

        logger.info(f"Cached source {image.path} in {cache}")
        return SourceHandle(image=image, reference=cache, resource=temp_dir)

    def invoke(self, handle: SourceHandle, command: TransformCommand) -> str:
        ensure_parent_dir(command.destination)
        argv = self.binary + [handle.reference]
        for step in command.operations:
            argv += step.args()
        argv.append(command.destination)
        self._run(argv)
        return command.destination

    def close(self, handle: SourceHandle) -> None:
        if handle.resource:
            shutil.rmtree(handle.resource, ignore_errors=True)
            handle.resource = None

    def _run(self, argv: List[str]) -> None:
        logger.debug(f"Running {' '.join(argv)}")
        try:
            proc = subprocess.run(argv, text=True, capture_output=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise InvocationFailure(f"ImageMagick timed out after {self.timeout}s") from e
        except OSError as e:
            raise InvocationFailure(f"Cannot run ImageMagick: {e}") from e

        if proc.returncode != 0:
            reason = proc.stderr.strip() or f"exit status {proc.returncode}"
            raise InvocationFailure(reason)


def create_invoker(backend: str, timeout: float, magick_binary: Optional[str] = None) -> Invoker:
    """
    Create the invoker for a configured backend.

    Args:
        backend: "pillow" or "magick"
        timeout: Time allowed for one ImageMagick call in seconds
        magick_binary: ImageMagick binary; detected on PATH when not given
    """
    if EngineBackend(backend) is EngineBackend.MAGICK:
        binary = [magick_binary] if magick_binary else None
        return MagickInvoker(binary=binary, timeout=timeout)
    return PillowInvoker()
