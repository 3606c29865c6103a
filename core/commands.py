"""
Transformation command composition.

A version is produced by a fixed sequence of steps run against the decoded
source: reference the source, set the quality, flatten, crop, resize, write
and release the working copy. Each step renders to ImageMagick syntax, either
as argv tokens for a subprocess or as text for a shell command:

    mpr:./a.jpg -quality 50 -resize "500x500" -write a-b.jpg +delete
"""

import logging
import shlex
from dataclasses import dataclass
from pathlib import PurePath
from typing import List, Optional, Sequence, Tuple, Union

from PIL import ImageColor

from core.constants import VersionConstants
from core.exceptions import InvalidBackground, MissingBackground, PathResolutionError
from core.image.geometry import crop
from core.image.processors import fit_within
from schemas import CropGeometry, ImageInfo, Size, VersionSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceStep:
    """Reference to the in-memory copy of the decoded source"""

    reference: str

    def args(self) -> List[str]:
        return [f"{VersionConstants.MEMORY_REFERENCE_PREFIX}{self.reference}"]

    def render(self) -> str:
        return f"{VersionConstants.MEMORY_REFERENCE_PREFIX}{self.reference}"


@dataclass(frozen=True)
class QualityStep:
    quality: int

    def args(self) -> List[str]:
        return ["-quality", str(self.quality)]

    def render(self) -> str:
        return f"-quality {self.quality}"


@dataclass(frozen=True)
class FlattenStep:
    background: str

    def args(self) -> List[str]:
        return ["-background", self.background, "-flatten"]

    def render(self) -> str:
        return f'-background "{self.background}" -flatten'


@dataclass(frozen=True)
class CropStep:
    geometry: CropGeometry

    def args(self) -> List[str]:
        # Drop the virtual canvas left by the crop
        return ["-crop", self.geometry.to_geometry(), "+repage"]

    def render(self) -> str:
        return f'-crop "{self.geometry.to_geometry()}"'


@dataclass(frozen=True)
class ResizeStep:
    """
    Fit-within-bounds resize.

    ``box`` is the bounding box passed to the engine, ``size`` the exact
    dimensions that box produces for the working image.
    """

    box: Size
    size: Size

    def args(self) -> List[str]:
        return ["-resize", str(self.box)]

    def render(self) -> str:
        return f'-resize "{self.box}"'


@dataclass(frozen=True)
class WriteStep:
    path: str

    def args(self) -> List[str]:
        return ["-write", self.path]

    def render(self) -> str:
        return f"-write {self.path}"


@dataclass(frozen=True)
class ReleaseStep:
    """Drop the working copy so the next version starts from the source"""

    def args(self) -> List[str]:
        return ["+delete"]

    def render(self) -> str:
        return "+delete"


Step = Union[SourceStep, QualityStep, FlattenStep, CropStep, ResizeStep, WriteStep, ReleaseStep]

# Steps that change pixels or encoding, as opposed to source/write bookkeeping
OPERATION_STEPS = (QualityStep, FlattenStep, CropStep, ResizeStep)


@dataclass(frozen=True)
class TransformCommand:
    """Ordered steps producing one version from the decoded source"""

    source: str
    destination: str
    steps: Tuple[Step, ...]

    @property
    def operations(self) -> Tuple[Step, ...]:
        return tuple(step for step in self.steps if isinstance(step, OPERATION_STEPS))

    @property
    def format(self) -> str:
        return PurePath(self.destination).suffix.lstrip(".").lower()

    @property
    def output_size(self) -> Size:
        return self.find(ResizeStep).size

    def find(self, step_type: type) -> Optional[Step]:
        for step in self.steps:
            if isinstance(step, step_type):
                return step
        return None

    def args(self) -> List[str]:
        return [arg for step in self.steps for arg in step.args()]

    def render(self) -> str:
        return " ".join(step.render() for step in self.steps)

    def __str__(self) -> str:
        return self.render()


def compose_version(
    image: ImageInfo, version: VersionSpec, allow_upscale: bool = False
) -> TransformCommand:
    """
    Compose the command producing one version.

    Args:
        image: Source image metadata
        version: Version with its output path set
        allow_upscale: If True, versions may be larger than the source

    Returns:
        TransformCommand with steps in fixed order: source, quality,
        flatten, crop, resize, write, release

    Raises:
        PathResolutionError: If the version has no output path
        MissingBackground: If flatten is requested without background
        InvalidBackground: If the background colour can not be parsed
        InvalidAspectRatio: If the version aspect ratio is malformed
    """
    if not version.path:
        raise PathResolutionError(image.path, f"version {version.suffix!r} has no output path")

    steps: List[Step] = [SourceStep(image.path)]

    if version.quality:
        steps.append(QualityStep(version.quality))

    if version.flatten:
        if not version.background:
            raise MissingBackground(version.suffix)
        try:
            ImageColor.getrgb(version.background)
        except ValueError as e:
            raise InvalidBackground(version.background, version.suffix) from e
        steps.append(FlattenStep(version.background))

    working = image.size
    geometry = crop(image, version.aspect)
    if geometry:
        steps.append(CropStep(geometry))
        working = geometry.size

    box, size = fit_within(
        working.width, working.height, version.max_width, version.max_height, allow_upscale
    )
    steps.append(ResizeStep(box=box, size=size))

    steps.append(WriteStep(version.path))
    steps.append(ReleaseStep())

    command = TransformCommand(source=image.path, destination=version.path, steps=tuple(steps))
    logger.debug(f"Composed {version.path}: {command.render()}")
    return command


def render_batch(
    image: ImageInfo,
    commands: Sequence[TransformCommand],
    binary: str = VersionConstants.DEFAULT_BATCH_BINARY,
) -> str:
    """
    Render a whole batch as one shell command.

    The source is decoded once and registered in memory, every version reads
    the registered copy, and the final image list goes to the null sink.
    Paths are shell quoted; paths without special characters render as is.
    """
    reference = shlex.quote(SourceStep(image.path).render())
    parts = [f"{binary} {shlex.quote(image.path)} -write {reference} +delete"]
    parts.extend(
        " ".join(_shell_render(step) for step in command.steps) for command in commands
    )
    parts.append(VersionConstants.NULL_OUTPUT)
    return " ".join(parts)


def _shell_render(step: Step) -> str:
    if isinstance(step, SourceStep):
        return shlex.quote(step.render())
    if isinstance(step, WriteStep):
        return f"-write {shlex.quote(step.path)}"
    return step.render()
