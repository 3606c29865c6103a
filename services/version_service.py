"""
Version Service - Plans and runs batches of image versions.

This service resolves the output path of every requested version, composes
the command producing it and drives the invoker over the whole batch with a
single decoded source.
"""

import logging
from typing import Callable, List, Optional, Tuple

from core.commands import TransformCommand, compose_version, render_batch
from core.constants import VersionConstants
from core.exceptions import InvocationFailure, PathResolutionError, VersionError
from core.invokers import Invoker, PillowInvoker
from core.paths import resolve_path
from core.utils.decorators import timer
from schemas import ImageInfo, OutputOptions, ResolvedVersion

logger = logging.getLogger(__name__)

BatchCallback = Callable[[Optional[Exception], Optional[List[ResolvedVersion]]], None]


class VersionService:
    """
    Service for producing versions of a source image.

    Composition is pure and happens for the whole batch before the invoker
    is touched, so configuration errors never leave partial output behind.
    """

    def __init__(self, invoker: Optional[Invoker] = None):
        """
        Initialize version service.

        Args:
            invoker: Transformation engine; defaults to the Pillow engine
        """
        self.invoker = invoker or PillowInvoker()

    def plan(self, image: ImageInfo, output: OutputOptions) -> List[ResolvedVersion]:
        """
        Resolve the output path of every version.

        Args:
            image: Source image metadata
            output: Output options with the ordered versions

        Returns:
            Resolved versions in input order

        Raises:
            PathResolutionError: If a path can not be derived or two
                versions resolve to the same path
        """
        resolved = []
        seen = {}

        for index, version in enumerate(output.versions):
            prefix = version.prefix if version.prefix is not None else output.prefix
            path = version.path or resolve_path(
                image.path,
                prefix=prefix,
                suffix=version.suffix,
                format=version.format,
                path=output.path,
            )

            if path in seen:
                raise PathResolutionError(
                    image.path, f"versions {seen[path]} and {index} both resolve to {path}"
                )
            seen[path] = index

            quality = version.quality if version.quality is not None else output.quality
            resolved.append(
                ResolvedVersion(
                    **version.model_dump(exclude={"path", "prefix", "quality"}),
                    prefix=prefix,
                    quality=quality,
                    path=path,
                )
            )

        logger.debug(f"Planned {len(resolved)} versions of {image.path}")
        return resolved

    def compose(
        self, image: ImageInfo, output: OutputOptions
    ) -> List[Tuple[ResolvedVersion, TransformCommand]]:
        """
        Plan the batch and compose the command of every version.

        Raises:
            ConfigurationError: If a version has a malformed aspect ratio or
                requests flatten without background
            PathResolutionError: If output paths can not be derived
        """
        return [
            (version, compose_version(image, version, allow_upscale=output.allow_upscale))
            for version in self.plan(image, output)
        ]

    def batch_command(
        self,
        image: ImageInfo,
        output: OutputOptions,
        binary: str = VersionConstants.DEFAULT_BATCH_BINARY,
    ) -> str:
        """Render the whole batch as a single shell command."""
        commands = [command for _, command in self.compose(image, output)]
        return render_batch(image, commands, binary=binary)

    def run(
        self,
        image: ImageInfo,
        output: OutputOptions,
        callback: Optional[BatchCallback] = None,
    ) -> Optional[List[ResolvedVersion]]:
        """
        Produce every version of a batch.

        Versions are produced in input order from one decoded source. The
        first failure stops the batch; no partial list is ever returned.

        Args:
            image: Source image metadata
            output: Output options with the ordered versions
            callback: Optional completion callback. When given it is called
                exactly once, with ``(None, versions)`` on success or
                ``(error, None)`` on failure, and ``run`` returns None.

        Returns:
            Resolved versions in input order (without callback)

        Raises:
            VersionError: Configuration or invocation failure (without
                callback)
        """
        try:
            versions = self._run(image, output)
        except VersionError as e:
            if callback is None:
                raise
            callback(e, None)
            return None

        if callback is None:
            return versions
        callback(None, versions)
        return None

    def _run(self, image: ImageInfo, output: OutputOptions) -> List[ResolvedVersion]:
        composed = self.compose(image, output)
        if not composed:
            return []

        with timer() as batch_time:
            with self.invoker.source(image) as handle:
                for index, (version, command) in enumerate(composed):
                    with timer() as t:
                        try:
                            self.invoker.invoke(handle, command)
                        except InvocationFailure as e:
                            e.for_version(index, version.path)
                            logger.error(f"Failed to produce {version.path}: {e.reason}")
                            raise
                    logger.info(f"Produced {version.path} ({command.output_size}) in {t['ms']} ms")

        logger.info(f"Produced {len(composed)} versions of {image.path} in {batch_time['ms']} ms")
        return [version for version, _ in composed]


def run(
    image: ImageInfo,
    output: OutputOptions,
    callback: Optional[BatchCallback] = None,
    invoker: Optional[Invoker] = None,
) -> Optional[List[ResolvedVersion]]:
    """Produce every version of a batch with a one-off service."""
    return VersionService(invoker=invoker).run(image, output, callback=callback)
