"""
Pytest configuration and fixtures for Image Versions tests
"""

from typing import List, Optional

import pytest
from PIL import Image

from core.commands import TransformCommand
from core.exceptions import InvocationFailure
from core.invokers import Invoker, SourceHandle
from schemas import ImageInfo, OutputOptions


class RecordingInvoker(Invoker):
    """Invoker that records calls instead of producing files"""

    def __init__(self, fail_at: Optional[int] = None):
        self.fail_at = fail_at
        self.opened: List[ImageInfo] = []
        self.closed: List[SourceHandle] = []
        self.commands: List[TransformCommand] = []
        self.handles: List[SourceHandle] = []

    def open(self, image: ImageInfo) -> SourceHandle:
        self.opened.append(image)
        return SourceHandle(image=image, reference=image.path, resource=object())

    def invoke(self, handle: SourceHandle, command: TransformCommand) -> str:
        if self.fail_at is not None and len(self.commands) == self.fail_at:
            self.commands.append(command)
            raise InvocationFailure("engine exploded")
        self.commands.append(command)
        self.handles.append(handle)
        return command.destination

    def close(self, handle: SourceHandle) -> None:
        self.closed.append(handle)


@pytest.fixture
def recording_invoker():
    """Invoker recording every call"""
    return RecordingInvoker()


@pytest.fixture
def failing_invoker():
    """Invoker failing on the second version"""
    return RecordingInvoker(fail_at=1)


@pytest.fixture
def horizontal_image():
    """Landscape source image metadata"""
    return ImageInfo(path="./assets/horizontal.jpg", width=5184, height=2623)


@pytest.fixture
def vertical_image():
    """Portrait source image metadata"""
    return ImageInfo(path="./assets/vertical.jpg", width=1929, height=3456)


@pytest.fixture
def version_specs():
    """Typical set of web versions"""
    return [
        {"suffix": "-full", "maxWidth": 1920, "maxHeight": 1920},
        {"suffix": "-1200", "maxWidth": 1200, "maxHeight": 1200, "aspect": "3:2"},
        {"suffix": "-800", "maxWidth": 800, "maxHeight": 800, "aspect": "3:2"},
        {"suffix": "-500", "maxWidth": 500, "maxHeight": 500, "aspect": "3:2"},
        {"suffix": "-260", "maxWidth": 260, "maxHeight": 260, "aspect": "3:2"},
        {"suffix": "-150", "maxWidth": 150, "maxHeight": 150, "aspect": "3:2"},
        {"suffix": "-square-200", "maxWidth": 200, "maxHeight": 200, "aspect": "1:1"},
        {"suffix": "-square-50", "maxWidth": 50, "maxHeight": 50, "aspect": "1:1"},
    ]


@pytest.fixture
def output_options(version_specs):
    """Output options with the typical versions"""
    return OutputOptions(versions=version_specs)


@pytest.fixture
def jpeg_file(tmp_path):
    """Create a 300x150 JPEG on disk and return its metadata"""
    path = tmp_path / "photo.jpg"
    image = Image.new("RGB", (300, 150), (30, 120, 200))
    image.save(path, format="JPEG")
    return ImageInfo(path=str(path), width=300, height=150)


@pytest.fixture
def transparent_file(tmp_path):
    """Create a fully transparent 80x60 PNG on disk and return its metadata"""
    path = tmp_path / "transparent.png"
    image = Image.new("RGBA", (80, 60), (0, 0, 0, 0))
    image.save(path, format="PNG")
    return ImageInfo(path=str(path), width=80, height=60)


@pytest.fixture
def gradient_file(tmp_path):
    """Create a 256x256 gradient JPEG on disk and return its metadata"""
    path = tmp_path / "gradient.jpg"
    image = Image.linear_gradient("L").convert("RGB")
    image.save(path, format="JPEG", quality=100)
    return ImageInfo(path=str(path), width=256, height=256)
