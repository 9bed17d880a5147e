"""
Pytest configuration and fixtures for imageproxy tests
"""

import io
from typing import List, Optional

import cv2
import numpy as np
import pytest
from PIL import Image

from imageproxy.config import Settings
from imageproxy.core.enums import FlipAxis, ResizeMode
from imageproxy.core.exceptions import GeometryOperationError
from imageproxy.core.image.engine import ImageEngine, WorkingImage
from imageproxy.core.metadata import MetadataRewriter
from imageproxy.schemas import CropBox

ORIENTATION_TAG = 0x0112


def make_test_array(width: int, height: int) -> np.ndarray:
    """BGR test pattern: white top-left quadrant, grey circle bottom-right."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    cv2.rectangle(image, (0, 0), (width // 2 - 1, height // 2 - 1), (255, 255, 255), -1)
    radius = max(1, min(width, height) // 8)
    cv2.circle(image, (3 * width // 4, 3 * height // 4), radius, (128, 128, 128), -1)
    return image


def encode_test_image(
    width: int,
    height: int,
    format: str = "JPEG",
    orientation: Optional[int] = None,
    **params,
) -> bytes:
    """Encode the test pattern with Pillow, optionally tagged with an orientation."""
    array = make_test_array(width, height)
    image = Image.fromarray(cv2.cvtColor(array, cv2.COLOR_BGR2RGB))
    if orientation is not None:
        exif = Image.Exif()
        exif[ORIENTATION_TAG] = orientation
        params["exif"] = exif.tobytes()
    buffer = io.BytesIO()
    image.save(buffer, format=format, **params)
    return buffer.getvalue()


def open_image(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


class FakeImage(WorkingImage):
    """Recording WorkingImage that tracks dimensions without pixels."""

    def __init__(self, width: int, height: int, format: str = "jpeg", orientation: int = 1):
        self._width = width
        self._height = height
        self._format = format
        self._orientation = orientation
        self.calls: List[tuple] = []
        self.fail_on: Optional[str] = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def format(self) -> Optional[str]:
        return self._format

    @property
    def orientation(self) -> int:
        return self._orientation

    def _record(self, *call) -> None:
        if self.fail_on == call[0]:
            raise GeometryOperationError(call[0], "rejected by fake engine")
        self.calls.append(call)

    def crop(self, box: CropBox) -> None:
        self._record("crop", box.x, box.y, box.width, box.height)
        self._width, self._height = box.width, box.height

    def resize(self, width: int, height: int, mode: ResizeMode) -> None:
        self._record("resize", width, height, mode)
        if width == 0:
            width = round(self._width * height / self._height)
        elif height == 0:
            height = round(self._height * width / self._width)
        self._width, self._height = width, height

    def smart_crop(self, width: int, height: int) -> None:
        self._record("smart_crop", width, height)
        self._width, self._height = width, height

    def rotate(self, degrees: int) -> None:
        self._record("rotate", degrees)
        if degrees in (90, 270):
            self._width, self._height = self._height, self._width

    def flip(self, axis: FlipAxis) -> None:
        self._record("flip", axis)

    def encode(self, format: str, quality: Optional[int] = None, interlace: bool = False) -> bytes:
        self._record("encode", format, quality, interlace)
        return f"{format}:{self._width}x{self._height}".encode()

    @property
    def operations(self) -> List[str]:
        return [call[0] for call in self.calls]


class FakeEngine(ImageEngine):
    """Engine that hands out prepared FakeImages in order."""

    def __init__(self, *images: FakeImage):
        self.images = list(images)
        self.decoded: List[bytes] = []
        self.auto_orient_flags: List[bool] = []

    def decode(self, data: bytes, auto_orient: bool = False) -> FakeImage:
        self.decoded.append(data)
        self.auto_orient_flags.append(auto_orient)
        return self.images.pop(0)


class RecordingRewriter(MetadataRewriter):
    """Rewriter that returns fixed bytes, or raises the given error."""

    def __init__(self, result: bytes = b"corrected", error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.received: List[bytes] = []

    def rewrite(self, data: bytes) -> bytes:
        self.received.append(data)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def image_bytes():
    """Factory for encoded test images"""
    return encode_test_image


@pytest.fixture
def read_image():
    """Decode bytes into a loaded PIL image"""
    return open_image


@pytest.fixture
def cmyk_jpeg():
    """A 40x20 CMYK JPEG"""
    buffer = io.BytesIO()
    Image.new("CMYK", (40, 20), (0, 255, 255, 0)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def pixels():
    """Render a working image losslessly and return its RGB pixels"""

    def render(image: WorkingImage) -> Image.Image:
        return open_image(image.encode("png")).convert("RGB")

    return render


@pytest.fixture
def fake_image():
    """Factory for recording working images"""
    return FakeImage


@pytest.fixture
def fake_engine():
    """Factory for engines serving prepared images"""
    return FakeEngine


@pytest.fixture
def rewriter():
    """Rewriter that succeeds with fixed bytes"""
    return RecordingRewriter()


@pytest.fixture
def rewriter_factory():
    return RecordingRewriter


@pytest.fixture
def settings():
    """Default settings, independent of the environment"""
    return Settings()
