"""
Pillow image engine.

Production implementation of the ImageEngine capability. Pillow never applies
EXIF orientation on decode, so auto orientation only happens when explicitly
requested.
"""

import io
import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from imageproxy.core.constants import ExifConstants, FormatConstants
from imageproxy.core.enums import FlipAxis, ResizeMode
from imageproxy.core.exceptions import DecodeError, GeometryOperationError
from imageproxy.core.image.engine import ImageEngine, WorkingImage
from imageproxy.core.image.smartcrop import CentreAnalyzer, SmartCropAnalyzer
from imageproxy.schemas import CropBox

logger = logging.getLogger(__name__)

RESAMPLE = Image.Resampling.LANCZOS

# Pillow format names that map onto our container tags
_FORMAT_ALIASES = {"mpo": FormatConstants.JPEG}

_PIL_FORMATS = {
    FormatConstants.GIF: "GIF",
    FormatConstants.JPEG: "JPEG",
    FormatConstants.PNG: "PNG",
    FormatConstants.TIFF: "TIFF",
    FormatConstants.WEBP: "WEBP",
}

# Containers whose Pillow writer accepts an exif block
_EXIF_FORMATS = frozenset({FormatConstants.JPEG, FormatConstants.PNG, FormatConstants.WEBP})

_JPEG_MODES = ("RGB", "L", "CMYK")
_GIF_MODES = ("1", "L", "LA", "P", "RGB", "RGBA")

# Clockwise degrees -> Pillow transpose (Pillow rotates counter-clockwise)
_ROTATIONS = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}

_FLIPS = {
    FlipAxis.VERTICAL: Image.Transpose.FLIP_TOP_BOTTOM,
    FlipAxis.HORIZONTAL: Image.Transpose.FLIP_LEFT_RIGHT,
}


@contextmanager
def _operation(name: str) -> Iterator[None]:
    """Translate Pillow failures into GeometryOperationError."""
    try:
        yield
    except GeometryOperationError:
        raise
    except (ValueError, OSError, MemoryError) as e:
        logger.error(f"Image {name} failed: {e}")
        raise GeometryOperationError(name, str(e)) from e


class PillowImage(WorkingImage):
    """WorkingImage backed by a PIL image."""

    def __init__(
        self,
        image: Image.Image,
        format: Optional[str],
        orientation: int = ExifConstants.NORMAL,
        exif: Optional[bytes] = None,
        analyzer: Optional[SmartCropAnalyzer] = None,
    ):
        self._image = image
        self._format = format
        self._orientation = orientation
        self._exif = exif
        self.analyzer = analyzer or CentreAnalyzer()

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def format(self) -> Optional[str]:
        return self._format

    @property
    def orientation(self) -> int:
        return self._orientation

    def crop(self, box: CropBox) -> None:
        if box.is_empty or not box.fits_within(self.width, self.height):
            raise GeometryOperationError(
                "crop", f"box {box.to_dict()} invalid for {self.width}x{self.height} image"
            )
        with _operation("crop"):
            self._image = self._image.crop((box.x, box.y, box.x2, box.y2))

    def resize(self, width: int, height: int, mode: ResizeMode) -> None:
        if width <= 0 and height <= 0:
            raise GeometryOperationError("resize", "no target dimension given")

        with _operation("resize"):
            if width == 0 or height == 0 or mode == ResizeMode.PROPORTIONAL:
                size = self._proportional_size(width, height)
                self._image = self._image.resize(size, RESAMPLE)
            elif mode == ResizeMode.CONTAIN:
                self._image = ImageOps.pad(self._image, (width, height), method=RESAMPLE, color=0)
            else:
                self._image = ImageOps.fit(self._image, (width, height), method=RESAMPLE)

    def smart_crop(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise GeometryOperationError("smart_crop", f"invalid target {width}x{height}")

        with _operation("smart_crop"):
            # scale to cover the target box, then crop at the analyzer's anchor
            scale = max(width / self.width, height / self.height)
            scaled = (
                max(width, round(self.width * scale)),
                max(height, round(self.height * scale)),
            )
            image = self._image
            if scaled != image.size:
                image = image.resize(scaled, RESAMPLE)
            left, top = self.analyzer.find_origin(image, width, height)
            self._image = image.crop((left, top, left + width, top + height))

    def rotate(self, degrees: int) -> None:
        transpose = _ROTATIONS.get(degrees)
        if transpose is None:
            raise GeometryOperationError("rotate", f"unsupported angle {degrees}")
        with _operation("rotate"):
            self._image = self._image.transpose(transpose)

    def flip(self, axis: FlipAxis) -> None:
        with _operation("flip"):
            self._image = self._image.transpose(_FLIPS[FlipAxis(axis)])

    def encode(self, format: str, quality: Optional[int] = None, interlace: bool = False) -> bytes:
        pil_format = _PIL_FORMATS.get(format, format.upper())
        image = self._image
        params: Dict[str, object] = {}

        if format == FormatConstants.JPEG:
            if image.mode not in _JPEG_MODES:
                image = image.convert("RGB")
            if quality:
                params["quality"] = quality
            if interlace:
                params["progressive"] = True
        elif format == FormatConstants.PNG and image.mode == "CMYK":
            image = image.convert("RGB")
        elif format == FormatConstants.GIF and image.mode not in _GIF_MODES:
            image = image.convert("RGB")

        if self._exif and format in _EXIF_FORMATS:
            params["exif"] = self._exif

        buffer = io.BytesIO()
        with _operation("encode"):
            image.save(buffer, format=pil_format, **params)
        return buffer.getvalue()

    def _proportional_size(self, width: int, height: int) -> Tuple[int, int]:
        if width == 0:
            width = max(1, round(self.width * height / self.height))
        elif height == 0:
            height = max(1, round(self.height * width / self.width))
        return (width, height)


class PillowEngine(ImageEngine):
    """
    Decodes images with Pillow.

    Args:
        max_exif_size: EXIF payloads larger than this many bytes are ignored
        analyzer: Smart crop anchor analyzer handed to every decoded image
    """

    def __init__(self, max_exif_size: int = 1 << 20, analyzer: Optional[SmartCropAnalyzer] = None):
        self.max_exif_size = max_exif_size
        self.analyzer = analyzer or CentreAnalyzer()

    def decode(self, data: bytes, auto_orient: bool = False) -> PillowImage:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
            SyntaxError,
        ) as e:
            logger.debug(f"decode failed: {e}")
            raise DecodeError() from e

        fmt = (image.format or "").lower() or None
        fmt = _FORMAT_ALIASES.get(fmt, fmt)
        orientation = self.read_orientation(image)

        if auto_orient:
            image = ImageOps.exif_transpose(image)
            orientation = ExifConstants.NORMAL

        return PillowImage(
            image,
            fmt,
            orientation=orientation,
            exif=image.info.get("exif"),
            analyzer=self.analyzer,
        )

    def read_orientation(self, image: Image.Image) -> int:
        """Read the EXIF orientation tag, 1 when absent or unreadable."""
        exif_block = image.info.get("exif")
        if exif_block is not None and len(exif_block) > self.max_exif_size:
            logger.debug(f"EXIF block of {len(exif_block)} bytes exceeds scan limit")
            return ExifConstants.NORMAL

        try:
            tag = image.getexif().get(ExifConstants.ORIENTATION_TAG, ExifConstants.NORMAL)
        except (ValueError, OSError, SyntaxError) as e:
            logger.debug(f"Could not read EXIF orientation: {e}")
            return ExifConstants.NORMAL

        try:
            tag = int(tag)
        except (TypeError, ValueError):
            return ExifConstants.NORMAL
        if ExifConstants.TOP_LEFT_SIDE <= tag <= ExifConstants.LEFT_SIDE_BOTTOM:
            return tag
        return ExifConstants.NORMAL
