"""
Orientation tag correction for encoded images.

After the pixels of an image have been rotated to match its EXIF orientation,
the tag itself must be reset to "normal" or viewers will rotate the image a
second time. A MetadataRewriter takes encoded bytes and returns corrected
bytes, raising MetadataCorrectionWarning when it cannot.
"""

import io
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from PIL import Image, UnidentifiedImageError

from imageproxy.core.constants import ExifConstants
from imageproxy.core.enums import MetadataBackend
from imageproxy.core.exceptions import MetadataCorrectionWarning

logger = logging.getLogger(__name__)

DEFAULT_EXIFTOOL_ARGS = ("-", "-Orientation#=1", "-o", "-")


class MetadataRewriter(ABC):
    """Resets the orientation tag of encoded image bytes."""

    @abstractmethod
    def rewrite(self, data: bytes) -> bytes:
        """
        Return data with its orientation tag set to normal.

        Raises:
            MetadataCorrectionWarning: If the bytes could not be rewritten
        """


class ExiftoolRewriter(MetadataRewriter):
    """
    Rewrites the tag with the exiftool command line program.

    The encoded image is written to the child's stdin and the corrected image
    is read from its stdout. The call blocks until the child exits, or until
    timeout seconds when a timeout is configured.
    """

    def __init__(
        self,
        tool_path: str = "exiftool",
        args: Sequence[str] = DEFAULT_EXIFTOOL_ARGS,
        timeout: Optional[float] = None,
    ):
        self.tool_path = tool_path
        self.args = list(args)
        self.timeout = timeout

    @property
    def command(self) -> list[str]:
        return [self.tool_path, *self.args]

    def rewrite(self, data: bytes) -> bytes:
        logger.debug(f"Running {' '.join(self.command)} on {len(data)} bytes")
        try:
            result = subprocess.run(
                self.command,
                input=data,
                capture_output=True,
                timeout=self.timeout,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
            raise MetadataCorrectionWarning(
                f"{self.tool_path} exited with status {e.returncode}: {stderr}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise MetadataCorrectionWarning(
                f"{self.tool_path} timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise MetadataCorrectionWarning(f"could not run {self.tool_path}: {e}") from e

        if not result.stdout:
            raise MetadataCorrectionWarning(f"{self.tool_path} produced no output")
        return result.stdout


class PillowExifRewriter(MetadataRewriter):
    """
    Rewrites the tag in-process with Pillow.

    JPEG data is re-saved with quality="keep" so the original quantization
    tables are reused.
    """

    def rewrite(self, data: bytes) -> bytes:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise MetadataCorrectionWarning(f"could not read image: {e}") from e

        exif = image.getexif()
        exif[ExifConstants.ORIENTATION_TAG] = ExifConstants.NORMAL

        params = {"exif": exif.tobytes()}
        if image.format == "JPEG":
            params["quality"] = "keep"

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=image.format, **params)
        except (ValueError, OSError, KeyError, TypeError) as e:
            raise MetadataCorrectionWarning(f"could not write {image.format}: {e}") from e
        return buffer.getvalue()


def create_rewriter(
    backend: MetadataBackend,
    tool_path: str = "exiftool",
    args: Sequence[str] = DEFAULT_EXIFTOOL_ARGS,
    timeout: Optional[float] = None,
) -> MetadataRewriter:
    """Build the rewriter for a configured backend."""
    if backend == MetadataBackend.PILLOW:
        return PillowExifRewriter()
    return ExiftoolRewriter(tool_path=tool_path, args=args, timeout=timeout)
