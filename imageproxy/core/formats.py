"""
Output format resolution and encoding.
"""

import logging
from typing import Optional

from imageproxy.core.constants import FormatConstants
from imageproxy.core.exceptions import UnsupportedFormatError
from imageproxy.core.image.engine import WorkingImage

logger = logging.getLogger(__name__)


def resolve_output_format(source_format: Optional[str], requested: str = "") -> str:
    """
    Decide the output container.

    tiff and webp sources default to jpeg, other sources keep their format.
    A non-empty requested format always wins.

    Raises:
        UnsupportedFormatError: If the result is not gif, jpeg, png or tiff
    """
    target = source_format
    if target in FormatConstants.JPEG_NORMALIZED_FORMATS:
        target = FormatConstants.JPEG
    if requested:
        target = requested.lower()

    if target not in FormatConstants.ALLOWED_OUTPUT_FORMATS:
        raise UnsupportedFormatError(target)
    return target


def encode_image(image: WorkingImage, format: str, quality: int) -> bytes:
    """
    Encode with the policy of each container.

    jpeg uses the given quality and progressive output; gif, png and tiff use
    engine defaults.
    """
    if format == FormatConstants.JPEG:
        logger.debug(f"Encoding {image.width}x{image.height} jpeg at quality {quality}")
        return image.encode(format, quality=quality, interlace=True)
    if format not in FormatConstants.ALLOWED_OUTPUT_FORMATS:
        raise UnsupportedFormatError(format)
    return image.encode(format)
