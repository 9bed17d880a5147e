"""
imageproxy transform core.

Plans and orchestrates crop, resize, rotate, flip and re-encoding of encoded
images according to a declarative Options record.
"""

from imageproxy.core.exceptions import (
    DecodeError,
    GeometryOperationError,
    ImageProxyError,
    MetadataCorrectionWarning,
    UnsupportedFormatError,
)
from imageproxy.schemas import Options
from imageproxy.services import TransformService, transform

__version__ = "1.0.0"

__all__ = [
    "Options",
    "TransformService",
    "transform",
    "ImageProxyError",
    "DecodeError",
    "UnsupportedFormatError",
    "GeometryOperationError",
    "MetadataCorrectionWarning",
]
