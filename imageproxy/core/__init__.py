"""
Core modules for the imageproxy transform core
"""

from .enums import FlipAxis, MetadataBackend, ResizeMode, SmartCropMethod
from .exceptions import (
    DecodeError,
    GeometryOperationError,
    ImageProxyError,
    MetadataCorrectionWarning,
    UnsupportedFormatError,
)

__all__ = [
    "FlipAxis",
    "MetadataBackend",
    "ResizeMode",
    "SmartCropMethod",
    "ImageProxyError",
    "DecodeError",
    "UnsupportedFormatError",
    "GeometryOperationError",
    "MetadataCorrectionWarning",
]
