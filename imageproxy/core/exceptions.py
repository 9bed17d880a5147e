"""
Exceptions raised by the transform core.

Fatal errors derive from ImageProxyError and abort the transform with no
output. MetadataCorrectionWarning is the only recoverable condition: it is
raised by metadata rewriters and logged by the orientation normalizer.
"""

from typing import Optional


class ImageProxyError(Exception):
    """Base class for fatal transform errors."""


class DecodeError(ImageProxyError):
    """Input bytes are not a recognized image container."""

    def __init__(self, message: str = "Could not parse image"):
        super().__init__(message)


class UnsupportedFormatError(ImageProxyError):
    """Resolved output format is not in the allow-list."""

    def __init__(self, format: Optional[str]):
        self.format = format
        super().__init__(f"unsupported format: {format}")


class GeometryOperationError(ImageProxyError):
    """The image engine rejected a crop, resize, rotate, flip or encode request."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


class MetadataCorrectionWarning(UserWarning):
    """Rewriting the orientation tag of encoded bytes failed."""
