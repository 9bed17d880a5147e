"""
Constants for the transform core.
Centralizes format tags and EXIF identifiers.

Tunable numbers (default quality, EXIF scan cap) live in config.TransformSettings.
"""


class FormatConstants:
    """Container format tags, always lower case."""

    GIF = "gif"
    JPEG = "jpeg"
    PNG = "png"
    TIFF = "tiff"
    WEBP = "webp"

    # Formats that may carry an EXIF orientation tag
    ORIENTATION_FORMATS = frozenset({JPEG, TIFF})

    # Sources re-encoded as jpeg unless a format is requested
    JPEG_NORMALIZED_FORMATS = frozenset({TIFF, WEBP})

    # Output allow-list
    ALLOWED_OUTPUT_FORMATS = frozenset({GIF, JPEG, PNG, TIFF})


class ExifConstants:
    """EXIF tag identifiers and orientation values."""

    ORIENTATION_TAG = 0x0112

    # http://sylvana.net/jpegcrop/exif_orientation.html
    TOP_LEFT_SIDE = 1
    TOP_RIGHT_SIDE = 2
    BOTTOM_RIGHT_SIDE = 3
    BOTTOM_LEFT_SIDE = 4
    LEFT_SIDE_TOP = 5
    RIGHT_SIDE_TOP = 6
    RIGHT_SIDE_BOTTOM = 7
    LEFT_SIDE_BOTTOM = 8

    NORMAL = TOP_LEFT_SIDE


class RotationConstants:
    """Rotations the engine can perform, clockwise degrees."""

    SUPPORTED_ANGLES = (90, 180, 270)
    FULL_TURN = 360
