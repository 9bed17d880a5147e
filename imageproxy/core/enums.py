"""
Centralized enums for the transform core.
"""

from enum import Enum


class ResizeMode(str, Enum):
    """How a resize request treats the aspect ratio."""

    PROPORTIONAL = "proportional"  # one axis given, the other follows
    CONTAIN = "contain"  # fit inside the box, pad the rest
    COVER = "cover"  # fill the box, crop the overflow


class FlipAxis(str, Enum):
    """Mirror axis for flip operations."""

    VERTICAL = "vertical"  # top to bottom
    HORIZONTAL = "horizontal"  # left to right


class SmartCropMethod(str, Enum):
    """Anchor selection used by smart crop."""

    CENTRE = "centre"
    EDGE_ENERGY = "edge_energy"


class MetadataBackend(str, Enum):
    """Implementation used to reset the orientation tag."""

    EXIFTOOL = "exiftool"
    PILLOW = "pillow"
