"""
Dual-mode numeric evaluation shared by every geometry computation.
"""

import math

from imageproxy.core.constants import RotationConstants


def evaluate(value: float, reference: int) -> int:
    """
    Interpret an option value against a reference dimension.

    Values strictly between 0 and 1 are a fraction of ``reference``; negative
    values give 0; anything else is an absolute pixel count. A result of 0
    means "unspecified" to the callers, not "zero pixels".

    Args:
        value: Option value (fraction or pixels)
        reference: Reference dimension in pixels

    Returns:
        Pixel count, never negative

    Example:
        >>> evaluate(0.5, 200)
        100
        >>> evaluate(150, 200)
        150
    """
    if 0 < value < 1:
        return math.floor(value * reference)
    if value < 0:
        return 0
    return math.floor(value)


def normalize_degrees(degrees: float) -> float:
    """Map any angle into [0, 360)."""
    full = RotationConstants.FULL_TURN
    return ((degrees % full) + full) % full
