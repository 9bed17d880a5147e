"""
Crop planning.

Computes the crop rectangle for explicit crop options, or the target size for
smart crop, relative to the current image bounds.
"""

from typing import Optional

from imageproxy.core.geometry.numeric import evaluate
from imageproxy.schemas import CropBox, Options, Size


class CropPlanner:
    """
    Planner for explicit and smart crops.

    Explicit offsets are dual-mode; a negative offset measures the origin from
    the right (x) or bottom (y) edge. Extents of 0 run to the image edge. The
    returned box is always clamped to the image bounds.
    """

    @staticmethod
    def is_requested(options: Options) -> bool:
        """Check whether the options ask for any crop at all."""
        return options.smart_crop or options.has_explicit_crop()

    @staticmethod
    def plan(options: Options, image_width: int, image_height: int) -> Optional[CropBox]:
        """
        Compute the explicit crop box.

        Args:
            options: Transform options
            image_width: Current image width
            image_height: Current image height

        Returns:
            Crop box, or None when the crop would keep the full image
        """
        if not options.has_explicit_crop():
            return None

        # top left coordinate of crop
        x0 = evaluate(abs(options.crop_x), image_width)
        if options.crop_x < 0:
            x0 = image_width - x0  # measure from right
        y0 = evaluate(abs(options.crop_y), image_height)
        if options.crop_y < 0:
            y0 = image_height - y0  # measure from bottom

        # origins outside the image are pulled back to its edges
        x0 = max(0, min(x0, image_width))
        y0 = max(0, min(y0, image_height))

        # width and height of crop
        w = evaluate(options.crop_width, image_width)
        if w == 0:
            w = image_width
        h = evaluate(options.crop_height, image_height)
        if h == 0:
            h = image_height

        # bottom right coordinate of crop
        x1 = min(x0 + w, image_width)
        y1 = min(y0 + h, image_height)

        box = CropBox(x=x0, y=y0, width=x1 - x0, height=y1 - y0)
        if box.width == image_width and box.height == image_height:
            return None
        return box

    @staticmethod
    def plan_smart(options: Options, image_width: int, image_height: int) -> Optional[Size]:
        """
        Compute the smart crop target size.

        Width and height options are evaluated against the current bounds. An
        axis left at 0 keeps the current dimension.

        Returns:
            Target size, or None when neither axis is constrained
        """
        w = evaluate(options.width, image_width)
        h = evaluate(options.height, image_height)
        if w == 0 and h == 0:
            return None
        return Size(width=w or image_width, height=h or image_height)
