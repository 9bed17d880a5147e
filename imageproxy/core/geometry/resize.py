"""
Resize planning.

Turns the width/height options into target pixel dimensions and a resize
mode, against the image bounds at the time the resize runs.
"""

from typing import Optional

from imageproxy.core.enums import ResizeMode
from imageproxy.core.geometry.numeric import evaluate
from imageproxy.schemas import Options, ResizePlan


class ResizePlanner:
    """Planner for fit (contain) and fill resizes."""

    @staticmethod
    def plan(options: Options, image_width: int, image_height: int) -> Optional[ResizePlan]:
        """
        Determine if the image needs to be resized, and if so, how.

        Args:
            options: Transform options
            image_width: Current image width
            image_height: Current image height

        Returns:
            Resize plan, or None when no resize is needed
        """
        # convert percentage width and height values to absolute values
        w = evaluate(options.width, image_width)
        h = evaluate(options.height, image_height)

        # never resize larger than the original image unless specifically allowed
        if not options.scale_up:
            w = min(w, image_width)
            h = min(h, image_height)

        # if requested width and height match the original, skip resizing
        if (w == image_width or w == 0) and (h == image_height or h == 0):
            return None

        if options.fit:
            return ResizePlan(width=w, height=h, mode=ResizeMode.CONTAIN)
        if w == 0 or h == 0:
            return ResizePlan(width=w, height=h, mode=ResizeMode.PROPORTIONAL)
        return ResizePlan(width=w, height=h, mode=ResizeMode.COVER)
