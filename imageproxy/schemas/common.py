"""
Common geometry models shared by the planners and the image engine.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from imageproxy.core.enums import ResizeMode


class Size(BaseModel):
    """Image size"""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)


class CropBox(BaseModel):
    """
    Crop rectangle in pixel coordinates of the current image.

    Width and height may be 0; an empty box is representable so the planner
    can report it and the engine can reject it.
    """

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., ge=0, description="Left edge")
    y: int = Field(..., ge=0, description="Top edge")
    width: int = Field(..., ge=0, description="Width")
    height: int = Field(..., ge=0, description="Height")

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for logging."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @property
    def x2(self) -> int:
        """Get right edge coordinate (exclusive)."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Get bottom edge coordinate (exclusive)."""
        return self.y + self.height

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def fits_within(self, image_width: int, image_height: int) -> bool:
        """Check the box lies inside [0, image_width) x [0, image_height)."""
        return self.x2 <= image_width and self.y2 <= image_height


class ResizePlan(BaseModel):
    """Target dimensions and mode for a single resize request."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=0, description="Target width, 0 when driven by height")
    height: int = Field(..., ge=0, description="Target height, 0 when driven by width")
    mode: ResizeMode
