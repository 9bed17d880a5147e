"""
Image engine capability.

The planners only decide what to do; an ImageEngine decodes bytes into a
WorkingImage which performs the geometric operations in place and encodes
the result. Any engine that honours this contract can replace the Pillow
backend without touching planner logic.
"""

from abc import ABC, abstractmethod
from typing import Optional

from imageproxy.core.enums import FlipAxis, ResizeMode
from imageproxy.schemas import CropBox


class WorkingImage(ABC):
    """
    Mutable decoded image owned by a single transform call.

    Every operation mutates the image and updates width/height for the next
    step. Failures raise GeometryOperationError.
    """

    @property
    @abstractmethod
    def width(self) -> int: ...

    @property
    @abstractmethod
    def height(self) -> int: ...

    @property
    @abstractmethod
    def format(self) -> Optional[str]:
        """Source container tag in lower case, e.g. "jpeg"."""

    @property
    @abstractmethod
    def orientation(self) -> int:
        """EXIF orientation tag, 1 when absent."""

    @abstractmethod
    def crop(self, box: CropBox) -> None: ...

    @abstractmethod
    def resize(self, width: int, height: int, mode: ResizeMode) -> None: ...

    @abstractmethod
    def smart_crop(self, width: int, height: int) -> None: ...

    @abstractmethod
    def rotate(self, degrees: int) -> None:
        """Rotate clockwise by 90, 180 or 270 degrees."""

    @abstractmethod
    def flip(self, axis: FlipAxis) -> None: ...

    @abstractmethod
    def encode(self, format: str, quality: Optional[int] = None, interlace: bool = False) -> bytes:
        """Encode to the given container, keeping embedded metadata where supported."""

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


class ImageEngine(ABC):
    """Factory for working images."""

    @abstractmethod
    def decode(self, data: bytes, auto_orient: bool = False) -> WorkingImage:
        """
        Decode encoded bytes.

        Args:
            data: Encoded image bytes
            auto_orient: Let the engine apply the EXIF orientation itself

        Raises:
            DecodeError: If the container is not recognized
        """
