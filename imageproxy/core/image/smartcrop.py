"""
Smart crop anchoring.

After the engine has scaled an image so it covers the requested box, an
analyzer picks the top-left corner of the crop window.
"""

import logging
from abc import ABC, abstractmethod
from typing import Tuple

import cv2
import numpy as np
from PIL import Image

from imageproxy.core.enums import SmartCropMethod

logger = logging.getLogger(__name__)


class SmartCropAnalyzer(ABC):
    """Chooses the crop window origin."""

    @abstractmethod
    def find_origin(self, image: Image.Image, width: int, height: int) -> Tuple[int, int]:
        """
        Pick the top-left corner of a width x height window inside image.

        Returns:
            Tuple of (left, top)
        """


class CentreAnalyzer(SmartCropAnalyzer):
    """Gravity centre."""

    def find_origin(self, image: Image.Image, width: int, height: int) -> Tuple[int, int]:
        return ((image.width - width) // 2, (image.height - height) // 2)


class EdgeEnergyAnalyzer(SmartCropAnalyzer):
    """
    Picks the window holding the most gradient energy.

    Energy is the Sobel gradient magnitude of the grayscale image. Window sums
    come from an integral image, so every candidate position is scored.
    Featureless images fall back to the centre.
    """

    def __init__(self, kernel_size: int = 3):
        self.kernel_size = kernel_size
        self._fallback = CentreAnalyzer()

    def energy_map(self, image: Image.Image) -> np.ndarray:
        gray = np.asarray(image.convert("L"), dtype=np.uint8)
        gx = cv2.Sobel(gray, cv2.CV_32F, 1, 0, ksize=self.kernel_size)
        gy = cv2.Sobel(gray, cv2.CV_32F, 0, 1, ksize=self.kernel_size)
        return cv2.magnitude(gx, gy)

    def find_origin(self, image: Image.Image, width: int, height: int) -> Tuple[int, int]:
        if width >= image.width and height >= image.height:
            return (0, 0)

        integral = cv2.integral(self.energy_map(image), sdepth=cv2.CV_64F)

        rows = image.height - height + 1
        cols = image.width - width + 1
        sums = (
            integral[height:, width:]
            - integral[:rows, width:]
            - integral[height:, :cols]
            + integral[:rows, :cols]
        )

        if sums.max() - sums.min() <= 0:
            return self._fallback.find_origin(image, width, height)

        top, left = np.unravel_index(int(np.argmax(sums)), sums.shape)
        logger.debug(f"Edge energy crop origin: ({left}, {top})")
        return (int(left), int(top))


def get_analyzer(method: SmartCropMethod) -> SmartCropAnalyzer:
    """Build the analyzer for a configured method."""
    if method == SmartCropMethod.EDGE_ENERGY:
        return EdgeEnergyAnalyzer()
    return CentreAnalyzer()
