"""
Image engine package.

- engine: ImageEngine / WorkingImage capability interface
- pillow_engine: Pillow implementation
- smartcrop: Smart crop anchor analyzers
"""

from imageproxy.core.image.engine import ImageEngine, WorkingImage
from imageproxy.core.image.pillow_engine import PillowEngine, PillowImage
from imageproxy.core.image.smartcrop import (
    CentreAnalyzer,
    EdgeEnergyAnalyzer,
    SmartCropAnalyzer,
    get_analyzer,
)

__all__ = [
    "ImageEngine",
    "WorkingImage",
    "PillowEngine",
    "PillowImage",
    "SmartCropAnalyzer",
    "CentreAnalyzer",
    "EdgeEnergyAnalyzer",
    "get_analyzer",
]
