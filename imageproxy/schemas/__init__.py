"""
Schemas Package

Pydantic models for transform requests and the geometry values passed
between planners and the image engine.
"""

from .common import CropBox, ResizePlan, Size
from .options import Options

__all__ = [
    "Options",
    "CropBox",
    "ResizePlan",
    "Size",
]
