"""
Geometry planning: dual-mode numbers, crop boxes and resize targets.
"""

from .crop import CropPlanner
from .numeric import evaluate, normalize_degrees
from .resize import ResizePlanner

__all__ = ["evaluate", "normalize_degrees", "CropPlanner", "ResizePlanner"]
