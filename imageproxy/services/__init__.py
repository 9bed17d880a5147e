"""
Service layer for the transform core.
"""

from .transform_service import TransformService, transform

__all__ = ["TransformService", "transform"]
