"""
Transform pipeline.

Applies the geometric operations in a fixed order:
crop -> resize -> rotate -> flip vertical -> flip horizontal.

Crop and resize coordinates refer to the un-rotated source, so they run
before rotation; flip axes refer to the rotated frame, so flips run last.
Each step evaluates its options against the image size at the moment it runs.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from imageproxy.core.constants import RotationConstants
from imageproxy.core.enums import FlipAxis
from imageproxy.core.geometry.crop import CropPlanner
from imageproxy.core.geometry.numeric import normalize_degrees
from imageproxy.core.geometry.resize import ResizePlanner
from imageproxy.core.image.engine import WorkingImage
from imageproxy.schemas import Options

logger = logging.getLogger(__name__)


class TransformStep(ABC):
    """One operation of the pipeline."""

    name: str = "step"

    @abstractmethod
    def apply(self, image: WorkingImage, options: Options) -> None:
        """Mutate image according to options, or do nothing."""


class CropStep(TransformStep):
    name = "crop"

    def apply(self, image: WorkingImage, options: Options) -> None:
        if not CropPlanner.is_requested(options):
            return

        if options.smart_crop:
            target = CropPlanner.plan_smart(options, image.width, image.height)
            if target is None:
                return
            logger.info(f"smartcrop input: {target.width}x{target.height}")
            try:
                image.smart_crop(target.width, target.height)
            except Exception as e:
                logger.error(f"error with smartcrop: {e}")
                raise
            logger.info(f"smartcrop result: {image.width}x{image.height}")
            return

        box = CropPlanner.plan(options, image.width, image.height)
        if box is not None:
            logger.debug(f"crop {box.to_dict()} from {image.width}x{image.height}")
            image.crop(box)


class ResizeStep(TransformStep):
    name = "resize"

    def apply(self, image: WorkingImage, options: Options) -> None:
        plan = ResizePlanner.plan(options, image.width, image.height)
        if plan is None:
            return
        logger.debug(
            f"resize {image.width}x{image.height} -> {plan.width}x{plan.height} ({plan.mode.value})"
        )
        image.resize(plan.width, plan.height, plan.mode)


class RotateStep(TransformStep):
    name = "rotate"

    def apply(self, image: WorkingImage, options: Options) -> None:
        degrees = normalize_degrees(options.rotate)
        if degrees not in RotationConstants.SUPPORTED_ANGLES:
            return
        logger.debug(f"rotate {int(degrees)}")
        image.rotate(int(degrees))


class FlipStep(TransformStep):
    def __init__(self, axis: FlipAxis):
        self.axis = axis
        self.name = f"flip_{axis.value}"

    def apply(self, image: WorkingImage, options: Options) -> None:
        requested = (
            options.flip_vertical if self.axis == FlipAxis.VERTICAL else options.flip_horizontal
        )
        if requested:
            logger.debug(f"flip {self.axis.value}")
            image.flip(self.axis)


class TransformPipeline:
    """Ordered list of steps applied to an owned working image."""

    def __init__(self, steps: Optional[Sequence[TransformStep]] = None):
        if steps is None:
            steps = (
                CropStep(),
                ResizeStep(),
                RotateStep(),
                FlipStep(FlipAxis.VERTICAL),
                FlipStep(FlipAxis.HORIZONTAL),
            )
        self.steps = tuple(steps)

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self.steps]

    def apply(self, image: WorkingImage, options: Options) -> WorkingImage:
        """
        Run every step in order.

        Raises:
            GeometryOperationError: From the first step the engine rejects;
                the remaining steps are not run
        """
        for step in self.steps:
            step.apply(image, options)
        return image
