"""
Transform Service - top level entry of the transform core.

Composes decoding, orientation normalization, the geometric pipeline, format
resolution and encoding into a single synchronous call.
"""

import logging
from typing import Optional

from imageproxy.config import Settings, get_settings
from imageproxy.core.constants import FormatConstants
from imageproxy.core.formats import encode_image, resolve_output_format
from imageproxy.core.image import ImageEngine, PillowEngine, get_analyzer
from imageproxy.core.metadata import MetadataRewriter, create_rewriter
from imageproxy.core.orientation import OrientationNormalizer
from imageproxy.core.pipeline import TransformPipeline
from imageproxy.schemas import Options

logger = logging.getLogger(__name__)


class TransformService:
    """
    Service for transforming encoded images.

    Each call owns its working image, so one service instance may be shared
    between threads as long as the engine and rewriter are reentrant.
    """

    def __init__(
        self,
        engine: Optional[ImageEngine] = None,
        rewriter: Optional[MetadataRewriter] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize transform service.

        Args:
            engine: Image engine, Pillow by default
            rewriter: Orientation tag rewriter, from settings by default
            settings: Settings, from the environment by default
        """
        self.settings = settings or get_settings()
        transform_settings = self.settings.transform
        metadata_settings = self.settings.metadata

        self.engine = engine or PillowEngine(
            max_exif_size=transform_settings.max_exif_size,
            analyzer=get_analyzer(transform_settings.smart_crop_method),
        )
        self.rewriter = rewriter or create_rewriter(
            metadata_settings.backend,
            tool_path=metadata_settings.tool_path,
            args=metadata_settings.tool_args,
            timeout=metadata_settings.timeout_seconds,
        )
        self.pipeline = TransformPipeline()
        self.normalizer = OrientationNormalizer(
            self.engine,
            self.rewriter,
            quality=transform_settings.default_quality,
            pipeline=self.pipeline,
        )

    def transform(self, data: bytes, options: Options) -> bytes:
        """
        Transform the provided image.

        Args:
            data: Raw bytes of an encoded image
            options: Requested transformations

        Returns:
            Encoded bytes of the transformed image; the input object itself
            when no transformation was requested

        Raises:
            DecodeError: If the input cannot be parsed
            UnsupportedFormatError: If the output format is not allowed
            GeometryOperationError: If the engine rejects an operation
        """
        if not options.transform():
            # bail if no transformation was requested
            return data

        image = self.engine.decode(data, auto_orient=False)
        source_format = image.format
        logger.debug(f"Decoded {source_format} {image.width}x{image.height}, options {options}")

        if source_format in FormatConstants.ORIENTATION_FORMATS:
            image = self.normalizer.normalize(image)

        target_format = resolve_output_format(source_format, options.format)

        self.pipeline.apply(image, options)

        quality = options.quality or self.settings.transform.default_quality
        result = encode_image(image, target_format, quality)
        logger.debug(
            f"Encoded {target_format} {image.width}x{image.height}: {len(result)} bytes"
        )
        return result


def transform(data: bytes, options: Options, settings: Optional[Settings] = None) -> bytes:
    """Transform data with a default-configured service."""
    return TransformService(settings=settings).transform(data, options)
