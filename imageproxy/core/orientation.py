"""
EXIF orientation normalization.

Maps the orientation tag of a jpeg or tiff source to a rotate/flip request,
bakes it into the pixels, and resets the tag on the encoded bytes.
"""

import logging
from typing import Dict, Optional

from imageproxy.core.constants import ExifConstants
from imageproxy.core.exceptions import DecodeError, MetadataCorrectionWarning
from imageproxy.core.image.engine import ImageEngine, WorkingImage
from imageproxy.core.metadata import MetadataRewriter
from imageproxy.core.pipeline import TransformPipeline
from imageproxy.schemas import Options

logger = logging.getLogger(__name__)

_ORIENTATION_OPTIONS: Dict[int, Options] = {
    ExifConstants.TOP_LEFT_SIDE: Options(),
    ExifConstants.TOP_RIGHT_SIDE: Options(rotate=180, flip_vertical=True),
    ExifConstants.BOTTOM_RIGHT_SIDE: Options(rotate=180),
    ExifConstants.BOTTOM_LEFT_SIDE: Options(rotate=180, flip_vertical=True),
    ExifConstants.LEFT_SIDE_TOP: Options(rotate=90, flip_vertical=True, flip_horizontal=True),
    ExifConstants.RIGHT_SIDE_TOP: Options(rotate=90),
    ExifConstants.RIGHT_SIDE_BOTTOM: Options(rotate=-90, flip_vertical=True, flip_horizontal=True),
    ExifConstants.LEFT_SIDE_BOTTOM: Options(rotate=-90),
}


def orientation_options(tag: int) -> Options:
    """
    Options that orient an image carrying the given EXIF tag.

    Unknown tags map to the identity.

    Example:
        >>> orientation_options(6).rotate
        90.0
    """
    return _ORIENTATION_OPTIONS.get(tag, _ORIENTATION_OPTIONS[ExifConstants.TOP_LEFT_SIDE])


class OrientationNormalizer:
    """
    Bakes the EXIF orientation into the pixels of a working image.

    Args:
        engine: Engine used to decode the corrected bytes
        rewriter: Collaborator that resets the orientation tag
        quality: JPEG quality for the intermediate encoding
        pipeline: Pipeline that applies the derived rotate/flip options
    """

    def __init__(
        self,
        engine: ImageEngine,
        rewriter: MetadataRewriter,
        quality: int = 95,
        pipeline: Optional[TransformPipeline] = None,
    ):
        self.engine = engine
        self.rewriter = rewriter
        self.quality = quality
        self.pipeline = pipeline or TransformPipeline()

    def normalize(self, image: WorkingImage) -> WorkingImage:
        """
        Orient the image and reset its tag.

        A failed tag rewrite is logged and the rotated image is returned with
        its stale tag; it never fails the transform.

        Returns:
            The working image to continue with (possibly a new instance)
        """
        tag = image.orientation
        options = orientation_options(tag)
        if not options.transform():
            return image

        logger.debug(f"Applying EXIF orientation {tag}: {options}")
        self.pipeline.apply(image, options)

        encoded = image.encode(image.format, quality=self.quality)
        try:
            corrected = self.rewriter.rewrite(encoded)
            return self.engine.decode(corrected, auto_orient=False)
        except (MetadataCorrectionWarning, DecodeError) as e:
            logger.warning(f"Could not reset EXIF orientation, tag {tag} left in place: {e}")
            return image
