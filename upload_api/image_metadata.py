"""
Best-effort metadata extraction for uploaded images.
"""

import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .thumbnail_result import ImageMetadata

logger = logging.getLogger(__name__)

UNKNOWN = ImageMetadata(width=0, height=0, format='unknown')


def extract_metadata(
    image_data: bytes,
    log: Optional[logging.Logger] = None
) -> ImageMetadata:
    """
    Read width, height and format from an image buffer.

    Only the header is parsed. Decoder failures degrade to zero dimensions
    and an 'unknown' format; anything else propagates.
    """
    log = log or logger
    try:
        with Image.open(io.BytesIO(image_data)) as img:
            width, height = img.size
            fmt = (img.format or 'unknown').lower()
    except (Image.DecompressionBombError, UnidentifiedImageError, OSError,
            ValueError, SyntaxError) as e:
        log.warning(f"Could not extract image metadata: {e}")
        return UNKNOWN

    return ImageMetadata(width=width, height=height, format=fmt)
