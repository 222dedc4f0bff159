"""
ImageValidator - Checks an upload's true format before any processing.
"""

import io
import logging
from typing import Iterable, Optional

from PIL import Image, UnidentifiedImageError

from .config import DEFAULT_ALLOWED_MIME_TYPES
from .exceptions import (
    CorruptImageError,
    DisallowedFormatError,
    ImageTooLargeError,
    UnrecognizedFormatError,
)
from .image_formats import DetectedFormat, sniff_format


class ImageValidator:
    """
    Validates image buffers by signature sniffing and a structural decode.

    The client-declared MIME type is only used for logging; validity follows
    the format found in the buffer itself.
    """

    def __init__(
        self,
        allowed_mime_types: Optional[Iterable[str]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize validator.

        Args:
            allowed_mime_types: MIME types to accept (default: jpeg, png,
                webp, heic, heif)
            logger: Optional logger instance
        """
        self.allowed_mime_types = frozenset(
            allowed_mime_types if allowed_mime_types is not None
            else DEFAULT_ALLOWED_MIME_TYPES
        )
        self.logger = logger or logging.getLogger(__name__)

    def validate(
        self,
        image_data: bytes,
        declared_mime_type: Optional[str] = None
    ) -> DetectedFormat:
        """
        Validate an image buffer.

        Args:
            image_data: Raw upload bytes
            declared_mime_type: Content-Type supplied by the client

        Returns:
            The detected format

        Raises:
            UnrecognizedFormatError: No known signature matches
            DisallowedFormatError: Detected format is not allowed
            CorruptImageError: Header or structure cannot be decoded
            ImageTooLargeError: Pixel count exceeds the decoder limit
        """
        detected = sniff_format(image_data)
        if detected is None:
            raise UnrecognizedFormatError("Could not detect file type")

        if declared_mime_type and declared_mime_type != detected.mime_type:
            self.logger.debug(
                f"Declared type {declared_mime_type} differs from detected "
                f"{detected.mime_type}"
            )

        if detected.mime_type not in self.allowed_mime_types:
            raise DisallowedFormatError(detected.mime_type)

        try:
            with Image.open(io.BytesIO(image_data)) as img:
                img.verify()
        except Image.DecompressionBombError as e:
            raise ImageTooLargeError(f"Image too large: {e}") from e
        except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as e:
            raise CorruptImageError(f"Invalid image: {e}") from e

        return detected
