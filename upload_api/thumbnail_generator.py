"""
ThumbnailGenerator - Handles orientation, resizing and re-encoding.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image, ImageOps

from .exceptions import GenerationError
from .image_formats import content_type_for


@dataclass(frozen=True)
class GeneratedThumbnail:
    """Encoded thumbnail bytes and the dimensions read back from them."""
    data: bytes
    width: int
    height: int
    content_type: str


class ThumbnailGenerator:
    """
    Generates thumbnails from original images using Pillow.

    Images are fitted inside a square bounding box and never enlarged.
    """

    def __init__(
        self,
        jpeg_quality: int = 85,
        webp_quality: int = 85,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize thumbnail generator.

        Args:
            jpeg_quality: JPEG quality for output (default: 85)
            webp_quality: WebP quality for output (default: 85)
            logger: Optional logger instance
        """
        self.jpeg_quality = jpeg_quality
        self.webp_quality = webp_quality
        self.logger = logger or logging.getLogger(__name__)

    def generate(
        self,
        image_data: bytes,
        max_dimension: int,
        encoding: str
    ) -> GeneratedThumbnail:
        """
        Generate a thumbnail from image data.

        Args:
            image_data: Original image as bytes
            max_dimension: Longest allowed edge of the output
            encoding: 'jpeg' or 'webp'

        Returns:
            GeneratedThumbnail with the encoded bytes and actual dimensions

        Raises:
            GenerationError: If decoding or encoding fails
        """
        try:
            with Image.open(io.BytesIO(image_data)) as original:
                img = ImageOps.exif_transpose(original)
                img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

                output = io.BytesIO()
                if encoding == 'webp':
                    img = self._convert_for_webp(img)
                    img.save(output, format='WEBP', quality=self.webp_quality, method=6)
                elif encoding == 'jpeg':
                    img = self._convert_for_jpeg(img)
                    img.save(
                        output,
                        format='JPEG',
                        quality=self.jpeg_quality,
                        optimize=True,
                        progressive=True,
                    )
                else:
                    raise ValueError(f"Unsupported encoding: {encoding}")

            data = output.getvalue()
            with Image.open(io.BytesIO(data)) as result:
                width, height = result.size

            return GeneratedThumbnail(
                data=data,
                width=width,
                height=height,
                content_type=content_type_for(encoding),
            )

        except GenerationError:
            raise
        except Exception as e:
            self.logger.error(f"Error generating {encoding} thumbnail ({max_dimension}px): {e}")
            raise GenerationError(str(e)) from e

    def _convert_for_jpeg(self, img: Image.Image) -> Image.Image:
        """Flatten transparency onto white and convert to RGB."""
        if img.mode in ('RGBA', 'LA', 'PA') or (img.mode == 'P' and 'transparency' in img.info):
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img

    def _convert_for_webp(self, img: Image.Image) -> Image.Image:
        """WebP keeps alpha; everything else becomes RGB or RGBA."""
        if img.mode in ('RGB', 'RGBA'):
            return img
        if img.mode in ('LA', 'PA') or (img.mode == 'P' and 'transparency' in img.info):
            return img.convert('RGBA')
        return img.convert('RGB')
