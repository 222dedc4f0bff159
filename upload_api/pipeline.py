"""
ImagePipeline - Produces and stores the thumbnail matrix for one upload.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, List, Optional, Tuple

from .config import PipelineConfig
from .exceptions import GenerationError, StorageWriteError
from .image_metadata import extract_metadata
from .keys import build_thumbnail_key
from .thumbnail_generator import ThumbnailGenerator
from .thumbnail_result import ProcessResult, ThumbnailResult, ThumbnailUrls

# Lower index wins.
ENCODING_PREFERENCE = ('webp', 'jpeg')


class ImagePipeline:
    """
    Generates every (size class, encoding) variant of an image and uploads
    each one independently.

    A failed variant is logged and left out of the result; it never aborts
    the rest of the matrix.
    """

    def __init__(
        self,
        storage,
        thumbnail_generator: Optional[ThumbnailGenerator] = None,
        config: Optional[PipelineConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.

        Args:
            storage: Object store exposing upload_object(key, data, content_type) -> url
            thumbnail_generator: Thumbnail generator instance
            config: Pipeline configuration (sizes, encodings, workers)
            logger: Optional logger instance
        """
        self.config = config or PipelineConfig()
        self.storage = storage
        self.thumb_gen = thumbnail_generator or ThumbnailGenerator(
            jpeg_quality=self.config.jpeg_quality,
            webp_quality=self.config.webp_quality,
            logger=logger,
        )
        self.logger = logger or logging.getLogger(__name__)

    def matrix(self) -> List[Tuple[str, str]]:
        """(size_class, encoding) pairs in output order."""
        return [
            (size_class, encoding)
            for size_class in self.config.size_classes
            for encoding in self.config.encodings
        ]

    def process_image(
        self,
        image_data: bytes,
        filename: str,
        asset_type: str,
        scope_id: Optional[str] = None
    ) -> ProcessResult:
        """
        Generate and store all thumbnails for an image.

        Args:
            image_data: Validated original image bytes
            filename: Storage filename of the original
            asset_type: 'portfolio', 'events' or 'slideshow'
            scope_id: Event ID, required for 'events'

        Returns:
            ProcessResult with original metadata and the stored variants
        """
        # Fails fast on a bad asset type or missing event id.
        build_thumbnail_key(asset_type, scope_id, filename, 'small', 'jpeg')

        original = extract_metadata(image_data, self.logger)
        pairs = self.matrix()

        if self.config.max_workers > 1:
            indexed = self._run_parallel(image_data, filename, asset_type, scope_id, pairs)
        else:
            indexed = []
            for index, (size_class, encoding) in enumerate(pairs):
                thumb = self._process_variant(
                    image_data, filename, asset_type, scope_id, size_class, encoding
                )
                if thumb is not None:
                    indexed.append((index, thumb))

        thumbnails = [thumb for _, thumb in sorted(indexed, key=lambda item: item[0])]

        self.logger.info(
            f"Processed {filename}: {len(thumbnails)}/{len(pairs)} thumbnails "
            f"({original.width}x{original.height} {original.format})"
        )
        return ProcessResult(original=original, thumbnails=thumbnails)

    def _run_parallel(
        self,
        image_data: bytes,
        filename: str,
        asset_type: str,
        scope_id: Optional[str],
        pairs: List[Tuple[str, str]]
    ) -> List[Tuple[int, ThumbnailResult]]:
        indexed = []
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            future_to_index = {
                executor.submit(
                    self._process_variant,
                    image_data, filename, asset_type, scope_id, size_class, encoding
                ): index
                for index, (size_class, encoding) in enumerate(pairs)
            }
            for future in as_completed(future_to_index):
                thumb = future.result()
                if thumb is not None:
                    indexed.append((future_to_index[future], thumb))
        return indexed

    def _process_variant(
        self,
        image_data: bytes,
        filename: str,
        asset_type: str,
        scope_id: Optional[str],
        size_class: str,
        encoding: str
    ) -> Optional[ThumbnailResult]:
        """Generate and upload one variant; None if it failed."""
        max_dimension = self.config.thumbnail_sizes[size_class]
        try:
            generated = self.thumb_gen.generate(image_data, max_dimension, encoding)
            key = build_thumbnail_key(asset_type, scope_id, filename, size_class, encoding)
            url = self.storage.upload_object(key, generated.data, generated.content_type)
        except (GenerationError, StorageWriteError) as e:
            self.logger.error(f"Failed to generate {size_class} {encoding} thumbnail: {e}")
            return None

        self.logger.debug(f"Stored {key} ({generated.width}x{generated.height})")
        return ThumbnailResult(
            size_class=size_class,
            encoding=encoding,
            width=generated.width,
            height=generated.height,
            key=key,
            url=url,
        )


def select_urls(thumbnails: Iterable[ThumbnailResult]) -> ThumbnailUrls:
    """
    Pick the best URL for each size class, preferring WebP over JPEG.

    Size classes with no stored variant map to None.
    """
    by_variant = {(t.size_class, t.encoding): t.url for t in thumbnails}

    def best(size_class: str) -> Optional[str]:
        for encoding in ENCODING_PREFERENCE:
            url = by_variant.get((size_class, encoding))
            if url:
                return url
        return None

    return ThumbnailUrls(
        small=best('small'),
        medium=best('medium'),
        large=best('large'),
    )
