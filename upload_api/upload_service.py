"""
UploadService - Stores an original, runs the pipeline and builds the
response record.
"""

import logging
import uuid
from typing import Iterable, Optional, Tuple

from .exceptions import StorageWriteError
from .image_validator import ImageValidator
from .keys import build_original_key, generate_unique_filename
from .pipeline import ImagePipeline, select_urls
from .upload_result import BatchResult, UploadedPhoto, UploadOutcome

# (image bytes, client filename, declared MIME type)
UploadFile = Tuple[bytes, str, Optional[str]]


class UploadService:
    """
    Handles single and batch uploads for one asset type at a time.
    """

    def __init__(
        self,
        validator: ImageValidator,
        pipeline: ImagePipeline,
        storage,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize upload service.

        Args:
            validator: Image validator
            pipeline: Thumbnail pipeline
            storage: Object store for originals (upload_object / delete_object)
            logger: Optional logger instance
        """
        self.validator = validator
        self.pipeline = pipeline
        self.storage = storage
        self.logger = logger or logging.getLogger(__name__)

    def upload(
        self,
        image_data: bytes,
        original_name: str,
        declared_mime_type: Optional[str],
        asset_type: str,
        scope_id: Optional[str] = None
    ) -> UploadedPhoto:
        """
        Validate, store and thumbnail one image.

        Raises:
            ValidationError: The buffer was rejected; nothing was stored
            StorageWriteError: The original could not be stored
        """
        detected = self.validator.validate(image_data, declared_mime_type)

        filename = generate_unique_filename(original_name)
        original_key = build_original_key(asset_type, scope_id, filename)
        original_url = self.storage.upload_object(original_key, image_data, detected.mime_type)

        try:
            result = self.pipeline.process_image(image_data, filename, asset_type, scope_id)
        except Exception:
            self.logger.error(f"Processing failed for {filename}, removing original")
            self._remove_original(original_key)
            raise

        urls = select_urls(result.thumbnails)
        is_slideshow = asset_type == 'slideshow'

        self.logger.info(f"Upload complete: {original_name} stored as {original_key}")
        return UploadedPhoto(
            id=str(uuid.uuid4()),
            filename=original_name,
            original_url=original_url,
            thumbnail_url=urls.large if is_slideshow else urls.medium,
            thumbnail_small_url=urls.small,
            thumbnail_medium_url=urls.medium,
            thumbnail_large_url=urls.large,
            width=result.original.width,
            height=result.original.height,
            size=len(image_data),
            event_id=scope_id if asset_type == 'events' else None,
            include_size_urls=not is_slideshow,
        )

    def upload_batch(
        self,
        files: Iterable[UploadFile],
        asset_type: str,
        scope_id: Optional[str] = None
    ) -> BatchResult:
        """
        Upload several images, recording success or failure per file.

        A failing file never prevents the remaining files from being uploaded.
        """
        batch = BatchResult()
        for image_data, original_name, declared_mime_type in files:
            try:
                photo = self.upload(
                    image_data, original_name, declared_mime_type, asset_type, scope_id
                )
            except Exception as e:
                self.logger.warning(f"Batch item {original_name} failed: {e}")
                batch.results.append(UploadOutcome(original_name, success=False, error=str(e)))
                continue
            batch.results.append(UploadOutcome(original_name, success=True, photo=photo))

        self.logger.info(f"Batch complete: {batch.message}")
        return batch

    def _remove_original(self, key: str) -> None:
        try:
            self.storage.delete_object(key)
        except StorageWriteError as e:
            self.logger.warning(f"Could not remove original {key}: {e}")
