"""
Photo upload gateway.

Validates uploaded images, stores the original in an S3-compatible object
store and generates a matrix of resized JPEG/WebP thumbnails.
"""

__version__ = "1.0.0"

from .config import S3Config, PipelineConfig, ServerConfig
from .image_formats import DetectedFormat, sniff_format
from .image_validator import ImageValidator
from .image_metadata import extract_metadata
from .thumbnail_generator import ThumbnailGenerator, GeneratedThumbnail
from .thumbnail_result import (
    Dimensions,
    ImageMetadata,
    ThumbnailResult,
    ProcessResult,
    ThumbnailUrls,
)
from .keys import build_thumbnail_key, build_original_key, generate_unique_filename
from .s3_client import S3Client
from .pipeline import ImagePipeline, select_urls
from .upload_result import UploadedPhoto, UploadOutcome, BatchResult
from .upload_service import UploadService

__all__ = [
    "S3Config",
    "PipelineConfig",
    "ServerConfig",
    "DetectedFormat",
    "sniff_format",
    "ImageValidator",
    "extract_metadata",
    "ThumbnailGenerator",
    "GeneratedThumbnail",
    "Dimensions",
    "ImageMetadata",
    "ThumbnailResult",
    "ProcessResult",
    "ThumbnailUrls",
    "build_thumbnail_key",
    "build_original_key",
    "generate_unique_filename",
    "S3Client",
    "ImagePipeline",
    "select_urls",
    "UploadedPhoto",
    "UploadOutcome",
    "BatchResult",
    "UploadService",
]
