"""
Configuration for the upload gateway.

Values are read from the environment by the ``from_env`` constructors and
passed explicitly into the components that need them.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple


ASSET_TYPES = ('portfolio', 'events', 'slideshow')

DEFAULT_ALLOWED_MIME_TYPES = frozenset({
    'image/jpeg',
    'image/png',
    'image/webp',
    'image/heic',
    'image/heif',
})

DEFAULT_THUMBNAIL_SIZES = {
    'small': 400,
    'medium': 800,
    'large': 1200,
}

DEFAULT_ENCODINGS = ('jpeg', 'webp')


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    return int(value)


@dataclass
class S3Config:
    """
    Connection settings for the S3-compatible object store (Cloudflare R2).

    Attributes:
        endpoint: S3 API endpoint URL
        bucket: Bucket receiving originals and thumbnails
        access_key: Access key id
        secret_key: Secret access key
        public_url: Base URL under which stored keys are publicly served
        region: Signing region ('auto' for R2)
    """
    endpoint: str = ''
    bucket: str = 'foto'
    access_key: str = ''
    secret_key: str = ''
    public_url: str = ''
    region: str = 'auto'

    def __post_init__(self):
        self.public_url = (self.public_url or '').replace('"', '').rstrip('/')

    @classmethod
    def from_env(cls) -> 'S3Config':
        """Build configuration from R2_* environment variables."""
        return cls(
            endpoint=os.getenv('R2_ENDPOINT', ''),
            bucket=os.getenv('R2_BUCKET', 'foto'),
            access_key=os.getenv('R2_ACCESS_KEY', ''),
            secret_key=os.getenv('R2_SECRET_KEY', ''),
            public_url=os.getenv('R2_PUBLIC_URL', ''),
            region=os.getenv('R2_REGION', 'auto'),
        )

    @property
    def is_configured(self) -> bool:
        """True when endpoint and credentials are all present."""
        return bool(self.endpoint and self.access_key and self.secret_key)

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty if valid)."""
        errors = []
        if not self.endpoint:
            errors.append("Missing R2_ENDPOINT")
        if not self.access_key:
            errors.append("Missing R2_ACCESS_KEY")
        if not self.secret_key:
            errors.append("Missing R2_SECRET_KEY")
        if not self.bucket:
            errors.append("Missing R2_BUCKET")
        if not self.public_url:
            errors.append("Missing R2_PUBLIC_URL")
        return errors


@dataclass
class PipelineConfig:
    """
    Image pipeline settings.

    Attributes:
        allowed_mime_types: MIME types accepted after signature sniffing
        thumbnail_sizes: Ordered size class -> max bounding dimension
        encodings: Output encodings, in generation order
        jpeg_quality: JPEG encoder quality (0-100)
        webp_quality: WebP encoder quality (0-100)
        max_workers: Worker threads per upload for the thumbnail matrix
    """
    allowed_mime_types: FrozenSet[str] = DEFAULT_ALLOWED_MIME_TYPES
    thumbnail_sizes: Dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_THUMBNAIL_SIZES)
    )
    encodings: Tuple[str, ...] = DEFAULT_ENCODINGS
    jpeg_quality: int = 85
    webp_quality: int = 85
    max_workers: int = 1

    @classmethod
    def from_env(cls) -> 'PipelineConfig':
        """Build configuration, honouring optional UPLOAD_* overrides."""
        allowed = os.getenv('UPLOAD_ALLOWED_MIME_TYPES')
        return cls(
            allowed_mime_types=(
                frozenset(m.strip() for m in allowed.split(',') if m.strip())
                if allowed else DEFAULT_ALLOWED_MIME_TYPES
            ),
            jpeg_quality=_env_int('UPLOAD_JPEG_QUALITY', 85),
            webp_quality=_env_int('UPLOAD_WEBP_QUALITY', 85),
            max_workers=_env_int('UPLOAD_PIPELINE_WORKERS', 1),
        )

    @property
    def size_classes(self) -> List[str]:
        """Size classes ordered by ascending max dimension."""
        return sorted(self.thumbnail_sizes, key=self.thumbnail_sizes.get)

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty if valid)."""
        errors = []
        if not self.allowed_mime_types:
            errors.append("At least one allowed MIME type is required")
        if not self.thumbnail_sizes:
            errors.append("At least one thumbnail size is required")
        for size_class, dimension in self.thumbnail_sizes.items():
            if dimension <= 0:
                errors.append(f"Thumbnail size {size_class} must be positive")
        for encoding in self.encodings:
            if encoding not in DEFAULT_ENCODINGS:
                errors.append(f"Unsupported encoding: {encoding}")
        for name in ('jpeg_quality', 'webp_quality'):
            if not 0 <= getattr(self, name) <= 100:
                errors.append(f"{name} must be between 0 and 100")
        if self.max_workers < 1:
            errors.append("max_workers must be at least 1")
        return errors


@dataclass
class ServerConfig:
    """
    HTTP boundary settings.

    Attributes:
        host: Bind address
        port: Listen port
        api_key: Shared secret expected in X-API-Key or a Bearer token
        max_file_size: Per-file upload limit in bytes
        max_files: Maximum files per batch request
        log_level: Root logging level name
        server: bottle server adapter name
    """
    host: str = '0.0.0.0'
    port: int = 4000
    api_key: Optional[str] = None
    max_file_size: int = 200 * 1024 * 1024
    max_files: int = 50
    log_level: str = 'INFO'
    server: str = 'wsgiref'

    @classmethod
    def from_env(cls) -> 'ServerConfig':
        """Build configuration from UPLOAD_API_* environment variables."""
        return cls(
            host=os.getenv('UPLOAD_API_HOST', '0.0.0.0'),
            port=_env_int('UPLOAD_API_PORT', 4000),
            api_key=os.getenv('UPLOAD_API_KEY') or None,
            max_file_size=_env_int('UPLOAD_MAX_FILE_SIZE', 200 * 1024 * 1024),
            max_files=_env_int('UPLOAD_MAX_FILES', 50),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            server=os.getenv('UPLOAD_API_SERVER', 'wsgiref'),
        )

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty if valid)."""
        errors = []
        if not self.api_key:
            errors.append("Missing UPLOAD_API_KEY")
        if self.max_file_size <= 0:
            errors.append("max_file_size must be positive")
        if self.max_files <= 0:
            errors.append("max_files must be positive")
        return errors
