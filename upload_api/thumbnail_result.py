"""
ThumbnailResult - Records describing an original image and its variants.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional


@dataclass(frozen=True)
class Dimensions:
    """Pixel dimensions; 0 means unknown."""
    width: int = 0
    height: int = 0

    def fits_within(self, max_dimension: int) -> bool:
        return self.width <= max_dimension and self.height <= max_dimension


@dataclass(frozen=True)
class ImageMetadata:
    """
    Metadata of an original upload.

    Attributes:
        width: Width in pixels (0 if unknown)
        height: Height in pixels (0 if unknown)
        format: Decoder format name, lowercase ('jpeg', 'png', ...) or 'unknown'
    """
    width: int = 0
    height: int = 0
    format: str = 'unknown'

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(self.width, self.height)

    @property
    def is_known(self) -> bool:
        return self.width > 0 and self.height > 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ThumbnailResult:
    """
    A single stored thumbnail variant.

    Attributes:
        size_class: 'small', 'medium' or 'large'
        encoding: 'jpeg' or 'webp'
        width: Width of the encoded thumbnail
        height: Height of the encoded thumbnail
        key: Object store key
        url: Public URL of the stored object
    """
    size_class: str
    encoding: str
    width: int
    height: int
    key: str
    url: str

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(self.width, self.height)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ProcessResult:
    """
    Outcome of running the thumbnail pipeline over one upload.

    Thumbnails are ordered size-major, encoding-minor. A result with fewer
    thumbnails than the configured matrix is still a valid result.
    """
    original: ImageMetadata
    thumbnails: List[ThumbnailResult] = field(default_factory=list)

    def find(self, size_class: str, encoding: str) -> Optional[ThumbnailResult]:
        for thumb in self.thumbnails:
            if thumb.size_class == size_class and thumb.encoding == encoding:
                return thumb
        return None

    def to_dict(self) -> dict:
        return {
            'original': self.original.to_dict(),
            'thumbnails': [t.to_dict() for t in self.thumbnails],
        }


@dataclass(frozen=True)
class ThumbnailUrls:
    """Best available URL per size class."""
    small: Optional[str] = None
    medium: Optional[str] = None
    large: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)
