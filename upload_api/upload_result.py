"""
Upload results - Response records for single and batch uploads.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class UploadedPhoto:
    """
    A stored photo as reported to the client.

    Attributes:
        id: Random identifier of this upload
        filename: Client-supplied filename
        original_url: Public URL of the stored original
        thumbnail_url: Primary thumbnail (medium; large for slideshow)
        thumbnail_small_url: Best small variant
        thumbnail_medium_url: Best medium variant
        thumbnail_large_url: Best large variant
        width: Original width (0 if unknown)
        height: Original height (0 if unknown)
        size: Original size in bytes
        event_id: Event the photo belongs to, for event uploads
        include_size_urls: Whether per-size URLs are reported
    """
    id: str
    filename: str
    original_url: str
    thumbnail_url: Optional[str]
    thumbnail_small_url: Optional[str]
    thumbnail_medium_url: Optional[str]
    thumbnail_large_url: Optional[str]
    width: int
    height: int
    size: int
    event_id: Optional[str] = None
    include_size_urls: bool = True

    def to_dict(self) -> dict:
        data = {'id': self.id}
        if self.event_id is not None:
            data['event_id'] = self.event_id
        data.update({
            'filename': self.filename,
            'original_url': self.original_url,
            'thumbnail_url': self.thumbnail_url,
        })
        if self.include_size_urls:
            data.update({
                'thumbnail_small_url': self.thumbnail_small_url,
                'thumbnail_medium_url': self.thumbnail_medium_url,
                'thumbnail_large_url': self.thumbnail_large_url,
            })
        data.update({
            'width': self.width,
            'height': self.height,
            'size': self.size,
        })
        return data


@dataclass
class UploadOutcome:
    """Per-file result of a batch upload."""
    filename: str
    success: bool
    photo: Optional[UploadedPhoto] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {'filename': self.filename, 'success': self.success}
        if self.success:
            data['photo'] = self.photo.to_dict()
        else:
            data['error'] = self.error
        return data


@dataclass
class BatchResult:
    """Outcomes of a batch upload plus aggregate counts."""
    results: List[UploadOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def message(self) -> str:
        message = f"Uploaded {self.succeeded} photos"
        if self.failed:
            message += f", {self.failed} failed"
        return message

    def to_dict(self) -> dict:
        return {
            'success': True,
            'message': self.message,
            'results': [r.to_dict() for r in self.results],
            'summary': {
                'total': self.total,
                'success': self.succeeded,
                'failed': self.failed,
            },
        }
