"""
Image signature sniffing.

Formats are detected from the leading bytes of a buffer, never from a file
name or a client-declared Content-Type.
"""

from dataclasses import dataclass
from typing import Optional

import pillow_heif

# Lets Pillow open HEIC/HEIF buffers alongside its built-in formats.
pillow_heif.register_heif_opener()


@dataclass(frozen=True)
class DetectedFormat:
    """A format identified from a buffer's signature."""
    name: str
    mime_type: str


SIGNATURES = (
    (b'\xff\xd8\xff', DetectedFormat('jpeg', 'image/jpeg')),
    (b'\x89PNG\r\n\x1a\n', DetectedFormat('png', 'image/png')),
    (b'GIF87a', DetectedFormat('gif', 'image/gif')),
    (b'GIF89a', DetectedFormat('gif', 'image/gif')),
    (b'II*\x00', DetectedFormat('tiff', 'image/tiff')),
    (b'MM\x00*', DetectedFormat('tiff', 'image/tiff')),
    (b'BM', DetectedFormat('bmp', 'image/bmp')),
)

# Major brands of ISO base media ('ftyp') containers.
FTYP_BRANDS = {
    b'heic': DetectedFormat('heic', 'image/heic'),
    b'heix': DetectedFormat('heic', 'image/heic'),
    b'hevc': DetectedFormat('heic', 'image/heic-sequence'),
    b'hevx': DetectedFormat('heic', 'image/heic-sequence'),
    b'mif1': DetectedFormat('heif', 'image/heif'),
    b'msf1': DetectedFormat('heif', 'image/heif-sequence'),
    b'avif': DetectedFormat('avif', 'image/avif'),
    b'avis': DetectedFormat('avif', 'image/avif-sequence'),
}

CONTENT_TYPES = {
    'jpeg': 'image/jpeg',
    'webp': 'image/webp',
}

FILE_EXTENSIONS = {
    'jpeg': 'jpg',
    'webp': 'webp',
}


def sniff_format(image_data: bytes) -> Optional[DetectedFormat]:
    """
    Identify an image format from its leading bytes.

    Args:
        image_data: Raw buffer

    Returns:
        DetectedFormat, or None when no known signature matches
    """
    header = image_data[:16]

    for signature, detected in SIGNATURES:
        if header.startswith(signature):
            return detected

    if len(header) >= 12 and header[:4] == b'RIFF' and header[8:12] == b'WEBP':
        return DetectedFormat('webp', 'image/webp')

    if len(header) >= 12 and header[4:8] == b'ftyp':
        return FTYP_BRANDS.get(header[8:12])

    return None


def content_type_for(encoding: str) -> str:
    """MIME type of a thumbnail encoding."""
    return CONTENT_TYPES[encoding]


def extension_for(encoding: str) -> str:
    """File extension used in storage keys for a thumbnail encoding."""
    return FILE_EXTENSIONS.get(encoding, 'jpg')
