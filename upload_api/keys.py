"""
Object store key derivation.

Keys are pure functions of their inputs so re-processing an upload writes
to the same locations.
"""

import os
import re
import time
import uuid
from typing import Optional

from .config import ASSET_TYPES
from .image_formats import extension_for

_UNSAFE_CHARS = re.compile(r'[^a-zA-Z0-9_-]')


def _asset_prefix(asset_type: str, scope_id: Optional[str]) -> str:
    if asset_type not in ASSET_TYPES:
        raise ValueError(f"Unknown asset type: {asset_type}")
    if asset_type == 'events':
        if not scope_id:
            raise ValueError("Event ID required for event uploads")
        return f"events/{scope_id}"
    return asset_type


def build_thumbnail_key(
    asset_type: str,
    scope_id: Optional[str],
    filename: str,
    size_class: str,
    encoding: str
) -> str:
    """
    Build the storage key of a thumbnail variant.

    Examples:
        portfolio/thumbnails/sunset-medium.webp
        events/42/thumbnails/sunset-small.jpg
    """
    base_name = os.path.splitext(filename)[0]
    ext = extension_for(encoding)
    return f"{_asset_prefix(asset_type, scope_id)}/thumbnails/{base_name}-{size_class}.{ext}"


def build_original_key(asset_type: str, scope_id: Optional[str], filename: str) -> str:
    """Build the storage key of an original upload."""
    return f"{_asset_prefix(asset_type, scope_id)}/originals/{filename}"


def generate_unique_filename(original_name: str) -> str:
    """
    Derive a collision-resistant storage filename from a client filename.

    The base name is reduced to [A-Za-z0-9_-] and 50 characters, then
    suffixed with a millisecond timestamp and a short random id.
    """
    base_name, ext = os.path.splitext(os.path.basename(original_name))
    safe_base = _UNSAFE_CHARS.sub('_', base_name)[:50]
    timestamp = int(time.time() * 1000)
    unique_id = uuid.uuid4().hex[:8]
    return f"{safe_base}-{timestamp}-{unique_id}{ext.lower()}"
