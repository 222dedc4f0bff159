"""
Pytest fixtures for upload_api tests.
"""

import io
import logging
import struct
import zlib

import pytest
from PIL import Image


PUBLIC_URL = 'https://cdn.example.com'


def make_image_bytes(width, height, fmt='JPEG', mode='RGB', color='red', orientation=None):
    """Encode a solid-colour test image."""
    img = Image.new(mode, (width, height), color=color)
    buffer = io.BytesIO()
    kwargs = {}
    if orientation is not None:
        exif = Image.Exif()
        exif[0x0112] = orientation
        kwargs['exif'] = exif
    img.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


def png_chunk(chunk_type, payload):
    """Encode one PNG chunk with its CRC."""
    body = chunk_type + payload
    return struct.pack('>I', len(payload)) + body + struct.pack('>I', zlib.crc32(body))


def make_png_header(width, height):
    """A minimal RGB PNG whose IHDR declares the given size."""
    return (
        b'\x89PNG\r\n\x1a\n'
        + png_chunk(b'IHDR', struct.pack('>IIBBBBB', width, height, 8, 2, 0, 0, 0))
        + png_chunk(b'IDAT', zlib.compress(b'\x00'))
        + png_chunk(b'IEND', b'')
    )


@pytest.fixture
def image_factory():
    """Fixture providing the image byte factory."""
    return make_image_bytes


@pytest.fixture
def sample_image_bytes():
    """Fixture providing sample JPEG image bytes."""
    return make_image_bytes(100, 100)


@pytest.fixture
def sample_png_bytes():
    """Fixture providing sample PNG image bytes with transparency."""
    return make_image_bytes(100, 100, fmt='PNG', mode='RGBA', color=(255, 0, 0, 128))


@pytest.fixture
def large_jpeg_bytes():
    """Fixture providing a 3000x2000 JPEG."""
    return make_image_bytes(3000, 2000, color='blue')


@pytest.fixture
def small_jpeg_bytes():
    """Fixture providing a 200x150 JPEG, smaller than every thumbnail size."""
    return make_image_bytes(200, 150, color='green')


@pytest.fixture
def oversized_png_bytes():
    """Fixture providing a PNG header declaring 20000x10000 pixels."""
    return make_png_header(20000, 10000)


@pytest.fixture
def heif_bytes():
    """Fixture providing a 640x480 HEIF image."""
    import upload_api.image_formats  # noqa: F401  registers the HEIF opener

    return make_image_bytes(640, 480, fmt='HEIF', color='purple')


@pytest.fixture
def gif_bytes():
    """Fixture providing GIF bytes (a recognized but disallowed format)."""
    return make_image_bytes(50, 50, fmt='GIF', mode='P', color=1)


@pytest.fixture
def text_bytes():
    """Fixture providing a text file's contents."""
    return b'Just a text file renamed to photo.jpg\n'


@pytest.fixture
def mock_storage(mocker):
    """Fixture providing an in-memory fake object store."""
    storage = mocker.MagicMock()
    storage.upload_object.side_effect = lambda key, data, content_type: f"{PUBLIC_URL}/{key}"
    storage.delete_object.return_value = None
    storage.check_bucket.return_value = True
    storage.config.bucket = 'test-bucket'
    storage.config.is_configured = True
    return storage


@pytest.fixture
def s3_config():
    """Fixture providing S3 configuration."""
    from upload_api.config import S3Config

    return S3Config(
        endpoint='https://test-account.r2.cloudflarestorage.com',
        bucket='test-bucket',
        access_key='test-access-key',
        secret_key='test-secret-key',
        public_url=PUBLIC_URL,
    )


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    return logging.getLogger('test')
