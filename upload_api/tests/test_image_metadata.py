"""Tests for metadata extraction."""

from upload_api.image_metadata import extract_metadata


class TestExtractMetadata:
    """Tests for extract_metadata."""

    def test_jpeg(self, large_jpeg_bytes):
        metadata = extract_metadata(large_jpeg_bytes)

        assert (metadata.width, metadata.height, metadata.format) == (3000, 2000, 'jpeg')
        assert metadata.is_known

    def test_png(self, sample_png_bytes):
        metadata = extract_metadata(sample_png_bytes)

        assert metadata.format == 'png'
        assert metadata.dimensions.width == 100

    def test_unreadable_buffer_degrades(self, text_bytes):
        metadata = extract_metadata(text_bytes)

        assert (metadata.width, metadata.height, metadata.format) == (0, 0, 'unknown')
        assert not metadata.is_known

    def test_empty_buffer_degrades(self):
        assert extract_metadata(b'').format == 'unknown'

    def test_heif(self, heif_bytes):
        metadata = extract_metadata(heif_bytes)

        assert (metadata.width, metadata.height, metadata.format) == (640, 480, 'heif')

    def test_pixel_count_over_decoder_limit_degrades(self, oversized_png_bytes):
        assert not extract_metadata(oversized_png_bytes).is_known
