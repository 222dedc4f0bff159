"""Tests for ImageValidator class."""

import pytest

from upload_api.exceptions import (
    CorruptImageError,
    DisallowedFormatError,
    ImageTooLargeError,
    UnrecognizedFormatError,
    ValidationError,
)
from upload_api.image_validator import ImageValidator


class TestImageValidator:
    """Tests for ImageValidator class."""

    def test_valid_jpeg(self, sample_image_bytes):
        detected = ImageValidator().validate(sample_image_bytes, 'image/jpeg')

        assert detected.mime_type == 'image/jpeg'

    def test_true_format_wins_over_declared(self, sample_png_bytes):
        """A PNG declared as JPEG is judged as the PNG it really is."""
        detected = ImageValidator().validate(sample_png_bytes, 'image/jpeg')

        assert detected.mime_type == 'image/png'

    def test_disallowed_format_with_spoofed_declaration(self, gif_bytes):
        with pytest.raises(DisallowedFormatError) as exc_info:
            ImageValidator().validate(gif_bytes, 'image/jpeg')

        assert exc_info.value.mime_type == 'image/gif'
        assert 'image/gif' in exc_info.value.reason

    def test_renamed_text_file(self, text_bytes):
        with pytest.raises(UnrecognizedFormatError):
            ImageValidator().validate(text_bytes, 'image/jpeg')

    def test_corrupt_jpeg(self):
        data = b'\xff\xd8\xff' + b'\x00' * 64

        with pytest.raises(CorruptImageError):
            ImageValidator().validate(data, 'image/jpeg')

    def test_corrupt_png(self):
        data = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64

        with pytest.raises(CorruptImageError):
            ImageValidator().validate(data, 'image/png')

    def test_pixel_count_over_decoder_limit(self, oversized_png_bytes):
        with pytest.raises(ImageTooLargeError) as exc_info:
            ImageValidator().validate(oversized_png_bytes, 'image/png')

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.reason.startswith('Image too large')

    def test_heif(self, heif_bytes):
        detected = ImageValidator().validate(heif_bytes, 'image/heic')

        assert detected.mime_type == 'image/heic'

    def test_custom_allow_list(self, sample_png_bytes, sample_image_bytes):
        validator = ImageValidator(allowed_mime_types={'image/jpeg'})

        assert validator.validate(sample_image_bytes).mime_type == 'image/jpeg'
        with pytest.raises(DisallowedFormatError):
            validator.validate(sample_png_bytes)

    def test_all_errors_are_validation_errors(self, text_bytes, gif_bytes):
        validator = ImageValidator()

        for data in (text_bytes, gif_bytes, b'\xff\xd8\xff\x00'):
            with pytest.raises(ValidationError):
                validator.validate(data)

    def test_declared_type_optional(self, sample_image_bytes):
        assert ImageValidator().validate(sample_image_bytes).name == 'jpeg'
