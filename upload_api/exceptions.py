"""
Exceptions raised by the upload pipeline and its collaborators.
"""


class UploadApiError(Exception):
    """Base class for all upload gateway errors."""
    pass


class ValidationError(UploadApiError):
    """Raised when an uploaded buffer is rejected before processing."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UnrecognizedFormatError(ValidationError):
    """No known image signature matches the buffer."""
    pass


class DisallowedFormatError(ValidationError):
    """The detected format is not in the configured allow-list."""

    def __init__(self, mime_type: str):
        super().__init__(f"Invalid file type: {mime_type}")
        self.mime_type = mime_type


class CorruptImageError(ValidationError):
    """The format is recognized but the image cannot be decoded."""
    pass


class ImageTooLargeError(ValidationError):
    """The image declares more pixels than the decoder will accept."""
    pass


class GenerationError(UploadApiError):
    """Raised when a single thumbnail variant cannot be produced."""
    pass


class StorageWriteError(UploadApiError):
    """Raised when the object store rejects a write or delete."""

    def __init__(self, key: str, message: str):
        super().__init__(f"Storage operation failed for {key}: {message}")
        self.key = key


class PayloadTooLargeError(UploadApiError):
    """Raised when an uploaded file exceeds the configured size limit."""

    def __init__(self, max_file_size: int):
        super().__init__(
            f"File too large. Maximum size: {max_file_size // 1024 // 1024}MB"
        )
        self.max_file_size = max_file_size
