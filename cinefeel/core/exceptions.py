class CineFeelError(Exception):
    """Base exception for the CineFeel service."""


class InvalidImagePayloadError(CineFeelError):
    """Raised when an image payload is empty or cannot be decoded as an image."""


class CaptureUnavailableError(CineFeelError):
    """Raised when a frame is requested but no camera stream is available."""
