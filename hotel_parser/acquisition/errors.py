"""Errors raised while turning a payload into text."""


class AcquisitionError(RuntimeError):
    """The payload is unreadable, corrupted, or encrypted."""


class UnsupportedMediaTypeError(ValueError):
    """The declared media type is not accepted for this document kind."""

    def __init__(self, media_type: str) -> None:
        super().__init__(
            f"Unsupported file type: {media_type}. Please upload a PDF or image file."
        )
        self.media_type = media_type
