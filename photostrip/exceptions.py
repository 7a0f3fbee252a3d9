"""Errors raised by the cropping and compositing pipeline."""

from typing import Optional


class PhotostripError(Exception):
    """Base class for every error the pipeline reports to its caller.

    Attributes:
        message: Human-readable description
        error_code: Stable code used by the HTTP layer
    """

    status_code = 400

    def __init__(self, message: str, error_code: str = "PHOTOSTRIP_ERROR"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class InvalidArgumentError(PhotostripError):
    """A size, rectangle or layout value the caller should never have sent.

    Attributes:
        field: Name of the offending argument (if known)
    """

    def __init__(self, message: str, field: Optional[str] = None, error_code: str = "INVALID_ARGUMENT"):
        super().__init__(message, error_code=error_code)
        self.field = field


class InvalidTransitionError(InvalidArgumentError):
    """Session wizard asked to do something its current panel does not allow."""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_TRANSITION")


class DecodeError(PhotostripError):
    """Source bytes could not be decoded into an image.

    Attributes:
        index: Position of the failing image in a composite request
    """

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message, error_code="DECODE_ERROR")
        self.index = index

    def __str__(self) -> str:
        if self.index is not None:
            return f"{super().__str__()} (image index: {self.index})"
        return super().__str__()


class EncodingError(PhotostripError):
    """Output format is unsupported or the encoder failed."""

    status_code = 500

    def __init__(self, message: str, output_format: Optional[str] = None):
        super().__init__(message, error_code="ENCODING_ERROR")
        self.output_format = output_format


class EmptyInputError(PhotostripError):
    """A strip was requested with no photos."""

    def __init__(self, message: str = "At least one image is required"):
        super().__init__(message, error_code="EMPTY_INPUT")
