"""
Exceptions raised by the tutor proxy.

Client input problems derive from RequestValidationFailed and map to HTTP 400
with their message. UpstreamError maps to HTTP 500 with a generic message;
its details are only ever written to the server log.
"""

from typing import Optional


class TutorProxyError(Exception):
    """
    Base exception class for all tutor proxy errors.

    Attributes:
        message: Human-readable description of the error.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class RequestValidationFailed(TutorProxyError):
    """Base class for errors caused by the caller's request body."""

    field: str = ""


class MissingFieldError(RequestValidationFailed):
    """Raised when the question is absent, not a string, or blank."""

    field = "question"

    def __init__(self, message: str = "Missing 'question' string.") -> None:
        super().__init__(message)


class InvalidModeError(RequestValidationFailed):
    """
    Raised when the mode is absent or not a recognized value.

    Attributes:
        mode: The rejected value, if any.
    """

    field = "mode"

    def __init__(self, mode: object = None) -> None:
        self.mode = mode
        super().__init__("Invalid 'mode'. Use 'exam' or 'tldr'.")


class QuestionTooLongError(RequestValidationFailed):
    """
    Raised when the trimmed question exceeds the configured maximum.

    Attributes:
        length: Length of the trimmed question.
        max_length: Configured upper bound.
    """

    field = "question"

    def __init__(self, length: int, max_length: int) -> None:
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"'question' is too long (max {max_length} characters).")


class UpstreamError(TutorProxyError):
    """
    Raised when the completion service cannot produce an answer.

    Covers network failures, timeouts, non-success responses and
    responses without usable content.

    Attributes:
        model_name: Name of the model that was called.
        original_error: The underlying exception if available.
    """

    def __init__(
        self,
        message: str,
        model_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
        details: Optional[str] = None,
    ) -> None:
        self.model_name = model_name
        self.original_error = original_error

        enhanced_message = f"[LLM] {message}"
        if model_name:
            enhanced_message = f"{enhanced_message} (model: {model_name})"
        if original_error:
            enhanced_message = (
                f"{enhanced_message} | Caused by: "
                f"{type(original_error).__name__}: {str(original_error)[:200]}"
            )

        super().__init__(enhanced_message, details)
