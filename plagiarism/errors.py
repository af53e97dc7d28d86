"""
Exceptions raised while serving a plagiarism check.

Every exception carries the HTTP status, the short ``error`` label and the
human-readable message that end up in the JSON error envelope.
"""

from typing import Optional

PROCESSING_FAILED = "Processing failed"


class PlagiarismCheckError(Exception):
    """Base exception for plagiarism check failures."""

    status_code: int = 500
    error: str = PROCESSING_FAILED
    default_message: str = "Plagiarism check failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidInput(PlagiarismCheckError):
    """Input is missing, not a string, or too large."""

    status_code = 400
    error = "Invalid input"
    default_message = "Input must be a non-empty string"

    def __init__(self, message: Optional[str] = None, error: Optional[str] = None):
        super().__init__(message)
        if error:
            self.error = error


class InvalidUrl(PlagiarismCheckError):
    status_code = 400
    error = "Invalid URL"
    default_message = "The provided input is not a valid URL"


class RateLimitExceeded(PlagiarismCheckError):
    """Exception raised when a caller exceeds the check quota."""

    status_code = 429
    error = "Too many plagiarism checks"
    default_message = "Please wait before making another request"

    def __init__(self, retry_after: int, message: Optional[str] = None):
        """
        Initialize rate limit exceeded error.

        Args:
            retry_after: Seconds until the caller's window resets
            message: Optional override for the envelope message
        """
        super().__init__(message)
        self.retry_after = retry_after


# Upstream failures


class AuthFailure(PlagiarismCheckError):
    status_code = 401
    default_message = "Authentication failed. Please check API credentials."


class PermissionDenied(PlagiarismCheckError):
    status_code = 403
    default_message = "Access forbidden. Please check your API permissions."


class UpstreamRateLimited(PlagiarismCheckError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."


class UpstreamUnavailable(PlagiarismCheckError):
    status_code = 500
    default_message = "GoWinston API is temporarily unavailable."


class GenericUpstreamError(PlagiarismCheckError):
    """Upstream answered with a status we have no dedicated mapping for."""

    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.detail = detail or "Unknown error"
        super().__init__(f"GoWinston API Error: {status_code} - {self.detail}", status_code)


class ConnectivityError(PlagiarismCheckError):
    """The request never got an answer from upstream (network, DNS, timeout)."""

    default_message = "Failed to connect to GoWinston API. Please check your internet connection."


class RequestSetupError(PlagiarismCheckError):
    """The upstream request could not be built."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Request setup error: {reason}")


def error_for_status(status_code: int, detail: Optional[str] = None) -> PlagiarismCheckError:
    """Map an upstream HTTP status onto the error taxonomy."""
    if status_code == 401:
        return AuthFailure()
    if status_code == 403:
        return PermissionDenied()
    if status_code == 429:
        return UpstreamRateLimited()
    if status_code == 500:
        return UpstreamUnavailable()
    return GenericUpstreamError(status_code, detail)
