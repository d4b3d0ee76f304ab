"""
Error Handling Module

Defines domain exceptions and error categories for the upload relay.
Domain exceptions are pure and have no external dependencies.
Application exceptions carry the user-facing message and HTTP status.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    MISSING_FILE = "missing_file"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    FILE_TOO_LARGE = "file_too_large"
    FILE_NOT_FOUND = "file_not_found"
    STORAGE_ERROR = "storage_error"
    INVALID_REQUEST = "invalid_request"
    SYSTEM_ERROR = "system_error"


# User-facing messages shown by the checkout flow
ERROR_MESSAGES: Dict[ErrorCategory, str] = {
    ErrorCategory.MISSING_FILE: "No file uploaded",
    ErrorCategory.UNSUPPORTED_MEDIA_TYPE: "Only PDF files are allowed",
    ErrorCategory.FILE_TOO_LARGE: "File exceeds the maximum allowed upload size",
    ErrorCategory.FILE_NOT_FOUND: "The requested file could not be found",
    ErrorCategory.STORAGE_ERROR: "The file could not be stored, please try again later",
    ErrorCategory.INVALID_REQUEST: "The request could not be processed",
    ErrorCategory.SYSTEM_ERROR: "An unexpected error occurred while processing your request",
}

HTTP_STATUS_CODES: Dict[ErrorCategory, int] = {
    ErrorCategory.MISSING_FILE: 400,
    ErrorCategory.UNSUPPORTED_MEDIA_TYPE: 400,
    ErrorCategory.FILE_TOO_LARGE: 413,
    ErrorCategory.FILE_NOT_FOUND: 404,
    ErrorCategory.STORAGE_ERROR: 500,
    ErrorCategory.INVALID_REQUEST: 400,
    ErrorCategory.SYSTEM_ERROR: 500,
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Each subclass names the ErrorCategory it is reported under, so the API
    layer can translate any domain failure without a lookup of its own.
    """

    category = ErrorCategory.SYSTEM_ERROR

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class MissingFileError(DomainError):
    """Raised when the request carries no `file` part."""

    category = ErrorCategory.MISSING_FILE


class UnsupportedMediaTypeError(DomainError):
    """Raised when the declared media type is not on the allowlist."""

    category = ErrorCategory.UNSUPPORTED_MEDIA_TYPE


class FileTooLargeError(DomainError):
    """Raised when an upload exceeds the configured size limit."""

    category = ErrorCategory.FILE_TOO_LARGE


class StoredFileNotFoundError(DomainError):
    """Raised when a storage name does not resolve to a stored file."""

    category = ErrorCategory.FILE_NOT_FOUND


class StorageError(DomainError):
    """Raised when the upload directory cannot be written or read."""

    category = ErrorCategory.STORAGE_ERROR


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Application error with category and user-facing message.

    Bridges domain errors with the JSON error body returned to callers.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for logging
        """
        self.category = category
        self.technical_message = technical_message or ""
        self.message = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.http_status_code = HTTP_STATUS_CODES.get(category, 500)

        super().__init__(self.message)

    @classmethod
    def from_domain_error(cls, error: DomainError) -> "ApplicationError":
        """Wrap a domain error, keeping its text as the technical message."""
        return cls(error.category, str(error))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "error": self.message,
            "code": self.category.value,
        }


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    status_code: Optional[int] = None,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        technical_message: Technical error details for logging
        status_code: HTTP status code, defaults to the category's status

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message)
    return error.to_dict(), status_code or error.http_status_code
