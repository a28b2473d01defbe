"""
Custom exceptions for Content Store.

All exceptions inherit from ContentStoreError and carry a status code and
error details so an upstream service layer can turn them into consistent
error responses.
"""

from typing import Any


class ContentStoreError(Exception):
    """Base exception for all Content Store errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        self.message = message or self.message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for an error response."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ContentStoreError):
    """Raised when the storage configuration is invalid."""

    error_code = "CONFIGURATION_ERROR"
    message = "Invalid storage configuration"


class UnsupportedBackendError(ConfigurationError):
    """Raised when the configuration names a backend with no implementation."""

    error_code = "UNSUPPORTED_BACKEND"
    message = "Storage backend not supported"

    def __init__(self, backend: str) -> None:
        super().__init__(
            message=f"Storage backend '{backend}' is not supported",
            details={"backend": backend},
        )


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(ContentStoreError):
    """Raised when caller input is rejected."""

    status_code = 422
    error_code = "VALIDATION_ERROR"
    message = "Request validation failed"


class EmptyPayloadError(ValidationError):
    """Raised when a write is attempted with zero-length content."""

    error_code = "EMPTY_PAYLOAD"
    message = "File length is zero"


# =============================================================================
# Storage Errors
# =============================================================================


class StorageError(ContentStoreError):
    """Raised when storage operation fails."""

    status_code = 500
    error_code = "STORAGE_ERROR"
    message = "Storage operation failed"


class FileNotFoundError(StorageError):
    """Raised when file is not found in storage."""

    status_code = 404
    error_code = "FILE_NOT_FOUND"
    message = "File not found in storage"


class IntegrityViolationError(StorageError):
    """Raised when stored content no longer matches its recorded checksum."""

    status_code = 409
    error_code = "INTEGRITY_VIOLATION"
    message = "File from the storage is modified and might breach the security of the system"

    def __init__(self, key: str, expected: str, actual: str) -> None:
        super().__init__(
            message=f"Checksum mismatch for '{key}', read aborted",
            details={"key": key, "expected": expected, "actual": actual},
        )


class StorageConnectionError(StorageError):
    """Raised when the storage backend is unreachable or rejects credentials."""

    status_code = 503
    error_code = "STORAGE_CONNECTION_ERROR"
    message = "Storage backend is unavailable"
