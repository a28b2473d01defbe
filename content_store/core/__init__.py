"""Core module - Configuration, logging, and exceptions."""

from content_store.core.config import (
    BackendConfiguration,
    BackendKind,
    Settings,
    get_settings,
)
from content_store.core.exceptions import (
    ConfigurationError,
    ContentStoreError,
    EmptyPayloadError,
    FileNotFoundError,
    IntegrityViolationError,
    StorageConnectionError,
    StorageError,
    UnsupportedBackendError,
    ValidationError,
)

__all__ = [
    "BackendConfiguration",
    "BackendKind",
    "Settings",
    "get_settings",
    "ConfigurationError",
    "ContentStoreError",
    "EmptyPayloadError",
    "FileNotFoundError",
    "IntegrityViolationError",
    "StorageConnectionError",
    "StorageError",
    "UnsupportedBackendError",
    "ValidationError",
]
