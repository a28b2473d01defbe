"""Storage backend abstraction for FTP and local filesystem."""

from content_store.services.storage.base import (
    StorageBackend,
    StoredFile,
    StoredFileWithTimestamp,
)
from content_store.services.storage.factory import create_storage_backend

__all__ = [
    "StorageBackend",
    "StoredFile",
    "StoredFileWithTimestamp",
    "create_storage_backend",
]
