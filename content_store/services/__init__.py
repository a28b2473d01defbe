"""Storage service, checksum and MIME helpers."""

from content_store.services.content import (
    StorageService,
    get_storage_service,
    reset_storage_service,
)

__all__ = ["StorageService", "get_storage_service", "reset_storage_service"]
