"""
Abstract base class for storage backends.

Provides a consistent interface for both FTP and local filesystem storage.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from content_store.core.config import BackendKind


@dataclass
class StoredFile:
    """A file as tracked by the content store."""

    storage_key: str  # Name inside the backend
    length: int  # Size in bytes
    checksum: str | None = None  # Content hash at store time
    display_name: str | None = None  # Caller-supplied name, first upload only


@dataclass
class StoredFileWithTimestamp(StoredFile):
    """Listing entry: a stored file plus its backend-reported timestamp."""

    created_at: datetime | None = None


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    kind: BackendKind

    @abstractmethod
    async def connect(self) -> None:
        """
        Verify the backend is reachable.

        Raises:
            StorageConnectionError: If the backend cannot be reached.
        """
        ...

    @abstractmethod
    async def put(self, key: str, data: bytes) -> None:
        """
        Write ``data`` under ``key``, replacing any existing content.

        Args:
            key: Storage key of the file.
            data: File content.

        Raises:
            StorageError: If the write fails.
        """
        ...

    @abstractmethod
    async def get(self, key: str, throw_if_missing: bool = True) -> bytes | None:
        """
        Read the content stored under ``key``.

        Args:
            key: Storage key of the file.
            throw_if_missing: Raise instead of returning None when absent.

        Returns:
            File content, or None if missing and ``throw_if_missing`` is False.

        Raises:
            FileNotFoundError: If the file doesn't exist in strict mode.
            StorageError: If the read fails.
        """
        ...

    @abstractmethod
    async def list_files(self, folder: str = "") -> list[StoredFileWithTimestamp]:
        """
        List the files directly under the root, or under ``folder``.

        Subdirectories are not descended into.

        Returns:
            Entries in backend-native order.
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a file from storage.

        Returns:
            True if file was deleted, False if it didn't exist.
        """
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if a file exists in storage.

        Returns:
            True if file exists.
        """
        ...

    @staticmethod
    def join_key(folder: str, name: str) -> str:
        """Build the storage key of ``name`` inside ``folder``."""
        folder = folder.strip("/")
        return f"{folder}/{name}" if folder else name
