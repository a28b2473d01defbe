"""
Local filesystem storage backend.

Implements StorageBackend for a directory tree on the host, e.g. a volume
mounted into a container. Keys are resolved under ``root / address``.
"""

import os
from datetime import datetime, timezone
from pathlib import Path

import aiofiles
import aiofiles.os

from content_store.core.config import BackendKind
from content_store.core.exceptions import FileNotFoundError as StorageFileNotFoundError
from content_store.core.exceptions import StorageError
from content_store.core.logging import get_logger
from content_store.services.storage.base import StorageBackend, StoredFileWithTimestamp

logger = get_logger(__name__)


class LocalStorageBackend(StorageBackend):
    """Local filesystem storage implementation."""

    kind = BackendKind.LOCAL

    def __init__(self, base_path: str | Path) -> None:
        """
        Initialize local storage backend.

        Args:
            base_path: Root directory for file storage. Created by connect().
        """
        self.base_path = Path(base_path).resolve()

    def _get_full_path(self, key: str) -> Path:
        """Get full filesystem path for a key."""
        clean_key = key.lstrip("/").lstrip("\\")
        full_path = (self.base_path / clean_key).resolve()

        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise StorageError(
                message="Invalid file key",
                details={"key": key, "reason": "Path traversal detected"},
            ) from e

        return full_path

    def _create_listing_entry(self, path: Path) -> StoredFileWithTimestamp:
        """Create a listing entry from a filesystem path."""
        stat = path.stat()
        # st_birthtime is missing on most Linux filesystems; st_ctime is the
        # last metadata change there, not the creation time.
        created = getattr(stat, "st_birthtime", stat.st_ctime)
        return StoredFileWithTimestamp(
            storage_key=path.relative_to(self.base_path).as_posix(),
            length=stat.st_size,
            created_at=datetime.fromtimestamp(created, tz=timezone.utc),
        )

    async def connect(self) -> None:
        """Ensure the root directory exists."""
        try:
            await aiofiles.os.makedirs(self.base_path, exist_ok=True)
        except OSError as e:
            raise StorageError(
                message=f"Failed to create storage root: {e}",
                details={"path": str(self.base_path)},
            ) from e

    async def put(self, key: str, data: bytes) -> None:
        """Write file to local storage."""
        full_path = self._get_full_path(key)

        try:
            await aiofiles.os.makedirs(full_path.parent, exist_ok=True)
            async with aiofiles.open(full_path, "wb") as f:
                await f.write(data)
        except OSError as e:
            raise StorageError(
                message=f"Failed to write file: {e}",
                details={"key": key},
            ) from e

    async def get(self, key: str, throw_if_missing: bool = True) -> bytes | None:
        """Read file from local storage."""
        full_path = self._get_full_path(key)

        if not await aiofiles.os.path.isfile(full_path):
            if throw_if_missing:
                raise StorageFileNotFoundError(
                    message=f"Requested file: {key} does not exist",
                    details={"key": key},
                )
            return None

        try:
            async with aiofiles.open(full_path, "rb") as f:
                return await f.read()
        except OSError as e:
            raise StorageError(
                message=f"Failed to read file: {e}",
                details={"key": key},
            ) from e

    async def list_files(self, folder: str = "") -> list[StoredFileWithTimestamp]:
        """List files directly under the root or a sub-folder."""
        search_path = self._get_full_path(folder) if folder else self.base_path

        if not search_path.is_dir():
            return []

        try:
            return [
                self._create_listing_entry(path)
                for path in search_path.iterdir()
                if path.is_file()
            ]
        except OSError as e:
            raise StorageError(
                message=f"Failed to list files: {e}",
                details={"folder": folder},
            ) from e

    async def delete(self, key: str) -> bool:
        """Delete file from local storage."""
        full_path = self._get_full_path(key)

        if not await aiofiles.os.path.isfile(full_path):
            return False

        try:
            await aiofiles.os.remove(full_path)
        except OSError as e:
            raise StorageError(
                message=f"Failed to delete file: {e}",
                details={"key": key},
            ) from e

        logger.debug("local_file_removed", path=os.fspath(full_path))
        return True

    async def exists(self, key: str) -> bool:
        """Check if file exists."""
        return await aiofiles.os.path.isfile(self._get_full_path(key))
