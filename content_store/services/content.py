"""
Storage service façade.

Dispatches every operation to the configured backend and applies the rules
shared by all backends: empty payloads are rejected, new files get a random
storage key, reads are verified against the caller's checksum, and missing
files are either an error or a plain None depending on the caller.
"""

import base64
from pathlib import Path, PurePosixPath

from content_store.core.config import BackendConfiguration, Settings, get_settings
from content_store.core.exceptions import EmptyPayloadError, IntegrityViolationError, ValidationError
from content_store.core.exceptions import FileNotFoundError as StorageFileNotFoundError
from content_store.core.logging import get_logger
from content_store.services.checksum import compute_checksum, generate_key
from content_store.services.mime import get_content_type
from content_store.services.storage.base import StorageBackend, StoredFile, StoredFileWithTimestamp
from content_store.services.storage.factory import create_storage_backend

logger = get_logger(__name__)


def extension_of(name: str | None) -> str:
    """
    Return the extension of ``name`` including the dot.

    Unlike ``PurePath.suffix`` a dot-file such as ``.png`` keeps its
    extension. A trailing dot yields no extension.
    """
    base = PurePosixPath(name or "").name
    dot = base.rfind(".")
    if dot < 0 or dot == len(base) - 1:
        return ""
    return base[dot:]



class StorageService:
    """Backend-independent entry point for storing and reading files."""

    def __init__(
        self,
        configuration: BackendConfiguration,
        content_root: str | Path = ".",
        backend: StorageBackend | None = None,
    ) -> None:
        """
        Initialize the storage service.

        Args:
            configuration: Backend configuration, shared read-only.
            content_root: Base directory for the local backend.
            backend: Pre-built backend; created from ``configuration`` if None.

        Raises:
            UnsupportedBackendError: If the configured backend kind is unknown.
        """
        self.configuration = configuration
        self.backend = backend or create_storage_backend(configuration, content_root)

    async def connect(self) -> None:
        """Check that the backend is reachable, creating the local root if needed."""
        kind = self.backend.kind.value
        logger.info("storage_connecting", backend=kind)
        await self.backend.connect()
        logger.info("storage_connected", backend=kind)

    async def put_file(self, data: bytes, original_name: str | None) -> StoredFile:
        """
        Store a new file under a freshly generated key.

        The key is a random token followed by the extension of
        ``original_name``.

        Raises:
            EmptyPayloadError: If ``data`` is empty.
        """
        if not data:
            raise EmptyPayloadError()

        extension = extension_of(original_name)
        stored = StoredFile(
            storage_key=f"{generate_key()}{extension}",
            length=len(data),
            checksum=compute_checksum(data),
            display_name=original_name,
        )

        await self.backend.put(stored.storage_key, data)
        logger.info("file_stored", key=stored.storage_key, length=stored.length)
        return stored

    async def update_file(self, data: bytes, key: str) -> StoredFile:
        """
        Overwrite the content stored under an existing key.

        Raises:
            EmptyPayloadError: If ``data`` is empty.
            ValidationError: If ``key`` is empty.
        """
        if not data:
            raise EmptyPayloadError()
        if not key:
            raise ValidationError(message="Storage key is required")

        stored = StoredFile(
            storage_key=key,
            length=len(data),
            checksum=compute_checksum(data),
        )

        await self.backend.put(key, data)
        logger.info("file_updated", key=key, length=stored.length)
        return stored

    async def get_file(
        self,
        key: str | None,
        expected_checksum: str | None = None,
        throw_if_missing: bool = True,
    ) -> bytes | None:
        """
        Read a file, optionally verifying its checksum.

        Args:
            key: Storage key of the file.
            expected_checksum: Checksum recorded at store time, if any.
            throw_if_missing: Raise FileNotFoundError when absent instead of
                returning None.

        Raises:
            FileNotFoundError: If the file is missing in strict mode.
            IntegrityViolationError: If the content no longer matches
                ``expected_checksum``.
        """
        if not key:
            if throw_if_missing:
                raise StorageFileNotFoundError(
                    message="Requested file: no key given",
                    details={"key": key},
                )
            return None

        data = await self.backend.get(key, throw_if_missing=throw_if_missing)
        if data is None:
            return None

        if expected_checksum:
            actual = compute_checksum(data)
            if actual != expected_checksum:
                logger.warning(
                    "checksum_mismatch",
                    key=key,
                    expected=expected_checksum,
                    actual=actual,
                )
                raise IntegrityViolationError(key, expected_checksum, actual)

        return data

    async def get_file_as_data_uri(
        self,
        key: str | None,
        expected_checksum: str | None = None,
        throw_if_missing: bool = True,
    ) -> str | None:
        """Read a file and return it as a base64 ``data:`` URI."""
        data = await self.get_file(key, expected_checksum, throw_if_missing)
        if data is None:
            return None

        content_type = get_content_type(extension_of(key))
        encoded = base64.b64encode(data).decode("ascii")
        return f"data:{content_type};base64,{encoded}"

    async def list_files(self, folder: str = "") -> list[StoredFileWithTimestamp]:
        """List the files directly under the storage root, in backend order."""
        return await self.backend.list_files(folder)

    async def delete_file(self, key: str | None) -> None:
        """Delete a file. Empty keys and missing files are ignored."""
        if not key:
            return

        if await self.backend.delete(key):
            logger.info("file_deleted", key=key)

    async def file_exists(self, key: str) -> bool:
        """Check whether a file exists without reading it."""
        return await self.backend.exists(key)


# Singleton instance
_storage_service: StorageService | None = None


def get_storage_service(settings: Settings | None = None) -> StorageService:
    """
    Get the process-wide storage service.

    Built on first use from application settings and reused afterwards.

    Args:
        settings: Application settings. Uses default if None.

    Returns:
        Configured StorageService instance.
    """
    global _storage_service

    if _storage_service is not None:
        return _storage_service

    if settings is None:
        settings = get_settings()

    _storage_service = StorageService(
        configuration=settings.backend_configuration(),
        content_root=settings.content_root_path,
    )
    return _storage_service


def reset_storage_service() -> None:
    """Reset the storage service singleton (for testing)."""
    global _storage_service
    _storage_service = None
