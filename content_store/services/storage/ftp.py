"""
FTP storage backend.

Implements StorageBackend against a remote FTP server using aioftp. Every
operation opens its own connection, performs one action and closes the
connection on every exit path; nothing is pooled or reused.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any

import aioftp

from content_store.core.config import BackendKind
from content_store.core.exceptions import FileNotFoundError as StorageFileNotFoundError
from content_store.core.exceptions import StorageConnectionError, StorageError
from content_store.core.logging import get_logger
from content_store.services.storage.base import StorageBackend, StoredFileWithTimestamp

logger = get_logger(__name__)

# MLSD/MLST "modify" facts: YYYYMMDDHHMMSS[.sss], always UTC
_MODIFY_FORMAT = "%Y%m%d%H%M%S"


def _parse_modify(value: str | None) -> datetime | None:
    """Parse an FTP modification fact, None if absent or malformed."""
    if not value:
        return None
    try:
        return datetime.strptime(value[:14], _MODIFY_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


class FtpStorageBackend(StorageBackend):
    """FTP storage implementation."""

    kind = BackendKind.FTP

    def __init__(
        self,
        host: str,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        client_factory: Callable[[], Any] = aioftp.Client,
    ) -> None:
        """
        Initialize FTP storage backend.

        Args:
            host: FTP server host name or address.
            port: Server port, protocol default when None.
            username: Login name, anonymous login when None.
            password: Login password.
            client_factory: Builds an unconnected client for each operation.
        """
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.client_factory = client_factory

    @staticmethod
    async def _is_file(client: Any, key: str) -> bool:
        """Check that ``key`` names a regular file, not a directory."""
        return await client.exists(key) and await client.is_file(key)

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[Any]:
        """Open a logged-in connection for the duration of one operation."""
        client = self.client_factory()
        try:
            try:
                if self.port is None:
                    await client.connect(self.host)
                else:
                    await client.connect(self.host, self.port)

                if self.username is None:
                    await client.login()
                else:
                    await client.login(self.username, self.password or "")
            except (aioftp.StatusCodeError, OSError) as e:
                raise StorageConnectionError(
                    message=f"Failed to connect to FTP server: {e}",
                    details={"host": self.host, "port": self.port},
                ) from e

            try:
                yield client
            except aioftp.StatusCodeError as e:
                raise StorageError(
                    message=f"FTP operation failed: {e}",
                    details={"host": self.host},
                ) from e
            except OSError as e:
                raise StorageConnectionError(
                    message=f"FTP connection lost: {e}",
                    details={"host": self.host},
                ) from e
        finally:
            client.close()

    async def connect(self) -> None:
        """Open and immediately close a connection."""
        async with self._session():
            logger.debug("ftp_login_succeeded", host=self.host, port=self.port)

    async def put(self, key: str, data: bytes) -> None:
        """Upload file to the FTP server, overwriting any existing one."""
        async with self._session() as client:
            async with client.upload_stream(key) as stream:
                await stream.write(data)

    async def get(self, key: str, throw_if_missing: bool = True) -> bytes | None:
        """Download file from the FTP server."""
        async with self._session() as client:
            if not await self._is_file(client, key):
                if throw_if_missing:
                    raise StorageFileNotFoundError(
                        message=f"Requested file: {key} does not exist",
                        details={"key": key},
                    )
                return None

            chunks: list[bytes] = []
            async with client.download_stream(key) as stream:
                async for block in stream.iter_by_block():
                    chunks.append(block)
            return b"".join(chunks)

    async def list_files(self, folder: str = "") -> list[StoredFileWithTimestamp]:
        """List files in the remote root directory or a sub-folder."""
        async with self._session() as client:
            try:
                entries = await client.list(folder, recursive=False)
            except aioftp.StatusCodeError as e:
                # 550: no such folder, listed as empty like the local backend
                if "550" not in e.received_codes:
                    raise
                return []

        files: list[StoredFileWithTimestamp] = []
        for path, info in entries:
            if info.get("type") != "file":
                continue
            files.append(
                StoredFileWithTimestamp(
                    storage_key=self.join_key(folder, PurePosixPath(path).name),
                    length=int(info.get("size", 0)),
                    created_at=_parse_modify(info.get("modify")),
                )
            )
        return files

    async def delete(self, key: str) -> bool:
        """Delete file from the FTP server if it exists."""
        async with self._session() as client:
            if not await self._is_file(client, key):
                return False
            await client.remove_file(key)
            return True

    async def exists(self, key: str) -> bool:
        """Check if file exists on the FTP server."""
        async with self._session() as client:
            return await self._is_file(client, key)
