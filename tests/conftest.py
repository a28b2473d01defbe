"""
Pytest configuration and fixtures.
"""

from contextlib import asynccontextmanager
from pathlib import Path, PurePosixPath

import aioftp
import pytest

from content_store.core.config import BackendConfiguration, BackendKind, Settings
from content_store.services.content import StorageService, reset_storage_service
from content_store.services.storage.ftp import FtpStorageBackend
from content_store.services.storage.local import LocalStorageBackend


# =============================================================================
# In-memory FTP server
# =============================================================================


class FakeFtpServer:
    """State shared by every FakeFtpClient built for one test."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.directories: set[str] = set()
        self.modified: dict[str, str] = {}
        self.credentials: tuple[str, str] | None = None
        self.unreachable = False
        self.fail_uploads = False
        self.drop_downloads = False
        self.connections: list[dict] = []
        self.removed: list[str] = []

    @property
    def open_connections(self) -> int:
        return sum(1 for c in self.connections if not c["closed"])


class FakeFtpClient:
    """Mimics the subset of aioftp.Client used by the FTP backend."""

    def __init__(self, server: FakeFtpServer) -> None:
        self.server = server
        self.state = {"host": None, "port": None, "user": None, "closed": False}
        server.connections.append(self.state)

    async def connect(self, host: str, port: int = 21) -> None:
        if self.server.unreachable:
            raise ConnectionRefusedError(f"Connection refused: {host}:{port}")
        self.state["host"] = host
        self.state["port"] = port

    async def login(self, user: str = "anonymous", password: str = "anon@") -> None:
        if self.server.credentials and (user, password) != self.server.credentials:
            raise aioftp.StatusCodeError(
                aioftp.Code("230"), aioftp.Code("530"), ["Login incorrect."]
            )
        self.state["user"] = user

    def close(self) -> None:
        self.state["closed"] = True

    async def exists(self, path: str) -> bool:
        return path in self.server.files or path in self.server.directories

    async def is_file(self, path: str) -> bool:
        return path in self.server.files

    @asynccontextmanager
    async def upload_stream(self, path: str):
        if self.server.fail_uploads:
            raise aioftp.StatusCodeError(
                aioftp.Code("226"), aioftp.Code("552"), ["Quota exceeded."]
            )
        stream = _UploadStream()
        yield stream
        self.server.files[path] = bytes(stream.buffer)
        self.server.modified[path] = "20240102030405"

    @asynccontextmanager
    async def download_stream(self, path: str):
        if path not in self.server.files:
            raise aioftp.StatusCodeError(
                aioftp.Code("150"), aioftp.Code("550"), ["No such file."]
            )
        yield _DownloadStream(self.server.files[path], self.server.drop_downloads)

    async def remove_file(self, path: str) -> None:
        del self.server.files[path]
        self.server.removed.append(path)

    async def list(self, path: str = "", *, recursive: bool = False):
        if path.strip("/") and path.strip("/") not in self.server.directories:
            raise aioftp.StatusCodeError(
                aioftp.Code("150"), aioftp.Code("550"), ["No such directory."]
            )
        prefix = f"{path.strip('/')}/" if path.strip("/") else ""
        entries = []
        for name in sorted(self.server.directories):
            if name.startswith(prefix) and "/" not in name[len(prefix):]:
                entries.append((PurePosixPath(name), {"type": "dir"}))
        for name, data in self.server.files.items():
            if name.startswith(prefix) and "/" not in name[len(prefix):]:
                info = {"type": "file", "size": str(len(data))}
                if name in self.server.modified:
                    info["modify"] = self.server.modified[name]
                entries.append((PurePosixPath(name), info))
        return entries


class _UploadStream:
    def __init__(self) -> None:
        self.buffer = bytearray()

    async def write(self, data: bytes) -> None:
        self.buffer.extend(data)


class _DownloadStream:
    def __init__(self, data: bytes, drop: bool = False) -> None:
        self.data = data
        self.drop = drop

    async def iter_by_block(self, count: int = 2):
        for i in range(0, len(self.data), count):
            if self.drop and i > 0:
                raise ConnectionResetError("Connection reset by peer")
            yield self.data[i:i + count]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_service_singleton():
    """Keep the process-wide service from leaking between tests."""
    reset_storage_service()
    yield
    reset_storage_service()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings using a temporary content root."""
    return Settings(
        app_env="development",
        content_storage="Type=docker;Address=store",
        content_root_path=str(tmp_path),
        log_format="console",
    )


@pytest.fixture
def ftp_server() -> FakeFtpServer:
    """Fresh in-memory FTP server."""
    return FakeFtpServer()


@pytest.fixture
def ftp_client_factory(ftp_server: FakeFtpServer):
    """Builds clients bound to the in-memory server."""
    return lambda: FakeFtpClient(ftp_server)


@pytest.fixture
def ftp_backend(ftp_client_factory) -> FtpStorageBackend:
    """FTP backend talking to the in-memory server."""
    return FtpStorageBackend(
        host="ftp.test",
        port=2121,
        username="content",
        password="secret",
        client_factory=ftp_client_factory,
    )


@pytest.fixture
def local_backend(tmp_path: Path) -> LocalStorageBackend:
    """Local backend rooted at ``tmp_path / "store"``."""
    return LocalStorageBackend(base_path=tmp_path / "store")


@pytest.fixture(params=["local", "ftp"])
def storage_service(request, tmp_path: Path, ftp_backend: FtpStorageBackend) -> StorageService:
    """Storage service over each backend in turn."""
    if request.param == "ftp":
        configuration = BackendConfiguration(
            kind=BackendKind.FTP,
            address="ftp.test",
            port=2121,
            username="content",
            password="secret",
        )
        return StorageService(configuration, backend=ftp_backend)

    configuration = BackendConfiguration(kind=BackendKind.LOCAL, address="store")
    return StorageService(configuration, content_root=tmp_path)
