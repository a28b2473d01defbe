"""
Storage backend factory.

Creates the appropriate storage backend from a backend configuration.
"""

from pathlib import Path

from content_store.core.config import BackendConfiguration, BackendKind
from content_store.core.exceptions import UnsupportedBackendError
from content_store.services.storage.base import StorageBackend
from content_store.services.storage.ftp import FtpStorageBackend
from content_store.services.storage.local import LocalStorageBackend


def create_storage_backend(
    configuration: BackendConfiguration,
    content_root: str | Path = ".",
) -> StorageBackend:
    """
    Create a storage backend for the given configuration.

    Args:
        configuration: Parsed backend configuration.
        content_root: Directory the local backend address is resolved against.

    Returns:
        Configured StorageBackend instance.

    Raises:
        UnsupportedBackendError: If the backend kind has no implementation.
    """
    if configuration.kind == BackendKind.FTP:
        return FtpStorageBackend(
            host=configuration.address,
            port=configuration.port,
            username=configuration.username,
            password=configuration.password,
        )

    elif configuration.kind == BackendKind.LOCAL:
        return LocalStorageBackend(
            base_path=Path(content_root) / configuration.address,
        )

    else:
        raise UnsupportedBackendError(str(configuration.kind))
