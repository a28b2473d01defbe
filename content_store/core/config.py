"""
Application configuration using Pydantic Settings.

Process settings are loaded from environment variables with sensible
defaults. The storage backend itself is described by a compact connection
string (``Type=ftp;Address=host;Port=21;Username=u;Password=p``) which is
parsed once into an immutable BackendConfiguration.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from content_store.core.exceptions import UnsupportedBackendError


class BackendKind(str, Enum):
    """Storage media a backend can be built for."""

    FTP = "ftp"
    LOCAL = "local"


# "docker" is the historical name of the local directory backend
_KIND_ALIASES: dict[str, BackendKind] = {
    "ftp": BackendKind.FTP,
    "docker": BackendKind.LOCAL,
    "local": BackendKind.LOCAL,
}


@dataclass(frozen=True)
class BackendConfiguration:
    """Which backend to use and how to reach it."""

    kind: BackendKind = BackendKind.LOCAL
    address: str = ""  # FTP host, or directory relative to the content root
    port: int | None = None
    username: str | None = None
    password: str | None = field(default=None, repr=False)

    @classmethod
    def parse(cls, value: str) -> "BackendConfiguration":
        """
        Parse a semicolon-delimited ``Key=Value`` string.

        Recognized keys are Type, Port, Address, Username and Password,
        matched case-insensitively. Unknown keys are ignored. An invalid
        Port is ignored as well and leaves the port unset.

        Raises:
            UnsupportedBackendError: If Type names an unknown backend.
        """
        options: dict[str, object] = {}

        for item in value.split(";"):
            name, sep, raw = item.partition("=")
            if not sep:
                continue
            name = name.strip().lower()
            raw = raw.strip()

            if name == "type":
                kind = _KIND_ALIASES.get(raw.lower())
                if kind is None:
                    raise UnsupportedBackendError(raw)
                options["kind"] = kind
            elif name == "port":
                try:
                    options["port"] = int(raw)
                except ValueError:
                    pass
            elif name in ("address", "username", "password"):
                options[name] = raw

        return cls(**options)  # type: ignore[arg-type]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(default="Content Store", description="Application name")
    app_env: Literal["development", "staging", "production"] = Field(
        default="production", description="Environment"
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------
    content_storage: str = Field(
        default="Type=docker;Address=content",
        description="Storage connection string (Type;Address;Port;Username;Password)",
    )
    content_root_path: str = Field(
        default=".", description="Base directory for the local backend address"
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="json", description="Log format"
    )

    def backend_configuration(self) -> BackendConfiguration:
        """Parse the storage connection string."""
        return BackendConfiguration.parse(self.content_storage)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
