"""Settings model for the VIM Library daemon.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pathlib import Path

from pydantic import SecretStr
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class LibrarySettings(BaseSettings):
    """Configuration for the libraryd daemon and its clients.

    Attributes:
        host: Listen address (default: 127.0.0.1)
        port: Listen port (default: 3000)
        log_level: Logging level (default: info)
        workers: Number of workers (default: 1)
        data_path: Base directory holding the library folder (default: cwd)
        library_folder: Name of the library root under data_path
        max_upload_mb: Upload size cap in megabytes
        cors_origins: Allowed CORS origins
        require_admin: Whether mutating endpoints need an admin token
        admin_password: Admin password, None disables admin login
        admin_token_ttl_seconds: Lifetime of issued admin tokens
        max_history: Back-navigation stack cap, None for unbounded

    Example:
        >>> settings = LibrarySettings()
        >>> assert settings.library_folder == "LibraryFolder"
        >>> assert settings.port == 3000
    """

    model_config = SettingsConfigDict(
        env_prefix="VIMLIB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "info"
    workers: int = 1

    data_path: str = "."
    library_folder: str = "LibraryFolder"
    max_upload_mb: int = 50

    cors_origins: list[str] = ["*"]

    require_admin: bool = True
    admin_password: SecretStr | None = None
    admin_token_ttl_seconds: int = 8 * 60 * 60

    max_history: int | None = 100

    @field_validator("data_path")
    @classmethod
    def expand_and_resolve_path(cls, v: str) -> str:
        """Expand ~ and resolve to absolute path.

        Args:
            v: Path string (may contain ~ or be relative)

        Returns:
            Absolute path as string
        """
        return str(Path(v).expanduser().resolve())

    @field_validator("library_folder")
    @classmethod
    def single_segment(cls, v: str) -> str:
        """Library folder must be a single path segment."""
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"library_folder must be a plain directory name: {v!r}")
        return v

    @property
    def root_path(self) -> Path:
        """Absolute path of the library root."""
        return Path(self.data_path) / self.library_folder

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024
