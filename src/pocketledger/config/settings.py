"""Application settings and configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BackendName = Literal["local", "realtime", "remote_api"]


def get_default_data_dir() -> Path:
    """Return the default data directory based on platform."""
    return Path.home() / ".pocketledger"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POCKETLEDGER_",
    )

    app_name: str = "Pocket Ledger"
    app_version: str = "0.1.0"

    # Data directory (local cache lives here)
    data_dir: Optional[Path] = None

    # Relational store served by /api/data and /api/sync
    database_url: Optional[str] = None

    # Local ledger cache used by the local and remote_api backends
    local_database_url: Optional[str] = None

    log_level: str = "INFO"
    timezone: str = "UTC"

    # Persistence backend, chosen once at start-up
    backend: BackendName = "local"

    # Identity required by the remote backends; without it we run local-only
    user_id: Optional[str] = None

    # Hybrid remote API
    remote_api_url: str = "http://localhost:5000/api"
    remote_sync_enabled: bool = False
    remote_timeout_seconds: float = 10.0

    # Ledger behavior
    seed_defaults: bool = True
    reconcile_on_load: bool = True

    # Undo / notifications
    undo_auto_dismiss_ms: int = 5000
    keep_undo_after_dismiss: bool = False
    persist_undo: bool = False

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "ledger.db"
        return f"sqlite:///{db_path}"

    def get_local_database_url(self) -> str:
        """Get the local ledger cache URL, deriving from data_dir if not set."""
        if self.local_database_url:
            return self.local_database_url
        db_path = self.get_data_dir() / "local-ledger.db"
        return f"sqlite:///{db_path}"

    def effective_backend(self) -> BackendName:
        """Return the backend to use; remote modes need an identity."""
        if self.backend != "local" and not self.user_id:
            return "local"
        return self.backend


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
