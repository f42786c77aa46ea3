"""Runtime configuration from the environment and an optional ``.env`` file."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path.home() / "Documents" / "Portfolio Dashboard"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Portfolio Dashboard"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Holds dashboard.db unless database_url points elsewhere
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None
    storage_key: str = "portfolio_stocks"

    # None serves the quote endpoints from this app
    quote_api_base_url: Optional[str] = None
    price_timeout_seconds: float = Field(default=15.0, gt=0)
    ratio_timeout_seconds: float = Field(default=20.0, gt=0)
    response_cache_ttl_seconds: float = Field(default=10.0, ge=0)

    refresh_interval_seconds: float = Field(default=15.0, gt=0)
    auto_refresh_enabled: bool = True

    # Fixes the synthetic placeholder values; None draws fresh ones
    synthetic_seed: Optional[int] = None

    # Browser front ends allowed to call the API
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    def get_data_dir(self) -> Path:
        data_dir = self.data_dir or DEFAULT_DATA_DIR
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        return self.database_url or f"sqlite:///{self.get_data_dir() / 'dashboard.db'}"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    global _settings
    _settings = None
