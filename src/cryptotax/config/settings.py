"""Application settings and configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".cryptotax"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Crypto Tax API"
    app_version: str = "0.1.0"

    # Data directory (database and uploaded files live here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Portfolio snapshots older than this are recomputed on read
    portfolio_cache_ttl_seconds: int = 300

    # Market data settings
    price_provider: Literal["stub", "coingecko"] = "stub"
    market_data_cache_ttl_seconds: int = 60
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_timeout_seconds: float = 15.0

    # Overview tax estimate, applied to realized gains only
    overview_tax_rate: float = 0.15
    reporting_timezone: str = "UTC"

    # When set, bearer tokens must carry a valid HS256 signature
    auth_token_secret: Optional[str] = None

    upload_dir: Optional[Path] = None

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "cryptotax.db"
        return f"sqlite:///{db_path}"

    def get_upload_dir(self) -> Path:
        """Get the directory where accepted uploads are stored."""
        upload_dir = self.upload_dir or self.get_data_dir() / "uploads"
        upload_dir.mkdir(parents=True, exist_ok=True)
        return upload_dir


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
