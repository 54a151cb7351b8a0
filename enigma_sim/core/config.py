from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ENIGMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Enigma Simulator"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    # Catalog (None = built-in M3 catalog)
    catalog_path: Path | None = None

    # Message handling
    group_size: int = 5
    max_message_length: int = 100_000

    @property
    def uses_builtin_catalog(self) -> bool:
        return self.catalog_path is None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
