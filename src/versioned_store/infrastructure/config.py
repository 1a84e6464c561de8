"""Configuration management for the versioned store."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Storage configuration."""

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".versioned_store",
        description="Application data directory holding the store file",
    )
    file_name: str = Field(default="store.db", min_length=1, description="Store file name")
    timeout_seconds: float = Field(
        default=5.0, gt=0, description="SQLite busy timeout in seconds"
    )

    @property
    def db_path(self) -> Path:
        """Full path of the store file."""
        return self.data_dir / self.file_name


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")
    metrics_port: int | None = Field(
        default=None, ge=1, le=65535, description="Prometheus exporter port (disabled if unset)"
    )
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="versioned_store", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for the versioned store."""

    model_config = SettingsConfigDict(
        env_prefix="VERSIONED_STORE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def ensure_directories(self) -> None:
        """Ensure the data directory exists."""
        self.storage.data_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
