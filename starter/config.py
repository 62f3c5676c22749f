"""Configuration management for the application."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST = "0.0.0.0"  # noqa: S104


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Server
    addr: str = Field(default="0.0.0.0:8080")
    public_url: str = Field(default="http://localhost:8080")

    # Storage
    work_dir: str = Field(default="./.data")
    database: str = Field(default="database.sqlite3")

    # Logging
    log_level: str = Field(default="INFO")

    # API
    environment: str = Field(default="development")
    redact_password: bool = Field(default=False)

    @model_validator(mode="after")
    def validate_addr(self) -> "Settings":
        """Validate that the listen address carries a usable port."""
        _, sep, port = self.addr.rpartition(":")
        if not sep or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"ADDR must look like host:port, got {self.addr!r}")
        return self

    @property
    def host(self) -> str:
        """Host part of the listen address."""
        host = self.addr.rpartition(":")[0]
        return host.strip("[]") or DEFAULT_HOST

    @property
    def port(self) -> int:
        """Port part of the listen address."""
        return int(self.addr.rpartition(":")[2])

    @property
    def database_path(self) -> Path:
        """Location of the SQLite database file."""
        return Path(self.work_dir) / self.database

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL of the SQLite database."""
        return f"sqlite:///{self.database_path}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
