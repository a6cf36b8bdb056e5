"""Configuration management for the c-sync backup utility."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

REQUIRED_KEYS = ("BACKUP_BUCKET", "PROFILE", "PATHTOREMOVE")


class AppConfig(BaseModel):
    """Main application configuration, read once per run from ``config.env``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    backup_bucket: str = Field(
        alias="BACKUP_BUCKET", description="Name of the bucket backups are stored in"
    )
    profile: str = Field(
        alias="PROFILE", description="aws CLI profile used to authenticate"
    )
    path_to_remove: str = Field(
        alias="PATHTOREMOVE",
        description="Local path segment stripped when building the remote key",
    )
    scheme: str = Field(
        default="s3", alias="SCHEME", description="URL scheme of the remote key"
    )
    log_level: str = Field(
        default="WARNING",
        alias="LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Optional[str] = Field(
        default=None, alias="LOG_FILE", description="Optional path of a log file"
    )

    @field_validator("backup_bucket", "profile", "path_to_remove", "scheme")
    @classmethod
    def validate_not_blank(cls, v: Optional[str]) -> str:
        """Reject unset or whitespace-only values."""
        if v is None or not v.strip():
            raise ValueError("value must not be empty")
        return v.strip()

    @field_validator("backup_bucket")
    @classmethod
    def validate_bucket(cls, v: str) -> str:
        """A bucket name, optionally followed by a key prefix, never a URL."""
        if "://" in v:
            raise ValueError("BACKUP_BUCKET must not include a scheme, e.g. 'my-backups'")
        v = v.rstrip("/")
        if not v:
            raise ValueError("value must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> str:
        """Validate log level."""
        if not v:
            return "WARNING"
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.strip().upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(sorted(valid_levels))}")
        return v_upper

    @field_validator("log_file")
    @classmethod
    def validate_log_file(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def remote_root(self) -> str:
        """Root URL of the bucket, e.g. ``s3://my-backups/``."""
        return f"{self.scheme}://{self.backup_bucket}/"


def load_config(config_path: str | Path) -> AppConfig:
    """Load and validate configuration from a key=value file."""
    config_file = Path(config_path)

    if not config_file.is_file():
        raise ConfigurationError(
            f"Configuration file not found at: {config_file}",
            {"hint": "Create config.env from config.env.example or point --config at it."},
        )

    values = dotenv_values(config_file)
    missing = [key for key in REQUIRED_KEYS if not (values.get(key) or "").strip()]
    if missing:
        raise ConfigurationError(
            f"Missing required configuration in {config_file}: {', '.join(missing)}",
            {"hint": f"Required variables: {', '.join(REQUIRED_KEYS)}"},
        )

    try:
        config = AppConfig(**{k: v for k, v in values.items() if v is not None})
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation error in {config_file}: {e}")

    logging.getLogger(__name__).debug(
        f"Configuration loaded from {config_file}: bucket={config.backup_bucket}, "
        f"profile={config.profile}"
    )
    return config
