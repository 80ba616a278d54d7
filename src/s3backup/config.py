"""Backup configuration loaded from a YAML file, environment variables and flags."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from s3backup.errors import ConfigError

DEFAULT_SOURCE_DIR = Path("./files-to-backup")
DEFAULT_REPORT_FILE = Path("./upload_report.txt")

# Field name -> environment variable
ENV_VARS = {
    "bucket": "S3BACKUP_BUCKET",
    "source_dir": "S3BACKUP_SOURCE_DIR",
    "report_file": "S3BACKUP_REPORT_FILE",
    "aws_region": "AWS_REGION",
    "endpoint_url": "S3BACKUP_ENDPOINT_URL",
    "allow_unreadable_policy": "S3BACKUP_ALLOW_UNREADABLE_POLICY",
}


class BackupConfig(BaseModel):
    """All settings for a single backup run."""

    # Unknown keys (typos in a config file) are rejected
    model_config = ConfigDict(extra="forbid")

    bucket: str = Field(min_length=1, description="S3 bucket to back up into")
    source_dir: Path = Field(default=DEFAULT_SOURCE_DIR)
    report_file: Path = Field(default=DEFAULT_REPORT_FILE)
    aws_region: str = Field(default="us-east-1")
    endpoint_url: str | None = Field(
        default=None, description="Override for S3-compatible stores"
    )
    allow_unreadable_policy: bool = Field(
        default=False,
        description="Treat a policy that cannot be read as non-public instead of failing",
    )

    @classmethod
    def from_env(cls) -> BackupConfig:
        """Load configuration from environment variables."""
        return cls._build(_env_values())

    @classmethod
    def from_yaml(cls, path: Path) -> BackupConfig:
        """Parse a YAML config file into a BackupConfig."""
        return cls._build(_yaml_values(path))

    @classmethod
    def resolve(cls, config_file: Path | None = None, **overrides: Any) -> BackupConfig:
        """Merge defaults, YAML file, environment and explicit overrides.

        Later sources win. Overrides set to None are ignored so unset CLI
        flags fall through to the environment.
        """
        values: dict[str, Any] = {}
        if config_file is not None:
            values.update(_yaml_values(config_file))
        values.update(_env_values())
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls._build(values)

    @classmethod
    def _build(cls, values: dict[str, Any]) -> BackupConfig:
        if not values.get("bucket"):
            raise ConfigError(
                f"A bucket name is required (set {ENV_VARS['bucket']} or pass --bucket)"
            )
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def _env_values() -> dict[str, str]:
    values = {}
    for field_name, var in ENV_VARS.items():
        value = os.environ.get(var)
        if value:
            values[field_name] = value
    return values


def _yaml_values(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Config file {path} does not exist")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {path} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return raw
