"""Application configuration: settings schema and config.yaml loader"""

import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDMEMORY_"


def default_storage_path() -> str:
    """Return the per-platform data directory for memory documents."""
    if sys.platform == "darwin":
        return str(Path.home() / "Library" / "Application Support" / "mdmemory")
    if sys.platform == "win32":
        return str(Path.home() / "AppData" / "Local" / "mdmemory")
    return str(Path.home() / ".local" / "share" / "mdmemory")


class Settings(BaseModel):
    app_name:     str = "mdmemory"
    storage_path: str = Field(default_factory=default_storage_path, description="Directory holding <id>.md documents")
    backups:      bool = Field(default=True, description="Write a timestamped backup before each overwrite")
    max_backups:  int = Field(default=0, ge=0, description="Max stored backups per document; 0 = unlimited")
    default_mode: str = Field(default="append", pattern="^(append|replace)$", description="append or replace")
    log_level:    str = Field(default="WARNING", description="Logging level name")

    @field_validator("storage_path")
    @classmethod
    def _expand_home(cls, v: str) -> str:
        return str(Path(v).expanduser())


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDMEMORY_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
