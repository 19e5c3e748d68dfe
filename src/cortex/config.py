"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from cortex.exceptions import ConfigError


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "CORTEX_"


class Settings(BaseModel):
    app_name:            str = "cortex"
    db_url:              str = "sqlite:///cortex.db"
    checkpoint_interval: int = Field(default=10, ge=1, description="Entries converted between intermediate commits")
    log_level:           str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_format:          str = Field(default="console", pattern="^(console|json)$", description="console or json")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then CORTEX_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    if isinstance(data.get("log_level"), str):
        data["log_level"] = data["log_level"].upper()
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
