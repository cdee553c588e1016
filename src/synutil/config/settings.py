"""Configuration management for synutil.

Loads settings from an optional YAML configuration file with environment
variable overrides. Supports .env files. Settings are read once per run
and never written back.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from synutil.domain.models import DEFAULT_PORT

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("synutil.yaml")
CONFIG_PATH_ENV = "SYNUTIL_CONFIG"


class TerminalConfig(BaseModel):
    default_port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    timeout: float = Field(default=15.0, gt=0, description="Session acquisition timeout in seconds")
    backend: str = Field(
        default="",
        description="Import path of the terminal protocol backend, as 'module:attribute'",
    )


class ListenerConfig(BaseModel):
    bind_host: str = Field(default="0.0.0.0")


class UploadConfig(BaseModel):
    bar_size: int = Field(default=30, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for synutil.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "SYNUTIL_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    terminal: TerminalConfig = Field(default_factory=TerminalConfig)
    listener: ListenerConfig = Field(default_factory=ListenerConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults

    Raises:
        ValueError: If the YAML is not a mapping or a value fails validation.
        yaml.YAMLError: If the file is not valid YAML.
    """
    if config_path:
        path = Path(config_path)
    else:
        path = Path(os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)

    yaml_data = {}
    if path.exists():
        with open(path, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}
        if not isinstance(yaml_data, dict):
            raise ValueError(f"{path} must contain a mapping of settings sections")
        logger.info("Loaded configuration from %s", path)
    else:
        logger.debug("Config file %s not found, using defaults + env vars", path)

    # YAML supplies init values; drop sections the environment overrides
    # so that env vars keep priority over the file.
    for section in list(yaml_data):
        env_key = f"SYNUTIL_{section.upper()}"
        if any(key.startswith(env_key + "__") for key in os.environ):
            _merge_env_section(yaml_data, section, env_key)

    return Settings(**yaml_data)


def _merge_env_section(yaml_data: dict, section: str, env_key: str) -> None:
    """Overlay nested env vars (SYNUTIL_SECTION__FIELD) onto a YAML section."""
    values = yaml_data.get(section)
    if not isinstance(values, dict):
        return
    prefix = env_key + "__"
    for key, value in os.environ.items():
        if key.startswith(prefix):
            values[key[len(prefix):].lower()] = value
