"""
Configuration for syncboard.

Settings are resolved from, highest priority first: explicit overrides,
SYNCBOARD_* environment variables (optionally loaded from a .env file),
a YAML file, and the defaults below.

Example YAML:
```yaml
data_dir: ~/.syncboard
remote_url: https://jsonplaceholder.typicode.com/posts
fetch_limit: 30
log_format: text
```
"""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "SYNCBOARD_"
CONFIG_ENV_VAR = f"{ENV_PREFIX}CONFIG"


class Settings(BaseModel):
    """
    Runtime settings.

    Attributes:
        data_dir: Directory holding the persisted slots
        remote_url: Endpoint returning the remote item list
        fetch_limit: Maximum remote items considered per sync
        window_days: Length of the default dashboard window
        request_timeout: HTTP timeout in seconds
        max_retries: Fetch attempts on transport errors
        retry_delay: Seconds between fetch attempts
        enrichment_seed: Seed for category/date enrichment (None = unseeded)
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: "json" or "text"
        metrics_port: Port for the Prometheus endpoint (None = disabled)
    """

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".syncboard")
    remote_url: str = "https://jsonplaceholder.typicode.com/posts"
    fetch_limit: int = Field(30, gt=0, le=10000)
    window_days: int = Field(30, ge=0)
    request_timeout: float = Field(10.0, gt=0)
    max_retries: int = Field(3, ge=1)
    retry_delay: float = Field(1.0, ge=0)
    enrichment_seed: int | None = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    metrics_port: int | None = None

    @field_validator("data_dir", mode="before")
    @classmethod
    def expand_home(cls, v):
        return Path(v).expanduser() if isinstance(v, (str, Path)) else v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


def _read_yaml(config_path: Path) -> dict[str, Any]:
    with open(config_path) as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a mapping: {config_path}")
    return config


def _read_env() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name in Settings.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw is None or raw == "":
            continue
        values[name] = raw
    return values


def load_settings(
    config_path: str | Path | None = None,
    env_file: str | Path | None = None,
    **overrides: Any,
) -> Settings:
    """
    Resolve settings.

    Args:
        config_path: YAML file (defaults to env var SYNCBOARD_CONFIG, if set)
        env_file: .env file loaded into the environment without overriding
            variables already set
        **overrides: Values that win over every other source (None is ignored)

    Returns:
        Validated Settings

    Raises:
        FileNotFoundError: If an explicit config file does not exist
        ValueError: If the YAML is not a mapping or a value is invalid
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)

    values: dict[str, Any] = {}

    config_path = config_path or os.getenv(CONFIG_ENV_VAR)
    if config_path:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        values.update(_read_yaml(path))

    values.update(_read_env())
    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings.model_validate(values)
