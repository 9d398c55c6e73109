from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from disklog.exceptions import ConfigError


class AppCfg(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = "disklog"
    env: str = "dev"


class LoggingCfg(BaseModel):
    """disklog's own diagnostics (lifecycle events), not the journal output."""

    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = False


class SinkCfg(BaseModel):
    model_config = ConfigDict(extra="forbid")

    folder: Path
    prefix: str = ""
    interval: float = Field(default=1.0, gt=0)
    encoding: str = "utf-8"
    fsync: bool = False


class Config(BaseModel):
    model_config = ConfigDict(extra="forbid")

    app: AppCfg = Field(default_factory=AppCfg)
    logging: LoggingCfg = Field(default_factory=LoggingCfg)
    sink: SinkCfg


def _read_yaml(path: Path) -> dict[str, Any]:
    """Safe YAML read; returns {} if file missing/empty."""
    import yaml  # lazy import

    if not path.exists():
        return {}
    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data or {}


def load_config(base_dir: str | Path) -> Config:
    """Load ``<base_dir>/config/base.yaml`` into a validated :class:`Config`."""

    base_yaml = Path(base_dir) / "config" / "base.yaml"
    data = _read_yaml(base_yaml)
    if not data:
        raise ConfigError(f"Missing or empty config file: {base_yaml}")

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {base_yaml}: {e}") from e
