"""Service configuration: defaults, YAML loading and validation."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError
from .gateway import CLIENT_VERSION
from .normalize import merge_deep


def default_config() -> Dict[str, Any]:
    return {
        "cache": False,
        "clientOptions": {
            "version": CLIENT_VERSION,
        },
        "requestOptions": {
            "SampleRate": 16000,
            "OutputFormat": "ogg_vorbis",
        },
    }


class ServiceConfig(BaseModel):
    """Validated service settings. YAML may use camelCase or snake_case keys."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str = "default"
    cache: bool = False
    cache_path: Optional[str] = Field(default=None, alias="cachePath")
    request_options: Dict[str, Any] = Field(default_factory=dict, alias="requestOptions")
    client_options: Dict[str, Any] = Field(default_factory=dict, alias="clientOptions")


def build_config(data: Optional[Dict[str, Any]] = None) -> ServiceConfig:
    """Validate ``data`` merged over the defaults."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Service config must be a mapping, got {type(data).__name__}")
    # Accept snake_case keys by folding them into their camelCase aliases first
    aliases = {"cache_path": "cachePath", "request_options": "requestOptions", "client_options": "clientOptions"}
    data = {aliases.get(k, k): v for k, v in data.items()}
    try:
        return ServiceConfig.model_validate(merge_deep(default_config(), data))
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid service config: {e}") from e


def load_config(path: str) -> ServiceConfig:
    """Load a service config from a YAML file.

    The file holds either the settings mapping itself or ``{service: {...}}``.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {p}: {e}") from e
    if isinstance(data, dict) and isinstance(data.get("service"), dict):
        data = data["service"]
    return build_config(data)


__all__ = ["ServiceConfig", "default_config", "build_config", "load_config"]
