"""SDK configuration loader."""
from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from stubflow.core import config as core_config

from .errors import ConfigError


@dataclass
class ClientConfig:
    stub_responses: bool = False
    endpoint_url: Optional[str] = None
    api_model_path: Optional[Path] = None
    validate_params: bool = True
    timeout: int = core_config.DEFAULT_TIMEOUT
    default_output_format: str = "print"


DEFAULT_CONFIG_PATH = Path.home() / ".stubflow" / "config.toml"
TRUE_VALUES = {"1", "true", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "no", "n", "off", ""}


def _load_toml(path: Path) -> dict:
    if not path.exists():
        return {}
    data = path.read_bytes()
    return tomllib.loads(data.decode("utf-8"))


def _as_bool(value: object, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value}")


def load_config(path: Path | None = None) -> ClientConfig:
    cfg = ClientConfig()
    cfg_path = path or DEFAULT_CONFIG_PATH
    file_data = _load_toml(cfg_path)
    section = file_data.get("stubflow", file_data) if isinstance(file_data, dict) else {}

    env_stub = os.environ.get("STUBFLOW_STUB_RESPONSES")
    env_endpoint = os.environ.get("STUBFLOW_ENDPOINT")
    env_api_model = os.environ.get("STUBFLOW_API_MODEL")

    stub_val = env_stub if env_stub is not None else section.get("stub_responses", cfg.stub_responses)
    cfg.stub_responses = _as_bool(stub_val, "stub_responses")
    cfg.validate_params = _as_bool(section.get("validate_params", cfg.validate_params), "validate_params")

    cfg.endpoint_url = env_endpoint or section.get("endpoint") or section.get("endpoint_url")
    api_model_val = env_api_model or section.get("api_model")
    if api_model_val:
        cfg.api_model_path = Path(api_model_val).expanduser()

    timeout_val = section.get("timeout", cfg.timeout)
    try:
        cfg.timeout = int(timeout_val)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeout: {timeout_val}") from exc

    cfg.default_output_format = section.get("default_output_format", cfg.default_output_format)
    return cfg


def merge_overrides(
    config: ClientConfig,
    stub_responses: bool | None = None,
    endpoint: str | None = None,
    api_model_path: Path | None = None,
) -> ClientConfig:
    updated = replace(config)
    if stub_responses is not None:
        updated.stub_responses = stub_responses
    if endpoint:
        updated.endpoint_url = endpoint
    if api_model_path:
        updated.api_model_path = Path(api_model_path)
    return updated
