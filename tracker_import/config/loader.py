from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (default config/import.yml)
- Validate against config_schema.json (shipped next to this module)
- Apply defaults (timeout 10s, delimiter ",", first sheet)
- Let TRACKER_API_* environment variables override the store section
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")

ENV_BASE_URL = "TRACKER_API_BASE_URL"
ENV_TOKEN = "TRACKER_API_TOKEN"
ENV_TIMEOUT = "TRACKER_API_TIMEOUT"

DEFAULT_TIMEOUT_SECONDS = 10.0


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class StoreConfig:
    base_url: str
    token: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class UploadConfig:
    sheet: str | int | None = None  # None -> first sheet
    delimiter: str = ","


@dataclass(frozen=True)
class ImportConfig:
    store: StoreConfig
    upload: UploadConfig = field(default_factory=UploadConfig)
    endpoints: dict[str, str] = field(default_factory=dict)  # resource -> path override

    def endpoint_for(self, resource: str, default: str) -> str:
        return self.endpoints.get(resource, default)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or config data
            violates the schema (missing keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _env_override(store_raw: dict[str, Any]) -> dict[str, Any]:
    merged = dict(store_raw)
    if os.getenv(ENV_BASE_URL):
        merged["base_url"] = os.environ[ENV_BASE_URL]
    if os.getenv(ENV_TOKEN):
        merged["token"] = os.environ[ENV_TOKEN]
    timeout = os.getenv(ENV_TIMEOUT)
    if timeout:
        try:
            merged["timeout_seconds"] = float(timeout)
        except ValueError as e:
            raise ConfigError(f"{ENV_TIMEOUT} is not a number: {timeout!r}") from e
    return merged


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    data = dict(data)
    if data.get("store") is None and os.getenv(ENV_BASE_URL):
        data["store"] = {}
    if isinstance(data.get("store"), dict):
        data["store"] = _env_override(data["store"])

    _validate_config_schema(data)

    store_raw = data["store"]
    upload_raw = data.get("upload") or {}
    store = StoreConfig(
        base_url=store_raw["base_url"],
        token=store_raw.get("token"),
        timeout_seconds=float(store_raw.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
    )
    upload = UploadConfig(
        sheet=upload_raw.get("sheet"),
        delimiter=upload_raw.get("delimiter", ","),
    )
    return ImportConfig(
        store=store,
        upload=upload,
        endpoints=dict(data.get("endpoints") or {}),
    )
