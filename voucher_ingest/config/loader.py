from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_ERROR_LOG_DIR, ImportConfig
from ..services.headers import AliasConflictError, build_alias_table

"""Config loader.

Responsibilities:
- Load the YAML config (default config/import.yml)
- Validate it against config_schema.json shipped next to this module
- Apply defaults for every omitted key
- Reject header aliases that would redefine a built-in alias
"""

__all__ = [
    "ConfigError",
    "SCHEMA_PATH",
    "DEFAULT_CONFIG_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config") / "import.yml"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (unknown keys, wrong types,
            alias targets outside the canonical vocabulary).
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


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    aliases = dict(data.get("header_aliases") or {})
    try:
        build_alias_table(aliases)
    except AliasConflictError as e:
        raise ConfigError(f"header_aliases: {e}") from e

    return ImportConfig(
        source_directory=data.get("source_directory"),
        sheet_name=data.get("sheet_name"),
        header_aliases=aliases,
        error_log_dir=data.get("error_log_dir") or DEFAULT_ERROR_LOG_DIR,
    )
