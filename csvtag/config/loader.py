from __future__ import annotations

import importlib
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load the YAML conversion config (default: config/convert.yml)
- Validate it against config_schema.json (shipped next to this module)
- Apply defaults (format inferred from the source suffix, delimiter ",", utf-8)
- Resolve the "module:ClassName" record type reference
"""

__all__ = [
    "ConfigError",
    "ConvertConfig",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "load_record_type",
]

DEFAULT_CONFIG_PATH = Path("config/convert.yml")
SCHEMA_PATH = Path(__file__).parent / "config_schema.json"

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ConvertConfig:
    source: Path
    record_type: str  # "module:ClassName"
    format: str = "csv"  # csv | excel
    delimiter: str = ","
    encoding: str = "utf-8"
    sheet: str | None = None
    keep_na_strings: list[str] = field(default_factory=list)
    output: Path | None = None  # None -> stdout


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or not valid JSON, or the config
            data fails validation (missing keys, wrong types, unknown keys).
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


def _infer_format(source: Path) -> str:
    return "excel" if source.suffix.lower() in EXCEL_SUFFIXES else "csv"


def load_config(path: Path) -> ConvertConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    source = Path(data["source"])
    output = data.get("output")
    return ConvertConfig(
        source=source,
        record_type=data["record_type"],
        format=data.get("format", _infer_format(source)),
        delimiter=data.get("delimiter", ","),
        encoding=data.get("encoding", "utf-8"),
        sheet=data.get("sheet"),
        keep_na_strings=list(data.get("keep_na_strings", [])),
        output=Path(output) if output else None,
    )


def load_record_type(reference: str) -> type:
    """Import the class named by a "package.module:ClassName" reference."""
    module_name, sep, qualname = reference.partition(":")
    if not sep or not module_name or not qualname:
        raise ConfigError(f"record_type should look like 'module:ClassName': {reference!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"cannot import record_type module '{module_name}': {e}") from e
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ConfigError(f"record_type '{reference}' not found: {e}") from e
    return obj
