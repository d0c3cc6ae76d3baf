#!/usr/bin/env python3
"""
Conversion settings.

Defaults reproduce the classic title/body workflow (uuid identifiers, en>ko).
A YAML file can override any of them:

```yaml
source_lang: en
target_lang: ja
identifier_field: uuid
fields: [title, body]
translatable_fields: [title, body, summary]   # omit to auto-detect
engine: json2xliff
engine_options:           # keyed by engine name
  json2xliff:
    node: node
    package_dir: node_modules/@leading-works/json2xliff   # relative to the working directory
    tag: v1.0.0
```
"""

from dataclasses import asdict, dataclass, field, fields as dataclass_fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError

DEFAULT_SOURCE_LANG = "en"
DEFAULT_TARGET_LANG = "ko"
DEFAULT_IDENTIFIER_FIELD = "uuid"
DEFAULT_FIELDS = ("title", "body")
DEFAULT_ENGINE = "json2xliff"

STRING_KEYS = ("source_lang", "target_lang", "identifier_field", "engine")


@dataclass(frozen=True)
class ConversionConfig:
    """Settings shared by all three pipelines."""
    source_lang: str = DEFAULT_SOURCE_LANG
    target_lang: str = DEFAULT_TARGET_LANG
    identifier_field: str = DEFAULT_IDENTIFIER_FIELD
    fields: tuple[str, ...] = DEFAULT_FIELDS  # flatten/reconstruct
    translatable_fields: Optional[tuple[str, ...]] = None  # consolidate; None = auto-detect
    engine: str = DEFAULT_ENGINE
    engine_options: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        data = asdict(self)
        data["fields"] = list(self.fields)
        if self.translatable_fields is not None:
            data["translatable_fields"] = list(self.translatable_fields)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ConversionConfig":
        """Create from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in dataclass_fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown configuration key(s): {', '.join(unknown)}",
                suggestion=f"Valid keys: {', '.join(sorted(known))}",
            )

        values = dict(data)
        for key in STRING_KEYS:
            if key in values and not isinstance(values[key], str):
                raise ConfigError(
                    f"{key} must be a string, got {type(values[key]).__name__} ({values[key]!r})",
                    suggestion=f'Quote the value in YAML, e.g. {key}: "{_yaml_hint(values[key])}"',
                )
        for key in ("fields", "translatable_fields"):
            if values.get(key) is not None:
                values[key] = _as_field_tuple(key, values[key])
        if "fields" in values and values["fields"] is None:
            del values["fields"]
        if values.get("engine_options") is None:
            values["engine_options"] = {}
        elif not isinstance(values["engine_options"], dict):
            raise ConfigError("engine_options must be a mapping")
        return cls(**values)

    def options_for(self, engine_name: Optional[str] = None) -> dict:
        """Constructor options for an engine (the configured one by default)."""
        options = self.engine_options.get(engine_name or self.engine) or {}
        if not isinstance(options, dict):
            raise ConfigError(f"engine_options.{engine_name or self.engine} must be a mapping")
        return dict(options)

    def with_overrides(self, **overrides: Any) -> "ConversionConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        for key in ("fields", "translatable_fields"):
            if key in changes:
                changes[key] = _as_field_tuple(key, changes[key])
        return replace(self, **changes)


def _yaml_hint(value: Any) -> str:
    # YAML 1.1 reads no/yes/off/on as booleans
    if value is False:
        return "no"
    if value is True:
        return "yes"
    return str(value)


def _as_field_tuple(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [part.strip() for part in value.split(",")]
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"{key} must be a list of field names")
    names = tuple(str(v) for v in value if str(v))
    if not names:
        raise ConfigError(f"{key} must name at least one field")
    return names


def load_config(path: Optional[str] = None) -> ConversionConfig:
    """
    Load settings from a YAML file.

    Args:
        path: YAML file path; None returns the defaults

    Returns:
        ConversionConfig
    """
    if path is None:
        return ConversionConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")

    if data is None:
        return ConversionConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping")

    return ConversionConfig.from_dict(data)
