"""User-defined output fields extracted from responses with regular expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

FIELD_NAMES = (
    "url", "path", "fqdn", "rdn", "rurl", "qurl", "qpath",
    "file", "ufile", "key", "value", "kv", "dir", "udir",
)

_FIELD_NAME = re.compile(r"[A-Za-z0-9_-]+")


class Part(str, Enum):
    """Part of an exchange that a custom field is extracted from."""

    HEADER = "header"
    BODY = "body"
    RESPONSE = "response"

    def __str__(self) -> str:
        return self.value


class CustomFieldError(ValueError):
    """Raised for unreadable or invalid custom field configuration."""


@dataclass
class CustomFieldConfig:
    """Definition of one custom field."""

    name: str = ""
    type: str = ""
    part: str = ""
    group: int = 0
    regex: list[str] = field(default_factory=list)
    compiled_regex: list[re.Pattern[str]] = field(default_factory=list, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration file form, leaving out empty members."""
        values = {
            "name": self.name,
            "type": self.type,
            "part": self.part,
            "group": self.group,
            "regex": list(self.regex),
        }
        return {key: value for key, value in values.items() if value}


DEFAULT_FIELD_CONFIG_DATA = (
    CustomFieldConfig(
        name="email",
        type="regex",
        part=Part.RESPONSE.value,
        regex=[r"([a-zA-Z0-9._-]+@[a-zA-Z0-9._-]+\.[a-zA-Z0-9_-]+)"],
    ),
)


def _config_from_mapping(item: Any) -> CustomFieldConfig:
    if not isinstance(item, dict):
        raise CustomFieldError("could not decode field config: entry is not a mapping")
    regex = item.get("regex") or []
    if isinstance(regex, str) or not isinstance(regex, list):
        raise CustomFieldError("could not decode field config: regex must be a list")
    group = item.get("group") or 0
    if isinstance(group, bool) or not isinstance(group, int):
        raise CustomFieldError("could not decode field config: group must be an integer")
    return CustomFieldConfig(
        name=str(item.get("name") or ""),
        type=str(item.get("type") or ""),
        part=str(item.get("part") or ""),
        group=group,
        regex=[str(r) for r in regex],
    )


def _read_configs(file_path: str | Path) -> list[CustomFieldConfig]:
    try:
        with open(file_path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise CustomFieldError(f"could not read field config: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CustomFieldError(f"could not decode field config: {exc}") from exc
    if data is None:
        raise CustomFieldError("could not decode field config: empty document")
    if not isinstance(data, list):
        raise CustomFieldError("could not decode field config: expected a list")
    return [_config_from_mapping(item) for item in data]


def parse_custom_field_names(file_path: str | Path) -> list[CustomFieldConfig]:
    """Check the field names of a configuration file and return its entries."""
    configs = _read_configs(file_path)
    seen: set[str] = set()
    for item in configs:
        if not _FIELD_NAME.fullmatch(item.name):
            raise CustomFieldError(f"wrong custom field name {item.name}")
        if item.name in FIELD_NAMES:
            raise CustomFieldError(
                f'could not register custom field. "{item.name}" already pre-defined field'
            )
        if item.name in seen:
            raise CustomFieldError(
                f'could not register custom field. "{item.name}" custom field already exists'
            )
        seen.add(item.name)
    return configs


def load_custom_fields(file_path: str | Path, fields: str) -> dict[str, CustomFieldConfig]:
    """Load a configuration file and return the fields named in the comma list ``fields``."""
    all_fields: dict[str, CustomFieldConfig] = {}
    for item in _read_configs(file_path):
        for pattern in item.regex:
            try:
                item.compiled_regex.append(re.compile(pattern))
            except re.error as exc:
                raise CustomFieldError(f"could not parse regex in field config: {exc}") from exc
        if not item.part:
            item.part = Part.RESPONSE.value
        all_fields[item.name] = item
    return {
        name: all_fields[name]
        for name in (f for f in fields.split(",") if f)
        if name in all_fields
    }


def init_custom_field_config_file(home: str | Path | None = None) -> Path:
    """Return the default configuration file, writing the default fields if it is missing."""
    try:
        base = Path(home) if home is not None else Path.home()
    except RuntimeError as exc:
        raise CustomFieldError(f"could not get home directory: {exc}") from exc
    config = base / ".config" / "katana" / "field-config.yaml"
    if config.is_file():
        return config
    try:
        config.parent.mkdir(parents=True, exist_ok=True)
        with open(config, "w", encoding="utf-8") as handle:
            yaml.safe_dump(
                [item.to_dict() for item in DEFAULT_FIELD_CONFIG_DATA],
                handle,
                sort_keys=False,
            )
    except OSError as exc:
        raise CustomFieldError(f"could not create field config: {exc}") from exc
    return config