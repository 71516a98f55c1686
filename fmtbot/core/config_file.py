# SPDX-License-Identifier: AGPL-3.0-only
#
# Copyright (c) 2026 Fmtbot Contributors
#
# This file is part of Fmtbot.
#
# Fmtbot is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 only.
#
# Fmtbot is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from fmtbot.core.errors import ConfigError

_LIST_KEYS = ("include", "py_include", "exclude")
_STR_KEYS = ("bot_name", "clang_format_version", "clang_format_override", "black_override")


@dataclass(frozen=True, slots=True)
class FileSettings:
    """
    Settings read from a --config file. None means "not set in the file".
    """

    bot_name: str | None = None
    include: tuple[str, ...] | None = None
    py_include: tuple[str, ...] | None = None
    exclude: tuple[str, ...] | None = None
    clang_format_version: str | None = None
    clang_format_override: str | None = None
    black_override: str | None = None


def split_globs(value: str) -> tuple[str, ...]:
    """Comma-delimited glob list; empty items are dropped."""
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _read_settings_file(path: Path) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            f"Cannot read config file {path}: {e}",
            code="config_unreadable",
            details={"path": str(path)},
        ) from e

    if path.suffix.lower() == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {path}: {e}", code="invalid_config") from e

    # .yaml / .yml / anything else: YAML is a superset of JSON
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}", code="invalid_config") from e


def _parse_globs(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return split_globs(value)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(v for v in value if v)
    raise ConfigError(
        f"'{key}' must be a list of glob strings or a comma-separated string.",
        code="invalid_config",
        details={"key": key},
    )


def load_config_file(path: str | Path) -> FileSettings:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file does not exist: {p}", code="config_not_found")

    data = _read_settings_file(p)
    if data is None:
        return FileSettings()
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping/object.", code="invalid_config")

    unknown = sorted(str(k) for k in data if k not in _LIST_KEYS and k not in _STR_KEYS)
    if unknown:
        raise ConfigError(
            f"Unknown config keys: {', '.join(unknown)}",
            code="invalid_config",
            details={"unknown": unknown},
        )

    values: dict[str, Any] = {}
    for key in _LIST_KEYS:
        if data.get(key) is not None:
            values[key] = _parse_globs(key, data[key])

    for key in _STR_KEYS:
        value = data.get(key)
        if value is None:
            continue
        # allow `clang_format_version: 14` without quotes
        if key == "clang_format_version" and isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"'{key}' must be a non-empty string.", code="invalid_config", details={"key": key})
        values[key] = value.strip()

    return FileSettings(**values)
