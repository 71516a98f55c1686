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

import os
import shutil
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from fmtbot.core.errors import ConfigError

DEFAULT_CLANG_FORMAT_VERSION: Final[str] = "10"

# Location of versioned clang-format binaries inside the action container
ACTION_CLANG_FORMAT_DIR: Final[Path] = Path("/clang-format")


@dataclass(frozen=True, slots=True)
class FormatterSpec:
    """
    External formatter invocation template.

    The file path is appended to `args`, e.g. clang-format runs as
    `<binary> -i <path>` and black as `<binary> <path>`.
    """

    name: str
    binary: Path
    args: tuple[str, ...] = field(default_factory=tuple)

    def argv(self, path: str) -> list[str]:
        return [str(self.binary), *self.args, path]


def _which(program: str) -> Path | None:
    found = shutil.which(program)
    return Path(found) if found else None


def resolve_clang_format(
    *,
    version: str = DEFAULT_CLANG_FORMAT_VERSION,
    override: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> FormatterSpec:
    """
    Locate clang-format.

    Precedence:
      1) explicit override path
      2) inside a GitHub Action: /clang-format/clang-format-<version>
      3) clang-format on PATH
    """
    env = os.environ if environ is None else environ

    if override:
        path: Path | None = Path(override)
    elif "GITHUB_ACTION" in env:
        path = ACTION_CLANG_FORMAT_DIR / f"clang-format-{version}"
    else:
        path = _which("clang-format")

    if path is None or not path.exists():
        raise ConfigError(
            f"No clang-format version {version}",
            code="formatter_not_found",
            details={"formatter": "clang-format", "path": str(path) if path else None},
        )

    return FormatterSpec(name="clang-format", binary=path, args=("-i",))


def resolve_black(*, override: str | None = None) -> FormatterSpec:
    path = Path(override) if override else _which("black")

    if path is None or not path.exists():
        raise ConfigError(
            "No black python formatter found",
            code="formatter_not_found",
            details={"formatter": "black", "path": str(path) if path else None},
        )

    return FormatterSpec(name="black", binary=path, args=())
