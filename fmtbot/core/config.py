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

from dataclasses import dataclass
from pathlib import Path

from fmtbot.files.select import FileFilter
from fmtbot.formatters.resolve import FormatterSpec

DEFAULT_BOT_NAME = "cpp-py-formatter"

DEFAULT_INCLUDES: tuple[str, ...] = (
    "**/*.c",
    "**/*.h",
    "**/*.C",
    "**/*.H",
    "**/*.cpp",
    "**/*.hpp",
    "**/*.cxx",
    "**/*.hxx",
    "**/*.c++",
    "**/*.h++",
    "**/*.cc",
    "**/*.hh",
)
DEFAULT_PY_INCLUDES: tuple[str, ...] = ("**/*.py",)
DEFAULT_EXCLUDES: tuple[str, ...] = ()


@dataclass(frozen=True)
class BotConfig:
    workspace: Path
    bot_name: str
    clang_format: FormatterSpec
    black: FormatterSpec
    native_filter: FileFilter
    script_filter: FileFilter
    github_token: str | None = None
    max_workers: int | None = None  # None = one worker per CPU

    @property
    def bot_email(self) -> str:
        return f"{self.bot_name}@automation.bot"

    @property
    def commit_message(self) -> str:
        return self.bot_name
