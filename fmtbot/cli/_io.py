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

import argparse
from collections.abc import Mapping
from pathlib import Path

from fmtbot.core.config import (
    DEFAULT_BOT_NAME,
    DEFAULT_EXCLUDES,
    DEFAULT_INCLUDES,
    DEFAULT_PY_INCLUDES,
    BotConfig,
)
from fmtbot.core.config_file import FileSettings, load_config_file, split_globs
from fmtbot.files.select import FileFilter, compile_globs
from fmtbot.formatters.resolve import DEFAULT_CLANG_FORMAT_VERSION, resolve_black, resolve_clang_format


def workspace_dir(explicit: str | None, environ: Mapping[str, str]) -> Path:
    if explicit:
        return Path(explicit).resolve()
    return Path(environ.get("GITHUB_WORKSPACE") or ".").resolve()


def _globs(explicit: str | None, from_file: tuple[str, ...] | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if explicit is not None:
        return split_globs(explicit)
    if from_file is not None:
        return from_file
    return default


def build_config(args: argparse.Namespace, environ: Mapping[str, str]) -> BotConfig:
    """
    Merge command-line flags, the optional --config file and built-in
    defaults (in that order of precedence) and resolve formatter binaries.

    Raises ConfigError before anything touches a repository.
    """
    settings = load_config_file(args.config) if args.config else FileSettings()

    clang_version = args.clang_format_version or settings.clang_format_version or DEFAULT_CLANG_FORMAT_VERSION
    clang_override = args.clang_format_override or settings.clang_format_override
    black_override = args.black_override or settings.black_override

    clang_format = resolve_clang_format(version=clang_version, override=clang_override, environ=environ)
    black = resolve_black(override=black_override)

    excludes = compile_globs(_globs(args.exclude, settings.exclude, DEFAULT_EXCLUDES))
    includes = compile_globs(_globs(args.include, settings.include, DEFAULT_INCLUDES))
    py_includes = compile_globs(_globs(args.py_include, settings.py_include, DEFAULT_PY_INCLUDES))

    return BotConfig(
        workspace=workspace_dir(args.workspace, environ),
        bot_name=args.bot_name or settings.bot_name or DEFAULT_BOT_NAME,
        clang_format=clang_format,
        black=black,
        native_filter=FileFilter(includes=includes, excludes=excludes),
        script_filter=FileFilter(includes=py_includes, excludes=excludes),
        github_token=args.github_token or environ.get("GITHUB_TOKEN") or None,
        max_workers=args.jobs,
    )
