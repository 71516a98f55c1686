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

from fmtbot.files.select import FileFilter, GlobPattern, compile_globs, match_any_glob, select_files, translate_glob

__all__ = [
    "FileFilter",
    "GlobPattern",
    "compile_globs",
    "match_any_glob",
    "select_files",
    "translate_glob",
]
