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

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from fmtbot.core.errors import ConfigError

# ----------------------------
# Glob compilation
# ----------------------------


def _translate_class(body: str) -> str:
    body = body.replace("\\", "\\\\").replace("[", "\\[")
    if body.startswith("!"):
        return "[^" + body[1:] + "]"
    if body.startswith("^"):
        return "[\\^" + body[1:] + "]"
    return "[" + body + "]"


def translate_glob(pattern: str) -> str:
    """
    Translate a shell glob into a regular expression matched against a full
    relative path.

    - `*` and `?` also match `/`
    - `**/` matches zero or more leading directories (so `**/*.c` matches `a.c`)
    - a trailing `**` matches everything below
    - `[...]` / `[!...]` are character classes
    """
    out: list[str] = []
    i = 0
    n = len(pattern)

    while i < n:
        c = pattern[i]

        if c == "*":
            if pattern.startswith("**", i):
                j = i + 2
                whole_component = (i == 0 or pattern[i - 1] == "/") and (j == n or pattern[j] == "/")
                if not whole_component:
                    raise ConfigError(
                        f"Invalid glob pattern {pattern!r}: '**' must form a whole path component",
                        code="invalid_glob",
                        details={"pattern": pattern, "position": i},
                    )
                if j < n:
                    out.append("(?:.*/)?")
                    i = j + 1
                else:
                    out.append(".*")
                    i = j
                continue
            out.append(".*")
            i += 1
            continue

        if c == "?":
            out.append(".")
            i += 1
            continue

        if c == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise ConfigError(
                    f"Invalid glob pattern {pattern!r}: unterminated character class",
                    code="invalid_glob",
                    details={"pattern": pattern, "position": i},
                )
            out.append(_translate_class(pattern[i + 1 : j]))
            i = j + 1
            continue

        out.append(re.escape(c))
        i += 1

    return "(?s:" + "".join(out) + r")\Z"


@dataclass(frozen=True, slots=True)
class GlobPattern:
    """A compiled glob. Case-sensitive on every platform."""

    source: str
    regex: re.Pattern[str]

    @classmethod
    def parse(cls, source: str) -> "GlobPattern":
        return cls(source=source, regex=re.compile(translate_glob(source)))

    def matches(self, path: str) -> bool:
        return self.regex.match(path) is not None


def compile_globs(patterns: Iterable[str | GlobPattern]) -> tuple[GlobPattern, ...]:
    return tuple(p if isinstance(p, GlobPattern) else GlobPattern.parse(p) for p in patterns)


def match_any_glob(path: str, patterns: Sequence[GlobPattern]) -> bool:
    return any(p.matches(path) for p in patterns)


# ----------------------------
# Include / exclude filter
# ----------------------------


@dataclass(frozen=True, slots=True)
class FileFilter:
    """
    Include/exclude pattern set.

    A path matches when it matches ANY include and NO exclude. Exclusion wins
    regardless of the order patterns were given in.
    """

    includes: tuple[GlobPattern, ...] = ()
    excludes: tuple[GlobPattern, ...] = ()

    @classmethod
    def from_globs(
        cls,
        includes: Iterable[str | GlobPattern],
        excludes: Iterable[str | GlobPattern] = (),
    ) -> "FileFilter":
        return cls(includes=compile_globs(includes), excludes=compile_globs(excludes))

    def matches(self, path: str) -> bool:
        return match_any_glob(path, self.includes) and not match_any_glob(path, self.excludes)

    def select(self, tracked_paths: Iterable[str]) -> Iterator[str]:
        return (p for p in tracked_paths if self.matches(p))


def select_files(
    tracked_paths: Iterable[str],
    includes: Iterable[str | GlobPattern],
    excludes: Iterable[str | GlobPattern] = (),
) -> Iterator[str]:
    """
    Lazily yield the tracked paths selected by (includes, excludes).

    Preserves incoming order. The result is single-pass; re-run against a
    fresh tracked-file listing to iterate again.
    """
    return FileFilter.from_globs(includes, excludes).select(tracked_paths)
