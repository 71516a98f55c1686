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

from collections.abc import Mapping
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """
    Coarse classification of failures.

    CONFIG   - bad flags, missing formatter binaries, malformed globs
    PROTOCOL - wrong trigger event, non-PR comment, malformed payload
    TOOL     - formatter crash, git failure, GitHub API / network failure
    """

    CONFIG = "config"
    PROTOCOL = "protocol"
    TOOL = "tool"


class FmtBotError(Exception):
    """
    Base class for all fmtbot errors.

    Components raise these instead of terminating the process; the CLI entry
    point is the only place that turns them into an exit status.
    """

    kind: ErrorKind = ErrorKind.TOOL

    code: str
    message: str
    details: Mapping[str, Any] | None = None

    def __init__(
        self,
        message: str,
        code: str = "fmtbot_error",
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigError(FmtBotError):
    """Raised at startup when configuration cannot be used."""

    kind = ErrorKind.CONFIG


class ProtocolError(FmtBotError):
    """Raised when the triggering event does not fit the selected mode."""

    kind = ErrorKind.PROTOCOL


class PayloadError(ProtocolError):
    """Raised when an event payload or API response has an unexpected shape."""

    pass


class FormatterError(FmtBotError):
    """Raised when a formatter invocation fails or cannot be spawned."""

    kind = ErrorKind.TOOL


class GitCommandError(FmtBotError):
    """Raised when a git subcommand exits non-zero."""

    kind = ErrorKind.TOOL


class GitHubApiError(FmtBotError):
    """Raised on a non-success response or transport failure talking to GitHub."""

    kind = ErrorKind.TOOL
