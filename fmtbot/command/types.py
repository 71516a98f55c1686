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
from enum import Enum
from typing import Literal


class Verb(str, Enum):
    FORMAT = "format"


@dataclass(frozen=True, slots=True)
class BotCommand:
    verb: Verb
    amend: bool = False

    @property
    def clone_depth(self) -> int:
        # amending needs the parent commit locally
        return 2 if self.amend else 1


ParseStatus = Literal["parsed", "rejected", "ignored"]


@dataclass(frozen=True, slots=True)
class CommandParse:
    """
    Outcome of reading a PR comment.

    - parsed:   `command` is set
    - rejected: addressed to the bot but malformed; `usage` should be posted back
    - ignored:  not addressed to the bot at all
    """

    status: ParseStatus
    command: BotCommand | None = None
    usage: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "parsed"
