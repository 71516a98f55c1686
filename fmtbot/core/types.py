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


@dataclass(frozen=True, slots=True)
class FormatOutcome:
    """
    Result of comparing the formatted working tree against HEAD.

    exit_code is the raw `git diff --exit-code` status: 0 means no drift.
    """

    changed: bool
    exit_code: int

    @classmethod
    def from_exit_code(cls, exit_code: int) -> "FormatOutcome":
        return cls(changed=exit_code != 0, exit_code=exit_code)


class CommitAction(str, Enum):
    NONE = "none"
    COMMIT = "commit"
    AMEND = "amend"
