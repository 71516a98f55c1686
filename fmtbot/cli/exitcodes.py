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

from fmtbot.command.types import CommandParse
from fmtbot.core.types import FormatOutcome

# CI-friendly semantics
EXIT_OK = 0
EXIT_FAILURE = 1


def exit_code_from_outcome(outcome: FormatOutcome) -> int:
    """
    check mode: git's `diff --exit-code` status is forwarded as-is,
    never remapped.
    """
    return outcome.exit_code


def exit_code_from_parse(parse: CommandParse) -> int:
    """
    command mode: anything but a successfully parsed command fails the run,
    including comments that were not addressed to the bot.
    """
    return EXIT_OK if parse.ok else EXIT_FAILURE
