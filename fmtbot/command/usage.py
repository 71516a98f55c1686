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

from fmtbot.command.types import Verb


def render_usage(bot_name: str) -> str:
    """
    Markdown usage block posted back to a pull request when a comment
    addressed to the bot cannot be parsed.
    """
    lines: list[str] = []

    # put the usage in code quotes
    lines.append("```")
    lines.append("USAGE:")
    lines.append(f"    @{bot_name} {Verb.FORMAT.value} [--amend]")
    lines.append("")
    lines.append("FLAGS:")
    lines.append("    --amend Amends the previous commit with formatting")
    lines.append("```")

    return "\n".join(lines)
