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
import shlex
from typing import NoReturn

from fmtbot.command.types import BotCommand, CommandParse, Verb
from fmtbot.command.usage import render_usage


class CommandSyntaxError(Exception):
    """Raised by the comment grammar instead of exiting the process."""

    pass


class _CommentArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise CommandSyntaxError(message)

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        raise CommandSyntaxError(message or f"exit {status}")


def mention(bot_name: str) -> str:
    return f"@{bot_name}"


def build_comment_parser(bot_name: str) -> argparse.ArgumentParser:
    """
    Grammar of a bot comment: `@<bot-name> format [--amend]`.
    """
    p = _CommentArgumentParser(prog=mention(bot_name), add_help=False, allow_abbrev=False)
    sub = p.add_subparsers(dest="verb", required=True)

    fmt = sub.add_parser(Verb.FORMAT.value, add_help=False, allow_abbrev=False)
    fmt.add_argument("--amend", action="store_true", help="Amends the previous commit with formatting")

    return p


def parse_comment(body: str, bot_name: str) -> CommandParse:
    """
    Turn a PR comment body into a BotCommand.

    A body that does not start with the bot mention is ignored. Anything
    else that fails to tokenize or to match the grammar is rejected and
    carries the usage text to post back.
    """
    if not body.startswith(mention(bot_name)):
        return CommandParse(status="ignored", reason=f"The command must start with {mention(bot_name)}")

    try:
        tokens = shlex.split(body)
        # first token is the mention itself, playing the role of argv[0]
        args = build_comment_parser(bot_name).parse_args(tokens[1:])
    except (ValueError, CommandSyntaxError, argparse.ArgumentError) as e:
        return CommandParse(status="rejected", usage=render_usage(bot_name), reason=str(e))

    return CommandParse(status="parsed", command=BotCommand(verb=Verb(args.verb), amend=bool(args.amend)))
