import sys
from collections.abc import Mapping

from fmtbot.cli.exitcodes import exit_code_from_parse
from fmtbot.core.config import BotConfig
from fmtbot.core.dispatcher import CommandResult, FormatBot
from fmtbot.core.types import CommitAction


def _report(result: CommandResult) -> None:
    parse = result.parse
    if parse.status == "ignored":
        print(f"fmtbot: error: {parse.reason}", file=sys.stderr)
    elif parse.status == "rejected":
        print(
            f"fmtbot: error: unrecognized command ({parse.reason}); usage posted to the pull request",
            file=sys.stderr,
        )
    elif result.action == CommitAction.NONE:
        print("No formatting changes to commit.")
    elif result.action == CommitAction.AMEND:
        print("Amended the last commit with formatting and force-pushed.")
    else:
        print("Committed formatting changes and pushed.")


def run(*, config: BotConfig, environ: Mapping[str, str]) -> int:
    result = FormatBot(config, environ=environ).command()
    _report(result)
    return exit_code_from_parse(result.parse)
