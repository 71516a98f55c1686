from collections.abc import Mapping

from fmtbot.cli.exitcodes import exit_code_from_outcome
from fmtbot.core.config import BotConfig
from fmtbot.core.dispatcher import FormatBot


def run(*, config: BotConfig, environ: Mapping[str, str]) -> int:
    """
    Push-triggered formatting check.

    Clones the pushed branch, formats it and exits with git's diff status so
    that any drift fails the build.
    """
    outcome = FormatBot(config, environ=environ).check()
    if outcome.changed:
        print(f"Formatting drift detected (git diff exit code {outcome.exit_code}).")
    else:
        print("Formatting is up to date.")
    return exit_code_from_outcome(outcome)
