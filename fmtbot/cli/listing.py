from collections.abc import Mapping

from fmtbot.cli.exitcodes import EXIT_OK
from fmtbot.core.config import BotConfig
from fmtbot.core.dispatcher import FormatBot


def run(*, config: BotConfig, environ: Mapping[str, str]) -> int:
    """Print the files each formatter would touch, native files first."""
    for path in FormatBot(config, environ=environ).list_files():
        print(path)
    return EXIT_OK
