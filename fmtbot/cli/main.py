import argparse
import os
import sys
from collections.abc import Mapping

from fmtbot._version import _detect_version
from fmtbot.cli import check, command, listing
from fmtbot.cli._io import build_config
from fmtbot.cli.exitcodes import EXIT_FAILURE
from fmtbot.core.errors import FmtBotError


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fmtbot",
        description="Runner for clang-format and black on GitHub pushes and pull request comments",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_detect_version()}")

    # Global options (defaults of None let --config values show through)
    p.add_argument("--github-token", default=None, help="GitHub token (default: $GITHUB_TOKEN).")

    clang = p.add_mutually_exclusive_group()
    clang.add_argument("--clang-format-version", default=None, help="clang-format version to use (default: 10).")
    clang.add_argument("--clang-format-override", default=None, help="Path to a clang-format binary.")
    p.add_argument("--black-override", default=None, help="Path to a black binary.")

    p.add_argument("--include", default=None, help="Comma-separated globs of C/C++ files to format.")
    p.add_argument(
        "--py-include", "--py_include", dest="py_include", default=None, help="Comma-separated globs of Python files."
    )
    p.add_argument("--exclude", default=None, help="Comma-separated globs excluded from both sets.")
    p.add_argument(
        "--bot-name", default=None, help="Bot name used for @mentions and commits (default: cpp-py-formatter)."
    )
    p.add_argument("--config", default=None, help="Settings file (YAML or JSON).")
    p.add_argument("--workspace", default=None, help="Checkout directory (default: $GITHUB_WORKSPACE or .).")
    p.add_argument(
        "-j", "--jobs", type=_positive_int, default=None, help="Parallel formatter processes (default: CPU count)."
    )

    sub = p.add_subparsers(dest="cmd", required=True)
    sub.add_parser("command", help="Run a bot command from a pull request comment.")
    sub.add_parser("check", help="Fail if the pushed branch is not formatted.")
    sub.add_parser("list", help="List the files that would be formatted.")

    return p


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    env = os.environ if environ is None else environ

    try:
        config = build_config(args, env)

        if args.cmd == "command":
            return command.run(config=config, environ=env)

        if args.cmd == "check":
            return check.run(config=config, environ=env)

        if args.cmd == "list":
            return listing.run(config=config, environ=env)

        print("Unknown command.", file=sys.stderr)
        return EXIT_FAILURE

    except FmtBotError as e:
        print(f"fmtbot: error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        print(f"fmtbot: internal error: {e!r}", file=sys.stderr)
        return EXIT_FAILURE


def run() -> None:
    sys.exit(main())
