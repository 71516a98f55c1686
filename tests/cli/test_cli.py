"""Tests for the fmtbot command line: flag handling, config merging and exit codes."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import init_repo, requires_git
from fmtbot.cli._io import build_config
from fmtbot.cli.main import build_parser, main
from fmtbot.core.config import DEFAULT_BOT_NAME
from fmtbot.core.types import FormatOutcome


def make_binary(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


@pytest.fixture
def binaries(tmp_path):
    return [
        "--clang-format-override",
        str(make_binary(tmp_path / "bin" / "clang-format")),
        "--black-override",
        str(make_binary(tmp_path / "bin" / "black")),
    ]


class TestParser:
    def test_subcommand_is_required(self):
        with pytest.raises(SystemExit) as ei:
            build_parser().parse_args([])
        assert ei.value.code == 2

    def test_clang_version_and_override_are_exclusive(self):
        with pytest.raises(SystemExit) as ei:
            build_parser().parse_args(["--clang-format-version", "12", "--clang-format-override", "/x", "check"])
        assert ei.value.code == 2

    def test_underscore_alias_for_py_include(self):
        args = build_parser().parse_args(["--py_include", "a/**/*.py", "list"])
        assert args.py_include == "a/**/*.py"

    def test_jobs_must_be_positive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-j", "0", "check"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as ei:
            main(["--version"])
        assert ei.value.code == 0
        assert capsys.readouterr().out.startswith("fmtbot ")


class TestBuildConfig:
    def test_defaults(self, tmp_path, binaries):
        args = build_parser().parse_args([*binaries, "--workspace", str(tmp_path), "list"])
        config = build_config(args, {"GITHUB_TOKEN": "env-token"})

        assert config.bot_name == DEFAULT_BOT_NAME
        assert config.github_token == "env-token"
        assert config.workspace == tmp_path.resolve()
        assert config.native_filter.matches("src/a.cpp")
        assert not config.native_filter.matches("tool.py")
        assert config.script_filter.matches("tool.py")

    def test_cli_beats_config_file_beats_defaults(self, tmp_path, binaries):
        cfg = tmp_path / "fmtbot.yaml"
        cfg.write_text("bot_name: file-bot\ninclude: ['src/**/*.c']\nexclude: 'src/gen/**'\n", encoding="utf-8")
        args = build_parser().parse_args(
            [*binaries, "--config", str(cfg), "--include", "lib/**/*.c", "--workspace", str(tmp_path), "list"]
        )

        config = build_config(args, {})

        assert config.bot_name == "file-bot"
        assert config.native_filter.matches("lib/x.c")
        assert not config.native_filter.matches("src/x.c")
        assert not config.script_filter.matches("src/gen/x.py")
        assert config.script_filter.matches("src/x.py")

    def test_workspace_from_environment(self, tmp_path, binaries):
        args = build_parser().parse_args([*binaries, "list"])
        config = build_config(args, {"GITHUB_WORKSPACE": str(tmp_path)})
        assert config.workspace == tmp_path.resolve()

    def test_cli_token_wins(self, tmp_path, binaries):
        args = build_parser().parse_args([*binaries, "--github-token", "flag", "list"])
        assert build_config(args, {"GITHUB_TOKEN": "env"}).github_token == "flag"


class TestMain:
    def test_check_forwards_diff_exit_code(self, tmp_path, binaries, capsys):
        with patch("fmtbot.cli.check.FormatBot") as bot:
            bot.return_value.check.return_value = FormatOutcome(changed=True, exit_code=1)
            code = main([*binaries, "--workspace", str(tmp_path), "check"], environ={})

        assert code == 1
        assert "Formatting drift detected" in capsys.readouterr().out

    def test_check_clean(self, tmp_path, binaries, capsys):
        with patch("fmtbot.cli.check.FormatBot") as bot:
            bot.return_value.check.return_value = FormatOutcome(changed=False, exit_code=0)
            code = main([*binaries, "--workspace", str(tmp_path), "check"], environ={})

        assert code == 0
        assert "up to date" in capsys.readouterr().out

    def test_check_without_token(self, tmp_path, binaries, capsys):
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"ref": "refs/heads/main", "repository": {"full_name": "o/r"}}))
        env = {"GITHUB_EVENT_NAME": "push", "GITHUB_EVENT_PATH": str(event)}

        code = main([*binaries, "--workspace", str(tmp_path / "ws"), "check"], environ=env)

        assert code == 1
        assert "fmtbot: error: A GitHub token is required" in capsys.readouterr().err

    def test_missing_formatter(self, tmp_path, capsys):
        code = main(
            ["--clang-format-override", str(tmp_path / "nope"), "--workspace", str(tmp_path), "list"], environ={}
        )
        assert code == 1
        assert "No clang-format version" in capsys.readouterr().err

    def test_unreadable_config_is_a_config_error(self, tmp_path, binaries, capsys):
        cfg_dir = tmp_path / "fmtbot.yaml"
        cfg_dir.mkdir()

        code = main([*binaries, "--config", str(cfg_dir), "--workspace", str(tmp_path), "list"], environ={})

        assert code == 1
        assert "fmtbot: error: Cannot read config file" in capsys.readouterr().err

    def test_comment_not_for_the_bot_fails_without_network(self, tmp_path, binaries, capsys):
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"comment": {"body": "thanks!"}, "issue": {"pull_request": {"url": "u"}}}))
        env = {"GITHUB_EVENT_NAME": "issue_comment", "GITHUB_EVENT_PATH": str(event), "GITHUB_TOKEN": "t"}

        with patch("fmtbot.github.client.requests.Session.request") as request:
            code = main([*binaries, "--bot-name", "fmt", "command"], environ=env)

        assert code == 1
        request.assert_not_called()
        assert "must start with @fmt" in capsys.readouterr().err

    def test_unexpected_exception_is_reported(self, tmp_path, binaries, capsys):
        with patch("fmtbot.cli.check.FormatBot") as bot:
            bot.return_value.check.side_effect = RuntimeError("boom")
            code = main([*binaries, "--workspace", str(tmp_path), "check"], environ={})

        assert code == 1
        assert "fmtbot: internal error: RuntimeError('boom')" in capsys.readouterr().err

    @requires_git
    def test_list_prints_native_then_script_files(self, tmp_path, binaries, capsys):
        ws = init_repo(
            tmp_path / "ws",
            {"b.py": "x\n", "src/a.c": "x\n", "third_party/z.c": "x\n", "notes.txt": "x\n"},
        )

        code = main([*binaries, "--exclude", "third_party/**", "--workspace", str(ws), "list"], environ={})

        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert out == ["src/a.c", "b.py"]

    def test_list_outside_a_repository(self, tmp_path, binaries, capsys):
        code = main([*binaries, "--workspace", str(tmp_path / "empty"), "list"], environ={})
        assert code == 1
        assert "Not a git repository" in capsys.readouterr().err
