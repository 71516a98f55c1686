import pytest
from fmtbot.command.parser import parse_comment
from fmtbot.command.types import BotCommand, Verb
from fmtbot.command.usage import render_usage

BOT = "bot"


class TestParsedCommands:
    def test_format(self):
        result = parse_comment("@bot format", BOT)
        assert result.status == "parsed"
        assert result.ok
        assert result.command == BotCommand(verb=Verb.FORMAT, amend=False)
        assert result.usage is None

    def test_format_amend(self):
        result = parse_comment("@bot format --amend", BOT)
        assert result.command == BotCommand(verb=Verb.FORMAT, amend=True)

    def test_quoted_tokens_are_honoured(self):
        result = parse_comment("@bot 'format' \"--amend\"", BOT)
        assert result.command == BotCommand(verb=Verb.FORMAT, amend=True)

    def test_surrounding_whitespace_and_newlines(self):
        result = parse_comment("@bot\n  format   --amend \n", BOT)
        assert result.command is not None
        assert result.command.amend is True

    def test_clone_depth_follows_amend(self):
        assert BotCommand(verb=Verb.FORMAT).clone_depth == 1
        assert BotCommand(verb=Verb.FORMAT, amend=True).clone_depth == 2


class TestRejectedCommands:
    @pytest.mark.parametrize(
        "body",
        [
            "@bot frobnicate",
            "@bot",
            "@bot format --force",
            "@bot format --am",
            "@bot format --a",
            "@bot format --amend=yes",
            "@bot format extra",
            "@bot --amend",
            "@bot format --help",
            "@bot -h",
            "@bot format 'unterminated",
        ],
    )
    def test_rejected_with_usage(self, body):
        result = parse_comment(body, BOT)
        assert result.status == "rejected"
        assert result.command is None
        assert result.usage == render_usage(BOT)
        assert not result.ok


class TestIgnoredComments:
    def test_not_addressed_to_the_bot(self):
        result = parse_comment("not for the bot", BOT)
        assert result.status == "ignored"
        assert result.usage is None
        assert result.command is None
        assert not result.ok

    def test_mention_not_at_the_start(self):
        result = parse_comment("hey @bot format", BOT)
        assert result.status == "ignored"

    def test_other_bot_mention(self):
        assert parse_comment("@other format", BOT).status == "ignored"


def test_usage_is_a_fenced_block_naming_the_bot():
    usage = render_usage("cpp-py-formatter")
    lines = usage.splitlines()

    assert lines[0] == "```"
    assert lines[-1] == "```"
    assert "    @cpp-py-formatter format [--amend]" in lines
    assert "    --amend Amends the previous commit with formatting" in lines
