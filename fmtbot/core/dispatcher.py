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

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from fmtbot.command.parser import parse_comment
from fmtbot.command.types import CommandParse
from fmtbot.core.commit import reconcile
from fmtbot.core.config import BotConfig
from fmtbot.core.errors import ConfigError, ProtocolError
from fmtbot.core.types import CommitAction, FormatOutcome
from fmtbot.formatters.runner import format_all
from fmtbot.github.client import GitHubClient
from fmtbot.github.events import IssueCommentEvent, PushEvent, load_payload
from fmtbot.vcs.git import GitRepository, clone_url

EVENT_PUSH = "push"
EVENT_ISSUE_COMMENT = "issue_comment"


@dataclass(frozen=True)
class CommandResult:
    parse: CommandParse
    action: CommitAction | None = None
    outcome: FormatOutcome | None = None


class FormatBot:
    """
    Drives one bot run.

      check()      - push event: clone, format, report drift
      command()    - PR comment: parse, clone PR head, format, commit/amend + push
      list_files() - selected files of an existing checkout

    The repository lives at config.workspace; the process working directory
    is never changed.
    """

    def __init__(
        self,
        config: BotConfig,
        *,
        client: GitHubClient | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.config = config
        self.environ = os.environ if environ is None else environ
        self.repo = GitRepository(root=config.workspace)
        self._client = client

    # ----------------------------
    # Collaborators
    # ----------------------------

    def _token(self) -> str:
        if not self.config.github_token:
            raise ConfigError(
                "A GitHub token is required (--github-token or GITHUB_TOKEN).",
                code="missing_token",
            )
        return self.config.github_token

    @property
    def client(self) -> GitHubClient:
        if self._client is None:
            self._client = GitHubClient(self._token())
        return self._client

    def _load_event(self) -> dict:
        path = self.environ.get("GITHUB_EVENT_PATH")
        if not path:
            raise ConfigError("GITHUB_EVENT_PATH is not set.", code="missing_event_path")
        return load_payload(path)

    def _clone(self, full_name: str, branch: str, depth: int) -> None:
        self.repo.clone(clone_url(full_name, self._token()), branch, depth)

    def _format(self) -> int:
        cfg = self.config
        return format_all(
            self.repo,
            native=cfg.clang_format,
            native_filter=cfg.native_filter,
            script=cfg.black,
            script_filter=cfg.script_filter,
            max_workers=cfg.max_workers,
        )

    # ----------------------------
    # Modes
    # ----------------------------

    def check(self) -> FormatOutcome:
        """
        Format the pushed branch and report whether anything drifted.

        The returned exit_code is git's own `diff --exit-code` status.
        """
        event_name = self.environ.get("GITHUB_EVENT_NAME")
        if event_name and event_name != EVENT_PUSH:
            raise ProtocolError(
                f"check is only compatible with '{EVENT_PUSH}' events (got '{event_name}')",
                code="wrong_event",
            )

        event = PushEvent.from_dict(self._load_event())
        self._clone(event.repository_full_name, event.branch, 1)
        self._format()
        return self.repo.has_changes()

    def command(self) -> CommandResult:
        """
        Execute a bot command found in a pull request comment.

        Ignored comments return without touching the network; rejected ones
        get the usage text posted back to the pull request.
        """
        if self.environ.get("GITHUB_EVENT_NAME") != EVENT_ISSUE_COMMENT:
            raise ProtocolError(
                f"This action is only compatible with '{EVENT_ISSUE_COMMENT}' events",
                code="wrong_event",
            )

        event = IssueCommentEvent.from_dict(self._load_event())

        parsed = parse_comment(event.body, self.config.bot_name)
        if parsed.status == "ignored":
            return CommandResult(parse=parsed)

        if event.pull_request_url is None:
            raise ProtocolError(f"{self.config.bot_name} only works with PR comments", code="not_a_pr_comment")

        pull_request = self.client.get_pull_request(event.pull_request_url)

        if parsed.command is None:
            self.client.create_comment(pull_request.comments_url, parsed.usage or "")
            return CommandResult(parse=parsed)

        cmd = parsed.command
        self._clone(pull_request.head_repo_full_name, pull_request.head_ref, cmd.clone_depth)
        self.repo.configure_identity(self.config.bot_name, self.config.bot_email)
        self._format()

        outcome = self.repo.has_changes()
        action = reconcile(self.repo, outcome, amend=cmd.amend, message=self.config.commit_message)
        return CommandResult(parse=parsed, action=action, outcome=outcome)

    def list_files(self) -> Iterator[str]:
        """
        Yield the native then the script files selected from the workspace
        checkout. A file in both sets is yielded twice.
        """
        if not self.repo.is_git_repo():
            raise ConfigError(f"Not a git repository: {self.repo.root}", code="not_a_repository")

        yield from self.config.native_filter.select(self.repo.tracked_files())
        yield from self.config.script_filter.select(self.repo.tracked_files())
