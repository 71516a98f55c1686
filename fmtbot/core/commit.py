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

from typing import Protocol

from fmtbot.core.types import CommitAction, FormatOutcome


class CommitTarget(Protocol):
    """The git mutations the commit strategy needs (GitRepository provides them)."""

    def commit_all(self, message: str) -> None: ...

    def amend_all(self) -> None: ...

    def push(self, *, force: bool = False) -> None: ...


def reconcile(
    repo: CommitTarget,
    outcome: FormatOutcome | bool,
    *,
    amend: bool,
    message: str,
) -> CommitAction:
    """
    Record formatting changes upstream.

      unchanged           -> nothing
      changed, no amend   -> new commit + plain push (fails if the remote moved)
      changed, amend      -> amend HEAD without editing the message + force push

    The git identity must already be configured. Git failures propagate as
    GitCommandError.
    """
    changed = outcome.changed if isinstance(outcome, FormatOutcome) else bool(outcome)
    if not changed:
        return CommitAction.NONE

    if amend:
        repo.amend_all()
        repo.push(force=True)
        return CommitAction.AMEND

    repo.commit_all(message)
    repo.push(force=False)
    return CommitAction.COMMIT
