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

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fmtbot.core.errors import PayloadError

BRANCH_PREFIX = "refs/heads/"
TAG_PREFIX = "refs/tags/"


def _require(data: Any, *keys: str, what: str) -> Any:
    cur: Any = data
    walked: list[str] = []
    for k in keys:
        walked.append(k)
        if not isinstance(cur, Mapping) or k not in cur:
            raise PayloadError(
                f"{what}: missing field '{'.'.join(walked)}'",
                code="invalid_payload",
                details={"field": ".".join(walked)},
            )
        cur = cur[k]
    return cur


def _require_str(data: Any, *keys: str, what: str) -> str:
    value = _require(data, *keys, what=what)
    if not isinstance(value, str):
        raise PayloadError(
            f"{what}: field '{'.'.join(keys)}' must be a string",
            code="invalid_payload",
            details={"field": ".".join(keys)},
        )
    return value


# ----------------------------
# Trigger events
# ----------------------------


@dataclass(frozen=True, slots=True)
class PushEvent:
    ref: str
    repository_full_name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PushEvent":
        return cls(
            ref=_require_str(data, "ref", what="push event"),
            repository_full_name=_require_str(data, "repository", "full_name", what="push event"),
        )

    @property
    def branch(self) -> str:
        return ref_to_branch(self.ref)


@dataclass(frozen=True, slots=True)
class IssueCommentEvent:
    """
    issue_comment payload. `pull_request_url` is None when the comment was
    made on a plain issue.
    """

    body: str
    pull_request_url: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IssueCommentEvent":
        body = _require_str(data, "comment", "body", what="issue_comment event")
        issue = _require(data, "issue", what="issue_comment event")
        if not isinstance(issue, Mapping):
            raise PayloadError("issue_comment event: 'issue' must be an object", code="invalid_payload")

        pr = issue.get("pull_request")
        url = _require_str(pr, "url", what="issue_comment event") if pr is not None else None
        return cls(body=body, pull_request_url=url)


# ----------------------------
# Pull request resource
# ----------------------------


@dataclass(frozen=True, slots=True)
class PullRequest:
    head_ref: str
    head_repo_full_name: str
    comments_url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PullRequest":
        what = "pull request"
        return cls(
            head_ref=_require_str(data, "head", "ref", what=what),
            head_repo_full_name=_require_str(data, "head", "repo", "full_name", what=what),
            comments_url=_require_str(data, "comments_url", what=what),
        )


# ----------------------------
# Helpers
# ----------------------------


def ref_to_branch(ref: str) -> str:
    """
    refs/heads/<name> and refs/tags/<name> become <name>.
    Any other ref is returned unchanged (cloning will reject it).
    """
    if ref.startswith(BRANCH_PREFIX):
        return ref[len(BRANCH_PREFIX) :]
    if ref.startswith(TAG_PREFIX):
        return ref[len(TAG_PREFIX) :]
    return ref


def load_payload(path: str | Path) -> dict[str, Any]:
    """
    Read the JSON event payload written by the CI runner.
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise PayloadError(
            f"Cannot read event payload {p}: {e}",
            code="payload_unreadable",
            details={"path": str(p)},
        ) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PayloadError(
            f"Event payload {p} is not valid JSON: {e}",
            code="invalid_payload",
            details={"path": str(p)},
        ) from e

    if not isinstance(data, dict):
        raise PayloadError(f"Event payload {p} must be a JSON object", code="invalid_payload")
    return data
