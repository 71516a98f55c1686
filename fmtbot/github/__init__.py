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

from fmtbot.github.client import GitHubClient
from fmtbot.github.events import IssueCommentEvent, PullRequest, PushEvent, load_payload, ref_to_branch

__all__ = [
    "GitHubClient",
    "IssueCommentEvent",
    "PullRequest",
    "PushEvent",
    "load_payload",
    "ref_to_branch",
]
