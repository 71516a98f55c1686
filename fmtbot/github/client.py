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

from typing import Any

import requests

from fmtbot.core.errors import GitHubApiError, PayloadError
from fmtbot.github.events import PullRequest

USER_AGENT = "fmtbot"
DEFAULT_TIMEOUT = 30.0


class GitHubClient:
    """
    Minimal authenticated GitHub REST client.

    Only the two calls the bot needs: fetch a pull request and post an
    issue comment.
    """

    def __init__(
        self,
        token: str,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"token {token}",
                "User-Agent": USER_AGENT,
                "Accept": "application/vnd.github+json",
            }
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise GitHubApiError(
                f"{method} {url} failed: {e}",
                code="github_unreachable",
                details={"url": url},
            ) from e

        if not response.ok:
            raise GitHubApiError(
                f"{method} {url} returned {response.status_code}: {response.text}",
                code="github_http_error",
                details={"url": url, "status": response.status_code},
            )
        return response

    def get_pull_request(self, url: str) -> PullRequest:
        response = self._request("GET", url)
        try:
            data = response.json()
        except ValueError as e:
            raise PayloadError(f"Pull request response from {url} is not JSON", code="invalid_payload") from e
        return PullRequest.from_dict(data)

    def create_comment(self, comments_url: str, body: str) -> None:
        self._request("POST", comments_url, json={"body": body})
