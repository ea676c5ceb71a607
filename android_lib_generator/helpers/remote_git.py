"""Hosted Git (GitHub REST API) client used when forking a library.

Authentication:
    GITREMOTE_TOKEN: personal access token (preferred over --git-remote-token)
    or username/password collected by the prompts (HTTP basic auth)

Usage:
    client = GitRemoteClient(token="...")
    orgs = client.list_organizations()
"""

from __future__ import annotations

import os
from typing import Any, cast

import httpx

from android_lib_generator.core.errors import RemoteAuthError, RemoteGitError
from android_lib_generator.core.settings import TOKEN_ENV_VAR, get_git_api_url

_HTTP_OK_MIN = 200
_HTTP_OK_MAX = 299
_HTTP_UNAUTHORIZED = 401


def resolve_remote_token(option_token: str | None) -> str | None:
    """Token from the environment, falling back to the command line option."""
    token = os.environ.get(TOKEN_ENV_VAR) or option_token
    return token or None


class GitRemoteClient:
    """Minimal client for the endpoints the generator needs."""

    def __init__(
        self,
        token: str | None = None,
        username: str | None = None,
        password: str | None = None,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 30.0,
    ):
        """Initialize the client.

        Args:
            token: Personal access token
            username: Account name for basic auth (when no token)
            password: Account password for basic auth
            base_url: API root (default: ALIB_GIT_API_URL or api.github.com)
            transport: Optional httpx transport (tests)
            timeout: Request timeout in seconds
        """
        self.base_url = (base_url or get_git_api_url()).rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._auth: httpx.BasicAuth | None = None
        self._headers = {
            "Accept": "application/vnd.github.v3+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self._headers["Authorization"] = f"token {token}"
        elif username and password:
            self._auth = httpx.BasicAuth(username, password)

    @property
    def authenticated(self) -> bool:
        return "Authorization" in self._headers or self._auth is not None

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(
                timeout=self.timeout,
                transport=self._transport,
                auth=self._auth,
            ) as client:
                response = client.get(url, headers=self._headers)
        except httpx.RequestError as exc:
            raise RemoteGitError(f"Failed to connect to {self.base_url}: {exc}") from exc

        if response.status_code == _HTTP_UNAUTHORIZED:
            raise RemoteAuthError(
                "Git remote authentication failed. "
                + f"Check your credentials or set {TOKEN_ENV_VAR}."
            )
        if not _HTTP_OK_MIN <= response.status_code <= _HTTP_OK_MAX:
            raise RemoteGitError(
                f"Git remote API error: {response.status_code} - {response.text}"
            )
        return response.json()

    def list_organizations(self) -> list[str]:
        """Logins of the organizations the authenticated user belongs to."""
        data = self._get("/user/orgs")
        if not isinstance(data, list):
            raise RemoteGitError("Unexpected response for /user/orgs")
        logins: list[str] = []
        for org in cast(list[object], data):
            if isinstance(org, dict) and "login" in org:
                logins.append(str(cast(dict[str, object], org)["login"]))
        return logins
