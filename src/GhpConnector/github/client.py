"""GitHub REST API client for repository issues."""

from __future__ import annotations

from typing import Any, Mapping

import requests

from GhpConnector import __version__
from GhpConnector.config import GitHubConfig
from GhpConnector.errors import (
    AuthenticationError,
    ConfigurationError,
    GitHubAPIError,
    NetworkError,
    NotFoundError,
)
from GhpConnector.utils.log import log

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
API_VERSION = "2022-11-28"

HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": API_VERSION,
    "User-Agent": f"ghp-connector/{__version__}",
}


class GitHubClient:
    """Low-level HTTP client for one repository's issues.

    Each call maps unsuccessful responses to the `GhpError` hierarchy and
    returns decoded JSON. Requests are not retried.
    """

    def __init__(
        self,
        *,
        owner: str | None,
        repo: str | None,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            token: Optional personal access token.
            base_url: API root, e.g. a GitHub Enterprise ``/api/v3`` URL.
            timeout: Request timeout in seconds.
            session: Session to use instead of a new one.

        Raises:
            ConfigurationError: If owner or repo is missing.
        """
        if not owner or not repo:
            raise ConfigurationError(
                "Repository owner and name are required (use --owner/--repo, "
                "GITHUB_OWNER/GITHUB_REPO or the github section of the config file)"
            )
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(HEADERS)
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    @classmethod
    def from_config(cls, config: GitHubConfig, *, session: requests.Session | None = None) -> "GitHubClient":
        """Build a client from the ``github`` config section."""
        return cls(
            owner=config.owner,
            repo=config.repo,
            token=config.token,
            base_url=config.base_url,
            timeout=config.timeout,
            session=session,
        )

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    def list_issues(self, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """List repository issues.

        Args:
            params: Query parameters, typically `IssueQuery.to_params()`.

        Returns:
            Issue mappings as returned by the API.
        """
        payload = self._request("GET", f"{self.repo_path}/issues", params=params)
        return payload if isinstance(payload, list) else []

    def get_issue(self, number: int) -> dict[str, Any]:
        return self._request("GET", f"{self.repo_path}/issues/{number}")

    def list_issue_comments(self, number: int) -> list[dict[str, Any]]:
        payload = self._request("GET", f"{self.repo_path}/issues/{number}/comments")
        return payload if isinstance(payload, list) else []

    def create_issue(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("POST", f"{self.repo_path}/issues", json=dict(payload))

    def update_issue(self, number: int, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("PATCH", f"{self.repo_path}/issues/{number}", json=dict(payload))

    def get_repository(self) -> dict[str, Any]:
        return self._request("GET", self.repo_path)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send one request and decode the response.

        Raises:
            NetworkError: On timeouts and connection failures.
            AuthenticationError: On 401.
            NotFoundError: On 404.
            GitHubAPIError: On any other unsuccessful status, including an
                exhausted rate limit.
        """
        url = f"{self.base_url}{path}"
        log.debug("GitHub %s %s params=%s", method, url, dict(params or {}))
        try:
            response = self._session.request(method, url, params=params, json=json, timeout=self.timeout)
        except requests.Timeout as e:
            raise NetworkError(f"Request to GitHub timed out after {self.timeout:g}s") from e
        except requests.ConnectionError as e:
            raise NetworkError(f"Could not connect to {self.base_url}: {e}") from e

        if response.status_code >= 400:
            raise _error_for(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()


def _error_for(response: requests.Response) -> Exception:
    """Map an unsuccessful response to the matching error."""
    payload = _safe_json(response)
    detail = payload.get("message") if isinstance(payload, dict) else None
    status = response.status_code

    if status == 401:
        return AuthenticationError(f"GitHub authentication failed: {detail or 'bad credentials'}")
    if status == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
        reset = response.headers.get("X-RateLimit-Reset")
        suffix = f" (resets at epoch {reset})" if reset else ""
        return GitHubAPIError(f"GitHub API rate limit exceeded{suffix}", payload, status)
    if status == 404:
        return NotFoundError(f"Not found: {detail or response.url}")
    return GitHubAPIError(f"GitHub API error {status}: {detail or response.reason}", payload, status)


def _safe_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
