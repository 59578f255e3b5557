"""Tests for the GitHub client with a stub HTTP session."""

import sys
import unittest
from pathlib import Path

import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from GhpConnector.config import GitHubConfig
from GhpConnector.errors import (
    AuthenticationError,
    ConfigurationError,
    GitHubAPIError,
    NetworkError,
    NotFoundError,
)
from GhpConnector.github import GitHubClient


class _StubResponse:
    def __init__(self, status_code: int = 200, payload=None, headers=None, reason: str = "OK") -> None:
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}
        self.reason = reason
        self.url = "https://api.github.com/stub"
        self.content = b"" if payload is None else b"x"

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _StubSession:
    def __init__(self, *, response: _StubResponse | None = None, error: Exception | None = None) -> None:
        self.headers: dict = {}
        self.calls: list[dict] = []
        self.closed = False
        self._response = response or _StubResponse(payload=[])
        self._error = error

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "params": params, "json": json, "timeout": timeout})
        if self._error is not None:
            raise self._error
        return self._response

    def close(self) -> None:
        self.closed = True


def _client(session: _StubSession, **kwargs) -> GitHubClient:
    options = {"owner": "octo", "repo": "hello", "session": session}
    options.update(kwargs)
    return GitHubClient(**options)


class TestGitHubClientRequests(unittest.TestCase):
    def test_requires_owner_and_repo(self) -> None:
        with self.assertRaisesRegex(ConfigurationError, "owner and name are required"):
            GitHubClient(owner="octo", repo=None, session=_StubSession())

    def test_sets_headers_and_token(self) -> None:
        session = _StubSession()
        _client(session, token="secret")

        self.assertEqual(session.headers["Authorization"], "Bearer secret")
        self.assertEqual(session.headers["Accept"], "application/vnd.github+json")
        self.assertIn("X-GitHub-Api-Version", session.headers)

    def test_no_token_no_authorization(self) -> None:
        session = _StubSession()
        _client(session)
        self.assertNotIn("Authorization", session.headers)

    def test_list_issues(self) -> None:
        session = _StubSession(response=_StubResponse(payload=[{"number": 1}]))
        client = _client(session, base_url="https://ghe.example.com/api/v3/", timeout=5)

        issues = client.list_issues({"state": "open"})

        self.assertEqual(issues, [{"number": 1}])
        call = session.calls[0]
        self.assertEqual(call["method"], "GET")
        self.assertEqual(call["url"], "https://ghe.example.com/api/v3/repos/octo/hello/issues")
        self.assertEqual(call["params"], {"state": "open"})
        self.assertEqual(call["timeout"], 5)

    def test_create_and_update_send_json(self) -> None:
        session = _StubSession(response=_StubResponse(status_code=201, payload={"number": 9}))
        client = _client(session)

        self.assertEqual(client.create_issue({"title": "t"}), {"number": 9})
        client.update_issue(9, {"state": "closed"})

        self.assertEqual(session.calls[0]["method"], "POST")
        self.assertEqual(session.calls[0]["json"], {"title": "t"})
        self.assertEqual(session.calls[1]["method"], "PATCH")
        self.assertTrue(session.calls[1]["url"].endswith("/repos/octo/hello/issues/9"))

    def test_comments_and_repository_paths(self) -> None:
        session = _StubSession(response=_StubResponse(payload=[]))
        client = _client(session)

        client.list_issue_comments(3)
        client.get_repository()

        self.assertTrue(session.calls[0]["url"].endswith("/repos/octo/hello/issues/3/comments"))
        self.assertTrue(session.calls[1]["url"].endswith("/repos/octo/hello"))

    def test_empty_body_returns_none(self) -> None:
        session = _StubSession(response=_StubResponse(status_code=204))
        self.assertIsNone(_client(session).get_issue(1))

    def test_context_manager_closes_session(self) -> None:
        session = _StubSession()
        with _client(session):
            pass
        self.assertTrue(session.closed)

    def test_from_config(self) -> None:
        session = _StubSession()
        config = GitHubConfig(owner="o", repo="r", token="t", base_url="http://localhost", timeout=2.0)

        client = GitHubClient.from_config(config, session=session)

        self.assertEqual(client.repo_path, "/repos/o/r")
        self.assertEqual(client.base_url, "http://localhost")
        self.assertEqual(session.headers["Authorization"], "Bearer t")


class TestGitHubClientErrors(unittest.TestCase):
    def _call(self, response: _StubResponse) -> None:
        _client(_StubSession(response=response)).get_issue(1)

    def test_unauthorized(self) -> None:
        with self.assertRaisesRegex(AuthenticationError, "Bad credentials"):
            self._call(_StubResponse(status_code=401, payload={"message": "Bad credentials"}))

    def test_not_found(self) -> None:
        with self.assertRaisesRegex(NotFoundError, "Not Found"):
            self._call(_StubResponse(status_code=404, payload={"message": "Not Found"}))

    def test_rate_limited(self) -> None:
        response = _StubResponse(
            status_code=403,
            payload={"message": "API rate limit exceeded"},
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )
        with self.assertRaisesRegex(GitHubAPIError, "rate limit exceeded \\(resets at epoch 1700000000\\)") as ctx:
            self._call(response)
        self.assertEqual(ctx.exception.status_code, 403)

    def test_forbidden_without_rate_limit(self) -> None:
        response = _StubResponse(status_code=403, payload={"message": "Forbidden"}, headers={"X-RateLimit-Remaining": "10"})
        with self.assertRaisesRegex(GitHubAPIError, "GitHub API error 403: Forbidden"):
            self._call(response)

    def test_other_errors_carry_payload(self) -> None:
        payload = {"message": "Validation Failed", "errors": [{"field": "title"}]}
        with self.assertRaises(GitHubAPIError) as ctx:
            self._call(_StubResponse(status_code=422, payload=payload))
        self.assertEqual(ctx.exception.response, payload)
        self.assertEqual(ctx.exception.status_code, 422)

    def test_non_json_error_body(self) -> None:
        with self.assertRaisesRegex(GitHubAPIError, "GitHub API error 502: Bad Gateway"):
            self._call(_StubResponse(status_code=502, reason="Bad Gateway"))

    def test_timeout(self) -> None:
        session = _StubSession(error=requests.Timeout("slow"))
        with self.assertRaisesRegex(NetworkError, "timed out"):
            _client(session, timeout=3).get_issue(1)

    def test_connection_error(self) -> None:
        session = _StubSession(error=requests.ConnectionError("refused"))
        with self.assertRaisesRegex(NetworkError, "Could not connect"):
            _client(session).get_issue(1)


if __name__ == "__main__":
    unittest.main()
