"""Canned GitHub API data for gh-contrib tests."""

from __future__ import annotations

from unittest.mock import MagicMock

from gh_contrib.github.client import GitHubClient, GitHubError


def api_item(
    number: int,
    state: str,
    created_at: str,
    closed_at: str | None = None,
    title: str | None = None,
    body: str = "",
) -> dict:
    return {
        "number": number,
        "title": title or f"Item {number}",
        "html_url": f"http://example.com/item/{number}",
        "state": state,
        "body": body,
        "created_at": created_at,
        "closed_at": closed_at,
        "repository_url": "https://api.github.com/repos/github/test-repo",
    }


class FakeClient(GitHubClient):
    """GitHubClient whose GET answers from canned search results keyed by a path marker."""

    def __init__(
        self,
        responses: dict[str, list[dict]] | None = None,
        error: Exception | None = None,
        login: str = "testuser",
    ) -> None:
        super().__init__("fake-token", session=MagicMock())
        self.responses = responses or {}
        self.error = error
        self.login = login
        self.calls: list[str] = []

    def get(self, path: str) -> dict:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        if path == "user":
            return {"login": self.login}
        for marker, items in self.responses.items():
            if marker in path:
                return {"total_count": len(items), "items": items}
        raise GitHubError(f"unexpected API call: {path}")
