"""GitHub API access."""

from .auth import GhCliTokenFetcher, TokenError, resolve_token
from .client import GitHubClient, GitHubError

__all__ = ["GhCliTokenFetcher", "GitHubClient", "GitHubError", "TokenError", "resolve_token"]
