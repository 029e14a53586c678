"""Resolve a GitHub token."""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "  - Token:"


class TokenError(Exception):
    """No GitHub token could be found."""


class GhCliTokenFetcher:
    """Reads the token the GitHub CLI is logged in with."""

    def fetch_token(self) -> str:
        try:
            proc = subprocess.run(
                ["gh", "auth", "status", "--show-token"],
                capture_output=True,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise TokenError(f"error running gh auth status: {exc}") from exc
        # Older gh versions print the status report on stderr.
        for line in (proc.stdout + proc.stderr).splitlines():
            if line.startswith(TOKEN_PREFIX):
                return line[len(TOKEN_PREFIX):].strip()
        raise TokenError("github token not found in auth status output")


def resolve_token(token: str | None = None, fetcher: GhCliTokenFetcher | None = None) -> str:
    """Explicit token, then $GH_TOKEN, then ``gh auth status``."""
    if token:
        return token
    env_token = os.environ.get("GH_TOKEN")
    if env_token:
        return env_token
    logger.debug("No token given, asking the gh CLI")
    return (fetcher or GhCliTokenFetcher()).fetch_token()
