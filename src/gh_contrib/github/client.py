"""Synchronous GitHub REST client."""

from __future__ import annotations

import logging

import requests

from ..models import ContributionItem, ItemKind
from ..query import paginated_path, search_path

logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"
PER_PAGE = 100
MAX_PAGES = 10
REQUEST_TIMEOUT = 30


class GitHubError(Exception):
    """A GitHub API request failed."""


class GitHubClient:
    """Thin wrapper over ``requests`` for the endpoints gh-contrib needs."""

    def __init__(
        self,
        token: str,
        base_url: str = API_BASE,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "User-Agent": "gh-contrib",
        })

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get(self, path: str) -> dict:
        """GET ``path`` relative to the API base and decode the JSON body."""
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = self._session.get(url, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise GitHubError(f"request to {url} failed: {exc}") from exc
        if response.status_code >= 400:
            message = response.text.strip()
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("message"):
                message = body["message"]
            raise GitHubError(f"HTTP {response.status_code} from {url}: {message}")
        try:
            return response.json()
        except ValueError as exc:
            raise GitHubError(f"invalid JSON from {url}: {exc}") from exc

    def current_user(self) -> str:
        return self.get("user").get("login", "")

    def fetch_all(self, path: str, max_pages: int = MAX_PAGES) -> list[dict]:
        """Collect ``items`` from every page of a search endpoint.

        Stops at the first short page. Stops after ``max_pages`` pages with a
        warning; items gathered so far are still returned.
        """
        items: list[dict] = []
        page = 1
        while page <= max_pages:
            page_path = paginated_path(path, page, PER_PAGE)
            logger.debug("Fetching page %d: %s", page, page_path)
            try:
                response = self.get(page_path)
            except GitHubError as exc:
                raise GitHubError(f"error fetching page {page} from {page_path}: {exc}") from exc
            page_items = response.get("items") or []
            logger.debug(
                "Page %d: found %d items (total_count: %s)",
                page, len(page_items), response.get("total_count"),
            )
            items.extend(page_items)
            if len(page_items) < PER_PAGE:
                break
            page += 1
        if page > max_pages:
            logger.warning("Reached maximum page limit (%d) for URL: %s", max_pages, path)
        return items

    def search_items(self, kind: ItemKind, query: str) -> list[ContributionItem]:
        path = search_path(query)
        logger.debug("Calling GitHub API with URL: %s", path)
        return [ContributionItem.from_api(kind, payload) for payload in self.fetch_all(path)]
