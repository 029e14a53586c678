"""Search query and web URL construction."""

from __future__ import annotations

from urllib.parse import quote_plus

from .models import ItemKind

SEARCH_ENDPOINT = "search/issues"
WEB_SEARCH_URL = "https://github.com/issues"


def _raw_query(kind: ItemKind | str, author: str, org: str, since: str, sort: str) -> str:
    kind_value = kind.value if isinstance(kind, ItemKind) else kind
    query = f"{kind_value} org:{org} author:{author} sort:{sort}"
    if since:
        query += f" created:>{since}"
    return query


def build_query(kind: ItemKind | str, author: str, org: str, since: str = "") -> str:
    """Build the escaped search query for items ``author`` created in ``org``.

    The whole string is escaped at once, after the qualifiers are joined.

    >>> build_query("is:pr", "testuser", "github", "2025-04-15")
    'is%3Apr+org%3Agithub+author%3Atestuser+sort%3Acreated-desc+created%3A%3E2025-04-15'
    """
    return quote_plus(_raw_query(kind, author, org, since, "created-desc"))


def build_web_url(kind: ItemKind | str, author: str, org: str, since: str = "") -> str:
    """Build the github.com search URL matching ``build_query``, sorted by last update."""
    return f"{WEB_SEARCH_URL}?q={quote_plus(_raw_query(kind, author, org, since, 'updated-desc'))}"


def search_path(query: str) -> str:
    return f"{SEARCH_ENDPOINT}?q={query}"


def paginated_path(path: str, page: int, per_page: int) -> str:
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}page={page}&per_page={per_page}"
