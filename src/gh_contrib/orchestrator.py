"""Command flows: fetch from GitHub, aggregate, render."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from rich.console import Console

from . import dates
from .aggregator import aggregate
from .config import Settings
from .github.client import GitHubClient, GitHubError
from .models import ContributionItem, ItemKind
from .query import build_query, build_web_url
from .renderer import format_graph, make_console, no_contributions_message, render_bodies, render_csv
from .summarizer import Summarizer, SummarizerError, split_entries

logger = logging.getLogger(__name__)

_KIND_NAMES = {
    ItemKind.PULL_REQUEST: "pull requests",
    ItemKind.ISSUE: "issues",
}


def _fetch(client: GitHubClient, kind: ItemKind, login: str, settings: Settings) -> list[ContributionItem]:
    query = build_query(kind, login, settings.org, settings.since)
    return client.search_items(kind, query)


def run_graph(
    client: GitHubClient,
    login: str | None,
    settings: Settings,
    today: datetime | None = None,
    console: Console | None = None,
    err_console: Console | None = None,
) -> int:
    """Print the weekly contribution graph for ``login``. Returns an exit code."""
    console = console or make_console()
    err_console = err_console or make_console(stderr=True)
    today = today or dates.utcnow()

    if not login:
        try:
            login = client.current_user()
        except GitHubError as exc:
            err_console.print(f"Error fetching user info: {exc}")
            return 1

    since = settings.since or dates.default_since(today)
    try:
        since_date = dates.parse_since(since)
    except ValueError:
        err_console.print(f"Invalid since date {since!r}, expected YYYY-MM-DD")
        return 2
    if since != settings.since:
        settings = replace(settings, since=since)

    try:
        prs = _fetch(client, ItemKind.PULL_REQUEST, login, settings)
    except GitHubError as exc:
        err_console.print(f"Error fetching pull requests for graph: {exc}")
        return 1
    try:
        issues = _fetch(client, ItemKind.ISSUE, login, settings)
    except GitHubError as exc:
        err_console.print(f"Error fetching issues for graph: {exc}")
        return 1

    if not prs and not issues:
        console.print(no_contributions_message(login, settings.org, since))
        return 0

    logger.debug("Aggregating %d pull requests and %d issues since %s", len(prs), len(issues), since)
    graph = aggregate(prs + issues, since_date, today)
    console.print(format_graph(graph))
    console.print()
    console.print(f"View issues in GitHub: {build_web_url(ItemKind.ISSUE, login, settings.org, since)}")
    return 0


def _run_listing(
    client: GitHubClient,
    kind: ItemKind,
    login: str,
    settings: Settings,
    console: Console | None,
    err_console: Console | None,
) -> int:
    console = console or make_console()
    err_console = err_console or make_console(stderr=True)
    name = _KIND_NAMES[kind]
    try:
        items = _fetch(client, kind, login, settings)
    except GitHubError as exc:
        err_console.print(f"Error fetching {name}: {exc}")
        return 1

    if not items:
        console.print(f"No {name} found for user '{login}' in the '{settings.org}' organization.")
        return 0
    if settings.body_only:
        render_bodies(items)
    else:
        render_csv(items)
    return 0


def run_pulls(
    client: GitHubClient,
    login: str,
    settings: Settings,
    console: Console | None = None,
    err_console: Console | None = None,
) -> int:
    return _run_listing(client, ItemKind.PULL_REQUEST, login, settings, console, err_console)


def run_issues(
    client: GitHubClient,
    login: str,
    settings: Settings,
    console: Console | None = None,
    err_console: Console | None = None,
) -> int:
    return _run_listing(client, ItemKind.ISSUE, login, settings, console, err_console)


def run_all(
    client: GitHubClient,
    login: str,
    settings: Settings,
    err_console: Console | None = None,
) -> int:
    """Pull requests followed by issues, as one CSV or one body stream."""
    err_console = err_console or make_console(stderr=True)
    items: list[ContributionItem] = []
    for kind in (ItemKind.PULL_REQUEST, ItemKind.ISSUE):
        try:
            items.extend(_fetch(client, kind, login, settings))
        except GitHubError as exc:
            err_console.print(f"Error fetching {_KIND_NAMES[kind]}: {exc}")
            return 1

    if settings.body_only:
        render_bodies(items)
    else:
        render_csv(items, with_type=True)
    return 0


def run_summarize(
    summarizer: Summarizer,
    text: str,
    console: Console | None = None,
    err_console: Console | None = None,
) -> int:
    """Summarize each entry in ``text``; failed entries are reported and skipped."""
    console = console or make_console()
    err_console = err_console or make_console(stderr=True)
    failures = 0
    for entry in split_entries(text):
        try:
            summary = summarizer.summarize(entry)
        except SummarizerError as exc:
            err_console.print(f"Error summarizing entry: {exc}")
            failures += 1
            continue
        console.print(summary)
    return 1 if failures else 0
