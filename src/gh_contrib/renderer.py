"""Text renderers for contribution graphs, CSV listings and raw bodies."""

from __future__ import annotations

import csv
import io

from rich.console import Console

from . import dates
from .models import ContributionGraph, ContributionItem, ContributionTally, ItemKind, WeekBucket

CLOSED_PR = "•"
OPEN_PR = "○"
CLOSED_ISSUE = "■"
OPEN_ISSUE = "□"

ENTRY_DELIMITER = "---END-OF-ENTRY---"
START_OF_PR = "---START-OF-PR---"
END_OF_PR = "---END-OF-PR---"
START_OF_ISSUE = "---START-OF-ISSUE---"
END_OF_ISSUE = "---END-OF-ISSUE---"

_KIND_LABELS = {
    ItemKind.PULL_REQUEST: "Pull Request",
    ItemKind.ISSUE: "Issue",
}


def make_console(stderr: bool = False) -> Console:
    """Plain console: no markup, emoji codes, highlighting or wrapping."""
    return Console(
        stderr=stderr,
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


def format_week(bucket: WeekBucket, tally: ContributionTally) -> str:
    glyphs = (
        CLOSED_PR * tally.closed_prs
        + OPEN_PR * tally.open_prs
        + CLOSED_ISSUE * tally.closed_issues
        + OPEN_ISSUE * tally.open_issues
    )
    return f"{bucket.label}: {glyphs}"


def format_legend(totals: ContributionTally, pr_count: int, issue_count: int) -> str:
    """Legend entries only for categories that were fetched and appear in the graph."""
    entries = []
    if pr_count > 0:
        if totals.closed_prs > 0:
            entries.append(f"{CLOSED_PR} = Closed PR")
        if totals.open_prs > 0:
            entries.append(f"{OPEN_PR} = Open PR")
    if issue_count > 0:
        if totals.closed_issues > 0:
            entries.append(f"{CLOSED_ISSUE} = Closed Issue")
        if totals.open_issues > 0:
            entries.append(f"{OPEN_ISSUE} = Open Issue")
    return "  ".join(entries)


def format_summary(totals: ContributionTally, days: int) -> list[str]:
    average = totals.total / days if days > 0 else 0.0
    return [
        f"Total Contributions: {totals.total}",
        f"PRs: {totals.prs} total ({totals.closed_prs} closed, {totals.open_prs} open)",
        f"Issues: {totals.issues} total ({totals.closed_issues} closed, {totals.open_issues} open)",
        f"Average: {average:.2f} contributions per day over {days} days",
    ]


def format_graph(graph: ContributionGraph) -> str:
    """Render the weekly histogram, legend and summary as plain text."""
    days = dates.days_active(graph.since, graph.today)
    lines = []
    for bucket in graph.buckets:
        lines.append(format_week(bucket, graph.tallies[bucket.index]))
    totals = graph.totals
    lines.append("")
    lines.append(f"Legend: {format_legend(totals, graph.pr_count, graph.issue_count)}")
    lines.append("")
    lines.extend(format_summary(totals, days))
    return "\n".join(lines)


def no_contributions_message(login: str, org: str, since: str) -> str:
    return f"No contributions found for user '{login}' in the '{org}' organization since {since}."


def render_csv(items: list[ContributionItem], with_type: bool = False) -> None:
    """Print items as CSV; the URL column carries a trailing space for terminal clicking."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    header = ["URL", "Title", "State"]
    writer.writerow(["Type", *header] if with_type else header)
    for item in items:
        row = [item.url + " ", item.title, item.state.value]
        writer.writerow([_KIND_LABELS[item.kind], *row] if with_type else row)
    print(output.getvalue(), end="")


def render_bodies(items: list[ContributionItem]) -> None:
    """Print item bodies wrapped in the markers ``summarize`` splits on."""
    for item in items:
        if item.kind is ItemKind.PULL_REQUEST:
            start, end = START_OF_PR, END_OF_PR
        else:
            start, end = START_OF_ISSUE, END_OF_ISSUE
        print(f"{start}\n{item.title} #{item.number}\n{item.body}\n{end}\n{ENTRY_DELIMITER}")
