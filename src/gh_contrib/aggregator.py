"""Aggregate contribution items into gap-filled weekly buckets."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from . import dates
from .models import ContributionGraph, ContributionItem, ContributionTally, ItemKind, WeekBucket

logger = logging.getLogger(__name__)


def _make_bucket(index: int, since: datetime, today: datetime) -> WeekBucket:
    start = dates.week_start(index, since)
    return WeekBucket(index=index, start=start, end=dates.week_end(start, today))


def _ensure_bucket(graph: ContributionGraph, index: int) -> ContributionTally:
    """Return the tally for ``index``, creating any missing buckets up to it."""
    if index not in graph.tallies:
        logger.debug("Week index %d is past the report range, extending buckets", index)
        for missing in range(len(graph.buckets), index + 1):
            if missing in graph.tallies:
                continue
            graph.buckets.append(_make_bucket(missing, graph.since, graph.today))
            graph.tallies[missing] = ContributionTally()
    return graph.tallies[index]


def aggregate(
    items: Iterable[ContributionItem],
    since: datetime,
    today: datetime,
) -> ContributionGraph:
    """Tally items into one bucket per week from ``since`` through ``today``.

    Every week in range gets a bucket even when nothing landed in it. Items
    dated after the last pre-built week extend the range instead of being
    dropped, and the extra weeks are rendered like any other.
    """
    graph = ContributionGraph(since=since, today=today)
    for index in range(dates.total_weeks(since, today)):
        graph.buckets.append(_make_bucket(index, since, today))
        graph.tallies[index] = ContributionTally()

    for item in items:
        if item.kind is ItemKind.PULL_REQUEST:
            graph.pr_count += 1
        else:
            graph.issue_count += 1
        moment = item.effective_date(today)
        index = dates.week_index(moment, since)
        _ensure_bucket(graph, index).add(item.kind, item.state)

    graph.buckets.sort(key=lambda bucket: bucket.start)
    return graph
