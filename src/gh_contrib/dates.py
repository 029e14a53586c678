"""Date parsing and week bucketing helpers."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_SINCE_DAYS = 30

HOURS_PER_DAY = 24
HOURS_PER_WEEK = HOURS_PER_DAY * 7

_RELATIVE_RE = re.compile(r"^(\d+)([dwmy])$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp, returning None when it is empty or malformed."""
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_since(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD`` since-date as midnight UTC.

    Raises ValueError for anything else.
    """
    parsed = datetime.strptime(value, DATE_FORMAT)
    return parsed.replace(tzinfo=timezone.utc)


def default_since(now: datetime | None = None) -> str:
    now = now or utcnow()
    return (now - timedelta(days=DEFAULT_SINCE_DAYS)).strftime(DATE_FORMAT)


def parse_relative_date(value: str, now: datetime | None = None) -> str | None:
    """Convert relative date strings like '7d', '2w', '3m', '1y' to YYYY-MM-DD."""
    match = _RELATIVE_RE.match(value.strip()) if value else None
    if not match:
        return None
    amount = int(match.group(1))
    unit = match.group(2)
    now = now or utcnow()
    if unit == "d":
        delta = timedelta(days=amount)
    elif unit == "w":
        delta = timedelta(weeks=amount)
    elif unit == "m":
        delta = timedelta(days=amount * 30)
    else:
        delta = timedelta(days=amount * 365)
    return (now - delta).strftime(DATE_FORMAT)


def resolve_effective_date(
    closed_at: str | None,
    created_at: str | None,
    now: datetime,
) -> datetime:
    """Pick the date an item is bucketed by: closed_at, then created_at, then now.

    Each step is tried on its own, so an unparseable ``closed_at`` falls
    through to ``created_at`` rather than straight to ``now``.
    """
    closed = parse_timestamp(closed_at)
    if closed is not None:
        return closed
    if closed_at:
        logger.debug("Unparseable closed_at %r, falling back to created_at", closed_at)
    created = parse_timestamp(created_at)
    if created is not None:
        return created
    logger.debug("No usable date (closed_at=%r, created_at=%r), using now", closed_at, created_at)
    return now


def hours_between(later: datetime, earlier: datetime) -> int:
    return int((later - earlier).total_seconds() // 3600)


def week_index(moment: datetime, since: datetime) -> int:
    """Zero-based week offset of ``moment`` from ``since``, clamped at 0."""
    return max(0, hours_between(moment, since) // HOURS_PER_WEEK)


def total_weeks(since: datetime, today: datetime) -> int:
    return max(0, hours_between(today, since) // HOURS_PER_WEEK) + 1


def days_active(since: datetime, today: datetime) -> int:
    return max(0, hours_between(today, since) // HOURS_PER_DAY) + 1


def week_start(index: int, since: datetime) -> datetime:
    return since + timedelta(days=7 * index)


def week_end(start: datetime, today: datetime) -> datetime:
    """Last day of the week starting at ``start``, never past ``today``.

    Weeks that begin after ``today`` keep their start as their end.
    """
    end = start + timedelta(days=6)
    if end > today:
        end = max(start, today)
    return end


def week_label(index: int, start: date, end: date) -> str:
    return f"Week {index + 1:2d} ({start:%b %d} - {end:%b %d})"
