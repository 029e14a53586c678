"""Shared fixtures for gh-contrib tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest


@pytest.fixture
def since() -> datetime:
    return datetime(2025, 4, 15, tzinfo=timezone.utc)


@pytest.fixture
def today() -> datetime:
    return datetime(2025, 5, 15, tzinfo=timezone.utc)
