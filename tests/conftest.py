"""Pytest configuration and fixtures for Crontide tests."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

# 2025-09-28T12:00:00Z, a Sunday
REFERENCE_TS = 1759060800


@pytest.fixture
def reference():
    """Fixed UTC reference instant used across search tests."""
    return datetime(2025, 9, 28, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def reference_ts():
    """The reference instant as epoch seconds."""
    return REFERENCE_TS


@pytest.fixture
def utc():
    return ZoneInfo("UTC")


@pytest.fixture
def new_york():
    """A zone with DST transitions."""
    return ZoneInfo("America/New_York")


@pytest.fixture
def trace_events():
    """Collects (event, details) pairs from a search trace hook."""
    events = []

    def hook(event, details):
        events.append((event, details))

    hook.events = events
    return hook
