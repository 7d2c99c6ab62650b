"""Pytest configuration and shared fixtures.

Engine tests pin "now" so every calendar computation is deterministic.
Activities are built from "days ago" offsets at local noon in the user's
timezone, then stored as UTC instants like the database does.
"""

import itertools
from datetime import datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from services import Activity, ActivityType, SeasonalFrequency

NEW_YORK = ZoneInfo("America/New_York")

# Saturday 2025-03-15 13:00 in New York (after the DST switch on March 9)
FIXED_NOW = datetime(2025, 3, 15, 17, 0, tzinfo=timezone.utc)

_ids = itertools.count(1)


@pytest.fixture
def tz():
    return NEW_YORK


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def make_type():
    """Factory for activity types with a uniform or seasonal frequency."""

    def _make(name="Run", frequency=7.0, type_id=None, tag_id=None):
        if not isinstance(frequency, SeasonalFrequency):
            frequency = SeasonalFrequency.uniform(frequency)
        return ActivityType(
            id=type_id or f"type-{name.lower()}",
            name=name,
            desired_frequency=frequency,
            tag_id=tag_id,
        )

    return _make


@pytest.fixture
def make_activities():
    """Factory: activities N local days before `now`, most recent first."""

    def _make(type_id, days_ago, now=FIXED_NOW, tz=NEW_YORK, hour=12):
        today = now.astimezone(tz).date()
        activities = []
        for offset in sorted(days_ago):
            local = datetime.combine(today - timedelta(days=offset), time(hour), tzinfo=tz)
            activities.append(Activity(
                id=f"activity-{next(_ids)}",
                type_id=type_id,
                date=local.astimezone(timezone.utc),
            ))
        return activities

    return _make
