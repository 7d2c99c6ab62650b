"""
Off-Time Exclusion
Date ranges during which activities are left out of analytics and streaks

An off-time period belongs either to one activity type directly or to a tag,
in which case it covers every activity type carrying that tag.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import FrozenSet, Iterable, List, Sequence, Union
from zoneinfo import ZoneInfo

from .dates import day_to_date, local_days
from .models import Activity


@dataclass(frozen=True)
class ByType:
    activity_type_id: str

    def applies_to(self, type_id: str) -> bool:
        return type_id == self.activity_type_id


@dataclass(frozen=True)
class ByTag:
    tag_id: str
    member_type_ids: FrozenSet[str]

    def applies_to(self, type_id: str) -> bool:
        return type_id in self.member_type_ids


OffTimeScope = Union[ByType, ByTag]


def _calendar_date(value: Union[date, datetime]) -> date:
    """Off-time bounds are stored as UTC midnight markers for calendar dates"""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


@dataclass(frozen=True)
class OffTimePeriod:
    """Inclusive calendar range [start_date, end_date]"""
    start_date: date
    end_date: date
    scope: OffTimeScope

    def __post_init__(self):
        object.__setattr__(self, 'start_date', _calendar_date(self.start_date))
        object.__setattr__(self, 'end_date', _calendar_date(self.end_date))
        if self.end_date < self.start_date:
            raise ValueError(
                f"Off-time end {self.end_date} is before start {self.start_date}"
            )

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


def _applicable(type_id: str, periods: Sequence[OffTimePeriod]) -> List[OffTimePeriod]:
    return [period for period in periods if period.scope.applies_to(type_id)]


def is_in_off_time(type_id: str,
                   instant: datetime,
                   periods: Sequence[OffTimePeriod],
                   tz: ZoneInfo) -> bool:
    """True if the instant's local calendar date falls in an applicable period"""
    applicable = _applicable(type_id, periods)
    if not applicable:
        return False

    day = day_to_date(local_days([instant], tz)[0])
    return any(period.contains(day) for period in applicable)


def filter_off_time(activities: Iterable[Activity],
                    periods: Sequence[OffTimePeriod],
                    tz: ZoneInfo) -> List[Activity]:
    """
    Drop activities that happened during an off-time period for their type.

    Order of the remaining activities is preserved.
    """
    activities = list(activities)
    if not periods or not activities:
        return activities

    days = local_days([activity.date for activity in activities], tz)
    kept = []
    for activity, day in zip(activities, days):
        applicable = _applicable(activity.type_id, periods)
        calendar_day = day_to_date(day)
        if not any(period.contains(calendar_day) for period in applicable):
            kept.append(activity)
    return kept
