"""
Engine Data Model
Read-only views of the rows the scoring engine consumes, and the records it emits
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from .seasons import SeasonalFrequency


class Status(str, Enum):
    """How due an activity type is"""
    NO_DATA = "no_data"
    AHEAD = "ahead"
    DUE_SOON = "due_soon"
    DUE_TODAY = "due_today"
    OVERDUE = "overdue"
    CRITICALLY_OVERDUE = "critically_overdue"


class Trend(str, Enum):
    """Last-3 average compared with the last-10 average"""
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class ActivityType:
    id: str
    name: str
    desired_frequency: SeasonalFrequency
    description: Optional[str] = None
    tag_id: Optional[str] = None

    def to_dict(self, desired_frequency: float) -> Dict[str, Any]:
        """Serialize with the frequency that applies to the current season"""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'desiredFrequency': desired_frequency,
            'seasonalFrequency': self.desired_frequency.as_dict(),
            'tagId': self.tag_id,
        }


@dataclass(frozen=True)
class Activity:
    """A logged activity; `date` is an absolute instant"""
    id: str
    type_id: str
    date: datetime


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass
class StreakResult:
    """Longest run of activities whose average spacing meets the target"""
    longest_streak: int = 0
    average_frequency: float = 0.0
    streak_start: Optional[date] = None
    streak_end: Optional[date] = None


@dataclass
class Recommendation:
    activity_type: ActivityType
    season_frequency: float
    status: Status
    priority_score: float
    trend: Trend
    last_performed_date: Optional[datetime] = None
    days_since_last_activity: Optional[int] = None
    difference: Optional[float] = None
    average_frequency_last3: Optional[float] = None
    average_frequency_last10: Optional[float] = None
    current_streak: int = 0
    current_streak_start: Optional[date] = None
    first_activity_date: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'activityType': self.activity_type.to_dict(self.season_frequency),
            'lastPerformedDate': _iso(self.last_performed_date),
            'daysSinceLastActivity': self.days_since_last_activity,
            'averageFrequencyLast3': self.average_frequency_last3,
            'averageFrequencyLast10': self.average_frequency_last10,
            'trend': self.trend.value,
            'difference': self.difference,
            'status': self.status.value,
            'priorityScore': self.priority_score,
            'currentStreak': self.current_streak,
            'currentStreakStart': _iso(self.current_streak_start),
            'firstActivityDate': _iso(self.first_activity_date),
        }


@dataclass
class TypeAnalytics:
    activity_type: ActivityType
    desired_frequency: float
    total_avg_frequency: float
    number_of_activities: int
    excluded_activities: int = 0
    date_of_first_activity: Optional[datetime] = None
    streak: StreakResult = field(default_factory=StreakResult)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'activityType': self.activity_type.name,
            'desiredFrequency': self.desired_frequency,
            'totalAvgFrequency': self.total_avg_frequency,
            'dateOfFirstActivity': _iso(self.date_of_first_activity),
            'numberOfActivities': self.number_of_activities,
            'excludedActivities': self.excluded_activities,
        }

    def streak_dict(self) -> Dict[str, Any]:
        return {
            'activityType': self.activity_type.name,
            'longestStreak': self.streak.longest_streak,
            'averageFrequency': self.streak.average_frequency,
            'streakStart': _iso(self.streak.streak_start),
            'streakEnd': _iso(self.streak.streak_end),
        }
