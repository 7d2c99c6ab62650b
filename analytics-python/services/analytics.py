"""
Frequency Analytics Service
Lifetime averages and streak detection over the full activity history

A streak is a window between two logged activities whose mean spacing is
within the activity type's desired frequency. Windows are bounded by activity
dates only; the gap after the last activity never counts.
"""

from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

import numpy as np

from logger import get_logger

from .dates import day_to_date, local_today, round_half_up
from .history import history_frame
from .models import Activity, ActivityType, StreakResult, TypeAnalytics
from .off_time import OffTimePeriod, filter_off_time

logger = get_logger(__name__)


def lifetime_average(days_asc: np.ndarray) -> float:
    """Mean interval from first to last activity, 0.0 below two activities"""
    if len(days_asc) < 2:
        return 0.0
    intervals = np.diff(days_asc)
    return round_half_up(float(intervals.mean()))


def longest_streak_window(days_asc: np.ndarray,
                          desired_frequency: float) -> Optional[Tuple[int, int]]:
    """
    Find the (start, end) indices of the longest qualifying window.

    Every start is paired with every later end, O(n^2). The mean of the
    consecutive intervals inside [start, end] is (day[end] - day[start]) /
    (end - start). Only a strictly longer window replaces the current best,
    so ties go to the earliest start and then the earliest end.
    """
    n = len(days_asc)
    longest = 0
    window = None

    for start in range(n - 1):
        spans = days_asc[start + 1:] - days_asc[start]
        interval_counts = np.arange(1, n - start)
        eligible = np.where(spans / interval_counts <= desired_frequency, spans, -1)

        offset = int(np.argmax(eligible))
        span = int(eligible[offset])
        if span > longest:
            longest = span
            window = (start, start + 1 + offset)

    return window


def current_streak_start(days_asc: np.ndarray,
                         desired_frequency: float) -> Optional[int]:
    """Earliest start index of a qualifying window ending at the last activity"""
    n = len(days_asc)
    if n < 2:
        return None

    end = n - 1
    spans = days_asc[end] - days_asc[:end]
    interval_counts = end - np.arange(end)
    eligible = np.where(spans / interval_counts <= desired_frequency, spans, -1)

    start = int(np.argmax(eligible))
    if eligible[start] <= 0:
        return None
    return start


def find_longest_streak(days_asc: np.ndarray, desired_frequency: float) -> StreakResult:
    window = longest_streak_window(days_asc, desired_frequency)
    if window is None:
        return StreakResult()

    start, end = window
    span = int(days_asc[end] - days_asc[start])
    return StreakResult(
        longest_streak=span,
        average_frequency=round_half_up(span / (end - start)),
        streak_start=day_to_date(days_asc[start]),
        streak_end=day_to_date(days_asc[end]),
    )


class FrequencyAnalyzer:
    """
    Per-type analytics for one user.

    Activities inside an applicable off-time period are removed before any
    average or streak is computed.
    """

    def __init__(self,
                 tz: ZoneInfo,
                 off_times: Sequence[OffTimePeriod] = (),
                 now: Optional[datetime] = None):
        self.tz = tz
        self.off_times = list(off_times)
        self.now = now or datetime.now(timezone.utc)
        self.today = day_to_date(local_today(tz, self.now))

    def analyze_type(self,
                     activity_type: ActivityType,
                     activities: Sequence[Activity]) -> TypeAnalytics:
        kept = filter_off_time(activities, self.off_times, self.tz)
        desired = activity_type.desired_frequency.for_date(self.today)

        df = history_frame(kept, self.tz, ascending=True)
        days = df['day'].to_numpy(dtype=np.int64)

        return TypeAnalytics(
            activity_type=activity_type,
            desired_frequency=desired,
            total_avg_frequency=lifetime_average(days),
            number_of_activities=len(kept),
            excluded_activities=len(activities) - len(kept),
            date_of_first_activity=df['instant'].iloc[0].to_pydatetime() if len(df) else None,
            streak=find_longest_streak(days, desired),
        )

    def analyze(self,
                activity_types: Sequence[ActivityType],
                activities_by_type: Mapping[str, Sequence[Activity]]) -> List[TypeAnalytics]:
        results = [
            self.analyze_type(activity_type, activities_by_type.get(activity_type.id, []))
            for activity_type in activity_types
        ]
        logger.debug("analytics.built", types=len(results), off_times=len(self.off_times))
        return results


def analytics_response(results: Sequence[TypeAnalytics]) -> Dict[str, List[Dict]]:
    """Parallel `analytics` / `streaks` arrays, one entry per activity type"""
    return {
        'analytics': [result.to_dict() for result in results],
        'streaks': [result.streak_dict() for result in results],
    }
