"""
Frequency Recommendations Service
Ranks activity types by how due or overdue they are

CONCEPTS:
1. Status buckets - how far the time since the last activity is from the target
2. Rolling averages - mean spacing over the last 3 and last 10 activities
3. Trend - whether recent spacing is tighter or looser than the longer window
"""

from datetime import datetime, timezone
from typing import List, Mapping, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

import numpy as np

from logger import get_logger

from .analytics import current_streak_start
from .dates import day_to_date, local_today, round_half_up
from .history import history_frame
from .models import Activity, ActivityType, Recommendation, Status, Trend
from .off_time import OffTimePeriod, filter_off_time

logger = get_logger(__name__)

NO_DATA_PRIORITY = -1000
STABLE_TREND_THRESHOLD = 0.5
SHORT_WINDOW = 3
LONG_WINDOW = 10


def classify_status(days_since: Optional[int],
                    desired_frequency: float) -> Tuple[Status, Optional[float], float]:
    """
    Bucket the gap between days since the last activity and the target.

    Buckets use the absolute difference; the sign only separates overdue
    from ahead once the gap reaches two days.

    Returns:
        (status, difference, priority_score)
    """
    if days_since is None:
        return Status.NO_DATA, None, NO_DATA_PRIORITY

    difference = days_since - desired_frequency
    gap = abs(difference)

    if gap < 1:
        return Status.DUE_TODAY, difference, 100 + difference
    if gap < 2:
        return Status.DUE_SOON, difference, difference
    if difference > 0:
        if gap <= 3:
            return Status.OVERDUE, difference, 200 + difference
        return Status.CRITICALLY_OVERDUE, difference, 300 + difference
    return Status.AHEAD, difference, difference


def rolling_average(days_desc: np.ndarray, today: int, window: int) -> Optional[float]:
    """
    Mean spacing over the `window` most recent activities.

    The open interval from the most recent activity to today counts as one
    of the intervals, so a single activity averages to its age in days.
    """
    if len(days_desc) == 0:
        return None

    recent = np.concatenate(([today], days_desc[:min(window, len(days_desc))]))
    intervals = -np.diff(recent)
    return round_half_up(float(intervals.mean()))


def classify_trend(avg_short: Optional[float], avg_long: Optional[float]) -> Trend:
    """Smaller recent spacing means the activity is done more often"""
    if avg_short is not None and avg_long is not None:
        if abs(avg_short - avg_long) < STABLE_TREND_THRESHOLD:
            return Trend.STABLE
        if avg_short < avg_long:
            return Trend.IMPROVING
        return Trend.DECLINING
    if avg_short is not None or avg_long is not None:
        return Trend.STABLE
    return Trend.INSUFFICIENT_DATA


def rank(recommendations: Sequence[Recommendation]) -> List[Recommendation]:
    """Most overdue first; equal scores fall back to name order"""
    return sorted(
        recommendations,
        key=lambda rec: (-rec.priority_score, rec.activity_type.name),
    )


class FrequencyRecommender:
    """
    Builds the ranked recommendation list for one user.

    Off-time periods are only applied when passed in explicitly; by default
    the live status uses the raw history.
    """

    def __init__(self,
                 tz: ZoneInfo,
                 off_times: Sequence[OffTimePeriod] = (),
                 now: Optional[datetime] = None):
        self.tz = tz
        self.off_times = list(off_times)
        self.now = now or datetime.now(timezone.utc)
        self.today = local_today(tz, self.now)

    def recommend_type(self,
                       activity_type: ActivityType,
                       activities: Sequence[Activity]) -> Recommendation:
        if self.off_times:
            activities = filter_off_time(activities, self.off_times, self.tz)

        desired = activity_type.desired_frequency.for_date(day_to_date(self.today))
        df = history_frame(activities, self.tz, ascending=False)
        days_desc = df['day'].to_numpy(dtype=np.int64)

        days_since = int(self.today - days_desc[0]) if len(days_desc) else None
        status, difference, priority = classify_status(days_since, desired)

        avg_short = rolling_average(days_desc, self.today, SHORT_WINDOW)
        avg_long = rolling_average(days_desc, self.today, LONG_WINDOW)

        recommendation = Recommendation(
            activity_type=activity_type,
            season_frequency=desired,
            status=status,
            priority_score=priority,
            trend=classify_trend(avg_short, avg_long),
            days_since_last_activity=days_since,
            difference=difference,
            average_frequency_last3=avg_short,
            average_frequency_last10=avg_long,
        )

        if len(df):
            recommendation.last_performed_date = df['instant'].iloc[0].to_pydatetime()
            recommendation.first_activity_date = df['instant'].iloc[-1].to_pydatetime()

            days_asc = days_desc[::-1]
            start = current_streak_start(days_asc, desired)
            if start is not None:
                recommendation.current_streak = int(days_asc[-1] - days_asc[start])
                recommendation.current_streak_start = day_to_date(days_asc[start])

        return recommendation

    def recommend(self,
                  activity_types: Sequence[ActivityType],
                  activities_by_type: Mapping[str, Sequence[Activity]]) -> List[Recommendation]:
        recommendations = rank([
            self.recommend_type(activity_type, activities_by_type.get(activity_type.id, []))
            for activity_type in activity_types
        ])
        logger.debug(
            "recommendations.built",
            types=len(recommendations),
            overdue=sum(1 for rec in recommendations
                        if rec.status in (Status.OVERDUE, Status.CRITICALLY_OVERDUE)),
        )
        return recommendations
