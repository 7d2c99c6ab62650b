"""
Frequency Engine Package

Contains the scoring logic:
- FrequencyRecommender: due/overdue status, rolling averages, trend, ranking
- FrequencyAnalyzer: lifetime averages and longest streaks
- build_daily_digest: notification text for what is due today/tomorrow
"""

from .analytics import FrequencyAnalyzer, analytics_response, find_longest_streak
from .dates import DEFAULT_TIMEZONE, resolve_timezone
from .digest import build_daily_digest
from .models import Activity, ActivityType, Recommendation, Status, Trend
from .off_time import ByTag, ByType, OffTimePeriod, filter_off_time, is_in_off_time
from .recommender import FrequencyRecommender, classify_status, classify_trend, rolling_average
from .seasons import Season, SeasonalFrequency, season_for_month

__all__ = [
    'FrequencyAnalyzer',
    'analytics_response',
    'find_longest_streak',
    'DEFAULT_TIMEZONE',
    'resolve_timezone',
    'build_daily_digest',
    'Activity',
    'ActivityType',
    'Recommendation',
    'Status',
    'Trend',
    'ByTag',
    'ByType',
    'OffTimePeriod',
    'filter_off_time',
    'is_in_off_time',
    'FrequencyRecommender',
    'classify_status',
    'classify_trend',
    'rolling_average',
    'Season',
    'SeasonalFrequency',
    'season_for_month',
]
