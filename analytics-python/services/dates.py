"""
Date Helpers
Timezone resolution and calendar-day arithmetic in the user's timezone

All day differences in the engine are taken between local calendar days,
never between raw instants, so an activity at 23:00 and one at 01:00 the
next morning are exactly one day apart.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import numpy as np
import pandas as pd

from logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "America/New_York"
EPOCH = date(1970, 1, 1)


def resolve_timezone(name: Optional[str], default: str = DEFAULT_TIMEZONE) -> ZoneInfo:
    """
    Resolve an IANA zone name, falling back to `default`.

    Never raises for bad user input: a missing, empty or unknown zone is
    logged and replaced by the default.
    """
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("timezone.invalid", timezone=name, fallback=default)
    return ZoneInfo(default)


def local_days(instants: Iterable[datetime], tz: ZoneInfo) -> np.ndarray:
    """
    Calendar day numbers (days since 1970-01-01) of each instant in `tz`.

    Naive datetimes are treated as UTC instants.
    """
    instants = list(instants)
    if not instants:
        return np.array([], dtype=np.int64)

    index = pd.DatetimeIndex(pd.to_datetime(instants, utc=True))
    local_midnights = index.tz_convert(tz).tz_localize(None).normalize()
    return local_midnights.values.astype("datetime64[D]").astype(np.int64)


def local_day(instant: datetime, tz: ZoneInfo) -> int:
    return int(local_days([instant], tz)[0])


def local_today(tz: ZoneInfo, now: Optional[datetime] = None) -> int:
    """Day number of today's midnight in `tz`"""
    return local_day(now or datetime.now(timezone.utc), tz)


def day_to_date(day: int) -> date:
    return EPOCH + timedelta(days=int(day))


def date_to_day(value: date) -> int:
    return (value - EPOCH).days


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to `digits` decimals with halves going up"""
    factor = 10 ** digits
    return float(np.floor(value * factor + 0.5) / factor)
