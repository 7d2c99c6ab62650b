"""
Activity History Frames
Turns a list of activities into a pandas frame keyed by local calendar day
"""

from typing import Sequence
from zoneinfo import ZoneInfo

import pandas as pd

from .dates import local_days
from .models import Activity

COLUMNS = ['activity', 'instant', 'day']


def history_frame(activities: Sequence[Activity],
                  tz: ZoneInfo,
                  ascending: bool = True) -> pd.DataFrame:
    """
    One row per activity with its UTC instant and local day number.

    Rows are ordered by instant; ties keep input order.
    """
    if len(activities) == 0:
        return pd.DataFrame(columns=COLUMNS)

    instants = [activity.date for activity in activities]
    df = pd.DataFrame({
        'activity': list(activities),
        'instant': pd.to_datetime(instants, utc=True),
        'day': local_days(instants, tz),
    })
    return df.sort_values('instant', ascending=ascending, kind='stable').reset_index(drop=True)
