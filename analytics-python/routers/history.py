"""
History Loader
Reads one user's activity types, activities and off-time periods
and converts them into engine input objects
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from logger import get_logger
from services import (
    Activity,
    ActivityType,
    ByTag,
    ByType,
    OffTimePeriod,
    Season,
    SeasonalFrequency,
)

logger = get_logger(__name__)


@dataclass
class UserHistory:
    timezone: Optional[str]
    activity_types: List[ActivityType] = field(default_factory=list)
    activities_by_type: Dict[str, List[Activity]] = field(default_factory=dict)
    off_times: List[OffTimePeriod] = field(default_factory=list)


def _activity_types(db: Session, user_id: str) -> List[ActivityType]:
    query = text("""
        SELECT id, name, description, "tagId",
               "freqWinter", "freqSpring", "freqSummer", "freqFall"
        FROM activity_types
        WHERE "userId" = :user_id
        ORDER BY name
    """)
    rows = db.execute(query, {"user_id": user_id}).fetchall()

    return [
        ActivityType(
            id=row[0],
            name=row[1],
            description=row[2],
            tag_id=row[3],
            desired_frequency=SeasonalFrequency.from_mapping({
                Season.WINTER: row[4],
                Season.SPRING: row[5],
                Season.SUMMER: row[6],
                Season.FALL: row[7],
            }),
        )
        for row in rows
    ]


def _activities(db: Session, user_id: str) -> Dict[str, List[Activity]]:
    query = text("""
        SELECT id, "typeId", date
        FROM activities
        WHERE "userId" = :user_id
        ORDER BY date DESC
    """)
    rows = db.execute(query, {"user_id": user_id}).fetchall()

    by_type = defaultdict(list)
    for row in rows:
        by_type[row[1]].append(Activity(id=row[0], type_id=row[1], date=row[2]))
    return dict(by_type)


def _off_times(db: Session, user_id: str,
               activity_types: List[ActivityType]) -> List[OffTimePeriod]:
    query = text("""
        SELECT id, "startDate", "endDate", "activityTypeId", "tagId"
        FROM off_times
        WHERE "userId" = :user_id
        ORDER BY "startDate" DESC
    """)
    rows = db.execute(query, {"user_id": user_id}).fetchall()

    members_by_tag = defaultdict(set)
    for activity_type in activity_types:
        if activity_type.tag_id:
            members_by_tag[activity_type.tag_id].add(activity_type.id)

    periods = []
    for off_time_id, start_date, end_date, activity_type_id, tag_id in rows:
        if activity_type_id:
            scope = ByType(activity_type_id)
        elif tag_id:
            scope = ByTag(tag_id, frozenset(members_by_tag.get(tag_id, ())))
        else:
            logger.warning("off_time.unscoped", off_time_id=off_time_id)
            continue
        periods.append(OffTimePeriod(start_date=start_date, end_date=end_date, scope=scope))
    return periods


def load_user_history(db: Session, user_id: str) -> Optional[UserHistory]:
    """Everything the engine needs for one user, or None if the user is unknown"""
    user = db.execute(
        text("SELECT id, timezone FROM users WHERE id = :user_id"),
        {"user_id": user_id}
    ).fetchone()

    if not user:
        return None

    activity_types = _activity_types(db, user_id)
    return UserHistory(
        timezone=user[1],
        activity_types=activity_types,
        activities_by_type=_activities(db, user_id),
        off_times=_off_times(db, user_id, activity_types),
    )
