"""
Analytics Router
API endpoint for lifetime averages and longest streaks
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from config import get_settings
from database import get_db
from logger import get_logger
from services import FrequencyAnalyzer, analytics_response, resolve_timezone

from .history import load_user_history

logger = get_logger(__name__)

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("")
async def get_analytics(
    user_id: str = Query(..., description="Owner of the activity types"),
    db: Session = Depends(get_db)
):
    """
    Per activity type analytics.

    Activities logged during off-time periods are left out of:
    - Lifetime average spacing
    - Longest streak detection
    """
    history = load_user_history(db, user_id)
    if history is None:
        raise HTTPException(status_code=404, detail="User not found")

    tz = resolve_timezone(history.timezone, get_settings().default_timezone)
    analyzer = FrequencyAnalyzer(tz, off_times=history.off_times)
    results = analyzer.analyze(history.activity_types, history.activities_by_type)

    logger.info("analytics.served", user_id=user_id, types=len(results))
    return analytics_response(results)
