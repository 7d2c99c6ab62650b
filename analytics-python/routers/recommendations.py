"""
Recommendations Router
API endpoints for the ranked due/overdue list and the daily digest
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from config import get_settings
from database import get_db
from logger import get_logger
from services import FrequencyRecommender, Recommendation, build_daily_digest, resolve_timezone

from .history import load_user_history

logger = get_logger(__name__)

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


def build_recommendations(db: Session, user_id: str) -> List[Recommendation]:
    """Load the user's history and rank their activity types"""
    history = load_user_history(db, user_id)
    if history is None:
        raise HTTPException(status_code=404, detail="User not found")

    settings = get_settings()
    tz = resolve_timezone(history.timezone, settings.default_timezone)
    off_times = history.off_times if settings.apply_off_time_to_recommendations else ()

    recommender = FrequencyRecommender(tz, off_times=off_times)
    recommendations = recommender.recommend(history.activity_types, history.activities_by_type)

    logger.info("recommendations.served", user_id=user_id, types=len(recommendations))
    return recommendations


@router.get("")
async def get_recommendations(
    user_id: str = Query(..., description="Owner of the activity types"),
    db: Session = Depends(get_db)
):
    """
    Rank activity types by how overdue they are.

    Each entry carries:
    - Days since the last activity and the difference from the target
    - Status bucket (ahead, due_soon, due_today, overdue, critically_overdue, no_data)
    - Last 3 / last 10 average spacing and the resulting trend
    - Current streak ending at the most recent activity
    """
    recommendations = build_recommendations(db, user_id)
    return {"recommendations": [rec.to_dict() for rec in recommendations]}


@router.get("/digest")
async def get_daily_digest(
    user_id: str = Query(..., description="Owner of the activity types"),
    db: Session = Depends(get_db)
):
    """
    Preview the daily notification.

    Title lists activities due today, body lists those due tomorrow.
    """
    return build_daily_digest(build_recommendations(db, user_id))
