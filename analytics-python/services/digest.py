"""
Daily Digest
Builds the push-notification payload summarising what is due today and tomorrow
"""

from typing import Dict, List, Sequence

from .models import Recommendation

MAX_NAMES = 3
DIGEST_TAG = "daily-recommendations"
DIGEST_ICON = "/icon-192.png"
DIGEST_URL = "/?tab=recommendations"


def due_today(recommendations: Sequence[Recommendation]) -> List[Recommendation]:
    """Overdue or due within the day"""
    return [rec for rec in recommendations
            if rec.difference is not None and rec.difference > -1]


def due_tomorrow(recommendations: Sequence[Recommendation]) -> List[Recommendation]:
    return [rec for rec in recommendations
            if rec.difference is not None and -2 < rec.difference <= -1]


def _summary(label: str, recommendations: Sequence[Recommendation], empty: str) -> str:
    if not recommendations:
        return empty
    names = ", ".join(rec.activity_type.name for rec in recommendations[:MAX_NAMES])
    suffix = "..." if len(recommendations) > MAX_NAMES else ""
    return f"{label}: {names}{suffix}"


def build_daily_digest(recommendations: Sequence[Recommendation]) -> Dict:
    """
    Notification payload for an already-ranked recommendation list.

    The title lists what is due today and the body what is due tomorrow,
    at most three names each.
    """
    return {
        'title': _summary("Today", due_today(recommendations), "No activities due today"),
        'body': _summary("Tomorrow", due_tomorrow(recommendations), "No activities due tomorrow"),
        'icon': DIGEST_ICON,
        'badge': DIGEST_ICON,
        'tag': DIGEST_TAG,
        'requireInteraction': False,
        'data': {'url': DIGEST_URL},
    }
