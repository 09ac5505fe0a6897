"""
Aggregation service for the seven-day, two-partner vibe timeline.
"""
from sqlalchemy.orm import Session, joinedload
from datetime import date
from typing import Any, Dict, List, Optional
from vibecheck.core.utils import date_window, local_today
from vibecheck.models.relationship import Membership
from vibecheck.models.vibe import Vibe

HISTORY_DAYS = 7
INSIGHT_DAYS = 3

INSIGHT_MESSAGES = {
    "positive": "You're both riding a good wave lately. Keep doing what you're doing!",
    "concern": "It's been a rough few days for both of you. Maybe plan something restful together.",
    "divergence": "Your moods have drifted apart recently. A quick check-in could help.",
    "balanced": "Your vibes are fairly balanced. Steady as you go.",
}


def _slot(vibe: Optional[Vibe]) -> Optional[Dict[str, Any]]:
    if vibe is None:
        return None
    return {"mood": vibe.mood, "note": vibe.note}


def get_vibes(relationship_id: int, db: Session, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Build the timeline for today and the previous six days, newest first.

    userA is the member at position 1 (the creator) and userB the member at
    position 2, for every row. Days without a submission hold None.
    """
    today = today or local_today()
    dates = date_window(today, HISTORY_DAYS)

    memberships = db.query(Membership).options(
        joinedload(Membership.user)
    ).filter(
        Membership.relationship_id == relationship_id
    ).order_by(Membership.position).all()
    user_ids = [m.user_id for m in memberships]

    vibes = db.query(Vibe).filter(
        Vibe.relationship_id == relationship_id,
        Vibe.date >= dates[-1],
        Vibe.date <= dates[0]
    ).all()
    by_key = {(v.date, v.user_id): v for v in vibes}

    user_a = user_ids[0] if len(user_ids) > 0 else None
    user_b = user_ids[1] if len(user_ids) > 1 else None

    rows = []
    for d in dates:
        rows.append({
            "date": d,
            "userA": _slot(by_key.get((d, user_a))),
            "userB": _slot(by_key.get((d, user_b))),
        })

    users = [{"id": m.user.id, "name": m.user.name} for m in memberships if m.user]

    return {
        "vibes": rows,
        "users": users,
        "insight": generate_insight(rows),
    }


def _average(moods: List[int]) -> Optional[float]:
    if not moods:
        return None
    return sum(moods) / len(moods)


def generate_insight(rows: List[Dict[str, Any]], days: int = INSIGHT_DAYS) -> Optional[Dict[str, Any]]:
    """
    Classify the partners' recent trend from the newest ``days`` rows.
    Returns None until both partners have at least one mood in the window.
    """
    recent = rows[:days]
    avg_a = _average([r["userA"]["mood"] for r in recent if r.get("userA")])
    avg_b = _average([r["userB"]["mood"] for r in recent if r.get("userB")])
    if avg_a is None or avg_b is None:
        return None

    if avg_a >= 4 and avg_b >= 4:
        kind = "positive"
    elif avg_a <= 2 and avg_b <= 2:
        kind = "concern"
    elif abs(avg_a - avg_b) >= 2:
        kind = "divergence"
    else:
        kind = "balanced"

    return {
        "kind": kind,
        "message": INSIGHT_MESSAGES[kind],
        "average_a": round(avg_a, 2),
        "average_b": round(avg_b, 2),
    }
