"""
Task prioritisation.
A fixed, labelled heuristic over due date and priority. No learned model is involved.
"""
import random
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from ..config import settings
from .windows import to_utc_naive, utc_now

SCORE_LABEL = "heuristic"

OVERDUE_SCORE = 1000
DUE_SOON_SCORE = 900
HIGH_PRIORITY_SCORE = 800
MEDIUM_PRIORITY_SCORE = 600
DEFAULT_SCORE = 400
JITTER_RANGE = 50

DUE_SOON = timedelta(hours=24)


def _due(task: Any) -> Optional[datetime]:
    return to_utc_naive(task.due_date) if task.due_date is not None else None


def score_task(task: Any, now: datetime, rng: Optional[random.Random] = None) -> float:
    """
    Score a pending task; higher is more urgent.

    The first matching rule wins: overdue, due within 24h, priority 3, priority 2,
    anything else. Jitter in [0, 50) is added to the priority-based scores only
    when ``rng`` is given, so scoring is deterministic by default.
    """
    due = _due(task)
    if due is not None:
        remaining = due - now
        if remaining < timedelta(0):
            return OVERDUE_SCORE
        if remaining < DUE_SOON:
            return DUE_SOON_SCORE

    if task.priority == 3:
        score = HIGH_PRIORITY_SCORE
    elif task.priority == 2:
        score = MEDIUM_PRIORITY_SCORE
    else:
        score = DEFAULT_SCORE

    if rng is not None:
        score += rng.random() * JITTER_RANGE
    return score


def days_until_due(task: Any, now: datetime) -> Optional[float]:
    due = _due(task)
    if due is None:
        return None
    return (due - now).total_seconds() / 86400


def prioritize_tasks(
    tasks: Iterable[Any],
    now: Optional[datetime] = None,
    limit: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Dict[str, Any]]:
    """
    Rank tasks by score, highest first, and return the top ``limit``.

    Equal scores fall back to the earlier due date (undated last), then the
    earlier creation time.
    """
    if now is None:
        now = utc_now()
    if limit is None:
        limit = settings.prioritized_task_limit

    scored = [(score_task(t, now, rng), t) for t in tasks]
    scored.sort(
        key=lambda pair: (
            -pair[0],
            _due(pair[1]) is None,
            _due(pair[1]) or datetime.max,
            to_utc_naive(pair[1].created_at) if pair[1].created_at else datetime.max,
        )
    )

    return [
        {
            "task": task,
            "ai_score": score,
            "days_until_due": days_until_due(task, now),
            "score_label": SCORE_LABEL,
        }
        for score, task in scored[:limit]
    ]
