"""Tests for :mod:`fieldforce.services.priority`."""

import random
from datetime import datetime, timedelta
from types import SimpleNamespace

from fieldforce.services.priority import prioritize_tasks, score_task


NOW = datetime(2024, 5, 1, 12, 0)


def task(title, priority=1, due_in=None, created=NOW - timedelta(days=1)):
    due = NOW + due_in if due_in is not None else None
    return SimpleNamespace(title=title, priority=priority, due_date=due, created_at=created)


def test_score_rules_in_order() -> None:
    assert score_task(task("late", priority=1, due_in=timedelta(hours=-1)), NOW) == 1000
    assert score_task(task("soon", priority=1, due_in=timedelta(hours=3)), NOW) == 900
    assert score_task(task("high", priority=3, due_in=timedelta(days=3)), NOW) == 800
    assert score_task(task("medium", priority=2), NOW) == 600
    assert score_task(task("low", priority=1, due_in=timedelta(days=3)), NOW) == 400


def test_scoring_is_deterministic_without_rng() -> None:
    t = task("high", priority=3)

    assert score_task(t, NOW) == score_task(t, NOW)


def test_jitter_stays_below_fifty() -> None:
    rng = random.Random(7)
    for _ in range(50):
        score = score_task(task("medium", priority=2), NOW, rng)
        assert 600 <= score < 650


def test_due_date_rules_ignore_jitter() -> None:
    assert score_task(task("late", due_in=timedelta(hours=-2)), NOW, random.Random(1)) == 1000


def test_ranking_and_limit() -> None:
    tasks = [
        task("low", priority=1, due_in=timedelta(days=5)),
        task("high", priority=3, due_in=timedelta(days=5)),
        task("late", priority=1, due_in=timedelta(hours=-5)),
        task("medium", priority=2, due_in=timedelta(days=5)),
        task("soon", priority=1, due_in=timedelta(hours=2)),
        task("undated", priority=1),
    ]

    ranked = prioritize_tasks(tasks, now=NOW, limit=5)

    assert [r["task"].title for r in ranked] == ["late", "soon", "high", "medium", "low"]
    assert all(r["score_label"] == "heuristic" for r in ranked)
    assert ranked[0]["ai_score"] == 1000


def test_ties_break_on_due_date_then_creation() -> None:
    tasks = [
        task("later", priority=3, due_in=timedelta(days=4)),
        task("undated", priority=3),
        task("earlier", priority=3, due_in=timedelta(days=2)),
        task("older", priority=3, due_in=timedelta(days=4), created=NOW - timedelta(days=9)),
    ]

    ranked = prioritize_tasks(tasks, now=NOW)

    assert [r["task"].title for r in ranked] == ["earlier", "older", "later", "undated"]


def test_days_until_due() -> None:
    ranked = prioritize_tasks([task("t", due_in=timedelta(days=2)), task("u")], now=NOW)

    assert ranked[0]["days_until_due"] == 2
    assert ranked[1]["days_until_due"] is None
