import datetime as dt
import pytest
from fairshift.models import CompletedTask
from fairshift.fairness import (
    gini_coefficient, gini_to_fairness_index, member_fairness_score, calculate_trend,
    period_date_range, build_distribution, member_points_history, assignment_suggestions,
)

NOW = dt.datetime(2025, 3, 1, 12, 0)


def task(user_id, when, points, name=None):
    return CompletedTask(user_id=user_id, display_name=name or user_id.upper(), points=points, completed_at=when)


def test_gini():
    assert gini_coefficient([]) == 0
    assert gini_coefficient([0, 0]) == 0
    assert gini_coefficient([5, 5, 5]) == 0
    assert gini_coefficient([0, 0, 10]) == pytest.approx(2 / 3)
    assert gini_to_fairness_index(2 / 3) == 33
    assert gini_to_fairness_index(0) == 100


def test_member_fairness_score():
    assert member_fairness_score(10, 10) == 50
    assert member_fairness_score(15, 10) == 75
    assert member_fairness_score(5, 10) == 25
    assert member_fairness_score(30, 10) == 100
    assert member_fairness_score(3, 0) == 50


def test_trend():
    assert calculate_trend(10, 5) == ("up", 5)
    assert calculate_trend(5, 10) == ("down", 5)
    assert calculate_trend(5, 5) == ("stable", 0)
    assert calculate_trend(0.5, 0) == ("stable", 0)
    assert calculate_trend(104, 100) == ("stable", 0)


def test_period_range():
    start, end = period_date_range("month", NOW)
    assert start == dt.datetime(2025, 2, 1)
    assert end.date() == dt.date(2025, 3, 1)
    start, _ = period_date_range("week", NOW)
    assert start == dt.datetime(2025, 2, 22)
    start, _ = period_date_range("bogus", NOW)
    assert start == dt.datetime(2025, 2, 1)


def test_distribution():
    records = [
        task("u1", dt.datetime(2025, 2, 5, 9), 10),
        task("u1", dt.datetime(2025, 2, 25, 9), 5),
        task("u2", dt.datetime(2025, 2, 20, 9), 5),
        task("u3", dt.datetime(2024, 12, 1, 9), 50),
    ]
    dist = build_distribution(records, "month", now=NOW, stable_id="stable-1")

    assert dist.stable_id == "stable-1"
    assert dist.period_start_date == "2025-02-01"
    assert dist.period_end_date == "2025-03-01"
    assert dist.total_points == 20
    assert dist.total_tasks == 3
    assert dist.active_member_count == 2
    assert dist.average_points_per_member == 10
    assert dist.average_tasks_per_member == 1.5
    assert dist.gini_coefficient == 0.25
    assert dist.fairness_index == 75

    first, second = dist.members
    assert first.user_id == "u1"
    assert first.fairness_score == 75
    assert first.percentage_of_total == 75
    assert first.deviation_from_average == 5
    assert first.estimated_hours_worked == 7.5
    assert (first.trend, first.trend_value) == ("down", 5)
    assert second.user_id == "u2"
    assert second.fairness_score == 25
    assert (second.trend, second.trend_value) == ("up", 5)


def test_empty_distribution():
    dist = build_distribution([], "week", now=NOW)
    assert dist.members == []
    assert dist.fairness_index == 100
    assert dist.average_points_per_member == 0


def test_member_history():
    records = [
        task("u1", dt.datetime(2025, 2, 7, 8), 3, name="Anna"),
        task("u1", dt.datetime(2025, 2, 5, 10), 10),
        task("u1", dt.datetime(2025, 2, 5, 15), 2),
        task("u2", dt.datetime(2025, 2, 5, 15), 100),
        task("u1", dt.datetime(2024, 1, 1), 100),
    ]
    history = member_points_history(records, "u1", days=90, now=NOW)
    assert [(h.date, h.points, h.cumulative_points, h.tasks_completed) for h in history.history] == [
        ("2025-02-05", 12, 12, 2),
        ("2025-02-07", 3, 15, 1),
    ]
    assert history.total_points == 15
    assert history.average_points_per_day == 0.17


def test_history_for_unknown_member():
    history = member_points_history([], "nobody", now=NOW)
    assert history.display_name == "Unknown"
    assert history.history == []


def test_suggestions():
    suggestions = assignment_suggestions({"a": 0, "b": 30, "c": 5}, {"a": "Anna"}, limit=2)
    assert [(s.user_id, s.priority) for s in suggestions] == [("a", 1), ("c", 7)]
    assert suggestions[0].display_name == "Anna"
    assert suggestions[1].display_name == "Unknown"
    everyone = assignment_suggestions({"a": 0, "b": 30, "c": 5})
    assert everyone[-1].priority == 3
