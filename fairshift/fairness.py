"""
Fairness reporting over completed work: Gini coefficient, per-member
fairness scores and trends, points history and assignment suggestions.
"""

import datetime as dt
import math
from typing import Dict, Iterable, List, Optional, Tuple
from dateutil.relativedelta import relativedelta

from fairshift.models import (
    CompletedTask, MemberFairnessData, FairnessDistribution, HistoryEntry,
    MemberPointsHistory, AssignmentSuggestion,
)

MINUTES_PER_POINT = 30

PERIOD_DELTAS = {
    "week": relativedelta(days=7),
    "month": relativedelta(months=1),
    "quarter": relativedelta(months=3),
    "year": relativedelta(years=1),
}


def _round(value: float, digits: int = 1) -> float:
    # Half up, so 0.25 -> 0.3 rather than banker's rounding
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _naive(ts: dt.datetime) -> dt.datetime:
    if ts.tzinfo is not None:
        return ts.astimezone().replace(tzinfo=None)
    return ts


def gini_coefficient(values: List[float]) -> float:
    """0 = perfect equality, 1 = one member did everything."""
    if not values:
        return 0.0
    n = len(values)
    mean = sum(values) / n
    if mean == 0:
        return 0.0
    total = sum(abs(a - b) for a in values for b in values)
    return total / (2 * n * n * mean)


def gini_to_fairness_index(gini: float) -> int:
    return int(math.floor((1 - gini) * 100 + 0.5))


def member_fairness_score(member_points: float, average_points: float) -> int:
    """0-100 where 50 is the average; 0.5x average = 25, 1.5x = 75."""
    if average_points == 0:
        return 50
    score = (member_points / average_points) * 50
    return min(100, max(0, int(math.floor(score + 0.5))))


def calculate_trend(recent_points: float, older_points: float) -> Tuple[str, float]:
    diff = recent_points - older_points
    threshold = max(1, older_points * 0.1)
    if abs(diff) < threshold:
        return "stable", 0
    return ("up" if diff > 0 else "down"), abs(diff)


def period_date_range(period: str, now: Optional[dt.datetime] = None) -> Tuple[dt.datetime, dt.datetime]:
    now = _naive(now or dt.datetime.now())
    end = now.replace(hour=23, minute=59, second=59, microsecond=999000)
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    start -= PERIOD_DELTAS.get(period, PERIOD_DELTAS["month"])
    return start, end


def build_distribution(records: Iterable[CompletedTask], period: str = "month",
                       now: Optional[dt.datetime] = None, stable_id: Optional[str] = None,
                       stable_name: Optional[str] = None) -> FairnessDistribution:
    if period not in PERIOD_DELTAS:
        period = "month"
    start, end = period_date_range(period, now)
    midpoint = start + (end - start) / 2

    per_member: Dict[str, dict] = {}
    for record in records:
        completed = _naive(record.completed_at)
        if completed < start or completed > end:
            continue
        entry = per_member.setdefault(record.user_id, {
            "display_name": record.display_name,
            "email": record.email,
            "total": 0.0, "recent": 0.0, "older": 0.0, "tasks": 0,
        })
        entry["total"] += record.points
        entry["tasks"] += 1
        if completed >= midpoint:
            entry["recent"] += record.points
        else:
            entry["older"] += record.points

    total_points = sum(e["total"] for e in per_member.values())
    total_tasks = sum(e["tasks"] for e in per_member.values())
    active = len(per_member)
    average_points = total_points / active if active else 0.0
    average_tasks = total_tasks / active if active else 0.0

    gini = gini_coefficient([e["total"] for e in per_member.values()])

    members = []
    for user_id, e in per_member.items():
        trend, trend_value = calculate_trend(e["recent"], e["older"])
        share = (e["total"] / total_points) * 100 if total_points > 0 else 0.0
        members.append(MemberFairnessData(
            user_id=user_id,
            display_name=e["display_name"],
            email=e["email"],
            total_points=e["total"],
            points_this_period=e["total"],
            tasks_completed=e["tasks"],
            tasks_this_period=e["tasks"],
            estimated_hours_worked=_round(e["total"] * MINUTES_PER_POINT / 60),
            fairness_score=member_fairness_score(e["total"], average_points),
            percentage_of_total=_round(share),
            deviation_from_average=_round(e["total"] - average_points),
            trend=trend,
            trend_value=trend_value,
        ))
    members.sort(key=lambda m: m.total_points, reverse=True)

    return FairnessDistribution(
        stable_id=stable_id,
        stable_name=stable_name,
        period=period,
        period_start_date=start.date().isoformat(),
        period_end_date=end.date().isoformat(),
        total_points=total_points,
        total_tasks=total_tasks,
        average_points_per_member=_round(average_points),
        average_tasks_per_member=_round(average_tasks),
        active_member_count=active,
        members=members,
        fairness_index=gini_to_fairness_index(gini),
        gini_coefficient=_round(gini, 2),
        generated_at=dt.datetime.now(),
    )


def member_points_history(records: Iterable[CompletedTask], user_id: str, days: int = 90,
                          now: Optional[dt.datetime] = None) -> MemberPointsHistory:
    now = _naive(now or dt.datetime.now())
    start = (now - dt.timedelta(days=days)).replace(hour=0, minute=0, second=0, microsecond=0)

    display_name = "Unknown"
    per_day: Dict[str, List[float]] = {}
    for record in records:
        if record.user_id != user_id:
            continue
        completed = _naive(record.completed_at)
        if completed < start:
            continue
        if record.display_name:
            display_name = record.display_name
        day = per_day.setdefault(completed.date().isoformat(), [0.0, 0])
        day[0] += record.points
        day[1] += 1

    history = []
    cumulative = 0.0
    for date_str in sorted(per_day):
        points, tasks = per_day[date_str]
        cumulative += points
        history.append(HistoryEntry(date=date_str, points=points,
                                    cumulative_points=cumulative, tasks_completed=tasks))

    return MemberPointsHistory(
        user_id=user_id,
        display_name=display_name,
        history=history,
        total_points=cumulative,
        average_points_per_day=_round(cumulative / days, 2) if days > 0 else 0.0,
    )


def suggestion_priority(points: float) -> int:
    if points == 0:
        return 1
    return min(10, math.ceil(10 / (points / 10 + 1)))


def assignment_suggestions(historical_points: Dict[str, float], names: Optional[Dict[str, str]] = None,
                           limit: int = 5) -> List[AssignmentSuggestion]:
    """Members with the fewest points first; these are the fairest next picks."""
    names = names or {}
    suggestions = [
        AssignmentSuggestion(
            user_id=user_id,
            display_name=names.get(user_id, "Unknown"),
            historical_points=points,
            priority=suggestion_priority(points),
        )
        for user_id, points in historical_points.items()
    ]
    suggestions.sort(key=lambda s: s.historical_points)
    return suggestions[:limit]
