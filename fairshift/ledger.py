"""
Caller-side bookkeeping around an assignment run: historical points going in,
assigned shifts and session points going back to storage.
"""

import datetime as dt
from typing import Dict, Iterable, List, Optional

from fairshift.models import Member, Shift, AssignmentResult, MemberTrackingState, ASSIGNED
from fairshift.utils import parse_date


def calculate_historical_points(shifts: Iterable[Shift], member_ids: Iterable[str],
                                memory_horizon_days: int = 90,
                                today: Optional[dt.date] = None) -> Dict[str, float]:
    """Points per member from assigned shifts dated within the memory horizon."""
    today = today or dt.date.today()
    threshold = today - dt.timedelta(days=memory_horizon_days)
    totals = {member_id: 0.0 for member_id in member_ids}

    for shift in shifts:
        if not shift.is_assigned or shift.assigned_to not in totals:
            continue
        shift_date = parse_date(shift.date)
        if shift_date is None or shift_date < threshold:
            continue
        totals[shift.assigned_to] += shift.points
    return totals


def with_historical_points(members: Iterable[Member], points: Dict[str, float]) -> List[Member]:
    return [m.model_copy(update={"historical_points": points.get(m.user_id, 0.0)}) for m in members]


def apply_results(shifts: Iterable[Shift], results: Iterable[AssignmentResult]) -> List[Shift]:
    """Copies of shifts with the run's assignments written in."""
    by_shift = {r.shift_id: r for r in results}
    updated = []
    for shift in shifts:
        result = by_shift.get(shift.id)
        if result is None:
            updated.append(shift)
            continue
        updated.append(shift.model_copy(update={
            "status": ASSIGNED,
            "assigned_to": result.assigned_to,
            "assigned_to_name": result.assigned_to_name,
            "assigned_to_email": result.assigned_to_email,
            "points_awarded": result.points_awarded,
        }))
    return updated


def fold_session_points(members: Iterable[Member], tracking: Dict[str, MemberTrackingState]) -> List[Member]:
    """Copies of members with this run's session points added to their ledger."""
    folded = []
    for member in members:
        state = tracking.get(member.user_id)
        if state is None or not state.session_points:
            folded.append(member)
            continue
        folded.append(member.model_copy(update={
            "historical_points": member.historical_points + state.session_points,
        }))
    return folded
