from typing import Dict, Iterable
from fairshift.models import AssignmentResult, AssignmentSummary, MemberDistribution


def summarize(results: Iterable[AssignmentResult]) -> AssignmentSummary:
    """Totals, holiday count and per-member shifts/points for a run."""
    distribution: Dict[str, MemberDistribution] = {}
    total_assigned = 0
    total_points = 0.0
    holiday_shifts = 0

    for result in results:
        total_assigned += 1
        total_points += result.points_awarded
        if result.is_holiday:
            holiday_shifts += 1

        current = distribution.setdefault(result.assigned_to, MemberDistribution())
        current.shifts += 1
        current.points += result.points_awarded

    return AssignmentSummary(
        total_assigned=total_assigned,
        total_points=total_points,
        holiday_shifts=holiday_shifts,
        member_distribution=distribution,
    )
