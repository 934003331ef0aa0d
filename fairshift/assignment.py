"""
Fairness-based auto-assignment of shifts to stable members.

Shifts are walked in date order. For each open shift the members who are
available and under their weekly/monthly caps are scored
(historical + session points, minus a bonus for preferred times) and the
lowest score wins; ties go to whoever comes first in the roster.
"""

import datetime as dt
import logging
from typing import Callable, Dict, List, Optional, Tuple

from fairshift.models import (
    Member, Shift, MemberTrackingState, AssignmentResult, AssignmentConfig, CurrentTracking,
)
from fairshift.eligibility import is_eligible, is_member_available, limit_reached
from fairshift.holidays import HolidayCalendar, apply_holiday_multiplier
from fairshift.scoring import score
from fairshift.utils import parse_date, is_same_week, is_same_month

logger = logging.getLogger(__name__)

HolidayLookup = Callable[[dt.date], bool]
Tracking = Dict[str, MemberTrackingState]

# Skip reasons recorded on AutoAssigner.skipped
ALREADY_ASSIGNED = "already_assigned"
UNPARSABLE_DATE = "unparsable_date"
NO_ELIGIBLE_MEMBERS = "no_eligible_members"


def sort_shifts_chronologically(shifts: List[Shift]) -> List[Shift]:
    """Stable sort by date; same-date shifts keep their input order."""
    return sorted(shifts, key=lambda s: parse_date(s.date) or dt.date.min)


class AutoAssigner:
    """One assignment run over a roster.

    The tracking dict is owned by the caller: pass one in to read the
    session points afterwards. It is reset for every roster member when
    run() starts.
    """

    def __init__(self, members: List[Member], config: Optional[AssignmentConfig] = None,
                 tracking: Optional[Tracking] = None,
                 holiday_lookup: Optional[HolidayLookup] = None):
        self.members = list(members)
        self.config = config or AssignmentConfig()
        self.tracking: Tracking = tracking if tracking is not None else {}
        if holiday_lookup is None:
            holiday_lookup = HolidayCalendar.from_config(self.config).is_holiday
        self.is_holiday = holiday_lookup
        self.skipped: List[Tuple[str, str]] = []

    def _reset_tracking(self):
        for member in self.members:
            self.tracking[member.user_id] = MemberTrackingState()
        self.skipped = []

    def _reset_counters(self, previous: Optional[dt.date], current: dt.date):
        # Counters reset on any week/month change relative to the previous processed shift
        if previous is None:
            return
        if not is_same_week(previous, current):
            for state in self.tracking.values():
                state.shifts_this_week = 0
        if not is_same_month(previous, current):
            for state in self.tracking.values():
                state.shifts_this_month = 0

    def _select_member(self, shift: Shift) -> Tuple[Optional[Member], float]:
        best, best_score = None, float("inf")
        for member in self.members:
            state = self.tracking[member.user_id]
            if not is_eligible(member, shift, state):
                continue
            member_score = score(member, state, shift, self.config)
            if member_score < best_score:
                best, best_score = member, member_score
        return best, best_score

    def _skip(self, shift: Shift, reason: str):
        logger.debug("Skipping shift %s: %s", shift.id, reason)
        self.skipped.append((shift.id, reason))

    def run(self, shifts: List[Shift]) -> List[AssignmentResult]:
        self._reset_tracking()
        results: List[AssignmentResult] = []
        previous_date: Optional[dt.date] = None

        for shift in sort_shifts_chronologically(shifts):
            if shift.is_assigned:
                self._skip(shift, ALREADY_ASSIGNED)
                continue

            shift_date = parse_date(shift.date)
            if shift_date is None:
                self._skip(shift, UNPARSABLE_DATE)
                continue

            self._reset_counters(previous_date, shift_date)
            previous_date = shift_date

            member, member_score = self._select_member(shift)
            if member is None:
                self._skip(shift, NO_ELIGIBLE_MEMBERS)
                continue

            is_holiday = bool(self.is_holiday(shift_date))
            points = apply_holiday_multiplier(shift.points, is_holiday, self.config.holiday_multiplier)

            state = self.tracking[member.user_id]
            state.session_points += points
            state.shifts_this_week += 1
            state.shifts_this_month += 1
            state.last_assigned_date = shift_date

            logger.debug("Shift %s (%s) -> %s, score %.1f, %.1f points%s",
                         shift.id, shift_date, member.user_id, member_score, points,
                         " (holiday)" if is_holiday else "")

            results.append(AssignmentResult(
                shift_id=shift.id,
                assigned_to=member.user_id,
                assigned_to_name=member.display_name,
                assigned_to_email=member.email,
                points_awarded=points,
                is_holiday=is_holiday,
            ))

        logger.info("Assigned %d of %d shifts to %d members (%d skipped)",
                    len(results), len(shifts), len(self.members), len(self.skipped))
        return results


def auto_assign_shifts(shifts: List[Shift], members: List[Member],
                       config: Optional[AssignmentConfig] = None,
                       tracking: Optional[Tracking] = None,
                       holiday_lookup: Optional[HolidayLookup] = None) -> List[AssignmentResult]:
    """Assign open shifts fairly. Shifts nobody can take are left out of the result.

    Without `holiday_lookup` the Swedish calendar is used, eves included, so
    e.g. 2025-01-06 (Epiphany) counts as a holiday and a 5-point shift awards 7.5.
    Pass `holiday_lookup=lambda d: False` to weight every shift at base points.
    """
    return AutoAssigner(members, config, tracking, holiday_lookup).run(shifts)


def validate_manual_assignment(member: Member, shift: Shift,
                               current_tracking: Optional[CurrentTracking] = None) -> Optional[str]:
    """Reason a manual assignment should be rejected, or None if it is allowed."""
    if not is_member_available(member, shift):
        return f"{member.display_name} is not available during this time slot"

    if current_tracking is None or member.limits is None:
        return None

    reached = limit_reached(member.limits, current_tracking.shifts_this_week,
                            current_tracking.shifts_this_month)
    if reached == "week":
        return (f"{member.display_name} has reached their maximum shifts per week "
                f"({member.limits.max_shifts_per_week})")
    if reached == "month":
        return (f"{member.display_name} has reached their maximum shifts per month "
                f"({member.limits.max_shifts_per_month})")
    return None
