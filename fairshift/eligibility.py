from typing import List, Optional
from fairshift.models import Member, Shift, MemberTrackingState, MemberLimits, DayAvailability
from fairshift.utils import parse_date, day_of_week, parse_shift_start_time, is_time_in_range


def matches_window(rules: Optional[List[DayAvailability]], shift: Shift) -> bool:
    """True if the shift's start time falls in one of the rules' slots on its weekday."""
    if not rules:
        return False
    shift_date = parse_date(shift.date)
    if shift_date is None:
        return False
    shift_day = day_of_week(shift_date)
    start = parse_shift_start_time(shift.time)
    for rule in rules:
        if rule.day_of_week != shift_day:
            continue
        for slot in rule.time_slots:
            if is_time_in_range(start, slot.start, slot.end):
                return True
    return False


def is_member_available(member: Member, shift: Shift) -> bool:
    if member.availability is None:
        return True
    # Unparsable dates count as available
    return not matches_window(member.availability.never_available, shift)


def limit_reached(limits: Optional[MemberLimits], shifts_this_week: int, shifts_this_month: int) -> Optional[str]:
    """Name of the first cap already reached ('week' or 'month'), else None."""
    if limits is None:
        return None
    if limits.max_shifts_per_week is not None and shifts_this_week >= limits.max_shifts_per_week:
        return "week"
    if limits.max_shifts_per_month is not None and shifts_this_month >= limits.max_shifts_per_month:
        return "month"
    return None


def has_reached_limits(member: Member, tracking: MemberTrackingState) -> bool:
    return limit_reached(member.limits, tracking.shifts_this_week, tracking.shifts_this_month) is not None


def is_eligible(member: Member, shift: Shift, tracking: MemberTrackingState) -> bool:
    return is_member_available(member, shift) and not has_reached_limits(member, tracking)
