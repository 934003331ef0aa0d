from typing import Optional
from fairshift.models import Member, Shift, MemberTrackingState, AssignmentConfig
from fairshift.eligibility import matches_window


def preference_adjustment(member: Member, shift: Shift, bonus: float) -> float:
    if member.availability is None:
        return 0.0
    if matches_window(member.availability.preferred_times, shift):
        return bonus
    return 0.0


def score(member: Member, tracking: MemberTrackingState, shift: Shift,
          config: Optional[AssignmentConfig] = None) -> float:
    """Fairness score for giving this shift to member. Lower = assign first."""
    config = config or AssignmentConfig()
    base = member.historical_points + tracking.session_points
    return base + preference_adjustment(member, shift, config.preference_bonus)
