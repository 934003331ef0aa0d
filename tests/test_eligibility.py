from fairshift.models import MemberTrackingState, MemberLimits
from fairshift.eligibility import is_member_available, has_reached_limits, is_eligible
from conftest import member, shift

MONDAY_MORNINGS_OFF = {"never_available": [
    {"day_of_week": 1, "time_slots": [{"start": "06:00", "end": "08:00"}]},
]}


def test_never_available_window_blocks_shift():
    m = member("u1", availability=MONDAY_MORNINGS_OFF)
    assert not is_member_available(m, shift("s1", "2025-01-06", "06:00-07:00"))
    assert not is_member_available(m, shift("s2", "2025-01-06", "07:30-09:00"))


def test_window_uses_start_time_and_weekday_only():
    m = member("u1", availability=MONDAY_MORNINGS_OFF)
    # Starts at the exclusive end of the window
    assert is_member_available(m, shift("s1", "2025-01-06", "08:00-09:00"))
    # Tuesday
    assert is_member_available(m, shift("s2", "2025-01-07", "06:00-07:00"))


def test_unparsable_date_counts_as_available():
    m = member("u1", availability=MONDAY_MORNINGS_OFF)
    assert is_member_available(m, shift("s1", "garbage", "06:00-07:00"))


def test_camel_case_store_documents_validate():
    from fairshift.models import Member
    m = Member.model_validate({
        "userId": "u9", "displayName": "Nine", "email": "n@x.se", "historicalPoints": 4,
        "availability": {"neverAvailable": [{"dayOfWeek": 1, "timeSlots": [{"start": "06:00", "end": "08:00"}]}]},
        "limits": {"maxShiftsPerWeek": 2},
    })
    assert m.limits.max_shifts_per_week == 2
    assert not is_member_available(m, shift("s1", "2025-01-06", "06:00-07:00"))


def test_limits():
    m = member("u1", limits=MemberLimits(max_shifts_per_week=2, max_shifts_per_month=5))
    assert not has_reached_limits(m, MemberTrackingState(shifts_this_week=1, shifts_this_month=4))
    assert has_reached_limits(m, MemberTrackingState(shifts_this_week=2, shifts_this_month=2))
    assert has_reached_limits(m, MemberTrackingState(shifts_this_week=0, shifts_this_month=5))


def test_zero_cap_blocks_everything():
    m = member("u1", limits=MemberLimits(max_shifts_per_week=0))
    assert has_reached_limits(m, MemberTrackingState())


def test_no_limits_never_reached():
    assert not has_reached_limits(member("u1"), MemberTrackingState(shifts_this_week=50))


def test_is_eligible_combines_both_checks():
    m = member("u1", availability=MONDAY_MORNINGS_OFF, limits=MemberLimits(max_shifts_per_week=1))
    tuesday = shift("s1", "2025-01-07")
    assert is_eligible(m, tuesday, MemberTrackingState())
    assert not is_eligible(m, tuesday, MemberTrackingState(shifts_this_week=1))
    assert not is_eligible(m, shift("s2", "2025-01-06"), MemberTrackingState())
