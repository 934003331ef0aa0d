from fairshift.models import MemberTrackingState, AssignmentConfig
from fairshift.scoring import score, preference_adjustment
from conftest import member, shift

MONDAY_PREFERRED = {"preferred_times": [
    {"day_of_week": 1, "time_slots": [{"start": "06:00", "end": "12:00"}]},
]}


def test_base_score_is_historical_plus_session():
    m = member("u1", points=10)
    assert score(m, MemberTrackingState(session_points=4), shift("s1", "2025-01-07")) == 14


def test_preferred_time_lowers_score():
    m = member("u1", points=10, availability=MONDAY_PREFERRED)
    assert score(m, MemberTrackingState(), shift("s1", "2025-01-06", "07:00-08:00")) == 8
    assert score(m, MemberTrackingState(), shift("s2", "2025-01-06", "13:00-14:00")) == 10


def test_configured_bonus():
    m = member("u1", points=10, availability=MONDAY_PREFERRED)
    config = AssignmentConfig(preference_bonus=-5)
    assert score(m, MemberTrackingState(), shift("s1", "2025-01-06"), config) == 5
    assert preference_adjustment(m, shift("s1", "2025-01-06"), -5) == -5


def test_score_is_pure():
    m = member("u1", points=3, availability=MONDAY_PREFERRED)
    state = MemberTrackingState(session_points=2)
    s = shift("s1", "2025-01-06")
    first = score(m, state, s)
    assert score(m, state, s) == first
    assert state.session_points == 2
