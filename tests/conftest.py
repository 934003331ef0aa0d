import pytest
from fairshift.models import Member, Shift


@pytest.fixture
def no_holidays():
    return lambda d: False


def member(user_id, points=0, **kw):
    return Member(user_id=user_id, display_name=kw.pop("name", user_id.upper()),
                  email=f"{user_id}@example.com", historical_points=points, **kw)


def shift(shift_id, date, time="06:00-07:00", points=1, **kw):
    return Shift(id=shift_id, date=date, time=time, points=points, **kw)
