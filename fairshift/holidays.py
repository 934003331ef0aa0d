"""
Swedish public holiday calendar used to weight shift points.
"""

import datetime as dt
from functools import lru_cache
from typing import Dict, Iterable, Optional
from dateutil.easter import easter
from dateutil.relativedelta import relativedelta, FR, SA

DEFAULT_HOLIDAY_MULTIPLIER = 1.5


@lru_cache(maxsize=64)
def _fixed_and_movable(year: int) -> Dict[dt.date, str]:
    easter_sunday = easter(year)
    return {
        dt.date(year, 1, 1): "Nyårsdagen",
        dt.date(year, 1, 6): "Trettondedag jul",
        easter_sunday - dt.timedelta(days=2): "Långfredagen",
        easter_sunday: "Påskdagen",
        easter_sunday + dt.timedelta(days=1): "Annandag påsk",
        dt.date(year, 5, 1): "Första maj",
        easter_sunday + dt.timedelta(days=39): "Kristi himmelsfärdsdag",
        easter_sunday + dt.timedelta(days=49): "Pingstdagen",
        dt.date(year, 6, 6): "Sveriges nationaldag",
        # Saturday between 20 and 26 June
        dt.date(year, 6, 20) + relativedelta(weekday=SA): "Midsommardagen",
        # Saturday between 31 October and 6 November
        dt.date(year, 10, 31) + relativedelta(weekday=SA): "Alla helgons dag",
        dt.date(year, 12, 25): "Juldagen",
        dt.date(year, 12, 26): "Annandag jul",
    }


@lru_cache(maxsize=64)
def _eves(year: int) -> Dict[dt.date, str]:
    return {
        dt.date(year, 6, 19) + relativedelta(weekday=FR): "Midsommarafton",
        dt.date(year, 12, 24): "Julafton",
        dt.date(year, 12, 31): "Nyårsafton",
    }


def swedish_holidays(year: int, include_eves: bool = True) -> Dict[dt.date, str]:
    days = dict(_fixed_and_movable(year))
    if include_eves:
        days.update(_eves(year))
    return days


class HolidayCalendar:
    """Swedish holidays plus locally configured extra days (e.g. stable closures)."""

    def __init__(self, extra: Optional[Iterable[dt.date]] = None, include_eves: bool = True):
        self.extra = set(extra or [])
        self.include_eves = include_eves

    def name(self, day: dt.date) -> Optional[str]:
        if day in self.extra:
            return "Extra holiday"
        return swedish_holidays(day.year, self.include_eves).get(day)

    def is_holiday(self, day: dt.date) -> bool:
        return self.name(day) is not None

    @classmethod
    def from_config(cls, config) -> "HolidayCalendar":
        return cls(extra=config.extra_holidays, include_eves=config.include_holiday_eves)


DEFAULT_CALENDAR = HolidayCalendar()


def is_swedish_holiday(day: dt.date) -> bool:
    return DEFAULT_CALENDAR.is_holiday(day)


def apply_holiday_multiplier(base_points: float, is_holiday: bool,
                             multiplier: float = DEFAULT_HOLIDAY_MULTIPLIER) -> float:
    if is_holiday:
        return base_points * multiplier
    return base_points
