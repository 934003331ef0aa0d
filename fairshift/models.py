from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional, Dict, Literal
import datetime as dt

ASSIGNED = "assigned"
UNASSIGNED = "unassigned"


class StoreModel(BaseModel):
    """Accepts both snake_case and the document store's camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeRange(StoreModel):
    start: str  # "HH:MM"
    end: str    # "HH:MM", exclusive


class DayAvailability(StoreModel):
    day_of_week: int = Field(ge=0, le=6)  # 0=Sun .. 6=Sat
    time_slots: List[TimeRange] = []


class MemberAvailability(StoreModel):
    never_available: Optional[List[DayAvailability]] = None
    preferred_times: Optional[List[DayAvailability]] = None


class MemberLimits(StoreModel):
    max_shifts_per_week: Optional[int] = None
    min_shifts_per_week: Optional[int] = None
    max_shifts_per_month: Optional[int] = None
    min_shifts_per_month: Optional[int] = None


class Member(StoreModel):
    user_id: str
    display_name: str = ""
    email: str = ""
    historical_points: float = 0.0
    availability: Optional[MemberAvailability] = None
    limits: Optional[MemberLimits] = None


class Shift(StoreModel):
    id: str
    date: Any  # date, datetime, ISO string or store timestamp; parsed lazily
    time: str = ""  # "HH:MM-HH:MM"
    points: float = Field(default=0.0, ge=0)
    status: str = UNASSIGNED
    assigned_to: Optional[str] = None

    # Written back by the caller after a run
    assigned_to_name: Optional[str] = None
    assigned_to_email: Optional[str] = None
    points_awarded: Optional[float] = None
    schedule_id: Optional[str] = None

    @property
    def is_assigned(self) -> bool:
        return self.status == ASSIGNED and bool(self.assigned_to)


class MemberTrackingState(StoreModel):
    session_points: float = 0.0
    shifts_this_week: int = 0
    shifts_this_month: int = 0
    last_assigned_date: Optional[dt.date] = None


class CurrentTracking(StoreModel):
    shifts_this_week: int = 0
    shifts_this_month: int = 0


class AssignmentResult(StoreModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    shift_id: str
    assigned_to: str
    assigned_to_name: str
    assigned_to_email: str
    points_awarded: float
    is_holiday: bool


class AssignmentConfig(StoreModel):
    holiday_multiplier: float = Field(default=1.5, ge=0)
    preference_bonus: float = -2.0  # negative lowers the score, raising priority
    memory_horizon_days: int = 90   # only read by the ledger, never by the assignment loop

    # Holiday calendar
    extra_holidays: List[dt.date] = []
    include_holiday_eves: bool = True


class MemberDistribution(StoreModel):
    shifts: int = 0
    points: float = 0.0


class AssignmentSummary(StoreModel):
    total_assigned: int = 0
    total_points: float = 0.0
    holiday_shifts: int = 0
    member_distribution: Dict[str, MemberDistribution] = {}


# Fairness reporting

Period = Literal["week", "month", "quarter", "year"]
Trend = Literal["up", "down", "stable"]


class CompletedTask(StoreModel):
    user_id: str
    display_name: str = "Unknown"
    email: str = ""
    points: float = 0.0
    completed_at: dt.datetime


class MemberFairnessData(StoreModel):
    user_id: str
    display_name: str
    email: str = ""
    total_points: float
    points_this_period: float
    tasks_completed: int
    tasks_this_period: int
    estimated_hours_worked: float  # 30 min per point
    fairness_score: int            # 0-100, 50 = average
    percentage_of_total: float
    deviation_from_average: float  # negative = under
    trend: Trend
    trend_value: float


class FairnessDistribution(StoreModel):
    stable_id: Optional[str] = None
    stable_name: Optional[str] = None
    period: Period
    period_start_date: str
    period_end_date: str

    total_points: float
    total_tasks: int
    average_points_per_member: float
    average_tasks_per_member: float
    active_member_count: int

    members: List[MemberFairnessData] = []

    fairness_index: int       # 0-100, higher = more fair
    gini_coefficient: float   # 0 = perfect equality

    generated_at: dt.datetime


class HistoryEntry(StoreModel):
    date: str
    points: float
    cumulative_points: float
    tasks_completed: int


class MemberPointsHistory(StoreModel):
    user_id: str
    display_name: str
    history: List[HistoryEntry] = []
    total_points: float = 0.0
    average_points_per_day: float = 0.0


class AssignmentSuggestion(StoreModel):
    user_id: str
    display_name: str
    historical_points: float
    priority: int
