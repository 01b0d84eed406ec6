"""Domain models for weight history views."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from weight_planner.domain.models import WeightLog


class TimeRange(StrEnum):
    """Window applied to daily history and the chart."""

    WEEK = "1W"
    MONTH = "1M"
    YEAR = "1Y"
    ALL = "ALL"


class GroupMode(StrEnum):
    """How history rows are grouped."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class TimelineUnit(StrEnum):
    """Unit used when counting from the anchor date."""

    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"


@dataclass(frozen=True)
class HistoryRow:
    """One row of the history table."""

    period_start: date
    label: str
    weight: float
    change: float
    entries: int = 1
    log_id: str | None = None


@dataclass(frozen=True)
class ChartPoint:
    """Point on the progress chart."""

    day: date
    label: str
    weight: float


@dataclass(frozen=True)
class WeekOption:
    """Calendar week a caller can jump to."""

    start: date
    end: date
    label: str


@dataclass(frozen=True)
class CalendarDay:
    """Cell of the month calendar."""

    day: date
    in_month: bool
    is_today: bool
    log: WeightLog | None
