"""Weight history grouping, timeline labels and navigation helpers."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING

from weight_planner.domain.history import (
    CalendarDay,
    ChartPoint,
    GroupMode,
    HistoryRow,
    TimelineUnit,
    TimeRange,
    WeekOption,
)
from weight_planner.domain.models import Plan, WeightLog
from weight_planner.services.plans import get_active_plan
from weight_planner.services.weight_logs import (
    WeightLogRepository,
    localize_logs,
    sort_logs,
)

if TYPE_CHECKING:
    from weight_planner.services.profiles import ProfileService

PRE_PLAN_LABEL = "Pre-Plan"
DAYS_PER_WEEK = 7
MONTHS_PER_YEAR = 12


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def _month_index(day: date) -> int:
    return day.year * MONTHS_PER_YEAR + day.month - 1


def _month_from_index(index: int) -> date:
    year, month = divmod(index, MONTHS_PER_YEAR)
    return date(year, month + 1, 1)


def range_interval(
    time_range: TimeRange, reference: date, offset: int = 0
) -> tuple[date, date] | None:
    """Return the inclusive calendar interval for a range.

    The interval is the week (Monday start), month or year containing
    ``reference``, moved by ``offset`` whole units. ALL is unbounded.
    """
    if time_range is TimeRange.WEEK:
        start = week_start(reference) + timedelta(days=DAYS_PER_WEEK * offset)
        return start, start + timedelta(days=DAYS_PER_WEEK - 1)
    if time_range is TimeRange.MONTH:
        index = _month_index(reference) + offset
        start = _month_from_index(index)
        return start, _month_from_index(index + 1) - timedelta(days=1)
    if time_range is TimeRange.YEAR:
        year = reference.year + offset
        return date(year, 1, 1), date(year, 12, 31)
    return None


def filter_logs(
    logs: list[WeightLog],
    time_range: TimeRange,
    reference: date,
    offset: int = 0,
) -> list[WeightLog]:
    """Return logs inside the range, oldest-first."""
    interval = range_interval(time_range, reference, offset)
    ordered = sort_logs(logs)
    if interval is None:
        return ordered
    start, end = interval
    return [log for log in ordered if start <= log.day <= end]


def resolve_anchor(plan: Plan | None, logs: list[WeightLog]) -> date | None:
    """Return the date timeline labels count from.

    The plan's start date wins; otherwise the earliest logged day.
    """
    if plan is not None:
        return plan.start_date
    if not logs:
        return None
    return min(log.day for log in logs)


def timeline_number(day: date, anchor: date, unit: TimelineUnit) -> int:
    """Return the 1-based position of ``day`` counted from ``anchor``."""
    if unit is TimelineUnit.DAY:
        return (day - anchor).days + 1
    if unit is TimelineUnit.WEEK:
        return (week_start(day) - week_start(anchor)).days // DAYS_PER_WEEK + 1
    return _month_index(day) - _month_index(anchor) + 1


def timeline_label(day: date, anchor: date, unit: TimelineUnit) -> str:
    """Return a label such as "Day 3", or "Pre-Plan" before the anchor."""
    number = timeline_number(day, anchor, unit)
    if number <= 0:
        return PRE_PLAN_LABEL
    return f"{unit.value} {number}"


def _newest_first_with_changes(rows: list[HistoryRow]) -> list[HistoryRow]:
    """Fill the change column on chronological rows and reverse them."""
    result: list[HistoryRow] = []
    previous: float | None = None
    for row in rows:
        change = 0.0 if previous is None else row.weight - previous
        result.append(
            HistoryRow(
                period_start=row.period_start,
                label=row.label,
                weight=row.weight,
                change=change,
                entries=row.entries,
                log_id=row.log_id,
            )
        )
        previous = row.weight
    result.reverse()
    return result


def daily_history(
    logs: list[WeightLog],
    anchor: date | None,
    time_range: TimeRange = TimeRange.ALL,
    reference: date | None = None,
    offset: int = 0,
) -> list[HistoryRow]:
    """Return one row per log inside the range, newest-first."""
    if anchor is None or not logs:
        return []
    selected = filter_logs(
        logs, time_range, reference or max(log.day for log in logs), offset
    )
    rows = [
        HistoryRow(
            period_start=log.day,
            label=timeline_label(log.day, anchor, TimelineUnit.DAY),
            weight=log.weight,
            change=0.0,
            log_id=log.id,
        )
        for log in selected
    ]
    return _newest_first_with_changes(rows)


def _grouped_history(
    logs: list[WeightLog],
    anchor: date | None,
    unit: TimelineUnit,
) -> list[HistoryRow]:
    if anchor is None or not logs:
        return []
    groups: dict[date, list[float]] = defaultdict(list)
    for log in logs:
        if unit is TimelineUnit.WEEK:
            key = week_start(log.day)
        else:
            key = log.day.replace(day=1)
        groups[key].append(log.weight)
    rows = [
        HistoryRow(
            period_start=start,
            label=timeline_label(start, anchor, unit),
            weight=sum(weights) / len(weights),
            change=0.0,
            entries=len(weights),
        )
        for start, weights in sorted(groups.items())
    ]
    return _newest_first_with_changes(rows)


def weekly_history(logs: list[WeightLog], anchor: date | None) -> list[HistoryRow]:
    """Return mean weight per Monday-start week, newest-first."""
    return _grouped_history(logs, anchor, TimelineUnit.WEEK)


def monthly_history(logs: list[WeightLog], anchor: date | None) -> list[HistoryRow]:
    """Return mean weight per calendar month, newest-first."""
    return _grouped_history(logs, anchor, TimelineUnit.MONTH)


def chart_series(
    logs: list[WeightLog],
    time_range: TimeRange = TimeRange.ALL,
    reference: date | None = None,
    offset: int = 0,
) -> list[ChartPoint]:
    """Return chart points for the range, oldest-first."""
    if not logs:
        return []
    selected = filter_logs(
        logs, time_range, reference or max(log.day for log in logs), offset
    )
    return [
        ChartPoint(day=log.day, label=f"{log.day:%b} {log.day.day}", weight=log.weight)
        for log in selected
    ]


def enumerate_weeks(logs: list[WeightLog], plan: Plan | None) -> list[WeekOption]:
    """List every week from the earliest to the latest log, newest-first.

    Weeks are labelled from the plan's start week; weeks before it become
    "Pre-plan W<k>" counting backwards. Without a plan the earliest log's week
    is week 1.
    """
    if not logs:
        return []
    days = [log.day for log in logs]
    first = week_start(min(days))
    last = week_start(max(days))
    anchor = week_start(plan.start_date) if plan is not None else first
    weeks: list[WeekOption] = []
    current = last
    while current >= first:
        offset = (current - anchor).days // DAYS_PER_WEEK
        label = f"Week {offset + 1}" if offset >= 0 else f"Pre-plan W{-offset}"
        weeks.append(
            WeekOption(
                start=current,
                end=current + timedelta(days=DAYS_PER_WEEK - 1),
                label=label,
            )
        )
        current -= timedelta(days=DAYS_PER_WEEK)
    return weeks


def calendar_month(
    logs: list[WeightLog], year: int, month: int, today: date
) -> list[CalendarDay]:
    """Return a Monday-start grid of whole weeks covering the month.

    Each cell carries the latest entry logged on that day.
    """
    first = date(year, month, 1)
    last = _month_from_index(_month_index(first) + 1) - timedelta(days=1)
    start = week_start(first)
    end = week_start(last) + timedelta(days=DAYS_PER_WEEK - 1)
    by_day: dict[date, WeightLog] = {}
    for log in sort_logs(logs):
        by_day[log.day] = log
    cells: list[CalendarDay] = []
    current = start
    while current <= end:
        cells.append(
            CalendarDay(
                day=current,
                in_month=current.month == month,
                is_today=current == today,
                log=by_day.get(current),
            )
        )
        current += timedelta(days=1)
    return cells


@dataclass
class HistoryService:
    """Application service producing history views from stored logs."""

    profile_service: ProfileService
    log_repository: WeightLogRepository

    def _logs(self) -> list[WeightLog]:
        return localize_logs(
            self.log_repository.load(), self.profile_service.timezone_name
        )

    def _context(self) -> tuple[list[WeightLog], Plan | None]:
        profile = self.profile_service.load_profile()
        plan = get_active_plan(profile.plans) if profile else None
        return self._logs(), plan

    def history(
        self,
        mode: GroupMode = GroupMode.DAILY,
        time_range: TimeRange = TimeRange.ALL,
        reference: date | None = None,
        offset: int = 0,
    ) -> list[HistoryRow]:
        """Return history rows for the grouping mode, newest-first."""
        logs, plan = self._context()
        anchor = resolve_anchor(plan, logs)
        if mode is GroupMode.WEEKLY:
            return weekly_history(logs, anchor)
        if mode is GroupMode.MONTHLY:
            return monthly_history(logs, anchor)
        return daily_history(
            logs,
            anchor,
            time_range,
            reference or self.profile_service.today(),
            offset,
        )

    def chart(
        self,
        time_range: TimeRange = TimeRange.ALL,
        reference: date | None = None,
        offset: int = 0,
    ) -> list[ChartPoint]:
        """Return chart points, oldest-first."""
        logs, _ = self._context()
        return chart_series(
            logs, time_range, reference or self.profile_service.today(), offset
        )

    def weeks(self) -> list[WeekOption]:
        """Return navigable weeks, newest-first."""
        logs, plan = self._context()
        return enumerate_weeks(logs, plan)

    def calendar(self, year: int, month: int) -> list[CalendarDay]:
        """Return the calendar grid for a month."""
        return calendar_month(
            self._logs(), year, month, self.profile_service.today()
        )
