"""CSV export of the weight log series."""

from __future__ import annotations

import csv
import io
import logging
import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from weight_planner.domain.export import ExportRow
from weight_planner.domain.history import TimelineUnit
from weight_planner.domain.models import Plan, WeightLog
from weight_planner.services.history import (
    DAYS_PER_WEEK,
    PRE_PLAN_LABEL,
    resolve_anchor,
    timeline_label,
)
from weight_planner.services.plans import get_active_plan
from weight_planner.services.weight_logs import (
    WeightLogRepository,
    localize_logs,
    sort_logs,
)

if TYPE_CHECKING:
    from weight_planner.services.profiles import ProfileService

_logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"
CSV_MEDIA_TYPE = "text/csv"
HEADER = ("Week", "Date", "Timeline", "Weight (kg)", "Change (kg)", "Visual Trend")
GAIN_GLYPH = "▲"
LOSS_GLYPH = "▼"
FLAT_GLYPH = "-"
MAX_GLYPHS = 15
FALLBACK_FILENAME = "weight_history.csv"


def trend_indicator(change: float | None) -> str:
    """Return a bar of glyphs sized by the change, capped at 15."""
    if change is None:
        return FLAT_GLYPH
    # Half-up rounding so 0.25 kg renders as three glyphs.
    count = min(math.floor(abs(change) * 10 + 0.5), MAX_GLYPHS)
    if count == 0:
        return FLAT_GLYPH
    return (GAIN_GLYPH if change > 0 else LOSS_GLYPH) * count


def week_label(log: WeightLog, plan: Plan | None, first_log: WeightLog) -> str:
    """Return the plan-relative (or first-log-relative) week label."""
    start = plan.start_date if plan is not None else first_log.day
    elapsed = (log.day - start).days
    if elapsed < 0:
        return PRE_PLAN_LABEL
    return f"Week {elapsed // DAYS_PER_WEEK + 1}"


def build_export_rows(logs: list[WeightLog], plan: Plan | None) -> list[ExportRow]:
    """Render every log oldest-first into export rows."""
    ordered = sort_logs(logs)
    if not ordered:
        return []
    anchor = resolve_anchor(plan, ordered)
    rows: list[ExportRow] = []
    previous: WeightLog | None = None
    for log in ordered:
        if previous is None:
            change_text = "0"
            trend = trend_indicator(None)
        else:
            change = log.weight - previous.weight
            change_text = f"{change:+.2f}"
            trend = trend_indicator(change)
        rows.append(
            ExportRow(
                week=week_label(log, plan, ordered[0]),
                date=log.day.isoformat(),
                timeline=timeline_label(log.day, anchor, TimelineUnit.DAY),
                weight=f"{log.weight:.2f}",
                change=change_text,
                trend=trend,
            )
        )
        previous = log
    return rows


def render_csv(rows: list[ExportRow]) -> str:
    """Render rows to CSV text prefixed with a byte-order mark."""
    buffer = io.StringIO()
    buffer.write(BYTE_ORDER_MARK)
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADER)
    for row in rows:
        writer.writerow(row.as_list())
    return buffer.getvalue()


def export_filename(plan: Plan | None) -> str:
    """Return the download filename for the plan."""
    if plan is None:
        return FALLBACK_FILENAME
    slug = re.sub(r"\s+", "_", plan.name.strip())
    return f"{slug}_{FALLBACK_FILENAME}"


@dataclass
class ExportService:
    """Application service producing the CSV download."""

    profile_service: ProfileService
    log_repository: WeightLogRepository

    def export(self) -> tuple[str, str]:
        """Return the filename and CSV content for the stored history."""
        profile = self.profile_service.load_profile()
        plan = get_active_plan(profile.plans) if profile else None
        logs = localize_logs(
            self.log_repository.load(), self.profile_service.timezone_name
        )
        rows = build_export_rows(logs, plan)
        _logger.info("History exported: rows=%s", len(rows))
        return export_filename(plan), render_csv(rows)
