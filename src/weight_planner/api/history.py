"""History, calendar and export endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, Response

from weight_planner.domain.history import (
    CalendarDay,
    ChartPoint,
    GroupMode,
    HistoryRow,
    TimeRange,
    WeekOption,
)
from weight_planner.services.export import CSV_MEDIA_TYPE

if TYPE_CHECKING:
    from weight_planner.containers import AppContainer

router = APIRouter(tags=["history"])


@router.get("/history")
async def history(
    request: Request,
    mode: GroupMode = GroupMode.DAILY,
    time_range: TimeRange = Query(default=TimeRange.ALL, alias="range"),
    reference: date | None = None,
    offset: int = 0,
) -> dict[str, list[HistoryRow]]:
    """Return history rows, newest-first."""
    container: AppContainer = request.app.state.container
    rows = container.history_service.history(mode, time_range, reference, offset)
    return {"rows": rows}


@router.get("/history/chart")
async def chart(
    request: Request,
    time_range: TimeRange = Query(default=TimeRange.ALL, alias="range"),
    reference: date | None = None,
    offset: int = 0,
) -> dict[str, list[ChartPoint]]:
    """Return chart points, oldest-first."""
    container: AppContainer = request.app.state.container
    return {"points": container.history_service.chart(time_range, reference, offset)}


@router.get("/history/weeks")
async def weeks(request: Request) -> dict[str, list[WeekOption]]:
    """Return the weeks a caller can jump to, newest-first."""
    container: AppContainer = request.app.state.container
    return {"weeks": container.history_service.weeks()}


@router.get("/calendar")
async def calendar(
    request: Request,
    year: int | None = None,
    month: int | None = Query(default=None, ge=1, le=12),
) -> dict[str, list[CalendarDay]]:
    """Return the month grid; defaults to the current month."""
    container: AppContainer = request.app.state.container
    today = container.profile_service.today()
    days = container.history_service.calendar(year or today.year, month or today.month)
    return {"days": days}


@router.get("/export")
async def export(request: Request) -> Response:
    """Download the weight history as CSV."""
    container: AppContainer = request.app.state.container
    filename, content = container.export_service.export()
    return Response(
        content=content.encode("utf-8"),
        media_type=f"{CSV_MEDIA_TYPE}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
