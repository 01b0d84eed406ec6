"""Tests for the CSV export."""

from datetime import date

from weight_planner.services.export import (
    build_export_rows,
    export_filename,
    render_csv,
    trend_indicator,
)
from tests.conftest import make_log, make_plan, make_profile

HEADER_LINE = (
    '\ufeff"Week","Date","Timeline","Weight (kg)","Change (kg)","Visual Trend"'
)


def _logs():
    return [
        make_log("d", date(2024, 3, 12), 78.0),
        make_log("a", date(2024, 3, 1), 80.0),
        make_log("b", date(2024, 3, 4), 80.5),
        make_log("c", date(2024, 3, 5), 78.0),
    ]


def test_rows_relative_to_plan() -> None:
    rows = build_export_rows(_logs(), make_plan(start_date=date(2024, 3, 3)))

    assert [row.as_list() for row in rows] == [
        ["Pre-Plan", "2024-03-01", "Pre-Plan", "80.00", "0", "-"],
        ["Week 1", "2024-03-04", "Day 2", "80.50", "+0.50", "▲▲▲▲▲"],
        ["Week 1", "2024-03-05", "Day 3", "78.00", "-2.50", "▼" * 15],
        ["Week 2", "2024-03-12", "Day 10", "78.00", "+0.00", "-"],
    ]


def test_rows_without_plan_count_from_first_log() -> None:
    rows = build_export_rows(_logs(), None)

    assert [row.week for row in rows] == ["Week 1", "Week 1", "Week 1", "Week 2"]
    assert [row.timeline for row in rows] == ["Day 1", "Day 4", "Day 5", "Day 12"]


def test_trend_indicator() -> None:
    assert trend_indicator(None) == "-"
    assert trend_indicator(0.0) == "-"
    assert trend_indicator(0.02) == "-"
    assert trend_indicator(0.25) == "▲▲▲"
    assert trend_indicator(-0.3) == "▼▼▼"
    assert trend_indicator(4.0) == "▲" * 15


def test_render_csv_has_bom_header_and_quoted_values() -> None:
    content = render_csv(build_export_rows(_logs()[:2], None))

    lines = content.split("\n")
    assert content.startswith("\ufeff")
    assert lines[0] == HEADER_LINE
    assert lines[1] == '"Week 1","2024-03-01","Day 1","80.00","0","-"'
    trend = "▼" * 15
    assert lines[2] == f'"Week 2","2024-03-12","Day 12","78.00","-2.00","{trend}"'


def test_empty_series_renders_header_only() -> None:
    content = render_csv(build_export_rows([], None))

    assert content == HEADER_LINE + "\n"


def test_export_filename() -> None:
    assert export_filename(None) == "weight_history.csv"
    assert (
        export_filename(make_plan(name="Summer  Cut 2024"))
        == "Summer_Cut_2024_weight_history.csv"
    )


def test_export_service_uses_active_plan(
    container, profile_repository, log_repository
) -> None:
    profile_repository.stored = make_profile(
        plans=[make_plan(name="Spring Cut", start_date=date(2024, 3, 1))]
    )
    log_repository.logs = _logs()

    filename, content = container.export_service.export()

    assert filename == "Spring_Cut_weight_history.csv"
    assert content.count("\n") == 5
