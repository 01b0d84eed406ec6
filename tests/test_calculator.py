"""Tests for the metabolic calculator."""

from datetime import date, timedelta

import pytest

from weight_planner.domain.metrics import PlanMode
from weight_planner.domain.models import ActivityLevel, Gender
from weight_planner.services.calculator import (
    ACTIVITY_MULTIPLIERS,
    calculate_bmr,
    calculate_deficit,
    calculate_tdee,
    effective_current_weight,
)
from tests.conftest import make_log, make_plan, make_profile

TODAY = date(2024, 3, 1)


def test_bmr_uses_gender_offset() -> None:
    assert calculate_bmr(80, 175, 30, Gender.MALE) == pytest.approx(1748.75)
    assert calculate_bmr(60, 165, 40, Gender.FEMALE) == pytest.approx(1270.25)


@pytest.mark.parametrize("level", list(ActivityLevel))
def test_tdee_exceeds_bmr_for_every_level(level: ActivityLevel) -> None:
    bmr = calculate_bmr(70, 170, 35, Gender.FEMALE)

    assert calculate_tdee(bmr, level) > bmr
    assert calculate_tdee(bmr, level) == pytest.approx(bmr * ACTIVITY_MULTIPLIERS[level])


def test_no_active_plan_returns_none() -> None:
    assert calculate_deficit(make_profile(), None, [], TODAY) is None


def test_loss_scenario() -> None:
    plan = make_plan(
        start_date=TODAY, target_weight=75, target_date=TODAY + timedelta(days=70)
    )

    result = calculate_deficit(make_profile(80), plan, [], TODAY)

    assert result is not None
    assert result.plan_mode is PlanMode.LOSS
    assert result.bmr == pytest.approx(1748.75)
    assert result.tdee == pytest.approx(2098.5)
    assert result.daily_deficit_required == pytest.approx(550.0)
    assert result.daily_calorie_target == pytest.approx(1548.5)
    assert result.weekly_change_required == pytest.approx(0.5)
    assert result.days_remaining == 70
    assert result.is_realistic is True


def test_loss_below_calorie_floor_is_unrealistic() -> None:
    plan = make_plan(target_weight=70, target_date=TODAY + timedelta(days=77))

    result = calculate_deficit(make_profile(80), plan, [], TODAY)

    assert result is not None
    assert result.weekly_change_required < 1.0
    assert result.daily_calorie_target < 1200
    assert result.is_realistic is False


def test_gain_scenario_checks_pace_only() -> None:
    plan = make_plan(target_weight=95, target_date=TODAY + timedelta(days=100))

    result = calculate_deficit(make_profile(80), plan, [], TODAY)

    assert result is not None
    assert result.plan_mode is PlanMode.GAIN
    assert result.daily_calorie_target == pytest.approx(
        result.tdee + result.daily_deficit_required
    )
    assert result.weekly_change_required == pytest.approx(1.05)
    assert result.is_realistic is False


def test_gain_with_large_surplus_is_realistic_within_pace() -> None:
    plan = make_plan(target_weight=90, target_date=TODAY + timedelta(days=100))

    result = calculate_deficit(make_profile(80), plan, [], TODAY)

    assert result is not None
    assert result.weekly_change_required == pytest.approx(0.7)
    assert result.is_realistic is True


def test_equal_target_is_maintenance() -> None:
    plan = make_plan(target_weight=80, target_date=TODAY + timedelta(days=30))

    result = calculate_deficit(make_profile(80), plan, [], TODAY)

    assert result is not None
    assert result.plan_mode is PlanMode.MAINTAIN
    assert result.daily_calorie_target == result.tdee
    assert result.daily_deficit_required == 0
    assert result.weekly_change_required == 0
    assert result.is_realistic is True


def test_past_target_date_is_clamped() -> None:
    plan = make_plan(target_weight=70, target_date=TODAY - timedelta(days=5))

    result = calculate_deficit(make_profile(80), plan, [], TODAY)

    assert result is not None
    assert result.days_remaining == 0
    assert result.daily_calorie_target == result.tdee
    assert result.weekly_change_required == 0
    assert result.is_realistic is True


def test_latest_log_overrides_stored_weight() -> None:
    profile = make_profile(90)
    logs = [
        make_log("b", date(2024, 2, 20), 82.0),
        make_log("a", date(2024, 2, 10), 85.0),
    ]

    assert effective_current_weight(profile, logs) == 82.0
    assert effective_current_weight(profile, []) == 90.0

    plan = make_plan(target_weight=82, target_date=TODAY + timedelta(days=10))
    result = calculate_deficit(profile, plan, logs, TODAY)
    assert result is not None
    assert result.plan_mode is PlanMode.MAINTAIN
