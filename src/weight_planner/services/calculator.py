"""Energy expenditure and calorie target calculations."""

from datetime import date

from weight_planner.domain.metrics import CalculationResult, PlanMode
from weight_planner.domain.models import ActivityLevel, Gender, Plan, Profile, WeightLog
from weight_planner.services.weight_logs import latest_log

CALORIES_PER_KG = 7700
MAX_WEEKLY_CHANGE_KG = 1.0
MIN_DAILY_CALORIES = 1200
DAYS_PER_WEEK = 7

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.VERY: 1.725,
    ActivityLevel.EXTRA: 1.9,
}

ACTIVITY_DESCRIPTIONS: dict[ActivityLevel, str] = {
    ActivityLevel.SEDENTARY: "Little or no exercise, desk job",
    ActivityLevel.LIGHT: "Light exercise or sports 1-3 days/week",
    ActivityLevel.MODERATE: "Moderate exercise or sports 3-5 days/week",
    ActivityLevel.VERY: "Hard exercise or sports 6-7 days/week",
    ActivityLevel.EXTRA: "Very hard exercise, physical job, or training 2x/day",
}

_GENDER_OFFSETS = {Gender.MALE: 5, Gender.FEMALE: -161}


def calculate_bmr(weight: float, height: float, age: float, gender: Gender) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation."""
    return 10 * weight + 6.25 * height - 5 * age + _GENDER_OFFSETS[gender]


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def effective_current_weight(profile: Profile, logs: list[WeightLog]) -> float:
    """Return the newest logged weight, falling back to the profile value."""
    latest = latest_log(logs)
    return latest.weight if latest else profile.current_weight


def plan_mode_for(current_weight: float, target_weight: float) -> PlanMode:
    """Classify a goal as loss, gain or maintenance."""
    if target_weight < current_weight:
        return PlanMode.LOSS
    if target_weight > current_weight:
        return PlanMode.GAIN
    return PlanMode.MAINTAIN


def calculate_deficit(
    profile: Profile,
    active_plan: Plan | None,
    logs: list[WeightLog],
    today: date,
) -> CalculationResult | None:
    """Compute the daily calorie target needed to reach the active plan.

    Returns None when no plan is active. Past target dates and maintenance
    goals produce a zero-change result pinned to TDEE.
    """
    if active_plan is None:
        return None

    current_weight = effective_current_weight(profile, logs)
    bmr = calculate_bmr(current_weight, profile.height, profile.age, profile.gender)
    tdee = calculate_tdee(bmr, profile.activity_level)
    days_remaining = (active_plan.target_date - today).days
    mode = plan_mode_for(current_weight, active_plan.target_weight)

    if days_remaining <= 0 or mode is PlanMode.MAINTAIN:
        return CalculationResult(
            bmr=bmr,
            tdee=tdee,
            daily_deficit_required=0.0,
            daily_calorie_target=tdee,
            weekly_change_required=0.0,
            is_realistic=True,
            days_remaining=max(days_remaining, 0),
            plan_mode=mode,
        )

    total_change = abs(current_weight - active_plan.target_weight)
    daily_change = total_change * CALORIES_PER_KG / days_remaining
    weekly_change = total_change / (days_remaining / DAYS_PER_WEEK)

    if mode is PlanMode.LOSS:
        target = tdee - daily_change
        is_realistic = weekly_change <= MAX_WEEKLY_CHANGE_KG and target > MIN_DAILY_CALORIES
    else:
        # Surplus targets have no calorie floor, only the pace bound.
        target = tdee + daily_change
        is_realistic = weekly_change <= MAX_WEEKLY_CHANGE_KG

    return CalculationResult(
        bmr=bmr,
        tdee=tdee,
        daily_deficit_required=daily_change,
        daily_calorie_target=target,
        weekly_change_required=weekly_change,
        is_realistic=is_realistic,
        days_remaining=days_remaining,
        plan_mode=mode,
    )
