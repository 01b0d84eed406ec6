"""Domain models for calorie calculations."""

from dataclasses import dataclass
from enum import StrEnum


class PlanMode(StrEnum):
    """Direction of the weight change a plan asks for."""

    LOSS = "loss"
    GAIN = "gain"
    MAINTAIN = "maintain"


@dataclass(frozen=True)
class CalculationResult:
    """Energy expenditure and calorie target for the active plan."""

    bmr: float
    tdee: float
    daily_deficit_required: float
    daily_calorie_target: float
    weekly_change_required: float
    is_realistic: bool
    days_remaining: int
    plan_mode: PlanMode
