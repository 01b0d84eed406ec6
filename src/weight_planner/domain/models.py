"""Domain models for the weight planner."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum


class Gender(StrEnum):
    """Biological sex used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Activity levels ordered from least to most active."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VERY = "very"
    EXTRA = "extra"


@dataclass(frozen=True)
class Plan:
    """A named, dated weight goal."""

    id: str
    name: str
    start_date: date
    target_weight: float
    target_date: date
    is_active: bool = False
    notes: str | None = None


@dataclass(frozen=True)
class WeightLog:
    """A single weight measurement."""

    id: str
    logged_at: datetime
    weight: float

    @property
    def day(self) -> date:
        """Calendar day the measurement belongs to."""
        return self.logged_at.date()


@dataclass(frozen=True)
class Profile:
    """Biometrics and goal plans for the person being tracked."""

    height: float
    current_weight: float
    age: int
    gender: Gender
    activity_level: ActivityLevel
    plans: list[Plan] = field(default_factory=list)


@dataclass(frozen=True)
class LegacyProfile:
    """Stored profile shape from before plans existed.

    Carried a single goal as top-level fields and no plan list.
    """

    height: float
    current_weight: float
    age: int
    gender: Gender
    activity_level: ActivityLevel
    target_weight: float | None = None
    target_date: date | None = None


StoredProfile = LegacyProfile | Profile
