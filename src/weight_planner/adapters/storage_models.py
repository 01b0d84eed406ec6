"""Pydantic schemas for the JSON documents kept in the key-value store."""

from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from weight_planner.domain.models import (
    ActivityLevel,
    Gender,
    LegacyProfile,
    Plan,
    Profile,
    StoredProfile,
    WeightLog,
)
from weight_planner.services.clock import localize

# Display labels written by the first version of the app.
_LEGACY_ACTIVITY_LABELS = {
    "Sedentary": ActivityLevel.SEDENTARY,
    "Lightly Active": ActivityLevel.LIGHT,
    "Moderately Active": ActivityLevel.MODERATE,
    "Very Active": ActivityLevel.VERY,
    "Extra Active": ActivityLevel.EXTRA,
}


def _calendar_date(value: object) -> object:
    if isinstance(value, str) and len(value) > 10:
        return value[:10]
    return value


CalendarDate = Annotated[date, BeforeValidator(_calendar_date)]


def _midnight_if_date_only(value: object) -> object:
    if isinstance(value, str) and len(value) == 10:
        return f"{value}T00:00:00"
    return value


StoredTimestamp = Annotated[datetime, BeforeValidator(_midnight_if_date_only)]


class _StoredModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PlanRecord(_StoredModel):
    """Stored plan document."""

    id: str
    name: str
    start_date: CalendarDate = Field(alias="startDate")
    target_weight: float = Field(alias="targetWeight", gt=0)
    target_date: CalendarDate = Field(alias="targetDate")
    is_active: bool = Field(default=False, alias="isActive")
    notes: str | None = None

    @classmethod
    def from_domain(cls, plan: Plan) -> "PlanRecord":
        return cls(
            id=plan.id,
            name=plan.name,
            start_date=plan.start_date,
            target_weight=plan.target_weight,
            target_date=plan.target_date,
            is_active=plan.is_active,
            notes=plan.notes,
        )

    def to_domain(self) -> Plan:
        return Plan(
            id=self.id,
            name=self.name,
            start_date=self.start_date,
            target_weight=self.target_weight,
            target_date=self.target_date,
            is_active=self.is_active,
            notes=self.notes,
        )


class _BiometricsRecord(_StoredModel):
    height: float = Field(gt=0)
    current_weight: float = Field(alias="currentWeight", gt=0)
    age: int = Field(gt=0)
    gender: Gender
    activity_level: ActivityLevel = Field(alias="activityLevel")

    @field_validator("gender", mode="before")
    @classmethod
    def _normalize_gender(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    @field_validator("activity_level", mode="before")
    @classmethod
    def _normalize_activity(cls, value: object) -> object:
        if isinstance(value, str):
            return _LEGACY_ACTIVITY_LABELS.get(value, value)
        return value


class ProfileRecord(_BiometricsRecord):
    """Stored profile document with a plan list."""

    plans: list[PlanRecord]

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfileRecord":
        return cls(
            height=profile.height,
            current_weight=profile.current_weight,
            age=profile.age,
            gender=profile.gender,
            activity_level=profile.activity_level,
            plans=[PlanRecord.from_domain(plan) for plan in profile.plans],
        )

    def to_domain(self) -> Profile:
        return Profile(
            height=self.height,
            current_weight=self.current_weight,
            age=self.age,
            gender=self.gender,
            activity_level=self.activity_level,
            plans=[plan.to_domain() for plan in self.plans],
        )


class LegacyProfileRecord(_BiometricsRecord):
    """Stored profile document from before plans existed."""

    target_weight: float | None = Field(default=None, alias="targetWeight")
    target_date: CalendarDate | None = Field(default=None, alias="targetDate")

    @field_validator("target_weight", "target_date", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        return None if value in ("", 0) else value

    def to_domain(self) -> LegacyProfile:
        return LegacyProfile(
            height=self.height,
            current_weight=self.current_weight,
            age=self.age,
            gender=self.gender,
            activity_level=self.activity_level,
            target_weight=self.target_weight,
            target_date=self.target_date,
        )


class WeightLogRecord(_StoredModel):
    """Stored weight log document."""

    id: str
    logged_at: StoredTimestamp = Field(alias="date")
    weight: float = Field(gt=0)

    @classmethod
    def from_domain(cls, log: WeightLog) -> "WeightLogRecord":
        return cls(id=log.id, logged_at=log.logged_at, weight=log.weight)

    def to_domain(self, timezone_name: str = "UTC") -> WeightLog:
        return WeightLog(
            id=self.id,
            logged_at=localize(self.logged_at, timezone_name),
            weight=self.weight,
        )


def parse_profile(raw: dict[str, object]) -> StoredProfile:
    """Parse a stored profile, detecting the legacy shape by its missing plans."""
    if "plans" in raw and raw["plans"] is not None:
        return ProfileRecord.model_validate(raw).to_domain()
    return LegacyProfileRecord.model_validate(raw).to_domain()


def dump_profile(profile: Profile) -> dict[str, object]:
    """Serialize a profile to its stored JSON form."""
    return ProfileRecord.from_domain(profile).model_dump(mode="json", by_alias=True)


def parse_logs(
    raw: list[dict[str, object]], timezone_name: str = "UTC"
) -> list[WeightLog]:
    """Parse the stored log series into timestamps in the given timezone.

    Values stored without an offset, date-only ones included, are read as
    local time in that zone.
    """
    return [
        WeightLogRecord.model_validate(item).to_domain(timezone_name) for item in raw
    ]


def dump_logs(logs: list[WeightLog]) -> list[dict[str, object]]:
    """Serialize the log series to its stored JSON form."""
    return [
        WeightLogRecord.from_domain(log).model_dump(mode="json", by_alias=True)
        for log in logs
    ]
