"""Pydantic models for API request payloads."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from weight_planner.domain.models import ActivityLevel, Gender


class BiometricsPayload(BaseModel):
    """Biometrics supplied by the settings form."""

    height: float = Field(gt=0)
    age: int = Field(gt=0)
    gender: Gender
    activity_level: ActivityLevel


class ProfilePayload(BiometricsPayload):
    """Onboarding payload."""

    current_weight: float = Field(gt=0)


class PlanPayload(BaseModel):
    """Plan fields; rule checks happen in the plan service."""

    name: str | None = None
    start_date: date | None = None
    target_date: date | None = None
    target_weight: float | None = None
    notes: str | None = None


class LogPayload(BaseModel):
    """New weight measurement."""

    weight: float = Field(gt=0)
    logged_at: datetime | None = None


class LogUpdatePayload(BaseModel):
    """Edited weight measurement."""

    weight: float = Field(gt=0)
    logged_at: datetime
