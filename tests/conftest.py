"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

import pytest

from weight_planner.config import Settings
from weight_planner.containers import AppContainer, build_services
from weight_planner.domain.models import (
    ActivityLevel,
    Gender,
    Plan,
    Profile,
    StoredProfile,
    WeightLog,
)
from weight_planner.services.profiles import ProfileRepository
from weight_planner.services.weight_logs import WeightLogRepository

FAKE_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJyb2xlIjoic2VydmljZV9yb2xlIn0"
    ".c2lnbmF0dXJl"
)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    stored: StoredProfile | None = None
    saves: int = 0

    def load(self) -> StoredProfile | None:
        return self.stored

    def save(self, profile: Profile) -> None:
        self.stored = profile
        self.saves += 1


@dataclass
class InMemoryWeightLogRepository(WeightLogRepository):
    """In-memory weight log repository for tests."""

    logs: list[WeightLog] = field(default_factory=list)

    def load(self) -> list[WeightLog]:
        return list(self.logs)

    def save(self, logs: list[WeightLog]) -> None:
        self.logs = list(logs)


def make_profile(
    weight: float = 80.0, plans: list[Plan] | None = None, **overrides: object
) -> Profile:
    values: dict[str, object] = {
        "height": 175.0,
        "current_weight": weight,
        "age": 30,
        "gender": Gender.MALE,
        "activity_level": ActivityLevel.SEDENTARY,
        "plans": plans or [],
    }
    values.update(overrides)
    return Profile(**values)


def make_plan(  # noqa: PLR0913
    plan_id: str = "plan-1",
    name: str = "Summer Cut",
    start_date: date = date(2024, 1, 1),
    target_weight: float = 75.0,
    target_date: date = date(2024, 6, 1),
    is_active: bool = True,
) -> Plan:
    return Plan(
        id=plan_id,
        name=name,
        start_date=start_date,
        target_weight=target_weight,
        target_date=target_date,
        is_active=is_active,
    )


def make_log(log_id: str, day: date, weight: float, hour: int = 8) -> WeightLog:
    return WeightLog(
        id=log_id,
        logged_at=datetime(day.year, day.month, day.day, hour, tzinfo=UTC),
        weight=weight,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=FAKE_SERVICE_KEY,
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def log_repository() -> InMemoryWeightLogRepository:
    return InMemoryWeightLogRepository()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    log_repository: InMemoryWeightLogRepository,
) -> AppContainer:
    return build_services(settings, profile_repository, log_repository)
