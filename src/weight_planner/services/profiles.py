"""Profile lifecycle and dashboard metrics."""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Protocol

from weight_planner.domain.metrics import CalculationResult
from weight_planner.domain.models import ActivityLevel, Gender, Profile, StoredProfile
from weight_planner.services.calculator import calculate_deficit
from weight_planner.services.clock import now_in, today_in
from weight_planner.services.plans import get_active_plan, is_legacy, upgrade_profile
from weight_planner.services.weight_logs import (
    WeightLogRepository,
    localize_logs,
    seed_logs,
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for the profile."""

    def load(self) -> StoredProfile | None:
        """Return the stored profile in whichever shape it was saved."""

    def save(self, profile: Profile) -> None:
        """Replace the stored profile."""


class ProfileNotFoundError(LookupError):
    """Raised when an operation needs a profile and none is stored."""


@dataclass
class ProfileService:
    """Application service for the tracked person's profile."""

    repository: ProfileRepository
    log_repository: WeightLogRepository
    timezone_name: str = "UTC"

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        return now_in(self.timezone_name)

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return today_in(self.timezone_name)

    def load_profile(self) -> Profile | None:
        """Return the profile, upgrading a legacy shape on the way."""
        stored = self.repository.load()
        if stored is None:
            return None
        profile = upgrade_profile(stored, self.today())
        if is_legacy(stored):
            self.repository.save(profile)
            _logger.info("Legacy profile migrated: plans=%s", len(profile.plans))
        return profile

    def require_profile(self) -> Profile:
        """Return the profile or raise when none exists."""
        profile = self.load_profile()
        if profile is None:
            raise ProfileNotFoundError("No profile has been created yet")
        return profile

    def save_profile(self, profile: Profile) -> None:
        """Persist the profile."""
        self.repository.save(profile)

    def create_profile(  # noqa: PLR0913
        self,
        height: float,
        current_weight: float,
        age: int,
        gender: Gender,
        activity_level: ActivityLevel,
    ) -> Profile:
        """Store a new profile and seed the log series with its weight."""
        profile = Profile(
            height=height,
            current_weight=current_weight,
            age=age,
            gender=gender,
            activity_level=activity_level,
        )
        self.repository.save(profile)
        self.log_repository.save(seed_logs(current_weight, self.now()))
        _logger.info("Profile created: activity_level=%s", activity_level)
        return profile

    def update_biometrics(
        self,
        height: float,
        age: int,
        gender: Gender,
        activity_level: ActivityLevel,
    ) -> Profile:
        """Replace the biometrics, keeping weight and plans."""
        profile = replace(
            self.require_profile(),
            height=height,
            age=age,
            gender=gender,
            activity_level=activity_level,
        )
        self.repository.save(profile)
        return profile

    def sync_current_weight(self, weight: float) -> None:
        """Mirror the newest logged weight onto the profile."""
        profile = self.load_profile()
        if profile is None or profile.current_weight == weight:
            return
        self.repository.save(replace(profile, current_weight=weight))

    def get_metrics(self) -> CalculationResult | None:
        """Return the calorie target for the active plan, if any."""
        profile = self.load_profile()
        if profile is None:
            return None
        return calculate_deficit(
            profile,
            get_active_plan(profile.plans),
            localize_logs(self.log_repository.load(), self.timezone_name),
            self.today(),
        )
