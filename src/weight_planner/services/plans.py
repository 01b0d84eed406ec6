"""Goal plan lifecycle: validation, activation and legacy upgrade."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import TYPE_CHECKING
from uuid import uuid4

from weight_planner.domain.models import LegacyProfile, Plan, Profile, StoredProfile

if TYPE_CHECKING:
    from weight_planner.services.profiles import ProfileService

_logger = logging.getLogger(__name__)

DEFAULT_PLAN_NAME = "My Plan"


class PlanValidationError(ValueError):
    """Raised when plan fields break a validation rule."""


class PlanNotFoundError(LookupError):
    """Raised when no plan matches the requested id."""


def validate_plan(
    name: str | None,
    start_date: date | None,
    target_date: date | None,
    target_weight: float | None,
    today: date | None = None,
) -> None:
    """Check plan fields and raise on the first broken rule.

    The past-date rule only applies when ``today`` is given, which callers do
    for brand-new plans.
    """
    if (
        not name
        or not name.strip()
        or start_date is None
        or target_date is None
        or target_weight is None
    ):
        raise PlanValidationError("Please fill in all fields.")
    if target_date < start_date:
        raise PlanValidationError("Target date must be on or after the start date.")
    if today is not None and target_date < today:
        raise PlanValidationError("Target date cannot be in the past.")
    if target_weight <= 0:
        raise PlanValidationError("Target weight must be greater than zero.")


def create_plan(  # noqa: PLR0913
    plans: list[Plan],
    name: str | None,
    start_date: date | None,
    target_date: date | None,
    target_weight: float | None,
    today: date,
    notes: str | None = None,
) -> list[Plan]:
    """Return a new plan list with the plan appended.

    The first plan in an empty list is activated.
    """
    validate_plan(name, start_date, target_date, target_weight, today=today)
    plan = Plan(
        id=str(uuid4()),
        name=name.strip(),
        start_date=start_date,
        target_weight=float(target_weight),
        target_date=target_date,
        is_active=not plans,
        notes=notes,
    )
    return [*plans, plan]


def edit_plan(  # noqa: PLR0913
    plans: list[Plan],
    plan_id: str,
    name: str | None,
    start_date: date | None,
    target_date: date | None,
    target_weight: float | None,
    notes: str | None = None,
) -> list[Plan]:
    """Return a new plan list with one plan's fields replaced."""
    if not any(plan.id == plan_id for plan in plans):
        raise PlanNotFoundError(plan_id)
    validate_plan(name, start_date, target_date, target_weight)
    return [
        replace(
            plan,
            name=name.strip(),
            start_date=start_date,
            target_date=target_date,
            target_weight=float(target_weight),
            notes=notes,
        )
        if plan.id == plan_id
        else plan
        for plan in plans
    ]


def delete_plan(plans: list[Plan], plan_id: str) -> list[Plan]:
    """Return the plan list without the given plan."""
    return [plan for plan in plans if plan.id != plan_id]


def set_active_plan(plans: list[Plan], plan_id: str) -> list[Plan]:
    """Activate one plan and deactivate all others.

    An unknown id leaves every plan inactive.
    """
    return [replace(plan, is_active=plan.id == plan_id) for plan in plans]


def get_active_plan(plans: list[Plan]) -> Plan | None:
    """Return the active plan, if any."""
    for plan in plans:
        if plan.is_active:
            return plan
    return None


def upgrade_profile(stored: StoredProfile, today: date) -> Profile:
    """Convert any stored profile shape into the current one.

    Current profiles are returned unchanged, so running this on every load is
    safe.
    """
    if isinstance(stored, Profile):
        return stored
    plans: list[Plan] = []
    if stored.target_weight is not None and stored.target_date is not None:
        plans.append(
            Plan(
                id=str(uuid4()),
                name=DEFAULT_PLAN_NAME,
                start_date=today,
                target_weight=stored.target_weight,
                target_date=stored.target_date,
                is_active=True,
            )
        )
    return Profile(
        height=stored.height,
        current_weight=stored.current_weight,
        age=stored.age,
        gender=stored.gender,
        activity_level=stored.activity_level,
        plans=plans,
    )


def is_legacy(stored: StoredProfile) -> bool:
    """Return True for profiles stored before plans existed."""
    return isinstance(stored, LegacyProfile)


@dataclass
class PlanService:
    """Application service applying plan transitions to the stored profile."""

    profile_service: ProfileService

    def list_plans(self) -> list[Plan]:
        """Return all plans of the profile."""
        return self.profile_service.require_profile().plans

    def get_active(self) -> Plan | None:
        """Return the active plan, if any."""
        profile = self.profile_service.load_profile()
        return get_active_plan(profile.plans) if profile else None

    def create(  # noqa: PLR0913
        self,
        name: str | None,
        start_date: date | None,
        target_date: date | None,
        target_weight: float | None,
        notes: str | None = None,
    ) -> Plan:
        """Create a plan and return it."""
        profile = self.profile_service.require_profile()
        plans = create_plan(
            profile.plans,
            name,
            start_date,
            target_date,
            target_weight,
            today=self.profile_service.today(),
            notes=notes,
        )
        self.profile_service.save_profile(replace(profile, plans=plans))
        created = plans[-1]
        _logger.info("Plan created: id=%s active=%s", created.id, created.is_active)
        return created

    def edit(  # noqa: PLR0913
        self,
        plan_id: str,
        name: str | None,
        start_date: date | None,
        target_date: date | None,
        target_weight: float | None,
        notes: str | None = None,
    ) -> Plan:
        """Replace a plan's fields and return the updated plan."""
        profile = self.profile_service.require_profile()
        plans = edit_plan(
            profile.plans, plan_id, name, start_date, target_date, target_weight, notes
        )
        self.profile_service.save_profile(replace(profile, plans=plans))
        _logger.info("Plan edited: id=%s", plan_id)
        return next(plan for plan in plans if plan.id == plan_id)

    def delete(self, plan_id: str) -> None:
        """Delete a plan."""
        profile = self.profile_service.require_profile()
        if not any(plan.id == plan_id for plan in profile.plans):
            raise PlanNotFoundError(plan_id)
        plans = delete_plan(profile.plans, plan_id)
        self.profile_service.save_profile(replace(profile, plans=plans))
        _logger.info("Plan deleted: id=%s", plan_id)

    def activate(self, plan_id: str) -> list[Plan]:
        """Make one plan the only active plan."""
        profile = self.profile_service.require_profile()
        if not any(plan.id == plan_id for plan in profile.plans):
            raise PlanNotFoundError(plan_id)
        plans = set_active_plan(profile.plans, plan_id)
        self.profile_service.save_profile(replace(profile, plans=plans))
        _logger.info("Plan activated: id=%s", plan_id)
        return plans
