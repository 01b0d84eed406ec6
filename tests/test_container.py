"""Tests for container wiring."""

from weight_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from weight_planner.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.settings is settings
    assert isinstance(
        container.profile_service.repository, SupabaseProfileRepository
    )
    assert container.plan_service.profile_service is container.profile_service
    assert container.history_service is not None
    assert container.export_service is not None
