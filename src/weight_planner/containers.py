"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from weight_planner.adapters.supabase_key_value_store import SupabaseKeyValueStore
from weight_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from weight_planner.adapters.supabase_weight_log_repository import (
    SupabaseWeightLogRepository,
)
from weight_planner.config import Settings
from weight_planner.services.export import ExportService
from weight_planner.services.history import HistoryService
from weight_planner.services.plans import PlanService
from weight_planner.services.profiles import ProfileRepository, ProfileService
from weight_planner.services.weight_logs import WeightLogRepository, WeightLogService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    plan_service: PlanService
    weight_log_service: WeightLogService
    history_service: HistoryService
    export_service: ExportService


def build_services(
    settings: Settings,
    profile_repository: ProfileRepository,
    log_repository: WeightLogRepository,
) -> AppContainer:
    """Wire services on top of the given repositories."""
    profile_service = ProfileService(
        repository=profile_repository,
        log_repository=log_repository,
        timezone_name=settings.timezone,
    )
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        plan_service=PlanService(profile_service),
        weight_log_service=WeightLogService(log_repository, profile_service),
        history_service=HistoryService(profile_service, log_repository),
        export_service=ExportService(profile_service, log_repository),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    store = SupabaseKeyValueStore(supabase_client, resolved_settings.storage_table)
    return build_services(
        resolved_settings,
        SupabaseProfileRepository(store, resolved_settings.profile_key),
        SupabaseWeightLogRepository(
            store, resolved_settings.logs_key, resolved_settings.timezone
        ),
    )
