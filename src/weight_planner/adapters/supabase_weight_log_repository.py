"""Supabase repository for the weight log series."""

from dataclasses import dataclass

from weight_planner.adapters.storage_models import dump_logs, parse_logs
from weight_planner.adapters.supabase_key_value_store import SupabaseKeyValueStore
from weight_planner.domain.models import WeightLog
from weight_planner.services.weight_logs import WeightLogRepository


@dataclass
class SupabaseWeightLogRepository(WeightLogRepository):
    """Supabase implementation for the log series."""

    store: SupabaseKeyValueStore
    key: str = "wt_logs"
    timezone_name: str = "UTC"

    def load(self) -> list[WeightLog]:
        """Return every stored log entry in the configured timezone."""
        raw = self.store.get(self.key)
        if not isinstance(raw, list):
            return []
        return parse_logs(raw, self.timezone_name)

    def save(self, logs: list[WeightLog]) -> None:
        """Replace the stored log series."""
        self.store.set(self.key, dump_logs(logs))
