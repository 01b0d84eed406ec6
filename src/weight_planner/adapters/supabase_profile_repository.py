"""Supabase repository for the profile document."""

from dataclasses import dataclass

from weight_planner.adapters.storage_models import dump_profile, parse_profile
from weight_planner.adapters.supabase_key_value_store import SupabaseKeyValueStore
from weight_planner.domain.models import Profile, StoredProfile
from weight_planner.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    store: SupabaseKeyValueStore
    key: str = "wt_profile"

    def load(self) -> StoredProfile | None:
        """Return the stored profile in its stored shape."""
        raw = self.store.get(self.key)
        if not isinstance(raw, dict):
            return None
        return parse_profile(raw)

    def save(self, profile: Profile) -> None:
        """Replace the stored profile."""
        self.store.set(self.key, dump_profile(profile))
