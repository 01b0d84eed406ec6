"""Supabase-backed JSON key-value store."""

from dataclasses import dataclass

from supabase import Client


@dataclass
class SupabaseKeyValueStore:
    """Stores one JSON document per key in a two-column table."""

    client: Client
    table: str = "app_state"

    def get(self, key: str) -> object | None:
        """Return the document stored under a key, if present."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: object) -> None:
        """Insert or replace the document stored under a key."""
        response = (
            self.client.table(self.table)
            .upsert({"key": key, "value": value}, on_conflict="key")
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to store {key} in Supabase")
