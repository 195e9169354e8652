"""Supabase-backed key-value storage."""

from dataclasses import dataclass

from supabase import Client

from photoshoot.services.storage import KeyValueStorage


@dataclass
class SupabaseKeyValueStorage(KeyValueStorage):
    """Supabase implementation storing values in a ``key``/``value`` table."""

    client: Client
    table: str = "kv_store"

    def get(self, key: str) -> str | None:
        """Return the stored value for ``key``, if present."""
        response = (
            self.client.table(self.table)
            .select("key, value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]["value"]

    def set(self, key: str, value: str) -> None:
        """Insert or replace the row for ``key``."""
        response = (
            self.client.table(self.table)
            .upsert({"key": key, "value": value}, on_conflict="key")
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to store {key!r}")

    def remove(self, key: str) -> None:
        """Delete the row for ``key``."""
        self.client.table(self.table).delete().eq("key", key).execute()
