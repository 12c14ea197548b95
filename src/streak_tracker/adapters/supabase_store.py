"""Supabase implementation of the key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from streak_tracker.services.storage import KeyValueStore, StorageError


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores each key as a ``(device_id, key, value)`` row."""

    client: Client
    device_id: str
    table_name: str = "device_storage"

    def get(self, key: str) -> object | None:
        """Return the value stored under a key for this device."""
        try:
            response = (
                self.client.table(self.table_name)
                .select("value")
                .eq("device_id", self.device_id)
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise StorageError(f"Failed to read {key} from Supabase") from exc
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: object) -> None:
        """Upsert the value stored under a key for this device."""
        try:
            self.client.table(self.table_name).upsert(
                {
                    "device_id": self.device_id,
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="device_id,key",
            ).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StorageError(f"Failed to write {key} to Supabase") from exc
