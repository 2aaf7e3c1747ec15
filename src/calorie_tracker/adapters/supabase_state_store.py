"""Supabase repository for tracker state records."""

from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from calorie_tracker.errors import PersistenceError
from calorie_tracker.services.ledger import StateStore


@dataclass
class SupabaseStateStore(StateStore):
    """Supabase implementation storing each record as a JSON value by key."""

    client: Client
    table: str = "app_state"

    def read(self, key: str) -> object | None:
        """Return the stored value for a key."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise PersistenceError(f"Failed to read state {key}") from exc
        if not response.data:
            return None
        return response.data[0].get("value")

    def write(self, key: str, value: object) -> None:
        """Overwrite the value stored under a key."""
        try:
            self.client.table(self.table).upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="key",
            ).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise PersistenceError(f"Failed to write state {key}") from exc
