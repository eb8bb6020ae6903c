"""Supabase storage for the tracker document."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.services.tracker import TrackerStorage


@dataclass
class SupabaseTrackerStorage(TrackerStorage):
    """Supabase implementation keeping one document row per storage key."""

    client: Client
    key: str
    table: str = "tracker_documents"

    def read(self) -> str | None:
        """Return the stored document for the key."""
        response = (
            self.client.table(self.table)
            .select("document")
            .eq("storage_key", self.key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        document = response.data[0].get("document")
        return document if isinstance(document, str) else None

    def write(self, document: str) -> None:
        """Upsert the document row for the key."""
        self.client.table(self.table).upsert(
            {
                "storage_key": self.key,
                "document": document,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="storage_key",
        ).execute()
