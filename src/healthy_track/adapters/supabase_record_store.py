"""Supabase repository for health records."""

from dataclasses import dataclass
from datetime import datetime

import httpx
from supabase import Client, PostgrestAPIError

from healthy_track.domain.errors import NotFound, StoreUnavailable, StoreWriteError
from healthy_track.domain.records import HealthRecord, RecordInput
from healthy_track.services.store import RecordStore

_COLUMNS = (
    "id, user_id, date, weight, sleep, sport, water, food_type, energy, mood, "
    "stress, created_at"
)


@dataclass
class SupabaseRecordStore(RecordStore):
    """Supabase implementation scoped to the signed-in user."""

    client: Client
    table_name: str = "health_records"

    def load_all(self, scope: str) -> list[HealthRecord]:
        """Return the user's records ordered by date."""
        try:
            response = (
                self.client.table(self.table_name)
                .select(_COLUMNS)
                .eq("user_id", scope)
                .order("date", desc=False)
                .execute()
            )
            return [_parse_record(row) for row in response.data or []]
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreUnavailable(f"Couldn't load records: {exc}") from exc
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreUnavailable(f"Unexpected record row: {exc}") from exc

    def insert(self, record: RecordInput, scope: str) -> HealthRecord:
        """Insert a row and return it with server-assigned id and timestamp."""
        try:
            response = (
                self.client.table(self.table_name)
                .insert({**_to_row(record), "user_id": scope})
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreWriteError(f"Couldn't save record: {exc}") from exc
        if not response.data:
            raise StoreWriteError("Failed to create health record")
        return _parse_record(response.data[0])

    def update(self, record_id: str, record: RecordInput, scope: str) -> HealthRecord:
        """Replace every editable column of a row."""
        try:
            response = (
                self.client.table(self.table_name)
                .update(_to_row(record))
                .eq("id", record_id)
                .eq("user_id", scope)
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreWriteError(f"Couldn't update record: {exc}") from exc
        if not response.data:
            raise NotFound(f"No record with id {record_id}")
        return _parse_record(response.data[0])

    def delete_by_id(self, record_id: str, scope: str) -> None:
        """Delete a row by id."""
        try:
            self.client.table(self.table_name).delete().eq("id", record_id).eq(
                "user_id", scope
            ).execute()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreWriteError(f"Couldn't delete record: {exc}") from exc


def _to_row(record: RecordInput) -> dict[str, object]:
    return {
        "date": record.date,
        "weight": record.weight,
        "sleep": record.sleep,
        "sport": record.sport,
        "water": record.water,
        "food_type": record.food_type,
        "energy": record.energy,
        "mood": record.mood,
        "stress": record.stress,
    }


def _parse_record(row: dict[str, object]) -> HealthRecord:
    created_at = row.get("created_at")
    return HealthRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]) if row.get("user_id") else None,
        date=str(row["date"]),
        weight=float(row["weight"]),
        sleep=float(row["sleep"]),
        sport=float(row["sport"]) if row.get("sport") is not None else None,
        water=float(row["water"]) if row.get("water") is not None else None,
        food_type=str(row.get("food_type") or "balanced"),
        energy=int(row["energy"]),
        mood=int(row["mood"]),
        stress=int(row["stress"]),
        created_at=datetime.fromisoformat(str(created_at)) if created_at else None,
    )
