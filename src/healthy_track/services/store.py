"""Persistence boundary for health records."""

from collections.abc import Sequence
from typing import Protocol

from healthy_track.domain.records import HealthRecord, RecordInput


class RecordStore(Protocol):
    """Persistence interface for health records.

    ``scope`` is the signed-in user id. Stores raise ``StoreUnavailable`` on
    read failures and ``StoreWriteError`` on write failures.
    """

    def load_all(self, scope: str) -> Sequence[HealthRecord]:
        """Return every record visible to the scope, oldest date first."""

    def insert(self, record: RecordInput, scope: str) -> HealthRecord:
        """Persist a new record and return it with store-assigned fields."""

    def update(self, record_id: str, record: RecordInput, scope: str) -> HealthRecord:
        """Replace all fields of an existing record."""

    def delete_by_id(self, record_id: str, scope: str) -> None:
        """Delete a record; deleting an absent id is a no-op."""
