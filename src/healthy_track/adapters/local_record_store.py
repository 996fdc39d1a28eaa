"""JSON-file record store that mirrors the browser local-storage layout."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import uuid4

import pydantic
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from healthy_track.domain.errors import NotFound, StoreUnavailable, StoreWriteError
from healthy_track.domain.records import HealthRecord, RecordInput
from healthy_track.services.store import RecordStore


class LocalRecordPayload(BaseModel):
    """One record as stored in the local document."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    date: str
    weight: float
    sleep: float
    sport: float | None = None
    water: float | None = None
    food_type: str = Field(default="balanced", alias="foodType")
    energy: int
    mood: int
    stress: int

    @field_validator("sport", "water", mode="before")
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_record(cls, record: HealthRecord) -> "LocalRecordPayload":
        """Build the stored payload for a record."""
        return cls(
            id=record.id,
            date=record.date,
            weight=record.weight,
            sleep=record.sleep,
            sport=record.sport,
            water=record.water,
            food_type=record.food_type,
            energy=record.energy,
            mood=record.mood,
            stress=record.stress,
        )

    def to_record(self) -> HealthRecord:
        """Return the domain record for this payload."""
        return HealthRecord(
            id=self.id,
            date=self.date,
            weight=self.weight,
            sleep=self.sleep,
            sport=self.sport,
            water=self.water,
            food_type=self.food_type,
            energy=self.energy,
            mood=self.mood,
            stress=self.stress,
        )


_DOCUMENT = TypeAdapter(dict[str, Any])
_RECORDS = TypeAdapter(list[LocalRecordPayload])


@dataclass
class LocalRecordStore(RecordStore):
    """Stores every record under one key of a JSON document.

    The whole array is rewritten on each change; other keys in the document
    are left as they are. The scope is ignored since the file belongs to a
    single device.
    """

    path: Path
    key: str = "healthRecords"

    def load_all(self, scope: str) -> list[HealthRecord]:
        """Return all stored records in insertion order."""
        return [payload.to_record() for payload in self._read_payloads()[1]]

    def insert(self, record: RecordInput, scope: str) -> HealthRecord:
        """Append a record with a fresh id."""
        document, payloads = self._read_for_write()
        stored = HealthRecord.from_input(str(uuid4()), record)
        payloads.append(LocalRecordPayload.from_record(stored))
        self._write(document, payloads)
        return stored

    def update(self, record_id: str, record: RecordInput, scope: str) -> HealthRecord:
        """Replace a record in place."""
        document, payloads = self._read_for_write()
        for index, payload in enumerate(payloads):
            if payload.id == record_id:
                stored = HealthRecord.from_input(record_id, record)
                payloads[index] = LocalRecordPayload.from_record(stored)
                self._write(document, payloads)
                return stored
        raise NotFound(f"No record with id {record_id}")

    def delete_by_id(self, record_id: str, scope: str) -> None:
        """Remove a record; absent ids leave the document untouched."""
        document, payloads = self._read_for_write()
        remaining = [payload for payload in payloads if payload.id != record_id]
        if len(remaining) != len(payloads):
            self._write(document, remaining)

    def _read_payloads(self) -> tuple[dict[str, Any], list[LocalRecordPayload]]:
        document = self._read_document()
        entry = document.get(self.key)
        if entry is None:
            return document, []
        try:
            return document, _RECORDS.validate_python(entry)
        except pydantic.ValidationError as exc:
            raise StoreUnavailable(f"Stored records are unreadable: {exc}") from exc

    def _read_for_write(self) -> tuple[dict[str, Any], list[LocalRecordPayload]]:
        try:
            return self._read_payloads()
        except StoreUnavailable as exc:
            raise StoreWriteError(str(exc)) from exc

    def _read_document(self) -> dict[str, Any]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StoreUnavailable(f"Couldn't read {self.path}: {exc}") from exc
        if not raw.strip():
            return {}
        try:
            return _DOCUMENT.validate_json(raw)
        except pydantic.ValidationError as exc:
            raise StoreUnavailable(f"{self.path} is not a valid store: {exc}") from exc

    def _write(
        self, document: dict[str, Any], payloads: list[LocalRecordPayload]
    ) -> None:
        document[self.key] = _RECORDS.dump_python(payloads, by_alias=True, mode="json")
        staging = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            staging.write_bytes(_DOCUMENT.dump_json(document, indent=2))
            staging.replace(self.path)
        except OSError as exc:
            raise StoreWriteError(f"Couldn't write {self.path}: {exc}") from exc
