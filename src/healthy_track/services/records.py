"""Authoritative in-memory collection of the signed-in user's records."""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from healthy_track.domain.errors import (
    SessionRequired,
    StoreUnavailable,
    StoreWriteError,
    SubmissionInProgress,
)
from healthy_track.domain.forms import FormState
from healthy_track.domain.records import HealthRecord
from healthy_track.domain.sessions import AuthSession
from healthy_track.services.forms import FormStateManager
from healthy_track.services.store import RecordStore

logger = logging.getLogger(__name__)

_NEW_RECORD = "new"


@dataclass
class RecordCollectionManager:
    """Applies add, update and delete to the collection after the store confirms.

    The in-memory list only changes once a store call has returned, so a
    failed write leaves the collection exactly as it was. Store calls run
    outside ``_lock``; every read-modify-write of the list runs inside it.
    """

    store: RecordStore
    form: FormStateManager
    warning: str | None = field(default=None, init=False)
    _records: list[HealthRecord] = field(default_factory=list, init=False)
    _scope: str | None = field(default=None, init=False)
    _pending: set[str] = field(default_factory=set, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    @property
    def records(self) -> list[HealthRecord]:
        """Return a copy of the current collection."""
        return list(self._records)

    @property
    def scope(self) -> str | None:
        """Return the user id the collection belongs to."""
        return self._scope

    def handle_session_change(self, session: AuthSession | None) -> None:
        """Reload for a new identity and drop everything on sign-out."""
        user_id = session.user_id if session else None
        if user_id == self._scope:
            return
        with self._lock:
            self._records = []
            self.warning = None
            self._scope = user_id
        self.form.reset()
        if user_id is not None:
            self.load()

    def clear(self) -> None:
        """Discard the in-memory collection."""
        with self._lock:
            self._records = []
            self.warning = None

    def load(self) -> list[HealthRecord]:
        """Load the collection from the store.

        On a read failure the last known collection is kept and ``warning``
        is set for display.
        """
        scope = self._require_scope()
        try:
            loaded = self.store.load_all(scope)
        except StoreUnavailable as exc:
            logger.warning(
                "Failed to load health records: %s", exc, extra={"user_id": scope}
            )
            with self._lock:
                if scope == self._scope:
                    self.warning = f"Couldn't load your records: {exc}"
            return self.records
        with self._lock:
            if scope == self._scope:
                self._records = list(loaded)
                self.warning = None
        return self.records

    def submit(self) -> HealthRecord:
        """Persist the current draft as a new record or as an edit."""
        scope = self._require_scope()
        values = self.form.build_record()
        editing_id = self.form.state.editing_id
        with self._claim(editing_id or _NEW_RECORD):
            try:
                if editing_id:
                    stored = self.store.update(editing_id, values, scope)
                else:
                    stored = self.store.insert(values, scope)
            except StoreWriteError:
                logger.exception(
                    "Failed to save health record",
                    extra={"user_id": scope, "record_id": editing_id},
                )
                raise
            with self._lock:
                if scope != self._scope:
                    return stored
                if editing_id:
                    self._records = [
                        stored if record.id == editing_id else record
                        for record in self._records
                    ]
                else:
                    self._records = [
                        *(record for record in self._records if record.id != stored.id),
                        stored,
                    ]
        self.form.reset()
        return stored

    def remove(self, record_id: str) -> None:
        """Delete a record, dropping it from the collection once the store confirms."""
        scope = self._require_scope()
        with self._claim(record_id):
            try:
                self.store.delete_by_id(record_id, scope)
            except StoreWriteError:
                logger.exception(
                    "Failed to delete health record",
                    extra={"user_id": scope, "record_id": record_id},
                )
                raise
            with self._lock:
                if scope == self._scope:
                    self._records = [
                        record for record in self._records if record.id != record_id
                    ]

    def edit(self, record_id: str) -> FormState | None:
        """Load a record into the form; unknown ids are ignored."""
        for record in self._records:
            if record.id == record_id:
                return self.form.load_for_edit(record)
        logger.info("Edit requested for unknown record", extra={"record_id": record_id})
        return None

    def _require_scope(self) -> str:
        if self._scope is None:
            raise SessionRequired("Please sign in first.")
        return self._scope

    @contextmanager
    def _claim(self, key: str) -> Iterator[None]:
        with self._lock:
            if key in self._pending:
                raise SubmissionInProgress("This record is still being saved.")
            self._pending.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._pending.discard(key)
