"""Editable collaborator roster for a single editing session."""

from __future__ import annotations

import logging
from enum import Enum

from ..adapters.base import (
    AdapterError,
    CommitAdapter,
    DirectoryAdapter,
    NotificationSink,
    RecordSource,
)
from ..core import reconciliation
from ..core.models import (
    CandidateEntry,
    CollaboratorEntry,
    CollaboratorInput,
    Record,
)

log = logging.getLogger(__name__)

SAVE_SUCCESS_MESSAGE = "All collaborator changes have been saved successfully."
SAVE_FAILURE_MESSAGE = "Unable to edit submission collaborators."


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    SAVING = "saving"


class RosterStore:
    """Holds the unsaved roster of one record and the pool it is edited against.

    ``current`` is never empty and never holds two rows with the same
    non-empty collaborator id. Invalid commands (bad index, empty update) are
    ignored rather than reported.

    The store subscribes to ``records`` for its whole lifetime; call
    :meth:`close` when the editing session ends.
    """

    def __init__(
        self,
        records: RecordSource,
        directory: DirectoryAdapter,
        committer: CommitAdapter,
        notifier: NotificationSink,
    ) -> None:
        self.records = records
        self.directory = directory
        self.committer = committer
        self.notifier = notifier

        self.record: Record | None = None
        self.pool: list[CandidateEntry] = []
        self.current: list[CollaboratorEntry] = [CollaboratorEntry.placeholder()]
        self.state = SessionState.UNINITIALIZED
        self.error: AdapterError | None = None

        self.records.subscribe(self._on_record_update)

    # ------------------------------------------------------------------
    # Record lifecycle
    # ------------------------------------------------------------------
    @property
    def record_id(self) -> str | None:
        return self.record.record_id if self.record else None

    @property
    def committed(self) -> list[CollaboratorEntry]:
        return list(self.record.collaborators) if self.record else []

    @property
    def loading(self) -> bool:
        return self.state in (SessionState.LOADING, SessionState.SAVING)

    def on_record_changed(self, record: Record | None) -> None:
        """Adopt ``record`` and reset the roster towards its collaborators.

        Switching to a different record discards the pool fetched for the
        previous one.
        """
        if record is None or record.record_id != self.record_id:
            self.pool = []
            self.error = None
            self.state = SessionState.UNINITIALIZED
        self.record = record
        self.reset()

    def _on_record_update(self, record: Record) -> None:
        if self.record is not None and record.record_id == self.record.record_id:
            self.on_record_changed(record)

    async def load_candidates(self) -> None:
        """Fetch the eligible pool for the active record."""
        record_id = self.record_id
        if not record_id:
            return
        self.state = SessionState.LOADING
        try:
            candidates = await self.directory.fetch_candidates(record_id)
        except AdapterError as exc:
            log.warning("Failed to load collaborators for %s: %s", record_id, exc)
            self.error = exc
            self.state = SessionState.READY
            return
        self.pool = list(candidates or [])
        self.error = None
        self.state = SessionState.READY
        log.debug("Loaded %d candidates for %s", len(self.pool), record_id)
        self.reset()

    def close(self) -> None:
        self.records.unsubscribe(self._on_record_update)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_placeholder(self) -> None:
        self.current = [*self.current, CollaboratorEntry.placeholder()]

    def remove_at(self, index: int) -> None:
        if not self._valid_index(index):
            log.debug("Ignoring removal of row %r", index)
            return
        remaining = self.current[:index] + self.current[index + 1 :]
        self.current = remaining or [CollaboratorEntry.placeholder()]

    def update_at(self, index: int, partial: CollaboratorInput) -> None:
        """Merge ``partial`` into the row at ``index``."""
        if not self._valid_index(index) or partial is None or partial.is_empty:
            log.debug("Ignoring update of row %r", index)
            return

        new_id = partial.collaborator_id
        if new_id and any(
            i != index and e.collaborator_id == new_id
            for i, e in enumerate(self.current)
        ):
            log.debug("Ignoring update of row %d: %s is already listed", index, new_id)
            return

        entry = reconciliation.merge_entry(partial, self.pool, self.current)
        updated = list(self.current)
        updated[index] = entry
        self.current = updated

    def reset(self) -> None:
        """Return to the committed roster unless it is already shown."""
        target = reconciliation.reset_target(self.committed, self.pool)
        if reconciliation.is_equivalent_roster(target, self.current):
            return
        self.current = target

    def _valid_index(self, index: object) -> bool:
        return (
            isinstance(index, int)
            and not isinstance(index, bool)
            and 0 <= index < len(self.current)
        )

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def remaining_candidates(self) -> list[CandidateEntry]:
        return reconciliation.remaining(self.pool, self.current)

    def max_roster_size(self) -> int:
        return reconciliation.max_size(self.pool, self.committed, self.current)

    @property
    def at_capacity(self) -> bool:
        return len(self.current) >= self.max_roster_size()

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------
    async def save(self) -> list[CollaboratorEntry]:
        """Commit the roster and return the server-confirmed list.

        Failures are reported through the notifier and yield an empty list;
        this coroutine does not raise for adapter errors.
        """
        payload = reconciliation.to_payload(self.current)
        record_id = self.record_id or ""
        self.state = SessionState.SAVING
        try:
            result = await self.committer.commit(record_id, payload)
            if not result:
                raise AdapterError("Failed to save collaborators.")
        except AdapterError as exc:
            log.error("Saving collaborators for %s failed: %s", record_id, exc)
            self.state = SessionState.READY
            await self._notify(SAVE_FAILURE_MESSAGE, "error")
            return []

        self.state = SessionState.READY
        saved = list(result.collaborators)
        if record_id:
            self.records.update_collaborators(record_id, saved)
        await self._notify(SAVE_SUCCESS_MESSAGE, "success")
        return saved

    async def _notify(self, message: str, severity: str) -> None:
        try:
            await self.notifier.notify(message, severity)
        except AdapterError as exc:
            log.warning("Could not deliver notification: %s", exc)
