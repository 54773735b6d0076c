"""In-memory record cache shared by every editing session."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..adapters.base import RecordListener, RecordSource
from ..core.models import CollaboratorEntry, Record

log = logging.getLogger(__name__)


class RecordCache(RecordSource):
    """Keeps the latest known copy of each record and notifies listeners.

    Records enter the cache with :meth:`put`, usually after being fetched
    from the submission API, and are updated in place after a successful
    save through :meth:`update_collaborators`.
    """

    def __init__(self) -> None:
        self._records: dict[str, Record] = {}
        self._listeners: list[RecordListener] = []

    def get_record(self, record_id: str) -> Record | None:
        return self._records.get(record_id)

    def put(self, record: Record) -> None:
        """Store ``record`` and notify listeners."""
        self._records[record.record_id] = record
        for listener in list(self._listeners):
            listener(record)

    def update_collaborators(
        self, record_id: str, collaborators: Sequence[CollaboratorEntry]
    ) -> None:
        record = self._records.get(record_id)
        if record is None:
            record = Record(record_id=record_id)
        log.debug(
            "Updating %d collaborators on record %s", len(collaborators), record_id
        )
        self.put(record.model_copy(update={"collaborators": list(collaborators)}))

    def subscribe(self, listener: RecordListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: RecordListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
