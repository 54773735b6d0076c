"""Per-user editing sessions over the collaborator roster."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..adapters.base import (
    AdapterError,
    CommitAdapter,
    DirectoryAdapter,
    NotificationSink,
)
from .records import RecordCache
from .store import RosterStore

log = logging.getLogger(__name__)


@dataclass
class Notice:
    message: str
    severity: str | None = None


@dataclass
class SessionNotifier(NotificationSink):
    """Buffers notifications until the command that triggered them replies.

    Each notice is also forwarded to ``downstream`` when one is configured,
    for example a Discord audit channel.
    """

    downstream: NotificationSink | None = None
    notices: list[Notice] = field(default_factory=list)

    async def notify(self, message: str, severity: str | None = None) -> None:
        log.info("%s: %s", severity or "info", message)
        self.notices.append(Notice(message, severity))
        if self.downstream is not None:
            try:
                await self.downstream.notify(message, severity)
            except AdapterError as exc:
                log.warning("Could not forward notification: %s", exc)

    def drain(self) -> list[Notice]:
        """Return and clear the buffered notices."""
        notices, self.notices = self.notices, []
        return notices


@dataclass
class Session:
    user_id: int
    record_id: str
    store: RosterStore
    notifier: SessionNotifier


class SessionRegistry:
    """Owns one :class:`RosterStore` per ``(user_id, record_id)`` pair."""

    def __init__(
        self,
        records: RecordCache,
        directory: DirectoryAdapter,
        committer: CommitAdapter,
        downstream: NotificationSink | None = None,
    ) -> None:
        self.records = records
        self.directory = directory
        self.committer = committer
        self.downstream = downstream
        self._sessions: dict[tuple[int, str], Session] = {}
        # The record each user is currently editing.
        self._active: dict[int, str] = {}

    async def open(self, user_id: int, record_id: str) -> Session:
        """Start (or resume) editing ``record_id`` and load its pool."""
        key = (user_id, record_id)
        session = self._sessions.get(key)
        if session is None:
            notifier = SessionNotifier(downstream=self.downstream)
            store = RosterStore(self.records, self.directory, self.committer, notifier)
            session = Session(user_id, record_id, store, notifier)
            self._sessions[key] = session
            log.info("Opened roster session for user %s on %s", user_id, record_id)
        self._active[user_id] = record_id

        session.store.on_record_changed(self.records.get_record(record_id))
        await session.store.load_candidates()
        return session

    def get(self, user_id: int, record_id: str | None = None) -> Session | None:
        """Return the user's session for ``record_id`` or their active one."""
        record_id = record_id or self._active.get(user_id)
        if record_id is None:
            return None
        return self._sessions.get((user_id, record_id))

    def close(self, user_id: int, record_id: str | None = None) -> bool:
        session = self.get(user_id, record_id)
        if session is None:
            return False
        session.store.close()
        del self._sessions[(user_id, session.record_id)]
        if self._active.get(user_id) == session.record_id:
            del self._active[user_id]
        log.info("Closed roster session for user %s on %s", user_id, session.record_id)
        return True

    def __len__(self) -> int:
        return len(self._sessions)
