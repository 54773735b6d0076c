"""Abstract interfaces for the services a roster session talks to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from ..core.models import (
    CandidateEntry,
    CollaboratorEntry,
    CollaboratorInput,
    CommitResult,
    Record,
)

RecordListener = Callable[[Record], None]


class AdapterError(Exception):
    """Raised when a remote service cannot fulfil a request."""


class DirectoryError(AdapterError):
    """The pool of eligible collaborators could not be fetched."""


class CommitError(AdapterError):
    """The collaborator list could not be saved."""


class RecordError(AdapterError):
    """The record could not be loaded."""


class DirectoryAdapter(ABC):
    """Source of people eligible to collaborate on a record."""

    @abstractmethod
    async def fetch_candidates(self, record_id: str) -> list[CandidateEntry] | None:
        """Return the eligible pool for ``record_id``.

        ``None`` and an empty list both mean an empty pool.
        """


class CommitAdapter(ABC):
    """Persists a record's collaborator list."""

    @abstractmethod
    async def commit(
        self, record_id: str, entries: Sequence[CollaboratorInput]
    ) -> CommitResult | None:
        """Save ``entries`` and return the confirmed list, or ``None``."""


class RecordSource(ABC):
    """Authoritative, observable store of records."""

    @abstractmethod
    def get_record(self, record_id: str) -> Record | None:
        """Return the record with ``record_id`` if it is known."""

    @abstractmethod
    def update_collaborators(
        self, record_id: str, collaborators: Sequence[CollaboratorEntry]
    ) -> None:
        """Replace the committed collaborators of ``record_id``."""

    @abstractmethod
    def subscribe(self, listener: RecordListener) -> None:
        """Call ``listener`` whenever a record changes."""

    @abstractmethod
    def unsubscribe(self, listener: RecordListener) -> None:
        """Stop calling ``listener``."""


class NotificationSink(ABC):
    """Receives human-readable outcome messages."""

    @abstractmethod
    async def notify(self, message: str, severity: str | None = None) -> None:
        """Deliver ``message``; ``severity`` is ``"success"`` or ``"error"``."""
