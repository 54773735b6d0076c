"""Shared fakes for the roster tests."""

from __future__ import annotations

import pytest

from roster_bot.adapters.base import (
    CommitAdapter,
    CommitError,
    DirectoryAdapter,
    DirectoryError,
    NotificationSink,
)
from roster_bot.core.models import (
    CandidateEntry,
    CollaboratorEntry,
    CommitResult,
    Permission,
    Record,
)
from roster_bot.data.records import RecordCache
from roster_bot.data.store import RosterStore


class FakeDirectory(DirectoryAdapter):
    def __init__(self, candidates=None, fail=False):
        self.candidates = candidates
        self.fail = fail
        self.calls = []

    async def fetch_candidates(self, record_id):
        self.calls.append(record_id)
        if self.fail:
            raise DirectoryError("directory unavailable")
        return self.candidates


class FakeCommitter(CommitAdapter):
    """Echoes the payload back, resolving names from ``names``."""

    def __init__(self, names=None, fail=False, empty=False):
        self.names = names or {}
        self.fail = fail
        self.empty = empty
        self.calls = []

    async def commit(self, record_id, entries):
        self.calls.append((record_id, list(entries)))
        if self.fail:
            raise CommitError("server rejected the change")
        if self.empty:
            return None
        return CommitResult(
            collaborators=[
                CollaboratorEntry(
                    collaborator_id=e.collaborator_id,
                    collaborator_name=self.names.get(e.collaborator_id),
                    permission=e.permission,
                )
                for e in entries
            ]
        )


class FakeNotifier(NotificationSink):
    def __init__(self):
        self.messages = []

    async def notify(self, message, severity=None):
        self.messages.append((message, severity))


def candidate(cid: str, name: str) -> CandidateEntry:
    return CandidateEntry(id=cid, display_name=name)


def entry(cid: str, name: str | None = None, permission=Permission.CAN_EDIT):
    return CollaboratorEntry(
        collaborator_id=cid, collaborator_name=name, permission=permission
    )


@pytest.fixture()
def pool():
    return [candidate("u1", "Alice"), candidate("u2", "Bob"), candidate("u3", "Carol")]


@pytest.fixture()
def records():
    return RecordCache()


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def make_store(records, notifier):
    """Build a store bound to a record with ``committed`` collaborators."""

    def factory(committed=(), candidates=None, directory=None, committer=None):
        directory = directory or FakeDirectory(candidates)
        committer = committer or FakeCommitter()
        store = RosterStore(records, directory, committer, notifier)
        record = Record(record_id="sub-1", collaborators=list(committed))
        records.put(record)
        store.on_record_changed(record)
        return store

    return factory


@pytest.fixture()
def fakes():
    """Expose the fake adapter classes to tests that build their own."""
    import types

    return types.SimpleNamespace(
        Directory=FakeDirectory, Committer=FakeCommitter, Notifier=FakeNotifier
    )
