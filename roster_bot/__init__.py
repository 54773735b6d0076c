"""Core package for the collaborator roster bot.

This module exposes the roster models and the session store so that
consumers of the package can simply import them from ``roster_bot``.
"""

from .core.models import (
    CandidateEntry,
    CollaboratorEntry,
    CollaboratorInput,
    Organization,
    Permission,
    Record,
)
from .data.records import RecordCache
from .data.store import RosterStore

__all__ = [
    "CandidateEntry",
    "CollaboratorEntry",
    "CollaboratorInput",
    "Organization",
    "Permission",
    "Record",
    "RecordCache",
    "RosterStore",
]
