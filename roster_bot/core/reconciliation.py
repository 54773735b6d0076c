"""Pure functions reconciling a roster with the pool of eligible people.

Nothing in this module mutates its arguments; every function returns new
objects so :class:`~roster_bot.data.store.RosterStore` can compare the
result against its current state before committing to it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import CandidateEntry, CollaboratorEntry, CollaboratorInput


def find_candidate(
    pool: Iterable[CandidateEntry], collaborator_id: str | None
) -> CandidateEntry | None:
    if not collaborator_id:
        return None
    return next((c for c in pool if c.id == collaborator_id), None)


def find_entry(
    current: Iterable[CollaboratorEntry], collaborator_id: str | None
) -> CollaboratorEntry | None:
    if not collaborator_id:
        return None
    return next((e for e in current if e.collaborator_id == collaborator_id), None)


def merge_entry(
    partial: CollaboratorInput,
    pool: Sequence[CandidateEntry],
    current: Sequence[CollaboratorEntry],
) -> CollaboratorEntry:
    """Build the roster row produced by applying ``partial``.

    The denormalized fields come from the first source that knows the id:

    1. the candidate pool;
    2. an entry already in ``current`` (a collaborator who has since left
       the pool);
    3. nothing, in which case the row is exactly ``partial``.

    Fields set on ``partial`` always win over the looked-up ones.
    """
    candidate = find_candidate(pool, partial.collaborator_id)
    if candidate is not None:
        return candidate.to_entry(permission=partial.permission)

    existing = find_entry(current, partial.collaborator_id)
    if existing is not None:
        return CollaboratorEntry(
            collaborator_id=existing.collaborator_id,
            collaborator_name=existing.collaborator_name,
            organization=existing.organization,
            permission=partial.permission,
        )

    return CollaboratorEntry(
        collaborator_id=partial.collaborator_id or "",
        permission=partial.permission,
    )


def remaining(
    pool: Iterable[CandidateEntry], current: Iterable[CollaboratorEntry]
) -> list[CandidateEntry]:
    """Return pool entries not yet on the roster, sorted by display name."""
    taken = {e.collaborator_id for e in current}
    return sorted(
        (c for c in pool if c.id not in taken),
        key=lambda c: c.display_name or "",
    )


def max_size(
    pool: Sequence[CandidateEntry],
    committed: Iterable[CollaboratorEntry],
    current: Iterable[CollaboratorEntry],
) -> int:
    """Return the largest roster the session may hold.

    Every pool member counts once. Collaborators who were committed but are
    no longer in the pool still count while they remain on the roster.
    """
    pool_ids = {c.id for c in pool}
    committed_ids = {e.collaborator_id for e in committed if e.collaborator_id}
    orphaned = {
        e.collaborator_id
        for e in current
        if e.collaborator_id in committed_ids and e.collaborator_id not in pool_ids
    }
    return len(pool_ids) + len(orphaned)


def is_equivalent_roster(
    a: Sequence[CollaboratorEntry], b: Sequence[CollaboratorEntry]
) -> bool:
    """Order-sensitive, field-for-field comparison of two rosters."""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def map_committed(
    committed: Iterable[CollaboratorEntry], pool: Sequence[CandidateEntry]
) -> list[CollaboratorEntry]:
    """Fill in names and organizations of committed rows from the pool."""
    mapped: list[CollaboratorEntry] = []
    for entry in committed:
        candidate = find_candidate(pool, entry.collaborator_id)
        if candidate is None:
            mapped.append(entry.model_copy())
            continue
        mapped.append(
            entry.model_copy(
                update={
                    "collaborator_name": candidate.display_name,
                    "organization": candidate.organization,
                }
            )
        )
    return mapped


def reset_target(
    committed: Iterable[CollaboratorEntry], pool: Sequence[CandidateEntry]
) -> list[CollaboratorEntry]:
    return map_committed(committed, pool) or [CollaboratorEntry.placeholder()]


def to_payload(current: Iterable[CollaboratorEntry]) -> list[CollaboratorInput]:
    """Keep only assigned rows with a permission, reduced to id and permission."""
    return [
        CollaboratorInput(collaborator_id=e.collaborator_id, permission=e.permission)
        for e in current
        if e.collaborator_id and e.permission
    ]
