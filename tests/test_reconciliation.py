"""Tests for the pure roster reconciliation functions."""

from roster_bot.core import reconciliation as rec
from roster_bot.core.models import (
    CandidateEntry,
    CollaboratorEntry,
    CollaboratorInput,
    Organization,
    Permission,
)

ORG = Organization(org_id="o1", org_name="Org One")


def cand(cid, name, org=None):
    return CandidateEntry(id=cid, display_name=name, organization=org)


def row(cid, name=None, permission=Permission.CAN_EDIT, org=None):
    return CollaboratorEntry(
        collaborator_id=cid,
        collaborator_name=name,
        organization=org,
        permission=permission,
    )


# --- merge_entry -------------------------------------------------------


def test_merge_prefers_pool_identity() -> None:
    pool = [cand("u1", "Alice", ORG)]
    current = [row("u1", "Stale name")]
    merged = rec.merge_entry(
        CollaboratorInput(collaborator_id="u1", permission=Permission.CAN_VIEW),
        pool,
        current,
    )
    assert merged == row("u1", "Alice", Permission.CAN_VIEW, ORG)


def test_merge_falls_back_to_orphaned_entry() -> None:
    current = [row("u1", "Alice", org=ORG)]
    merged = rec.merge_entry(
        CollaboratorInput(collaborator_id="u1", permission=Permission.CAN_EDIT),
        [],
        current,
    )
    assert merged.collaborator_name == "Alice"
    assert merged.organization == ORG
    assert merged.permission is Permission.CAN_EDIT


def test_merge_without_any_source_is_the_partial() -> None:
    merged = rec.merge_entry(
        CollaboratorInput(collaborator_id="ghost", permission=Permission.NO_ACCESS),
        [cand("u1", "Alice")],
        [row("u2", "Bob")],
    )
    assert merged == row("ghost", None, Permission.NO_ACCESS)


def test_merge_keeps_missing_permission_unset() -> None:
    merged = rec.merge_entry(
        CollaboratorInput(collaborator_id="u1"), [cand("u1", "Alice")], []
    )
    assert merged.collaborator_name == "Alice"
    assert merged.permission is None


def test_merge_does_not_touch_inputs() -> None:
    current = [row("u1", "Alice")]
    rec.merge_entry(
        CollaboratorInput(collaborator_id="u1", permission=Permission.CAN_VIEW),
        [],
        current,
    )
    assert current == [row("u1", "Alice")]


# --- remaining ---------------------------------------------------------


def test_remaining_excludes_current_and_sorts_by_name() -> None:
    pool = [cand("u3", "carol"), cand("u1", "Alice"), cand("u2", "Bob")]
    result = rec.remaining(pool, [row("u1", "Alice")])
    # case-sensitive: uppercase sorts before lowercase
    assert [c.id for c in result] == ["u2", "u3"]


def test_remaining_with_placeholder_only() -> None:
    pool = [cand("u2", "Bob"), cand("u1", "Alice")]
    result = rec.remaining(pool, [CollaboratorEntry.placeholder()])
    assert [c.display_name for c in result] == ["Alice", "Bob"]


# --- max_size ----------------------------------------------------------


def test_max_size_is_pool_size_without_orphans() -> None:
    pool = [cand("u1", "A"), cand("u2", "B"), cand("u3", "C")]
    assert rec.max_size(pool, [row("u1")], [row("u1")]) == 3


def test_max_size_counts_committed_orphans_on_roster() -> None:
    assert rec.max_size([], [row("u1")], [row("u1")]) == 1


def test_max_size_ignores_orphans_not_committed() -> None:
    assert rec.max_size([cand("u2", "B")], [], [row("u9")]) == 1


def test_max_size_ignores_removed_orphans() -> None:
    assert rec.max_size([], [row("u1")], [CollaboratorEntry.placeholder()]) == 0


# --- equivalence, reset target, payload --------------------------------


def test_is_equivalent_roster_is_order_sensitive() -> None:
    a = [row("u1"), row("u2")]
    assert rec.is_equivalent_roster(a, [row("u1"), row("u2")])
    assert not rec.is_equivalent_roster(a, [row("u2"), row("u1")])
    assert not rec.is_equivalent_roster(a, a[:1])
    assert not rec.is_equivalent_roster(
        [row("u1")], [row("u1", permission=Permission.CAN_VIEW)]
    )


def test_map_committed_uses_pool_names_and_committed_permission() -> None:
    pool = [cand("u1", "Alice", ORG)]
    committed = [row("u1", permission=Permission.CAN_VIEW), row("u9", "Gone")]
    mapped = rec.map_committed(committed, pool)
    assert mapped == [
        row("u1", "Alice", Permission.CAN_VIEW, ORG),
        row("u9", "Gone"),
    ]


def test_reset_target_falls_back_to_placeholder() -> None:
    assert rec.reset_target([], []) == [CollaboratorEntry.placeholder()]


def test_to_payload_filters_incomplete_rows() -> None:
    current = [
        CollaboratorEntry.placeholder(),
        row("u1", "Alice"),
        row("u2", "Bob", permission=None),
        row("u3", "Carol", permission=Permission.NO_ACCESS),
    ]
    assert [p.to_payload() for p in rec.to_payload(current)] == [
        {"collaboratorID": "u1", "permission": "Can Edit"},
        {"collaboratorID": "u3", "permission": "No Access"},
    ]
