from __future__ import annotations

import discord

from ..adapters.discord import SEVERITY_PREFIX
from ..core.models import CollaboratorEntry, Permission
from ..data.sessions import Notice
from ..data.store import RosterStore


def parse_permission(value: str | None) -> Permission | None:
    """Map a permission value or member name to :class:`Permission`."""
    if not value:
        return None
    for permission in Permission:
        if value in (permission.value, permission.name):
            return permission
    return None


def row_index(row: int) -> int:
    """Convert a 1-based row number typed by a user to a list index."""
    return row - 1


def describe_entry(entry: CollaboratorEntry) -> str:
    if entry.is_placeholder:
        return "(unassigned)"
    name = entry.collaborator_name or entry.collaborator_id
    if entry.organization and entry.organization.org_name:
        name = f"{name} ({entry.organization.org_name})"
    return name


def roster_lines(store: RosterStore) -> list[str]:
    lines = []
    for number, entry in enumerate(store.current, start=1):
        permission = entry.permission.value if entry.permission else "no permission chosen"
        lines.append(f"{number}. {describe_entry(entry)}: {permission}")
    return lines


def roster_embed(store: RosterStore) -> discord.Embed:
    """Summarise the roster of ``store`` for an ephemeral reply."""
    embed = discord.Embed(
        title=f"Collaborators of {store.record_id}",
        description="\n".join(roster_lines(store)),
    )
    embed.add_field(
        name="Capacity",
        value=f"{len(store.current)} / {store.max_roster_size()}",
        inline=True,
    )
    embed.add_field(
        name="Available",
        value=", ".join(
            c.display_name or c.id for c in store.remaining_candidates()
        )
        or "(none)",
        inline=False,
    )
    if store.error is not None:
        embed.add_field(
            name="Directory",
            value=f"Eligible collaborators could not be loaded: {store.error}",
            inline=False,
        )
    return embed


def format_notices(notices: list[Notice]) -> str:
    return "\n".join(
        f"{SEVERITY_PREFIX[n.severity]} {n.message}"
        if n.severity in SEVERITY_PREFIX
        else n.message
        for n in notices
    )
