"""Registration of slash commands for the bot."""

from __future__ import annotations

import logging

import discord
from discord.ext import commands

from ..adapters.base import AdapterError
from ..adapters.graphql import GraphQLAdapter
from ..core.models import CollaboratorInput
from ..data.sessions import Session, SessionRegistry
from .utils import format_notices, parse_permission, roster_embed, row_index

log = logging.getLogger(__name__)

NO_SESSION = "No roster is open. Use `/collaborators_open` first."
BUSY = "The roster is still loading or saving, try again in a moment."


def register_commands(
    bot: commands.Bot, registry: SessionRegistry, api: GraphQLAdapter
) -> None:
    """Register bot commands with optional compatibility shims."""
    tree = bot.tree
    choices = getattr(
        discord.app_commands, "choices", lambda **_kwargs: (lambda func: func)
    )
    permission_choices = [
        discord.app_commands.Choice(name="Can View", value="Can View"),
        discord.app_commands.Choice(name="Can Edit", value="Can Edit"),
        discord.app_commands.Choice(name="No Access", value="No Access"),
    ]

    async def editable_session(interaction: discord.Interaction) -> Session | None:
        session = registry.get(interaction.user.id)
        if session is None:
            await interaction.response.send_message(NO_SESSION, ephemeral=True)
            return None
        if session.store.loading:
            await interaction.response.send_message(BUSY, ephemeral=True)
            return None
        return session

    async def show(interaction: discord.Interaction, session: Session) -> None:
        await interaction.response.send_message(
            embed=roster_embed(session.store), ephemeral=True
        )

    @tree.command(
        name="collaborators_open",
        description="Start editing the collaborators of a submission",
    )
    @discord.app_commands.describe(submission_id="Submission ID")
    async def collaborators_open(
        interaction: discord.Interaction, submission_id: str
    ) -> None:
        await interaction.response.defer(ephemeral=True)
        record = registry.records.get_record(submission_id)
        if record is None:
            try:
                record = await api.fetch_record(submission_id)
            except AdapterError as exc:
                log.warning("Could not load submission %s: %s", submission_id, exc)
                await interaction.edit_original_response(
                    content=f"Could not load submission `{submission_id}`."
                )
                return
            if record is None:
                await interaction.edit_original_response(
                    content="Submission not found."
                )
                return
            registry.records.put(record)

        session = await registry.open(interaction.user.id, submission_id)
        await interaction.edit_original_response(
            content=f"Editing collaborators of `{submission_id}`.",
            embed=roster_embed(session.store),
        )

    @tree.command(name="collaborators_show", description="Show the roster being edited")
    async def collaborators_show(interaction: discord.Interaction) -> None:
        session = registry.get(interaction.user.id)
        if session is None:
            await interaction.response.send_message(NO_SESSION, ephemeral=True)
            return
        await show(interaction, session)

    @tree.command(name="collaborators_add", description="Add an empty collaborator row")
    async def collaborators_add(interaction: discord.Interaction) -> None:
        session = await editable_session(interaction)
        if session is None:
            return
        if session.store.at_capacity:
            await interaction.response.send_message(
                "No more collaborators can be added to this submission.",
                ephemeral=True,
            )
            return
        session.store.add_placeholder()
        await show(interaction, session)

    @tree.command(
        name="collaborators_set",
        description="Assign a person to a collaborator row",
    )
    @discord.app_commands.describe(
        row="Row number",
        collaborator="Person to assign",
        permission="Access level (keeps the row's current one if omitted)",
    )
    @choices(permission=permission_choices)
    async def collaborators_set(
        interaction: discord.Interaction,
        row: int,
        collaborator: str,
        permission: discord.app_commands.Choice[str] | None = None,
    ) -> None:
        session = await editable_session(interaction)
        if session is None:
            return
        index = row_index(row)
        chosen = parse_permission(permission.value) if permission else None
        if chosen is None and 0 <= index < len(session.store.current):
            chosen = session.store.current[index].permission
        session.store.update_at(
            index, CollaboratorInput(collaborator_id=collaborator, permission=chosen)
        )
        await show(interaction, session)

    if hasattr(collaborators_set, "autocomplete"):
        @collaborators_set.autocomplete("collaborator")
        async def collaborators_set_collaborator_autocomplete(
            interaction: discord.Interaction, current: str
        ) -> list[discord.app_commands.Choice[str]]:
            session = registry.get(interaction.user.id)
            if session is None:
                return []
            current_lower = current.lower()
            return [
                discord.app_commands.Choice(name=c.display_name or c.id, value=c.id)
                for c in session.store.remaining_candidates()
                if current_lower in (c.display_name or c.id).lower()
            ][:25]

    @tree.command(
        name="collaborators_permission",
        description="Change the access level of a collaborator row",
    )
    @discord.app_commands.describe(row="Row number", permission="Access level")
    @choices(permission=permission_choices)
    async def collaborators_permission(
        interaction: discord.Interaction,
        row: int,
        permission: discord.app_commands.Choice[str],
    ) -> None:
        session = await editable_session(interaction)
        if session is None:
            return
        index = row_index(row)
        current_id = None
        if 0 <= index < len(session.store.current):
            current_id = session.store.current[index].collaborator_id
        session.store.update_at(
            index,
            CollaboratorInput(
                collaborator_id=current_id,
                permission=parse_permission(permission.value),
            ),
        )
        await show(interaction, session)

    @tree.command(name="collaborators_remove", description="Remove a collaborator row")
    @discord.app_commands.describe(row="Row number")
    async def collaborators_remove(interaction: discord.Interaction, row: int) -> None:
        session = await editable_session(interaction)
        if session is None:
            return
        session.store.remove_at(row_index(row))
        await show(interaction, session)

    @tree.command(
        name="collaborators_reset",
        description="Discard unsaved changes to the roster",
    )
    async def collaborators_reset(interaction: discord.Interaction) -> None:
        session = await editable_session(interaction)
        if session is None:
            return
        session.store.reset()
        await show(interaction, session)

    @tree.command(name="collaborators_save", description="Save the roster")
    async def collaborators_save(interaction: discord.Interaction) -> None:
        session = await editable_session(interaction)
        if session is None:
            return
        await interaction.response.defer(ephemeral=True)
        await session.store.save()
        await interaction.edit_original_response(
            content=format_notices(session.notifier.drain()) or None,
            embed=roster_embed(session.store),
        )

    @tree.command(
        name="collaborators_close",
        description="Stop editing and discard unsaved changes",
    )
    async def collaborators_close(interaction: discord.Interaction) -> None:
        if not registry.close(interaction.user.id):
            await interaction.response.send_message(NO_SESSION, ephemeral=True)
            return
        await interaction.response.send_message(
            "Closed the collaborator roster.", ephemeral=True
        )
