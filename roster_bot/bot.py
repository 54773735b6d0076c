"""Discord bot hosting collaborator roster editing sessions."""

from __future__ import annotations

from typing import Any

import discord
from discord.ext import commands

from .adapters.discord import DiscordNotifier
from .adapters.graphql import GraphQLAdapter
from .data.sessions import SessionRegistry
from .logging_config import setup_logging


class RosterBot(commands.Bot):
    """Small ``discord.py`` based bot used for editing collaborator rosters."""

    def __init__(
        self,
        registry: SessionRegistry,
        api: GraphQLAdapter,
        notifier: DiscordNotifier | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the bot with the minimal intents required."""
        intents = kwargs.pop("intents", None) or discord.Intents.default()
        # We use slash commands only; message content intent not needed.
        intents.message_content = False
        super().__init__(
            command_prefix=kwargs.pop("command_prefix", "!"),
            intents=intents,
        )
        self.log = setup_logging()
        self.registry = registry
        self.api = api
        self.notifier = notifier

    async def setup_hook(self) -> None:
        """Sync slash commands so new ones show up for users."""
        tree = getattr(self, "tree", None)
        if tree is not None:
            await tree.sync()
        await super().setup_hook()

    async def on_ready(self) -> None:  # pragma: no cover - requires discord
        """Log a short confirmation once the bot connected successfully."""
        await self.change_presence(activity=discord.Game(name="Collaborators"))
        self.log.info(
            "Logged in as %s (%s)",
            self.user,
            self.user.id if self.user else "?",
        )

    async def close(self) -> None:
        """Release the HTTP clients before disconnecting."""
        await self.api.close()
        if self.notifier is not None:
            await self.notifier.close()
        await super().close()


__all__ = ["RosterBot"]
