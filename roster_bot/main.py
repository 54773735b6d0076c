from __future__ import annotations

import asyncio

from .adapters.discord import DiscordNotifier
from .adapters.graphql import GraphQLAdapter
from .bot import RosterBot
from .commands.register import register_commands
from .config import load_settings
from .data.records import RecordCache
from .data.sessions import SessionRegistry
from .logging_config import setup_logging


def main() -> int:
    log = setup_logging()
    settings = load_settings()
    if not settings.token:
        log.error(
            "DISCORD_BOT_TOKEN is not set. "
            "Export it in your environment before running."
        )
        return 2

    async def runner():
        api = GraphQLAdapter(settings.api_url, settings.api_token)
        notifier = (
            DiscordNotifier(settings.token, settings.notify_channel_id)
            if settings.notify_channel_id
            else None
        )
        registry = SessionRegistry(RecordCache(), api, api, downstream=notifier)
        bot = RosterBot(registry, api, notifier)
        register_commands(bot, registry, api)
        try:
            async with bot:
                await bot.start(settings.token)
        except KeyboardInterrupt:
            log.info("Shutting down...")
        return 0

    return asyncio.run(runner())


if __name__ == "__main__":
    raise SystemExit(main())
