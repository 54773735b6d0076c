"""Discord notification sink.

Notifications are posted to a channel through Discord's HTTP API using
:mod:`httpx`, so saving a roster does not depend on the gateway connection
of the running bot.
"""

from __future__ import annotations

import httpx

from .base import AdapterError, NotificationSink

SEVERITY_PREFIX = {
    "success": "✅",
    "error": "⚠️",
}


class DiscordNotifier(NotificationSink):
    """Posts roster notifications to a Discord channel."""

    api_base = "https://discord.com/api"

    def __init__(
        self,
        token: str,
        channel_id: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Store authentication ``token``, target ``channel_id`` and ``client``."""
        self.token = token
        self.channel_id = channel_id
        self.client = client or httpx.AsyncClient()

    # ------------------------------------------------------------------
    async def send_message(self, channel_id: str, content: str) -> None:
        """Send a message to a channel.

        Parameters
        ----------
        channel_id:
            Identifier of the Discord channel.
        content:
            Message body to send.

        """
        url = f"{self.api_base}/channels/{channel_id}/messages"
        headers = {"Authorization": f"Bot {self.token}"}
        payload = {"content": content}
        try:
            response = await self.client.post(url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise AdapterError(str(exc)) from exc

    async def notify(self, message: str, severity: str | None = None) -> None:
        prefix = SEVERITY_PREFIX.get(severity or "")
        content = f"{prefix} {message}" if prefix else message
        await self.send_message(self.channel_id, content)

    async def close(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()
