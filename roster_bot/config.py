import os
from dataclasses import dataclass

DEFAULT_API_URL = "http://localhost:4000/api/graphql"


@dataclass(frozen=True)
class Settings:
    token: str
    api_url: str = DEFAULT_API_URL
    api_token: str = ""
    # Channel receiving a copy of every save notification, if set
    notify_channel_id: str = ""


def load_settings() -> Settings:
    token = os.getenv("DISCORD_BOT_TOKEN", "").strip()
    return Settings(
        token=token or "",
        api_url=os.getenv("ROSTER_API_URL", "").strip() or DEFAULT_API_URL,
        api_token=os.getenv("ROSTER_API_TOKEN", "").strip(),
        notify_channel_id=os.getenv("ROSTER_NOTIFY_CHANNEL_ID", "").strip(),
    )
