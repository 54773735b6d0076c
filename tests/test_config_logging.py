import logging
from dataclasses import fields

from roster_bot.config import DEFAULT_API_URL, load_settings
from roster_bot.logging_config import setup_logging


def test_load_settings(monkeypatch):
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "abc123")
    monkeypatch.setenv("ROSTER_API_URL", "https://api.example.org/graphql")
    monkeypatch.setenv("ROSTER_API_TOKEN", " secret ")
    monkeypatch.setenv("ROSTER_NOTIFY_CHANNEL_ID", "42")
    s = load_settings()
    assert s.token == "abc123"
    assert s.api_url == "https://api.example.org/graphql"
    assert s.api_token == "secret"
    assert s.notify_channel_id == "42"
    assert [f.name for f in fields(s)] == [
        "token",
        "api_url",
        "api_token",
        "notify_channel_id",
    ]

    # empty environment falls back to defaults
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "")
    monkeypatch.delenv("ROSTER_API_URL")
    monkeypatch.delenv("ROSTER_API_TOKEN")
    monkeypatch.delenv("ROSTER_NOTIFY_CHANNEL_ID")
    s2 = load_settings()
    assert s2.token == ""
    assert s2.api_url == DEFAULT_API_URL
    assert s2.api_token == ""
    assert s2.notify_channel_id == ""


def test_setup_logging_idempotent():
    logger1 = setup_logging(logging.DEBUG)
    logger2 = setup_logging(logging.DEBUG)
    assert logger1 is logger2
    assert logger1.name == "roster_bot"
    assert logger1.handlers  # at least one handler installed
