"""Slash commands exposing roster editing sessions."""
