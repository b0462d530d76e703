from __future__ import annotations

import discord

from .constants import COLORS, MAX_EMBED_DESCRIPTION, MAX_EMBED_TITLE, MAX_FIELD_VALUE


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def field_value(text: str) -> str:
    """Clamp text to what Discord accepts in an embed field."""
    return truncate(text, MAX_FIELD_VALUE)


def safe_embed(title: str | None, description: str, color: int = COLORS["default"]) -> discord.Embed:
    """Create an embed with safe length limits."""
    if title is not None:
        title = truncate(title, MAX_EMBED_TITLE)
    return discord.Embed(title=title, description=truncate(description, MAX_EMBED_DESCRIPTION), color=color)


def error_embed(message: str) -> discord.Embed:
    return safe_embed(None, message, COLORS["error"])


def success_embed(message: str) -> discord.Embed:
    return safe_embed(None, message, COLORS["success"])


def info_embed(message: str) -> discord.Embed:
    return safe_embed(None, message, COLORS["info"])
