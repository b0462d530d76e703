from __future__ import annotations

import logging
from typing import Awaitable, TypeVar

import discord

from ..constants import GONE_ERROR_CODES

log = logging.getLogger("pinwarden.discord_safety")

T = TypeVar("T")


def is_gone(error: BaseException) -> bool:
    """Whether Discord reported that the message/channel/webhook no longer exists."""
    return isinstance(error, discord.HTTPException) and getattr(error, "code", 0) in GONE_ERROR_CODES


async def ignore_gone(awaitable: Awaitable[T], *, what: str = "resource") -> T | None:
    """Await a transport call, treating "already gone" as done. Other errors propagate."""
    try:
        return await awaitable
    except discord.HTTPException as e:
        if not is_gone(e):
            raise
        log.info("Skipped %s: already gone (code %s)", what, e.code)
        return None


async def silent_ack(interaction: discord.Interaction) -> bool:
    """Acknowledge a component/modal interaction without visible change."""
    try:
        if interaction.response.is_done():
            return True
        await interaction.response.defer()
        return True
    except (discord.NotFound, discord.HTTPException):
        return interaction.response.is_done()


async def safe_send(
    interaction: discord.Interaction,
    content: str | None = None,
    *,
    embed: discord.Embed | None = None,
    ephemeral: bool = True,
) -> bool:
    try:
        if not interaction.response.is_done():
            await interaction.response.send_message(content=content, embed=embed, ephemeral=ephemeral)
            return True
        await interaction.followup.send(content=content, embed=embed, ephemeral=ephemeral)
        return True
    except (discord.NotFound, discord.HTTPException):
        return False
    except Exception:
        log.exception("safe_send failed")
        return False
