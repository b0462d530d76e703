from __future__ import annotations

import logging
from typing import Iterable

import discord

from ..constants import INVALID_FORM_BODY

log = logging.getLogger("pinwarden.requests.forwarding")

# Keys present on every embed, even one with nothing to show
_NO_CONTENT_KEYS = frozenset({"type", "flags"})


def relayable_embed(embed: discord.Embed) -> discord.Embed | None:
    """Rebuild a received embed into one a bot is allowed to send."""
    data = embed.to_dict()
    # Bots cannot send video/provider; link previews keep their picture as a thumbnail.
    data.pop("video", None)
    data.pop("provider", None)
    if "image" not in data and "thumbnail" in data:
        data["image"] = data["thumbnail"]
    data["type"] = "rich"
    if not data.keys() - _NO_CONTENT_KEYS:
        return None
    return discord.Embed.from_dict(data)


async def forward_embeds(moderator_message: discord.Message, embeds: Iterable[discord.Embed]) -> int:
    """Reply to the moderator message with each of the target's embeds.

    Embeds Discord rejects as malformed are skipped; any other error propagates.
    Returns how many were forwarded.
    """
    forwarded = 0
    for embed in embeds:
        relayed = relayable_embed(embed)
        if relayed is None:
            continue
        try:
            await moderator_message.reply(
                embed=relayed,
                allowed_mentions=discord.AllowedMentions.none(),
                mention_author=False,
            )
        except discord.HTTPException as e:
            if e.code != INVALID_FORM_BODY:
                raise
            log.info("Skipped malformed embed while forwarding to message %s: %s", moderator_message.id, e.text)
            continue
        forwarded += 1
    return forwarded
