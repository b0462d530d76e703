from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from .utils import error_embed, info_embed, success_embed

if TYPE_CHECKING:
    from .bot import PinWardenBot


class BaseCog(commands.Cog):
    """Base class for all cogs with common functionality."""

    def __init__(self, bot: "PinWardenBot") -> None:
        self.bot = bot
        self.log = logging.getLogger(f"pinwarden.cog.{self.__class__.__name__.lower()}")

    async def cog_load(self) -> None:
        self.log.info("Loaded %s", self.__class__.__name__)

    async def cog_unload(self) -> None:
        self.log.info("Unloaded %s", self.__class__.__name__)

    def error_embed(self, message: str) -> discord.Embed:
        return error_embed(message)

    def success_embed(self, message: str) -> discord.Embed:
        return success_embed(message)

    def info_embed(self, message: str) -> discord.Embed:
        return info_embed(message)
