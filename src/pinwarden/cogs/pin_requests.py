from __future__ import annotations

import discord
from discord import app_commands

from ..base_cog import BaseCog


class PinRequestsCog(BaseCog):
    """Registers the "Request Pin" message context menu."""

    def __init__(self, bot) -> None:
        super().__init__(bot)
        self.request_pin_menu = app_commands.ContextMenu(name="Request Pin", callback=self.request_pin)

    async def cog_load(self) -> None:
        self.bot.tree.add_command(self.request_pin_menu)
        await super().cog_load()

    async def cog_unload(self) -> None:
        self.bot.tree.remove_command(self.request_pin_menu.name, type=self.request_pin_menu.type)
        await super().cog_unload()

    @app_commands.guild_only()
    async def request_pin(self, interaction: discord.Interaction, message: discord.Message) -> None:
        await self.bot.pin_requests.execute(interaction, message)
