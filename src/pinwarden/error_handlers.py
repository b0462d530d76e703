from __future__ import annotations

import logging

import discord
from discord import app_commands
from discord.ext import commands

from .constants import ERROR_MESSAGES
from .services.discord_safety import safe_send
from .utils import error_embed

log = logging.getLogger("pinwarden.error_handlers")


async def report_interaction_error(interaction: discord.Interaction, error: BaseException) -> None:
    """Log an unexpected failure and tell the user, without details."""
    name = interaction.command.qualified_name if interaction.command else type(interaction).__name__
    log.error("Unexpected error while handling %s for user %s", name, interaction.user, exc_info=error)
    await safe_send(interaction, embed=error_embed(ERROR_MESSAGES["internal_error"]), ephemeral=True)


class ErrorHandler(commands.Cog):
    """Centralized error handling for application commands."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot
        self._previous = bot.tree.on_error

    async def cog_load(self) -> None:
        self.bot.tree.on_error = self.on_app_command_error

    async def cog_unload(self) -> None:
        self.bot.tree.on_error = self._previous

    async def on_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        """Handle application command errors."""
        if isinstance(error, app_commands.MissingPermissions):
            await safe_send(interaction, embed=error_embed("You don't have permission to use this command."))
            return

        if isinstance(error, app_commands.BotMissingPermissions):
            await safe_send(interaction, embed=error_embed(ERROR_MESSAGES["missing_permissions"]))
            return

        if isinstance(error, app_commands.NoPrivateMessage):
            await safe_send(interaction, embed=error_embed("This command can only be used in a server."))
            return

        if isinstance(error, app_commands.CommandInvokeError):
            await report_interaction_error(interaction, error.original)
            return

        await report_interaction_error(interaction, error)


async def setup_error_handlers(bot: commands.Bot) -> None:
    """Setup error handlers for the bot."""
    await bot.add_cog(ErrorHandler(bot))
