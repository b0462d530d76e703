from __future__ import annotations

import discord
from discord import app_commands

from ..base_cog import BaseCog


class ConfigCog(BaseCog):
    config = app_commands.Group(
        name="config",
        description="Config commands",
        guild_only=True,
        default_permissions=discord.Permissions(manage_guild=True),
    )

    @config.command(name="request-channel", description="Configure the channel to send pin requests to.")
    @app_commands.describe(channel="The channel to send pin requests to. Leave out to see the current one.")
    async def request_channel(self, interaction: discord.Interaction, channel: discord.TextChannel | None = None) -> None:
        assert interaction.guild_id is not None
        store = self.bot.request_channels

        if channel is None:
            current = await store.get(interaction.guild_id)
            if current is not None:
                await interaction.response.send_message(f"Requests are being sent to <#{current}>", ephemeral=True)
            else:
                await interaction.response.send_message("No channel set!", ephemeral=True)
            return

        await store.set(interaction.guild_id, channel.id)
        await interaction.response.send_message(
            embed=self.success_embed(f"Requests will now be sent to {channel.mention}"), ephemeral=True
        )

    @config.command(name="request-channel-clear", description="Stop accepting pin requests in this server.")
    async def request_channel_clear(self, interaction: discord.Interaction) -> None:
        assert interaction.guild_id is not None
        removed = await self.bot.request_channels.delete(interaction.guild_id)
        if removed:
            await interaction.response.send_message(embed=self.success_embed("Request channel cleared."), ephemeral=True)
        else:
            await interaction.response.send_message("No channel set!", ephemeral=True)
