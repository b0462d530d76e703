from __future__ import annotations

import asyncio
import logging

import discord
from discord.ext import commands

from .config import Settings
from .constants import CACHE_TTL_SECONDS
from .database import initialize_database
from .error_handlers import setup_error_handlers
from .requests import PinRequestService
from .services.request_channel_store import RequestChannelStore

log = logging.getLogger("pinwarden.bot")


class _CommandSyncManager:
    def __init__(self, bot: "PinWardenBot") -> None:
        self.bot = bot
        self._lock = asyncio.Lock()

    async def sync_startup(self) -> None:
        if self.bot.settings.sync_guild_id:
            await self.sync_guild(self.bot.settings.sync_guild_id)
        else:
            await self.sync_global()

    async def sync_global(self) -> None:
        async with self._lock:
            synced = await self.bot.tree.sync()
            log.info("Commands synced globally: %s", ", ".join(c.name for c in synced))

    async def sync_guild(self, guild_id: int) -> None:
        async with self._lock:
            guild = discord.Object(id=guild_id)
            self.bot.tree.copy_global_to(guild=guild)
            synced = await self.bot.tree.sync(guild=guild)
            log.info("Commands synced to guild %d: %s", guild_id, ", ".join(c.name for c in synced))


class PinWardenBot(commands.Bot):
    def __init__(self, settings: Settings) -> None:
        intents = discord.Intents.default()
        intents.message_content = bool(settings.message_content_intent)

        log.info("INTENTS: guilds=%s message_content=%s", intents.guilds, intents.message_content)

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            allowed_mentions=discord.AllowedMentions(everyone=False, roles=False, users=True),
            help_command=None,
        )

        self.settings = settings

        cache_ttl = settings.cache_default_ttl_seconds or CACHE_TTL_SECONDS
        self.request_channels = RequestChannelStore(settings.sqlite_path, cache_ttl)
        self.pin_requests = PinRequestService(self, self.request_channels, settings)
        self._sync_mgr = _CommandSyncManager(self)

    async def setup_hook(self) -> None:
        await initialize_database(self.settings.sqlite_path, [self.request_channels])
        await setup_error_handlers(self)

        loaded: list[str] = []
        failed: list[str] = []

        # One bad cog must not prevent the others from registering their commands.
        async def _load_cog(import_path: str, class_name: str) -> None:
            try:
                log.info("Loading cog: %s.%s", import_path, class_name)
                mod = __import__(import_path, fromlist=[class_name])
                cls = getattr(mod, class_name)
                await self.add_cog(cls(self))
                loaded.append(f"{import_path}.{class_name}")
            except (ModuleNotFoundError, AttributeError) as e:
                log.error("Cannot load cog %s.%s: %s", import_path, class_name, e)
                failed.append(f"{import_path}.{class_name} ({type(e).__name__})")
            except Exception as e:
                log.exception("Failed to load cog: %s.%s", import_path, class_name)
                failed.append(f"{import_path}.{class_name} ({type(e).__name__})")

        await _load_cog("pinwarden.cogs.config", "ConfigCog")
        await _load_cog("pinwarden.cogs.pin_requests", "PinRequestsCog")

        log.info("Startup cog load summary: loaded=%d failed=%d", len(loaded), len(failed))
        for name in failed:
            log.warning("Startup cog failed: %s", name)

        await self._sync_mgr.sync_startup()
        log.info("Command sync complete")

    async def on_ready(self) -> None:
        log.info("Logged in as %s (%s) in %d guilds", self.user, getattr(self.user, "id", "?"), len(self.guilds))
