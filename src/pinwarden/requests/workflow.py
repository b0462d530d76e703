from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

import discord

from ..config import Settings
from ..constants import ERROR_MESSAGES, UNKNOWN_INTERACTION
from ..error_handlers import report_interaction_error
from ..services.discord_safety import ignore_gone, safe_send, silent_ack
from ..services.request_channel_store import RequestChannelStore
from ..utils import error_embed
from .controls import ModeratorControls, RequesterControls
from .forwarding import forward_embeds
from .models import Actor, ApprovalRequest, Decision, RequestStatus, ResolveAttempt, TargetSnapshot
from .render import notices, render

if TYPE_CHECKING:
    from discord.ext import commands

log = logging.getLogger("pinwarden.requests.workflow")


class Refusal(str, Enum):
    """Reasons a pin request is turned away before anything is created."""

    MISSING_PERMISSIONS = "missing_permissions"
    NOT_CONFIGURED = "not_configured"
    RELAY_UNAVAILABLE = "internal_error"
    ALREADY_PINNED = "already_pinned"
    DO_IT_YOURSELF = "do_it_yourself"

    @property
    def embed(self) -> discord.Embed:
        return error_embed(ERROR_MESSAGES[self.value])


class PinRequestService:
    """Entry point for "Request Pin": checks, then hands off to a ``PinRequest``."""

    def __init__(self, bot: "commands.Bot", request_channels: RequestChannelStore, settings: Settings) -> None:
        self.bot = bot
        self.request_channels = request_channels
        self.settings = settings
        self.active: set[PinRequest] = set()

    async def execute(self, interaction: discord.Interaction, target: discord.Message) -> Optional["PinRequest"]:
        await interaction.response.defer(ephemeral=True, thinking=True)

        refusal, relay_channel = await self.preflight(interaction, target)
        if refusal is not None:
            log.debug("Pin request by %s refused: %s", interaction.user, refusal.name)
            await interaction.edit_original_response(embed=refusal.embed)
            return None

        assert relay_channel is not None
        pin_request = PinRequest(self, interaction, target, relay_channel)
        self.active.add(pin_request)
        try:
            await pin_request.start()
        except Exception:
            self.active.discard(pin_request)
            raise
        return pin_request

    async def preflight(
        self, interaction: discord.Interaction, target: discord.Message
    ) -> tuple[Optional[Refusal], Optional[discord.abc.Messageable]]:
        assert interaction.guild_id is not None

        if not interaction.app_permissions.manage_messages:
            return Refusal.MISSING_PERMISSIONS, None

        channel_id = await self.request_channels.get(interaction.guild_id)
        if channel_id is None:
            return Refusal.NOT_CONFIGURED, None

        relay_channel = await self._fetch_relay(channel_id)
        if relay_channel is None:
            return Refusal.RELAY_UNAVAILABLE, None

        if target.pinned:
            return Refusal.ALREADY_PINNED, None

        if self.settings.enforce_self_service and interaction.permissions.manage_messages:
            return Refusal.DO_IT_YOURSELF, None

        return None, relay_channel

    async def _fetch_relay(self, channel_id: int) -> Optional[discord.abc.Messageable]:
        channel: Any = self.bot.get_channel(channel_id)
        if channel is None:
            try:
                channel = await self.bot.fetch_channel(channel_id)
            except (discord.NotFound, discord.Forbidden) as e:
                log.warning("Request channel %s cannot be fetched: %s", channel_id, e)
                return None
        if not isinstance(channel, discord.abc.Messageable):
            log.warning("Request channel %s is not messageable (%s)", channel_id, type(channel).__name__)
            return None
        return channel


class PinRequest:
    """One in-flight request: owns the guard, both messages and both listeners."""

    def __init__(
        self,
        service: PinRequestService,
        command: discord.Interaction,
        target: discord.Message,
        relay_channel: discord.abc.Messageable,
    ) -> None:
        self.service = service
        self.command = command
        self.target = target
        self.relay_channel = relay_channel
        self.request = ApprovalRequest(
            id=int(target.id),
            requesting_actor=Actor.from_user(command.user),
            source_channel_id=int(command.channel.id),
            source_channel_mention=command.channel.mention,
            relay_channel_id=int(relay_channel.id),
            target=TargetSnapshot.from_message(target),
        )
        # Set once both messages exist (or the request is abandoned); listeners hold their events until then.
        self.armed = asyncio.Event()
        self.moderator_message: Optional[discord.Message] = None
        self._finished = False

        settings = service.settings
        self.requester_controls = RequesterControls(self, timeout=settings.cancel_window_seconds)
        self.moderator_controls = ModeratorControls(
            self,
            timeout=settings.moderator_timeout,
            deny_reason_timeout=settings.deny_reason_timeout_seconds,
        )

    @property
    def status(self) -> RequestStatus:
        return self.request.status

    @property
    def resolved(self) -> bool:
        return self.request.resolved

    async def start(self) -> None:
        moderator_payload, requester_payload = render(RequestStatus.PENDING, self.request)
        self.moderator_message = await self.relay_channel.send(
            embed=moderator_payload.embed,
            view=self.moderator_controls,
            allowed_mentions=discord.AllowedMentions.none(),
        )
        try:
            requester_message = await self.command.edit_original_response(
                embed=requester_payload.embed, view=self.requester_controls
            )
            self.request.attach_messages(self.moderator_message.id, requester_message.id)
            self.armed.set()
            forwarded = await forward_embeds(self.moderator_message, self.target.embeds)
        except Exception:
            await self._abandon()
            raise

        log.info(
            "Pin request for message %s by %s relayed to channel %s (%d embeds forwarded)",
            self.request.id,
            self.request.requesting_actor.id,
            self.request.relay_channel_id,
            forwarded,
        )

    async def resolve(self, attempt: ResolveAttempt) -> bool:
        """Single resolution point for both listeners. Returns whether this attempt won."""
        if not self.request.guard.try_acquire(attempt.decision.value):
            log.debug(
                "Pin request %s: %s by %s arrived after resolution, ignored",
                self.request.id,
                attempt.decision.value,
                attempt.actor.id,
            )
            await silent_ack(attempt.interaction)
            return False

        self.requester_controls.stop()
        self.moderator_controls.stop()
        self.moderator_controls.close_prompts()
        try:
            if attempt.decision is Decision.CANCEL:
                await self._finalize_cancel(attempt)
            elif attempt.decision is Decision.APPROVE:
                await self._finalize_approve(attempt)
            else:
                await self._finalize_deny(attempt)
        finally:
            self._finish()

        log.info("Pin request %s %s by %s", self.request.id, self.request.status.value, attempt.actor.id)
        return True

    async def _finalize_cancel(self, attempt: ResolveAttempt) -> None:
        self.request.transition(Decision.CANCEL, actor=attempt.actor)
        moderator_payload, requester_payload = render(self.request.status, self.request)
        await self._edit_clicked_message(
            attempt.interaction, requester_payload.embed, self.command.edit_original_response, "requester message"
        )
        assert self.moderator_message is not None
        await ignore_gone(
            self.moderator_message.edit(embed=moderator_payload.embed, view=None),
            what="moderator message edit",
        )

    async def _finalize_approve(self, attempt: ResolveAttempt) -> None:
        await self.target.pin(
            reason=f"Pin request by {self.request.requesting_actor.username} approved by {attempt.actor.username}"
        )
        self.request.transition(Decision.APPROVE, actor=attempt.actor)
        await self._apply_decision(attempt)

    async def _finalize_deny(self, attempt: ResolveAttempt) -> None:
        self.request.transition(Decision.DENY, actor=attempt.actor, reason=attempt.reason)
        await self._apply_decision(attempt)

    async def _apply_decision(self, attempt: ResolveAttempt) -> None:
        moderator_payload, requester_payload = render(self.request.status, self.request)
        assert self.moderator_message is not None
        await self._edit_clicked_message(
            attempt.interaction, moderator_payload.embed, self.moderator_message.edit, "moderator message"
        )
        await ignore_gone(
            self.command.edit_original_response(embed=requester_payload.embed, view=None),
            what="requester message edit",
        )

        moderator_notice, requester_notice = notices(self.request)
        await asyncio.gather(
            ignore_gone(attempt.interaction.followup.send(embed=moderator_notice, ephemeral=True), what="moderator notice"),
            ignore_gone(self.command.followup.send(embed=requester_notice, ephemeral=True), what="requester notice"),
        )

    async def _edit_clicked_message(
        self, interaction: discord.Interaction, embed: discord.Embed, fallback: Any, what: str
    ) -> None:
        """Edit the message the control sits on, directly if the interaction has expired."""
        try:
            await ignore_gone(interaction.response.edit_message(embed=embed, view=None), what=f"{what} edit")
        except discord.NotFound as e:
            if e.code != UNKNOWN_INTERACTION:
                raise
            log.info("Interaction expired while resolving pin request %s, editing %s directly", self.request.id, what)
            await ignore_gone(fallback(embed=embed, view=None), what=f"{what} edit")

    async def fail(self, interaction: discord.Interaction, error: Exception) -> None:
        """Abandon this request after an unexpected error and report it."""
        await self._abandon()
        await report_interaction_error(interaction, error)
        if interaction is not self.command:
            await safe_send(self.command, embed=error_embed(ERROR_MESSAGES["internal_error"]), ephemeral=True)

    async def expire(self) -> None:
        self._finish()

    async def _abandon(self) -> None:
        self.request.guard.try_acquire("abandoned")
        self.armed.set()
        self.requester_controls.stop()
        self.moderator_controls.stop()
        self.moderator_controls.close_prompts()
        if self.moderator_message is not None:
            await self._strip_controls(self.moderator_message.edit(view=None), "moderator message")
        await self._strip_controls(self.command.edit_original_response(view=None), "requester message")
        self._finish()

    async def _strip_controls(self, edit: Any, what: str) -> None:
        try:
            await edit
        except discord.HTTPException as e:
            log.warning("Could not remove controls from %s of pin request %s: %s", what, self.request.id, e)

    def _finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        self.service.active.discard(self)
