from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import discord
from discord import ui

from ..constants import APPROVE_ID, CANCEL_ID, DENY_ID, ERROR_MESSAGES
from ..errors import UnknownControlError
from ..services.discord_safety import ignore_gone, safe_send, silent_ack
from ..utils import error_embed
from .deny_reason import DenyReasonModal
from .models import Actor, Decision, ResolveAttempt

if TYPE_CHECKING:
    from .workflow import PinRequest

log = logging.getLogger("pinwarden.requests.controls")


class ControlButton(ui.Button["_Controls"]):
    async def callback(self, interaction: discord.Interaction) -> None:
        assert self.view is not None
        await self.view.dispatch_control(interaction, self.custom_id)


class _Controls(ui.View):
    def __init__(self, pin_request: "PinRequest", *, timeout: float | None) -> None:
        super().__init__(timeout=timeout)
        self.pin_request = pin_request

    async def dispatch_control(self, interaction: discord.Interaction, custom_id: str | None) -> None:
        raise NotImplementedError

    async def _ready(self, interaction: discord.Interaction) -> bool:
        """Hold events until both messages exist; late ones after resolution are only acked."""
        await self.pin_request.armed.wait()
        if self.pin_request.resolved:
            await silent_ack(interaction)
            return False
        return True

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: ui.Item[Any], /) -> None:
        await self.pin_request.fail(interaction, error)


class RequesterControls(_Controls):
    """The requester's "Cancel" button on their acknowledgment message."""

    def __init__(self, pin_request: "PinRequest", *, timeout: float, max_activations: int = 1) -> None:
        super().__init__(pin_request, timeout=timeout)
        self.max_activations = max_activations
        self.activations = 0
        self.add_item(ControlButton(style=discord.ButtonStyle.danger, label="Cancel", emoji="❌", custom_id=CANCEL_ID))

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return interaction.user.id == self.pin_request.request.requesting_actor.id

    async def dispatch_control(self, interaction: discord.Interaction, custom_id: str | None) -> None:
        if not await self._ready(interaction):
            return

        if self.activations >= self.max_activations:
            await silent_ack(interaction)
            return
        self.activations += 1
        if self.activations >= self.max_activations:
            self.stop()

        if custom_id != CANCEL_ID:
            self.stop()
            raise UnknownControlError(custom_id)

        await self.pin_request.resolve(ResolveAttempt(Decision.CANCEL, interaction, Actor.from_user(interaction.user)))

    async def on_timeout(self) -> None:
        log.debug("Cancel window closed for pin request %s", self.pin_request.request.id)
        if self.pin_request.resolved:
            return
        await ignore_gone(
            self.pin_request.command.edit_original_response(view=None),
            what="requester cancel button removal",
        )


class ModeratorControls(_Controls):
    """Approve/Deny buttons on the relay message. Any moderator, any number of tries."""

    def __init__(self, pin_request: "PinRequest", *, timeout: float | None, deny_reason_timeout: float) -> None:
        super().__init__(pin_request, timeout=timeout)
        self.deny_reason_timeout = deny_reason_timeout
        self.open_prompts: set[DenyReasonModal] = set()
        self.add_item(ControlButton(style=discord.ButtonStyle.success, label="Approve", emoji="✅", custom_id=APPROVE_ID))
        self.add_item(ControlButton(style=discord.ButtonStyle.danger, label="Deny", emoji="❌", custom_id=DENY_ID))

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        permissions = getattr(interaction, "permissions", None)
        if permissions is not None and permissions.manage_messages:
            return True
        await safe_send(interaction, embed=error_embed(ERROR_MESSAGES["not_a_moderator"]), ephemeral=True)
        return False

    async def dispatch_control(self, interaction: discord.Interaction, custom_id: str | None) -> None:
        if not await self._ready(interaction):
            return

        if custom_id == APPROVE_ID:
            await self.pin_request.resolve(ResolveAttempt(Decision.APPROVE, interaction, Actor.from_user(interaction.user)))
        elif custom_id == DENY_ID:
            await self._deny(interaction)
        else:
            self.stop()
            raise UnknownControlError(custom_id)

    async def _deny(self, interaction: discord.Interaction) -> None:
        if self.pin_request.resolved:
            await silent_ack(interaction)
            return

        # The guard is only consulted once a reason comes back, so other
        # moderators can still act while this one is typing.
        modal = DenyReasonModal(timeout=self.deny_reason_timeout)
        self.open_prompts.add(modal)
        try:
            await interaction.response.send_modal(modal)
            submission = await modal.collect()
        finally:
            self.open_prompts.discard(modal)
        if submission is None:
            if not self.pin_request.resolved:
                log.info("Deny reason for pin request %s abandoned by %s", self.pin_request.request.id, interaction.user)
            return

        await self.pin_request.resolve(
            ResolveAttempt(Decision.DENY, submission.interaction, Actor.from_user(interaction.user), submission.reason)
        )

    def close_prompts(self) -> None:
        for modal in list(self.open_prompts):
            modal.stop()

    async def on_timeout(self) -> None:
        log.info("Moderator window closed for pin request %s", self.pin_request.request.id)
        self.close_prompts()
        await self.pin_request.expire()
