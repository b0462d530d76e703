from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import discord
from discord import ui

from ..constants import MAX_REASON_LENGTH, REASON_INPUT_ID
from ..services.discord_safety import silent_ack

log = logging.getLogger("pinwarden.requests.deny_reason")


@dataclass(frozen=True)
class DenyReasonSubmission:
    interaction: discord.Interaction
    reason: str


class DenyReasonModal(ui.Modal, title="Reason"):
    """Asks the denying moderator why. One instance per click on "Deny".

    Closing the dialog is invisible to the bot, so abandonment is only noticed
    when the timeout runs out. Either way ``collect()`` then returns ``None`` and
    the moderator buttons stay usable. The prompt is also closed early once the
    request is resolved by someone else.
    """

    reason = ui.TextInput(
        label="Reason",
        custom_id=REASON_INPUT_ID,
        style=discord.TextStyle.paragraph,
        placeholder="Enter your reason for denying this request here. Leave blank for no reason.",
        required=False,
        max_length=MAX_REASON_LENGTH,
    )

    def __init__(self, timeout: float) -> None:
        super().__init__(timeout=timeout)
        self.submission: Optional[DenyReasonSubmission] = None

    async def on_submit(self, interaction: discord.Interaction) -> None:
        await self.submit(interaction, self.reason.value)

    async def submit(self, interaction: discord.Interaction, text: str | None) -> None:
        # One submission per modal; repeats and late arrivals are acknowledged and dropped.
        if self.submission is not None or self.is_finished():
            log.debug("Dropped deny reason submission from %s", interaction.user)
            await silent_ack(interaction)
            return
        self.submission = DenyReasonSubmission(interaction, (text or "").strip())
        self.stop()

    async def on_timeout(self) -> None:
        log.debug("Deny reason prompt timed out")

    async def collect(self) -> Optional[DenyReasonSubmission]:
        """Wait until the modal is submitted, abandoned, or stopped."""
        await self.wait()
        return self.submission
