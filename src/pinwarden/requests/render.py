"""Embeds shown to moderators and requesters. Pure: no I/O, no Discord state."""
from __future__ import annotations

from dataclasses import dataclass

import discord

from ..constants import COLORS, NO_REASON_GIVEN, PIN_REQUEST_MESSAGES
from ..utils import error_embed, field_value, safe_embed, success_embed
from .models import ApprovalRequest, RequestStatus


@dataclass(frozen=True)
class Payload:
    embed: discord.Embed
    # Whether the message should still carry its buttons.
    controls: bool


def _request_embed(request: ApprovalRequest, description: str, color: int) -> discord.Embed:
    actor = request.requesting_actor
    target = request.target

    embed = safe_embed(None, description, color)
    embed.set_author(name=f"{actor.display_name} (@{actor.username})", icon_url=actor.avatar_url)

    if target.content:
        embed.add_field(
            name="Message",
            value=field_value(f"Message from <@{target.author_id}>: {target.content}"),
            inline=False,
        )

    if target.sticker_names:
        embed.add_field(
            name="Stickers",
            value=field_value("\n".join(f"`{name}`" for name in target.sticker_names)),
            inline=True,
        )

    if target.attachments:
        first, *others = target.attachments
        embed.set_image(url=first.url)
        if others:
            embed.add_field(
                name="Other Attachments",
                value=field_value("\n".join(f"[{a.filename}]({a.url})" for a in others)),
                inline=True,
            )

    embed.add_field(name="\u200b", value=f"[Jump]({target.jump_url})", inline=False)
    return embed


def _moderator_payload(status: RequestStatus, request: ApprovalRequest) -> Payload:
    requester = request.requesting_actor.mention
    moderator = request.decided_by.mention if request.decided_by else "a moderator"

    if status is RequestStatus.PENDING:
        return Payload(
            _request_embed(
                request,
                f"{requester} is requesting a pin in {request.source_channel_mention}.",
                COLORS["pending"],
            ),
            controls=True,
        )
    if status is RequestStatus.CANCELLED:
        embed = _request_embed(request, f"❌ Pin request by {requester} has been cancelled.", COLORS["error"])
    elif status is RequestStatus.APPROVED:
        embed = _request_embed(
            request, f"✅ Pin request by {requester} has been approved by {moderator}", COLORS["success"]
        )
    else:
        embed = _request_embed(request, f"❌ Pin request by {requester} has been denied by {moderator}", COLORS["error"])
        embed.add_field(name="Reason", value=field_value(request.denied_reason or NO_REASON_GIVEN), inline=False)
    return Payload(embed, controls=False)


def _requester_payload(status: RequestStatus) -> Payload:
    if status is RequestStatus.PENDING:
        return Payload(success_embed(PIN_REQUEST_MESSAGES["requested"]), controls=True)
    if status is RequestStatus.CANCELLED:
        return Payload(error_embed(PIN_REQUEST_MESSAGES["cancelled"]), controls=False)
    # Approved/denied: the acknowledgment stays, the outcome arrives as a follow-up.
    return Payload(success_embed(PIN_REQUEST_MESSAGES["requested"]), controls=False)


def render(status: RequestStatus, request: ApprovalRequest) -> tuple[Payload, Payload]:
    """Build the (moderator, requester) message payloads for ``status``."""
    return _moderator_payload(status, request), _requester_payload(status)


def denied_feedback(reason: str | None) -> discord.Embed:
    embed = error_embed(PIN_REQUEST_MESSAGES["denied_feedback"])
    if reason:
        embed.add_field(name="Reason", value=field_value(reason), inline=False)
    return embed


def notices(request: ApprovalRequest) -> tuple[discord.Embed, discord.Embed]:
    """Ephemeral (moderator, requester) notices sent once a decision is final."""
    if request.status is RequestStatus.APPROVED:
        return success_embed(PIN_REQUEST_MESSAGES["approved_mod"]), success_embed(PIN_REQUEST_MESSAGES["approved_feedback"])
    if request.status is RequestStatus.DENIED:
        return error_embed(PIN_REQUEST_MESSAGES["denied_mod"]), denied_feedback(request.denied_reason)
    raise ValueError(f"no notices for a {request.status.value} request")
