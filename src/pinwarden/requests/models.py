from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import discord

from ..errors import InvalidTransitionError
from .guard import ResolutionGuard


class RequestStatus(str, Enum):
    PENDING = "pending"
    CANCELLED = "cancelled"
    APPROVED = "approved"
    DENIED = "denied"

    @property
    def terminal(self) -> bool:
        return self is not RequestStatus.PENDING


class Decision(str, Enum):
    CANCEL = "cancel"
    APPROVE = "approve"
    DENY = "deny"


_OUTCOMES = {
    Decision.CANCEL: RequestStatus.CANCELLED,
    Decision.APPROVE: RequestStatus.APPROVED,
    Decision.DENY: RequestStatus.DENIED,
}


@dataclass(frozen=True)
class Actor:
    id: int
    mention: str
    display_name: str
    username: str
    avatar_url: str | None = None

    @classmethod
    def from_user(cls, user: discord.abc.User) -> "Actor":
        avatar = getattr(user, "display_avatar", None)
        return cls(
            id=int(user.id),
            mention=user.mention,
            display_name=getattr(user, "display_name", None) or user.name,
            username=user.name,
            avatar_url=str(avatar.url) if avatar is not None else None,
        )


@dataclass(frozen=True)
class Attachment:
    filename: str
    url: str


@dataclass(frozen=True)
class TargetSnapshot:
    """What the moderators get to see of the message being pinned."""

    message_id: int
    channel_id: int
    author_id: int
    content: str
    jump_url: str
    sticker_names: tuple[str, ...] = ()
    attachments: tuple[Attachment, ...] = ()

    @classmethod
    def from_message(cls, message: discord.Message) -> "TargetSnapshot":
        return cls(
            message_id=int(message.id),
            channel_id=int(message.channel.id),
            author_id=int(message.author.id),
            content=message.content or "",
            jump_url=message.jump_url,
            sticker_names=tuple(s.name for s in (message.stickers or [])),
            attachments=tuple(Attachment(a.filename, a.url) for a in (message.attachments or [])),
        )


@dataclass
class ApprovalRequest:
    """One member's request to pin one message, and where it currently stands."""

    id: int
    requesting_actor: Actor
    source_channel_id: int
    source_channel_mention: str
    relay_channel_id: int
    target: TargetSnapshot
    status: RequestStatus = RequestStatus.PENDING
    moderator_message_id: Optional[int] = None
    requester_message_id: Optional[int] = None
    decided_by: Optional[Actor] = None
    denied_reason: Optional[str] = None
    guard: ResolutionGuard = field(default_factory=ResolutionGuard, repr=False)

    @property
    def resolved(self) -> bool:
        return self.guard.closed

    def attach_messages(self, moderator_message_id: int, requester_message_id: int) -> None:
        if self.moderator_message_id is not None or self.requester_message_id is not None:
            raise InvalidTransitionError(f"request {self.id} already has its messages")
        self.moderator_message_id = int(moderator_message_id)
        self.requester_message_id = int(requester_message_id)

    def transition(self, decision: Decision, *, actor: Actor, reason: str | None = None) -> RequestStatus:
        if self.status.terminal:
            raise InvalidTransitionError(f"request {self.id} is already {self.status.value}")
        status = _OUTCOMES[decision]
        self.status = status
        self.decided_by = actor
        if status is RequestStatus.DENIED:
            self.denied_reason = (reason or "").strip()
        return status


@dataclass
class ResolveAttempt:
    """A listener's bid to end the request; sent to ``PinRequest.resolve``."""

    decision: Decision
    interaction: Any
    actor: Actor
    reason: str | None = None
