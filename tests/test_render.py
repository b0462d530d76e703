import pytest

from pinwarden.constants import COLORS, NO_REASON_GIVEN, PIN_REQUEST_MESSAGES
from pinwarden.requests.models import Actor, ApprovalRequest, Decision, RequestStatus, TargetSnapshot
from pinwarden.requests.render import denied_feedback, notices, render
from pinwarden.testing.fakes import FakeAttachment, FakeMember, FakeMessage, FakeSticker


@pytest.fixture
def request_():
    author = FakeMember(name="bob")
    message = FakeMessage(
        "cat picture",
        author=author,
        stickers=[FakeSticker("blobcat")],
        attachments=[FakeAttachment("one.png"), FakeAttachment("two.png")],
    )
    return ApprovalRequest(
        id=message.id,
        requesting_actor=Actor.from_user(FakeMember(name="alice")),
        source_channel_id=message.channel.id,
        source_channel_mention=message.channel.mention,
        relay_channel_id=1,
        target=TargetSnapshot.from_message(message),
    )


def fields(embed):
    return {f.name: f.value for f in embed.fields}


def test_pending_payloads_carry_controls(request_):
    moderator, requester = render(RequestStatus.PENDING, request_)
    assert moderator.controls and requester.controls
    assert moderator.embed.color.value == COLORS["pending"]
    assert moderator.embed.description == (
        f"{request_.requesting_actor.mention} is requesting a pin in {request_.source_channel_mention}."
    )
    assert moderator.embed.author.name == "Alice (@alice)"
    assert requester.embed.description == PIN_REQUEST_MESSAGES["requested"]


def test_moderator_embed_shows_target(request_):
    moderator, _ = render(RequestStatus.PENDING, request_)
    shown = fields(moderator.embed)
    assert shown["Message"] == f"Message from <@{request_.target.author_id}>: cat picture"
    assert shown["Stickers"] == "`blobcat`"
    assert moderator.embed.image.url == request_.target.attachments[0].url
    assert shown["Other Attachments"] == f"[two.png]({request_.target.attachments[1].url})"
    assert shown["\u200b"] == f"[Jump]({request_.target.jump_url})"


def test_terminal_payloads_drop_controls(request_):
    request_.transition(Decision.CANCEL, actor=request_.requesting_actor)
    moderator, requester = render(RequestStatus.CANCELLED, request_)
    assert not moderator.controls and not requester.controls
    assert "has been cancelled" in moderator.embed.description
    assert requester.embed.description == PIN_REQUEST_MESSAGES["cancelled"]


def test_approved_names_the_moderator(request_):
    mod = Actor.from_user(FakeMember(name="mallory"))
    request_.transition(Decision.APPROVE, actor=mod)
    moderator, requester = render(request_.status, request_)
    assert moderator.embed.description.endswith(f"approved by {mod.mention}")
    assert moderator.embed.color.value == COLORS["success"]
    assert requester.embed.description == PIN_REQUEST_MESSAGES["requested"]


def test_blank_denial_reason_is_normalized(request_):
    request_.transition(Decision.DENY, actor=Actor.from_user(FakeMember(name="mallory")), reason="   ")
    moderator, _ = render(request_.status, request_)
    assert fields(moderator.embed)["Reason"] == NO_REASON_GIVEN
    _, requester_notice = notices(request_)
    assert requester_notice.fields == []


def test_denial_reason_is_shown(request_):
    request_.transition(Decision.DENY, actor=Actor.from_user(FakeMember(name="mallory")), reason="duplicate")
    moderator, _ = render(request_.status, request_)
    assert fields(moderator.embed)["Reason"] == "duplicate"
    moderator_notice, requester_notice = notices(request_)
    assert moderator_notice.description == PIN_REQUEST_MESSAGES["denied_mod"]
    assert fields(requester_notice) == {"Reason": "duplicate"}


def test_denied_feedback_without_reason():
    assert denied_feedback(None).fields == []
    assert denied_feedback("").fields == []


def test_no_notices_while_pending(request_):
    with pytest.raises(ValueError):
        notices(request_)
