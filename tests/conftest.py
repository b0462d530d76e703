"""Shared fixtures: a configured guild, a service and a live pin request."""

import discord
import pytest

from pinwarden.config import Settings
from pinwarden.requests import PinRequestService
from pinwarden.services.request_channel_store import RequestChannelStore
from pinwarden.testing.fakes import (
    FakeBot,
    FakeGuild,
    FakeInteraction,
    FakeMember,
    FakeMessage,
    FakeTextChannel,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(token="test-token", cancel_window_seconds=60, deny_reason_timeout_seconds=60)


@pytest.fixture
async def request_channels(tmp_path) -> RequestChannelStore:
    store = RequestChannelStore(str(tmp_path / "pinwarden.sqlite3"))
    await store.init()
    return store


@pytest.fixture
def guild() -> FakeGuild:
    return FakeGuild(name="Pin Club")


@pytest.fixture
def source_channel(guild) -> FakeTextChannel:
    return FakeTextChannel(name="general", guild=guild)


@pytest.fixture
def relay_channel(guild) -> FakeTextChannel:
    return FakeTextChannel(name="pin-requests", guild=guild)


@pytest.fixture
def requester() -> FakeMember:
    return FakeMember(name="alice")


@pytest.fixture
def moderator() -> FakeMember:
    return FakeMember(name="mallory")


@pytest.fixture
def target(source_channel) -> FakeMessage:
    return FakeMessage("look at this cat", author=FakeMember(name="bob"), channel=source_channel)


@pytest.fixture
def bot(relay_channel) -> FakeBot:
    return FakeBot(relay_channel)


@pytest.fixture
async def service(bot, request_channels, relay_channel, guild, settings) -> PinRequestService:
    await request_channels.set(guild.id, relay_channel.id)
    return PinRequestService(bot, request_channels, settings)


@pytest.fixture
def command(requester, source_channel) -> FakeInteraction:
    return FakeInteraction(requester, source_channel)


@pytest.fixture
async def pin_request(service, command, target):
    pin_request = await service.execute(command, target)
    assert pin_request is not None
    return pin_request


@pytest.fixture
def mod_click(pin_request, moderator, relay_channel):
    """Build a button/modal interaction on the moderator message."""

    def make(member: FakeMember | None = None) -> FakeInteraction:
        return FakeInteraction(
            member or moderator,
            relay_channel,
            message=pin_request.moderator_message,
            permissions=discord.Permissions(manage_messages=True),
        )

    return make


@pytest.fixture
def cancel_click(pin_request, requester, command):
    """Build a button interaction on the requester's acknowledgment."""

    def make() -> FakeInteraction:
        return FakeInteraction(requester, command.channel, message=command.original)

    return make
