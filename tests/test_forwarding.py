import discord
import pytest

from pinwarden.requests.forwarding import forward_embeds, relayable_embed
from pinwarden.testing.fakes import FakeMessage, http_error


def test_video_embed_becomes_picture():
    embed = discord.Embed.from_dict(
        {
            "type": "video",
            "title": "clip",
            "video": {"url": "https://video.example/clip.mp4"},
            "provider": {"name": "Tube"},
            "thumbnail": {"url": "https://img.example/thumb.png"},
        }
    )
    relayed = relayable_embed(embed)
    assert relayed is not None
    data = relayed.to_dict()
    assert "video" not in data and "provider" not in data
    assert relayed.image.url == "https://img.example/thumb.png"
    assert relayed.title == "clip"


def test_empty_embed_is_skipped():
    assert relayable_embed(discord.Embed()) is None


def test_embed_with_only_flags_is_skipped():
    assert relayable_embed(discord.Embed.from_dict({"type": "link", "flags": 0})) is None


async def test_malformed_embeds_are_skipped():
    moderator_message = FakeMessage("request")
    moderator_message.reply_errors = [http_error(50035, status=400, message="Invalid Form Body"), None]
    embeds = [discord.Embed(title="broken"), discord.Embed(title="fine")]

    assert await forward_embeds(moderator_message, embeds) == 1
    assert len(moderator_message.replies) == 1
    assert moderator_message.replies[0]["embed"].title == "fine"
    assert moderator_message.replies[0]["allowed_mentions"].users is False


async def test_other_errors_propagate():
    moderator_message = FakeMessage("request")
    moderator_message.reply_errors = [http_error(50013, status=403, message="Missing Permissions")]
    with pytest.raises(discord.Forbidden):
        await forward_embeds(moderator_message, [discord.Embed(title="x")])
