from pinwarden.database import initialize_database
from pinwarden.services.request_channel_store import RequestChannelStore


async def test_unconfigured_guild_has_no_channel(request_channels):
    assert await request_channels.get(1) is None


async def test_set_then_get(request_channels):
    await request_channels.set(1, 111)
    assert await request_channels.get(1) == 111

    await request_channels.set(1, 222)
    assert await request_channels.get(1) == 222


async def test_delete(request_channels):
    await request_channels.set(1, 111)
    assert await request_channels.delete(1) is True
    assert await request_channels.get(1) is None
    assert await request_channels.delete(1) is False


async def test_values_survive_a_new_store(tmp_path):
    path = str(tmp_path / "config.sqlite3")
    first = RequestChannelStore(path)
    await initialize_database(path, [first])
    await first.set(7, 777)

    second = RequestChannelStore(path)
    await second.init()
    assert await second.get(7) == 777
    assert await second.get(8) is None


async def test_absence_is_cached(tmp_path):
    path = str(tmp_path / "config.sqlite3")
    reader = RequestChannelStore(path)
    writer = RequestChannelStore(path)
    await reader.init()

    assert await reader.get(5) is None
    await writer.set(5, 555)
    # reader remembered the miss until its cache expires
    assert await reader.get(5) is None
    assert await writer.get(5) == 555
