import asyncio

from pinwarden.requests.guard import ResolutionGuard


def test_first_acquire_wins():
    guard = ResolutionGuard()
    assert not guard.closed
    assert guard.try_acquire("approve")
    assert guard.closed
    assert guard.owner == "approve"


def test_later_acquires_lose_and_keep_owner():
    guard = ResolutionGuard()
    guard.try_acquire("cancel")
    assert not guard.try_acquire("approve")
    assert not guard.try_acquire()
    assert guard.owner == "cancel"


async def test_concurrent_acquires_have_one_winner():
    guard = ResolutionGuard()

    async def contender(name: str) -> bool:
        await asyncio.sleep(0)
        won = guard.try_acquire(name)
        await asyncio.sleep(0)
        return won

    results = await asyncio.gather(*(contender(f"flow-{i}") for i in range(20)))
    assert results.count(True) == 1
    assert guard.owner == f"flow-{results.index(True)}"
