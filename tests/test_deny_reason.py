import asyncio

from pinwarden.constants import MAX_REASON_LENGTH
from pinwarden.requests.deny_reason import DenyReasonModal
from pinwarden.testing.fakes import FakeInteraction


async def test_submission_is_trimmed_and_closes_the_modal():
    modal = DenyReasonModal(timeout=60)
    interaction = FakeInteraction()
    await modal.submit(interaction, "\n  spam  \n")

    submission = await modal.collect()
    assert submission is not None
    assert submission.reason == "spam"
    assert submission.interaction is interaction
    assert modal.is_finished()


async def test_missing_text_becomes_empty_reason():
    modal = DenyReasonModal(timeout=60)
    await modal.submit(FakeInteraction(), None)
    submission = await modal.collect()
    assert submission is not None
    assert submission.reason == ""


async def test_stopped_without_submission_collects_nothing():
    modal = DenyReasonModal(timeout=60)
    collector = asyncio.create_task(modal.collect())
    await asyncio.sleep(0)
    modal.stop()
    assert await collector is None


async def test_second_submission_is_acknowledged_and_dropped():
    modal = DenyReasonModal(timeout=60)
    first, second = FakeInteraction(), FakeInteraction()
    await modal.submit(first, "first")
    await modal.submit(second, "second")

    submission = await modal.collect()
    assert submission.reason == "first"
    assert second.response.deferred
    assert first.response.calls == []


async def test_reason_input_is_optional_and_bounded():
    modal = DenyReasonModal(timeout=60)
    assert modal.reason.required is False
    assert modal.reason.max_length == MAX_REASON_LENGTH
    assert modal.title == "Reason"


async def test_submission_after_prompt_closed_is_acknowledged_and_dropped():
    modal = DenyReasonModal(timeout=60)
    modal.stop()
    late = FakeInteraction()
    await modal.submit(late, "too late")

    assert await modal.collect() is None
    assert late.response.deferred
