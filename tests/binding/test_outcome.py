import asyncio

import pytest

from cfbinding.binding.outcome import Failure, Success, capture


@pytest.mark.asyncio
async def test_capture_async_value():
    async def fetch():
        return 42

    assert await capture(fetch) == Success(42)


@pytest.mark.asyncio
async def test_capture_sync_value():
    assert await capture(lambda x: x * 2, 4) == Success(8)


@pytest.mark.asyncio
async def test_capture_async_error():
    async def fail():
        raise ValueError("bad value")

    outcome = await capture(fail)

    assert isinstance(outcome, Failure)
    assert outcome.message == "bad value"


@pytest.mark.asyncio
async def test_capture_sync_error():
    def fail():
        raise KeyError

    outcome = await capture(fail)

    assert isinstance(outcome.error, KeyError)
    assert outcome.message == "KeyError"


@pytest.mark.asyncio
async def test_cancellation_propagates():
    async def cancelled():
        raise asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await capture(cancelled)


def test_map():
    assert Success(2).map(str) == Success("2")
    assert isinstance(Success("x").map(int), Failure)
    failure = Failure(RuntimeError("boom"))
    assert failure.map(str) is failure
