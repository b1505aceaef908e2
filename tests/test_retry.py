from __future__ import annotations

import pytest

from search_proxy.utils.retry import retry_async


class RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def warning(self, event, **kwargs):
        self.events.append((event, kwargs))


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch):
    async def _noop_sleep(delay):
        return None

    monkeypatch.setattr("search_proxy.utils.retry.asyncio.sleep", _noop_sleep)


@pytest.mark.asyncio
async def test_retry_returns_after_transient_failure():
    attempts = 0
    logger = RecordingLogger()

    async def operation():
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise ConnectionError("reset")
        return "ok"

    result = await retry_async(
        operation,
        max_attempts=2,
        retry_on=(ConnectionError,),
        logger=logger,
        operation_name="unit",
    )

    assert result == "ok"
    assert attempts == 2
    assert logger.events[0][0] == "retrying_operation"
    assert logger.events[0][1]["operation"] == "unit"
    assert logger.events[0][1]["attempt"] == 1


@pytest.mark.asyncio
async def test_retry_does_not_retry_other_exceptions():
    attempts = 0

    async def operation():
        nonlocal attempts
        attempts += 1
        raise ValueError("bad payload")

    with pytest.raises(ValueError):
        await retry_async(operation, max_attempts=3, retry_on=(ConnectionError,))

    assert attempts == 1


@pytest.mark.asyncio
async def test_retry_reraises_last_error():
    attempts = 0

    async def operation():
        nonlocal attempts
        attempts += 1
        raise ConnectionError(f"attempt {attempts}")

    with pytest.raises(ConnectionError, match="attempt 2"):
        await retry_async(operation, max_attempts=2, retry_on=(ConnectionError,))
