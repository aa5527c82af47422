r"""Integration tests combining the primitives on a real event loop."""

from __future__ import annotations

import asyncio
import json
import logging
from io import StringIO
from typing import Any

import pytest

from apromise import (
    Attempt,
    TimeoutExceededError,
    callbackify,
    defer,
    delay,
    finally_,
    promisify,
    promisify_all,
    props,
    retry,
    timeout,
)
from apromise.callbacks import make_logging_reporter
from apromise.utils.structured_logging import StructuredFormatter


class FlakyService:
    """Callback-style service failing a given number of times."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0

    def fetch(self, key: str, callback: Any) -> None:
        self.calls += 1
        loop = asyncio.get_running_loop()
        if self.calls <= self.failures:
            loop.call_later(0.005, callback, ConnectionError("connection reset"))
        else:
            loop.call_later(0.005, callback, None, f"value of {key}")

    def hang(self, callback: Any) -> None:
        self.calls += 1


@pytest.mark.asyncio
async def test_retry_promisified_service() -> None:
    """Test retrying a promisified callback API until it recovers."""
    service = promisify_all(FlakyService(failures=2))

    result = await retry(
        lambda attempt: service.fetchAsync("user"),
        {"max_attempts": 5, "backoff_base": 2, "match": ConnectionError},
    )

    assert result == "value of user"
    assert service.calls == 3


@pytest.mark.asyncio
async def test_retry_timeout_on_hanging_service() -> None:
    """Test a service that never calls back times out on every
    attempt."""
    source = FlakyService(failures=0)
    hang = promisify(source.hang)

    with pytest.raises(TimeoutExceededError, match=r"Timeout of 20ms exceeded"):
        await retry(lambda attempt: hang(), {"max_attempts": 3, "timeout": 20, "backoff_base": 1})
    assert source.calls == 3


@pytest.mark.asyncio
async def test_callbackify_retry() -> None:
    """Test delivering the outcome of a retried operation to a
    callback."""
    outcomes = []
    done = defer()

    async def flaky(attempt: Attempt) -> int:
        if attempt.current < 2:
            msg = "not yet"
            raise RuntimeError(msg)
        return attempt.current

    def callback(error: BaseException | None, value: Any = None) -> None:
        outcomes.append((error, value))
        done.resolve()

    fetch = callbackify(lambda: retry(flaky, {"max_attempts": 3, "backoff_base": 0}))
    fetch(callback)
    await timeout(done.future, 1000)

    assert outcomes == [(None, 2)]


@pytest.mark.asyncio
async def test_props_with_timeouts() -> None:
    """Test resolving a mapping of raced operations."""
    result = await props(
        {
            "fast": timeout(delay(5, "fast"), 500),
            "plain": 3,
            "cleaned": finally_(delay(5, "cleaned"), lambda: None),
        }
    )
    assert result == {"fast": "fast", "plain": 3, "cleaned": "cleaned"}


@pytest.mark.asyncio
async def test_structured_retry_reports() -> None:
    """Test the logging reporter emits one JSON record per report."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("test_structured_retry_reports")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

    async def sync_profile(attempt: Attempt) -> str:
        if attempt.current == 1:
            msg = "reset"
            raise ConnectionError(msg)
        return "synced"

    try:
        policy = {"max_attempts": 2, "backoff_base": 1, "report": make_logging_reporter(logger)}
        assert await retry(sync_profile, policy) == "synced"
    finally:
        logger.removeHandler(handler)

    records = [json.loads(line) for line in stream.getvalue().strip().split("\n")]
    assert [record["attempt"] for record in records] == [1, 1, 2, 2]
    assert {record["retry_name"] for record in records} == {"sync_profile"}
    assert records[1]["message"] == "Try sync_profile #1 failed: ConnectionError: reset"
    assert records[1]["error"] == "ConnectionError('reset')"
    assert records[2]["message"] == "Delaying retry of sync_profile by 1.0"
