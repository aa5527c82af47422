r"""Unit tests for manually resolvable futures."""

from __future__ import annotations

import asyncio

import pytest

from apromise import CallbackError, Deferred, defer
from apromise.deferred import settle_future

###########################
#     Tests for defer     #
###########################


@pytest.mark.asyncio
async def test_defer_returns_pending_deferred() -> None:
    """Test defer creates a pending future."""
    deferred = defer()
    assert isinstance(deferred, Deferred)
    assert isinstance(deferred.future, asyncio.Future)
    assert not deferred.future.done()


@pytest.mark.asyncio
async def test_defer_resolve() -> None:
    """Test resolving a deferred settles its future with the value."""
    deferred = defer()
    deferred.resolve(5)
    assert await deferred.future == 5


@pytest.mark.asyncio
async def test_defer_resolve_later() -> None:
    """Test a deferred resolved from a callback of the loop."""
    deferred = defer()
    asyncio.get_running_loop().call_soon(deferred.resolve, "later")
    assert await deferred == "later"


@pytest.mark.asyncio
async def test_defer_resolve_without_value() -> None:
    """Test resolving a deferred without value settles it with None."""
    deferred = defer()
    deferred.resolve()
    assert await deferred.future is None


@pytest.mark.asyncio
async def test_defer_reject() -> None:
    """Test rejecting a deferred fails its future with the error."""
    deferred = defer()
    error = RuntimeError("boom")
    deferred.reject(error)
    with pytest.raises(RuntimeError, match=r"boom") as exc_info:
        await deferred.future
    assert exc_info.value is error


@pytest.mark.asyncio
async def test_defer_reject_with_non_exception() -> None:
    """Test rejecting a deferred with a value that is not an
    exception."""
    deferred = defer()
    deferred.reject("ENOENT")
    with pytest.raises(CallbackError) as exc_info:
        await deferred.future
    assert exc_info.value.value == "ENOENT"


@pytest.mark.asyncio
async def test_defer_first_settlement_wins() -> None:
    """Test later calls to resolve and reject are ignored."""
    deferred = defer()
    deferred.resolve(1)
    deferred.resolve(2)
    deferred.reject(RuntimeError("ignored"))
    assert await deferred.future == 1


@pytest.mark.asyncio
async def test_defer_reject_then_resolve() -> None:
    """Test resolve is ignored after reject."""
    deferred = defer()
    deferred.reject(ValueError("first"))
    deferred.resolve("ignored")
    with pytest.raises(ValueError, match=r"first"):
        await deferred.future


def test_defer_requires_running_loop() -> None:
    """Test defer cannot be called without a running event loop."""
    with pytest.raises(RuntimeError, match=r"no running event loop"):
        defer()


###################################
#     Tests for settle_future     #
###################################


@pytest.mark.asyncio
async def test_settle_future_ignores_cancelled_future() -> None:
    """Test settle_future does nothing on a cancelled future."""
    future = asyncio.get_running_loop().create_future()
    future.cancel()
    settle_future(future, "value")
    assert future.cancelled()


@pytest.mark.asyncio
async def test_settle_future_failed_with_none_error() -> None:
    """Test a failure with a None error is wrapped in CallbackError."""
    future = asyncio.get_running_loop().create_future()
    settle_future(future, error=None, failed=True)
    assert isinstance(future.exception(), CallbackError)
    assert future.exception().value is None
