r"""Timed awaitables: value-carrying waits and deadline races.

The deadline timer of ``timeout`` and the raced operation settle
independently, and both may become ready in the same loop iteration.
The outcome is therefore adjudicated with the loop clock when the
operation settles, not by callback order: an operation that settles at
or after the deadline loses the race.
"""

from __future__ import annotations

__all__ = ["delay", "timeout"]

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from apromise.exceptions import InvalidArgumentError, TimeoutExceededError
from apromise.utils.validation import validate_awaitable, validate_duration

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


def delay(ms: float, value: T = None, *, unref: bool = False) -> Any:  # noqa: ARG001
    """Return an awaitable that resolves with ``value`` after ``ms``
    milliseconds.

    The duration is validated immediately, so a bad argument raises
    before anything is awaited. Cancelling the awaiting task cancels
    the wait.

    Args:
        ms: The delay in milliseconds. Must be >= 0.
        value: The value the awaitable resolves with.
        unref: Hint that the wait must not keep the process alive.
            asyncio event loops never wait on pending timers when they
            shut down, so every delay already behaves this way and the
            flag has no further effect.

    Returns:
        A coroutine resolving with ``value``.

    Raises:
        InvalidArgumentError: If ``ms`` is not a non-negative number.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import delay
        >>> asyncio.run(delay(10, "done"))
        'done'

        ```
    """
    validate_duration(ms)
    return _sleep(ms, value)


async def _sleep(ms: float, value: T) -> T:
    await asyncio.sleep(ms / 1000)
    return value


def timeout(awaitable: Awaitable[Any], ms: float) -> asyncio.Future:
    """Fail with ``TimeoutExceededError`` if ``awaitable`` does not settle
    within ``ms`` milliseconds.

    The raced operation is never cancelled: when the deadline wins, it
    keeps running in the background and its outcome is ignored. The
    deadline timer is cleared as soon as the returned future settles.

    Must be called while an event loop is running.

    Args:
        awaitable: The awaitable to race.
        ms: The timeout in milliseconds. Must be > 0.

    Returns:
        A future resolving with the value of ``awaitable``.

    Raises:
        InvalidArgumentError: If ``awaitable`` is not awaitable or ``ms``
            is not a positive number. Raised before any timer is armed.
            A coroutine rejected this way is closed.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import delay, timeout
        >>> async def main():
        ...     return await timeout(delay(10, "fast"), 1000)
        ...
        >>> asyncio.run(main())
        'fast'

        ```
    """
    validate_awaitable(awaitable)
    try:
        validate_duration(ms, allow_zero=False)
    except InvalidArgumentError:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        raise

    loop = asyncio.get_running_loop()
    operation = asyncio.ensure_future(awaitable)
    result = loop.create_future()
    seconds = ms / 1000
    started = loop.time()

    def _elapsed() -> float:
        return (loop.time() - started) * 1000

    def _on_deadline() -> None:
        if not result.done():
            logger.debug(f"Timeout of {ms}ms exceeded before the operation settled")
            result.set_exception(TimeoutExceededError(ms, elapsed=_elapsed()))

    def _on_settled(future: asyncio.Future) -> None:
        timer.cancel()
        error = None if future.cancelled() else future.exception()
        if result.done():
            return
        elapsed = _elapsed()
        if elapsed >= ms:
            logger.debug(f"Operation settled after {elapsed:.1f}ms, past its {ms}ms timeout")
            result.set_exception(TimeoutExceededError(ms, elapsed=elapsed, original=error))
        elif future.cancelled():
            result.cancel()
        elif error is not None:
            result.set_exception(error)
        else:
            result.set_result(future.result())

    def _on_result_done(_: asyncio.Future) -> None:
        timer.cancel()

    timer = loop.call_later(seconds, _on_deadline)
    operation.add_done_callback(_on_settled)
    result.add_done_callback(_on_result_done)
    return result
