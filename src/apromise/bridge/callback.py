r"""Adapters from awaitables to callback-style delivery.

The callback receives ``(None, value)`` on success and ``(error,)`` on
failure, never both.
"""

from __future__ import annotations

__all__ = ["callbackify", "nodeify", "universalify_from_promise"]

import asyncio
import functools
from typing import TYPE_CHECKING, Any

from apromise.utils.validation import validate_awaitable, validate_callable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


def _deliver(future: asyncio.Future, callback: Callable[..., Any]) -> Any:
    if future.cancelled():
        return callback(asyncio.CancelledError())
    error = future.exception()
    if error is not None:
        return callback(error)
    return callback(None, future.result())


def nodeify(awaitable: Awaitable[Any], callback: Callable[..., Any] | None) -> Any:
    """Deliver the outcome of an awaitable to a callback.

    Must be called while an event loop is running when ``callback`` is
    callable.

    Args:
        awaitable: The awaitable to observe.
        callback: The callback receiving ``(None, value)`` or
            ``(error,)``. If it is not callable, ``awaitable`` is
            returned unchanged and nothing is scheduled.

    Returns:
        The future wrapping ``awaitable``, or ``awaitable`` itself when
        there is no callback.

    Raises:
        InvalidArgumentError: If ``awaitable`` is not awaitable.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import delay, nodeify
        >>> async def main():
        ...     await nodeify(delay(1, 42), print)
        ...     await asyncio.sleep(0)
        ...
        >>> asyncio.run(main())
        None 42

        ```
    """
    validate_awaitable(awaitable)
    if not callable(callback):
        return awaitable
    future = asyncio.ensure_future(awaitable)
    future.add_done_callback(functools.partial(_deliver, callback=callback))
    return future


def callbackify(fn: Callable[..., Awaitable[Any]]) -> Callable[..., Any]:
    """Convert an awaitable-returning function into a dual-mode function.

    When the last positional argument is callable, it is removed and
    receives the outcome of ``fn`` called with the remaining arguments;
    the future wrapping that call is returned. Otherwise ``fn`` is
    called unchanged and its awaitable is returned as-is.

    Args:
        fn: The awaitable-returning function.

    Returns:
        The dual-mode function. It carries the name, docstring, and
        attributes of ``fn``.

    Raises:
        InvalidArgumentError: If ``fn`` is not callable.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import callbackify
        >>> async def add(a, b):
        ...     return a + b
        ...
        >>> add = callbackify(add)
        >>> async def main():
        ...     await add(1, 2, print)
        ...     await asyncio.sleep(0)
        ...     return await add(3, 4)
        ...
        >>> asyncio.run(main())
        None 3
        7

        ```
    """
    validate_callable(fn)

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if args and callable(args[-1]):
            return nodeify(fn(*args[:-1], **kwargs), args[-1])
        return fn(*args, **kwargs)

    return wrapper


def universalify_from_promise(fn: Callable[..., Awaitable[Any]]) -> Callable[..., Any]:
    """Make an awaitable-returning function callable with or without a
    callback.

    Without a trailing callable, the call goes to ``fn`` unchanged.
    With one, the callable is removed, receives the outcome of ``fn``,
    and the returned future resolves with the callback's return value
    once it has run.

    Args:
        fn: The awaitable-returning function.

    Returns:
        The dual-mode function. It carries the name, docstring, and
        attributes of ``fn``.

    Raises:
        InvalidArgumentError: If ``fn`` is not callable.
    """
    validate_callable(fn)

    async def _call_back(awaitable: Awaitable[Any], callback: Callable[..., Any]) -> Any:
        try:
            value = await awaitable
        except Exception as exc:
            return callback(exc)
        return callback(None, value)

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if not args or not callable(args[-1]):
            return fn(*args, **kwargs)
        awaitable = fn(*args[:-1], **kwargs)
        validate_awaitable(awaitable, f"The result of {getattr(fn, '__name__', fn)!s}")
        return asyncio.ensure_future(_call_back(awaitable, args[-1]))

    return wrapper
