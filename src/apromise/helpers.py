r"""Small compositions over awaitables."""

from __future__ import annotations

__all__ = ["finally_", "props", "try_"]

import asyncio
import inspect
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

T = TypeVar("T")


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def props(mapping: Mapping[Any, Any]) -> dict[Any, Any]:
    """Await every value of a mapping concurrently.

    Values that are not awaitable are passed through.

    Args:
        mapping: The mapping to resolve.

    Returns:
        A new dict with the same keys and the resolved values.

    Raises:
        Exception: The first failure raised by one of the values.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import delay, props
        >>> asyncio.run(props({"a": delay(1, 1), "b": 2}))
        {'a': 1, 'b': 2}

        ```
    """
    keys = list(mapping)
    values = await asyncio.gather(*(_resolve(mapping[key]) for key in keys))
    return dict(zip(keys, values))


async def finally_(
    awaitable: Awaitable[T],
    on_finally: Callable[[], Any] | None = None,
) -> T:
    """Await ``awaitable`` then run ``on_finally`` on success and failure.

    The value or exception of ``awaitable`` is kept, unless
    ``on_finally`` raises (or returns an awaitable that fails), in which
    case its exception wins.

    Args:
        awaitable: The awaitable to wrap.
        on_finally: Optional cleanup function. If it returns an
            awaitable, the awaitable is awaited too.

    Returns:
        The value of ``awaitable``.
    """
    try:
        return await awaitable
    finally:
        if on_finally is not None:
            await _resolve(on_finally())


async def try_(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Call ``fn`` and await its result if needed.

    Synchronous exceptions raised by ``fn`` surface when the returned
    coroutine is awaited.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import try_
        >>> asyncio.run(try_(lambda a, b: a + b, 1, 2))
        3

        ```
    """
    return await _resolve(fn(*args, **kwargs))
