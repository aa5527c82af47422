r"""Manually resolvable futures."""

from __future__ import annotations

__all__ = ["Deferred", "defer", "settle_future"]

import asyncio
from dataclasses import dataclass
from typing import Any

from apromise.exceptions import CallbackError


def settle_future(
    future: asyncio.Future,
    value: Any = None,
    error: Any = None,
    *,
    failed: bool = False,
) -> None:
    """Resolve or reject a future unless it is already done.

    Args:
        future: The future to settle.
        value: The success value.
        error: The failure value. Non-exception values are wrapped in
            ``CallbackError``.
        failed: Whether the future must be rejected with ``error``.
    """
    if future.done():
        return
    if not failed:
        future.set_result(value)
    elif isinstance(error, BaseException):
        future.set_exception(error)
    else:
        future.set_exception(CallbackError(error))


@dataclass
class Deferred:
    """A future exposing separate resolve and reject capabilities.

    Once the future is settled, ``resolve`` and ``reject`` become no-ops.

    Attributes:
        future: The future controlled by this handle.
    """

    future: asyncio.Future

    def resolve(self, value: Any = None) -> None:
        """Resolve the future with ``value``."""
        settle_future(self.future, value)

    def reject(self, error: Any) -> None:
        """Reject the future with ``error``.

        A value that is not an exception is wrapped in ``CallbackError``.
        """
        settle_future(self.future, error=error, failed=True)

    def __await__(self):
        return self.future.__await__()


def defer() -> Deferred:
    """Create a future and return an interface to control its state.

    Must be called while an event loop is running.

    Returns:
        A new ``Deferred`` handle.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import defer
        >>> async def main():
        ...     deferred = defer()
        ...     asyncio.get_running_loop().call_soon(deferred.resolve, 5)
        ...     return await deferred.future
        ...
        >>> asyncio.run(main())
        5

        ```
    """
    return Deferred(future=asyncio.get_running_loop().create_future())
