r"""Contains the retry entry points."""

from __future__ import annotations

__all__ = ["retry", "retrying"]

import functools
from typing import TYPE_CHECKING, Any

from apromise.config import DEFAULT_OPERATION_NAME
from apromise.exceptions import InvalidArgumentError
from apromise.retries.config import RetryPolicy
from apromise.retries.executor import AsyncRetryExecutor
from apromise.utils.validation import validate_callable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine, Mapping

    from apromise.retries.config import Attempt


def retry(
    operation: Callable[[Attempt], Any],
    policy: RetryPolicy | Mapping[str, Any] | int,
) -> Coroutine[Any, Any, Any]:
    """Call an operation until it succeeds, with backoff between
    attempts.

    The arguments are validated immediately, so a missing operation or
    policy raises before anything is awaited. Each call owns its own
    attempt counter: concurrent retries never share state.

    Args:
        operation: Callable receiving an ``Attempt`` whose ``current``
            attribute is the attempt number (1, 2, 3, ...). It may
            return an awaitable or a plain value.
        policy: A ``RetryPolicy``, a mapping of its fields, or a bare
            integer used as ``max_attempts``.

    Returns:
        A coroutine resolving with the value of the first successful
        attempt. It raises the exception of the last failed attempt,
        unchanged, when retrying stops.

    Raises:
        InvalidArgumentError: If ``operation`` is missing or not
            callable, or if ``policy`` is missing or invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import retry
        >>> calls = []
        >>> async def flaky(attempt):
        ...     calls.append(attempt.current)
        ...     if attempt.current < 3:
        ...         raise ConnectionError("reset")
        ...     return "ok"
        ...
        >>> asyncio.run(retry(flaky, {"max_attempts": 5, "backoff_base": 0}))
        'ok'
        >>> calls
        [1, 2, 3]

        ```
    """
    if operation is None or policy is None:
        msg = "retry requires an operation and a policy or a number of attempts"
        raise InvalidArgumentError(msg)
    validate_callable(operation, "operation")
    resolved = RetryPolicy.coerce(policy)
    name = resolved.name or getattr(operation, "__name__", None) or DEFAULT_OPERATION_NAME
    return AsyncRetryExecutor(resolved, name).execute(operation)


def retrying(
    policy: RetryPolicy | Mapping[str, Any] | int,
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
    """Decorate an async function so every call is retried.

    Unlike ``retry``, the decorated function receives its own arguments
    on every attempt and no ``Attempt`` descriptor.

    Args:
        policy: A ``RetryPolicy``, a mapping of its fields, or a bare
            integer used as ``max_attempts``.

    Returns:
        The decorator.

    Raises:
        InvalidArgumentError: If ``policy`` is missing or invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import retrying
        >>> @retrying({"max_attempts": 3, "backoff_base": 0})
        ... async def double(x):
        ...     return 2 * x
        ...
        >>> asyncio.run(double(21))
        42

        ```
    """
    if policy is None:
        msg = "retrying requires a policy or a number of attempts"
        raise InvalidArgumentError(msg)
    resolved = RetryPolicy.coerce(policy)

    def decorator(fn: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        validate_callable(fn)
        named = resolved if resolved.name else resolved.merge(name=fn.__name__)

        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            return await retry(lambda _: fn(*args, **kwargs), named)

        return wrapper

    return decorator
