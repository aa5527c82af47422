r"""Exceptions raised by the apromise library.

The library only raises its own exceptions for precondition violations,
timed out races, and non-exception failure values delivered through a
callback. Failures raised by user operations are always propagated
unchanged.
"""

from __future__ import annotations

__all__ = [
    "ApromiseError",
    "CallbackError",
    "InvalidArgumentError",
    "TimeoutExceededError",
]

from typing import Any


class ApromiseError(Exception):
    """Base class of all the exceptions raised by apromise."""


class InvalidArgumentError(ApromiseError, TypeError, ValueError):
    """Raised when a required argument is missing, has the wrong shape,
    or is out of range.

    It is always raised synchronously, before any asynchronous work
    starts, and is never retried.

    Example:
        ```pycon
        >>> from apromise.exceptions import InvalidArgumentError
        >>> raise InvalidArgumentError("The first argument must be awaitable")
        Traceback (most recent call last):
            ...
        apromise.exceptions.InvalidArgumentError: The first argument must be awaitable

        ```
    """


class TimeoutExceededError(ApromiseError, TimeoutError):
    """Raised when the deadline of a timeout race wins.

    Args:
        timeout: The timeout of the race in milliseconds.
        elapsed: The elapsed time in milliseconds when the race was
            decided, if known.
        original: The exception raised by the raced operation when it
            failed at or after the deadline. It is auxiliary context,
            never the primary failure.

    Example:
        ```pycon
        >>> from apromise.exceptions import TimeoutExceededError
        >>> error = TimeoutExceededError(timeout=200)
        >>> str(error)
        'Timeout of 200ms exceeded'
        >>> error.original is None
        True

        ```
    """

    def __init__(
        self,
        timeout: float,
        elapsed: float | None = None,
        original: BaseException | None = None,
    ) -> None:
        super().__init__(f"Timeout of {timeout}ms exceeded")
        self.timeout = timeout
        self.elapsed = elapsed
        self.original = original


class CallbackError(ApromiseError):
    """Carries a failure value delivered through a callback.

    Awaitables can only fail with exceptions, so a callback that reports
    a failure with another kind of value (a string, an error code, or the
    whole argument list in multi-args mode) is surfaced as a
    ``CallbackError`` whose ``value`` attribute holds that value.

    Args:
        value: The raw failure value.

    Example:
        ```pycon
        >>> from apromise.exceptions import CallbackError
        >>> error = CallbackError("ENOENT")
        >>> error.value
        'ENOENT'

        ```
    """

    def __init__(self, value: Any) -> None:
        super().__init__(f"Callback failed with {value!r}")
        self.value = value
