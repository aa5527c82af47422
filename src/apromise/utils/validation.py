r"""Argument validation utilities.

This module provides the validation functions used by the public entry
points to reject bad arguments synchronously, before any asynchronous
work starts.
"""

from __future__ import annotations

__all__ = [
    "validate_awaitable",
    "validate_callable",
    "validate_duration",
    "validate_match_rules",
    "validate_retry_params",
]

import inspect
import re
from typing import Any

from apromise.exceptions import InvalidArgumentError


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_awaitable(obj: Any, name: str = "The first argument") -> None:
    """Validate that an object is awaitable.

    Args:
        obj: The object to check.
        name: The name used in the error message.

    Raises:
        InvalidArgumentError: If ``obj`` is not awaitable.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise.utils.validation import validate_awaitable
        >>> validate_awaitable(asyncio.sleep(0))  # doctest: +SKIP
        >>> validate_awaitable(5)
        Traceback (most recent call last):
            ...
        apromise.exceptions.InvalidArgumentError: The first argument must be awaitable, got int

        ```
    """
    if not inspect.isawaitable(obj):
        msg = f"{name} must be awaitable, got {type(obj).__name__}"
        raise InvalidArgumentError(msg)


def validate_callable(obj: Any, name: str = "The first argument") -> None:
    """Validate that an object is callable.

    Args:
        obj: The object to check.
        name: The name used in the error message.

    Raises:
        InvalidArgumentError: If ``obj`` is not callable.
    """
    if not callable(obj):
        msg = f"{name} must be callable, got {type(obj).__name__}"
        raise InvalidArgumentError(msg)


def validate_duration(ms: Any, name: str = "ms", *, allow_zero: bool = True) -> None:
    """Validate a duration expressed in milliseconds.

    Args:
        ms: The duration to check.
        name: The parameter name used in the error message.
        allow_zero: If ``False``, the duration must be strictly positive.

    Raises:
        InvalidArgumentError: If ``ms`` is not a number or is out of range.

    Example:
        ```pycon
        >>> from apromise.utils.validation import validate_duration
        >>> validate_duration(100)
        >>> validate_duration(0)
        >>> validate_duration(0, "timeout", allow_zero=False)
        Traceback (most recent call last):
            ...
        apromise.exceptions.InvalidArgumentError: timeout must be > 0, got 0

        ```
    """
    if not _is_number(ms):
        msg = f"{name} must be a number, got {type(ms).__name__}"
        raise InvalidArgumentError(msg)
    if allow_zero and ms < 0:
        msg = f"{name} must be >= 0, got {ms}"
        raise InvalidArgumentError(msg)
    if not allow_zero and ms <= 0:
        msg = f"{name} must be > 0, got {ms}"
        raise InvalidArgumentError(msg)


def validate_retry_params(
    max_attempts: int,
    timeout: float | None = None,
    backoff_base: float = 0,
    backoff_exponent: float = 0,
    max_delay: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_attempts: Maximum number of attempts, including the first
            one. Must be an integer >= 1.
        timeout: Optional per-attempt timeout in milliseconds.
            Must be > 0 if provided.
        backoff_base: Base of the backoff formula. Must be >= 0.
            A value of 0 disables the backoff wait.
        backoff_exponent: Growth rate of the backoff exponent.
            Must be >= 0.
        max_delay: Optional cap in milliseconds on a single backoff
            wait. Must be > 0 if provided.

    Raises:
        InvalidArgumentError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from apromise.utils.validation import validate_retry_params
        >>> validate_retry_params(max_attempts=3)
        >>> validate_retry_params(max_attempts=3, timeout=1000)
        >>> validate_retry_params(max_attempts=0)
        Traceback (most recent call last):
            ...
        apromise.exceptions.InvalidArgumentError: max_attempts must be >= 1, got 0

        ```
    """
    if not isinstance(max_attempts, int) or isinstance(max_attempts, bool):
        msg = f"max_attempts must be an integer, got {type(max_attempts).__name__}"
        raise InvalidArgumentError(msg)
    if max_attempts < 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise InvalidArgumentError(msg)
    if timeout is not None:
        validate_duration(timeout, "timeout", allow_zero=False)
    if not _is_number(backoff_base) or backoff_base < 0:
        msg = f"backoff_base must be >= 0, got {backoff_base}"
        raise InvalidArgumentError(msg)
    if not _is_number(backoff_exponent) or backoff_exponent < 0:
        msg = f"backoff_exponent must be >= 0, got {backoff_exponent}"
        raise InvalidArgumentError(msg)
    if max_delay is not None:
        validate_duration(max_delay, "max_delay", allow_zero=False)


def validate_match_rules(rules: tuple[Any, ...]) -> None:
    """Validate the kind of every retry match rule.

    A rule is a string, an exception class, a compiled regex, or a
    predicate.

    Args:
        rules: The rules to check.

    Raises:
        InvalidArgumentError: If a rule has any other kind.

    Example:
        ```pycon
        >>> import re
        >>> from apromise.utils.validation import validate_match_rules
        >>> validate_match_rules(("reset", TimeoutError, re.compile(r"busy")))
        >>> validate_match_rules((42,))
        Traceback (most recent call last):
            ...
        apromise.exceptions.InvalidArgumentError: match rule must be a string, an exception class, a compiled regex, or a callable, got int

        ```
    """
    for rule in rules:
        if isinstance(rule, (str, type, re.Pattern)) or callable(rule):
            continue
        msg = (
            "match rule must be a string, an exception class, a compiled regex, "
            f"or a callable, got {type(rule).__name__}"
        )
        raise InvalidArgumentError(msg)
