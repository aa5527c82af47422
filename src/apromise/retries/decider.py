r"""Retry decision logic for failed attempts.

This module provides the RetryDecider class that decides whether a
failed attempt should be retried, based on the attempt budget and the
match rules of the policy.
"""

from __future__ import annotations

__all__ = ["RetryDecider", "describe_error", "rule_matches"]

import logging
import re
from typing import TYPE_CHECKING

from apromise.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from apromise.retries.config import MatchRule

logger: logging.Logger = logging.getLogger(__name__)


def describe_error(error: BaseException) -> str:
    """Return the textual form of an exception.

    The textual form is ``"<ClassName>: <message>"``, or the class name
    alone when the message is empty.

    Example:
        ```pycon
        >>> from apromise.retries.decider import describe_error
        >>> describe_error(ValueError("bad value"))
        'ValueError: bad value'
        >>> describe_error(KeyError())
        'KeyError'

        ```
    """
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name


def rule_matches(rule: MatchRule, error: BaseException) -> bool:
    """Check whether one match rule accepts an exception.

    Args:
        rule: A string compared with the textual form and the message of
            the exception, an exception class checked with
            ``isinstance``, a compiled regex searched in the message and
            the textual form, or a predicate called with the exception.
        error: The exception to classify.

    Returns:
        ``True`` if the rule matches.

    Raises:
        InvalidArgumentError: If the rule has none of these kinds.

    Example:
        ```pycon
        >>> import re
        >>> from apromise.retries.decider import rule_matches
        >>> error = ConnectionError("connection reset")
        >>> rule_matches("connection reset", error)
        True
        >>> rule_matches("ConnectionError: connection reset", error)
        True
        >>> rule_matches(OSError, error)
        True
        >>> rule_matches(re.compile(r"reset$"), error)
        True
        >>> rule_matches(lambda exc: "refused" in str(exc), error)
        False

        ```
    """
    if isinstance(rule, str):
        return rule == describe_error(error) or rule == str(error)
    if isinstance(rule, type):
        return isinstance(error, rule)
    if isinstance(rule, re.Pattern):
        return bool(rule.search(str(error)) or rule.search(describe_error(error)))
    if callable(rule):
        return bool(rule(error))
    msg = f"Unsupported match rule: {rule!r}"
    raise InvalidArgumentError(msg)


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    Args:
        max_attempts: Maximum number of attempts.
        match: Rules of which at least one must match a failure for it to
            be retried. Empty means every failure is retried.
    """

    def __init__(self, max_attempts: int, match: tuple[MatchRule, ...] = ()) -> None:
        self.max_attempts = max_attempts
        self.match = match

    def matches(self, error: BaseException) -> bool:
        """Return ``True`` if any rule matches ``error``, or if there is no
        rule."""
        if not self.match:
            return True
        return any(rule_matches(rule, error) for rule in self.match)

    def should_retry(self, error: BaseException, attempt: int) -> tuple[bool, str]:
        """Determine if a failure should trigger a retry.

        Args:
            error: The exception raised by the attempt.
            attempt: The number of the failed attempt (1-indexed).

        Returns:
            Tuple of (should_retry, reason).
        """
        if attempt >= self.max_attempts:
            return (False, "max attempts exhausted")
        if not self.matches(error):
            logger.debug(f"{describe_error(error)} matches none of the {len(self.match)} rule(s)")
            return (False, "no match rule accepted the error")
        if self.match:
            return (True, "match rule")
        return (True, f"{type(error).__name__}")
