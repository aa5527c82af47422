r"""Configuration dataclasses for retry behavior.

This module provides the retry policy and the attempt descriptor passed
to the retried operation.
"""

from __future__ import annotations

__all__ = ["Attempt", "MatchRule", "RetryPolicy"]

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Union

from apromise.config import DEFAULT_BACKOFF_BASE, DEFAULT_BACKOFF_EXPONENT
from apromise.exceptions import InvalidArgumentError
from apromise.utils.validation import validate_match_rules, validate_retry_params

if TYPE_CHECKING:
    from apromise.backoff.base import BaseBackoffStrategy
    from apromise.callbacks import Reporter

# A string, an exception class, a compiled regex, or a predicate
MatchRule = Union[str, type, re.Pattern, Callable[[BaseException], bool]]


@dataclass(frozen=True)
class Attempt:
    """Descriptor passed to the retried operation on every attempt.

    Attributes:
        current: The attempt number (1-indexed).
    """

    current: int


@dataclass
class RetryPolicy:
    """Policy of one retry invocation.

    Args:
        max_attempts: Maximum number of attempts, including the first
            one. Must be >= 1.
        timeout: Optional per-attempt timeout in milliseconds. When set,
            every attempt is raced against it.
        match: Rules deciding which failures are retried. A failure is
            retried if any rule matches it. An empty tuple retries every
            failure. Any iterable of rules is accepted and a single rule
            is wrapped in a tuple.
        backoff_base: Base of the default backoff formula,
            ``backoff_base ** (backoff_exponent ** (attempt - 1))``
            milliseconds. A value of 0 disables the wait.
        backoff_exponent: Growth rate of the backoff exponent.
        backoff_strategy: Optional strategy replacing the default
            formula.
        max_delay: Optional cap in milliseconds on a single backoff
            wait.
        name: Optional diagnostic name. Defaults to the operation's
            ``__name__``.
        report: Optional reporter, see ``apromise.callbacks``.

    Example:
        ```pycon
        >>> from apromise.retries import RetryPolicy
        >>> policy = RetryPolicy(max_attempts=3, match=TimeoutError)
        >>> policy.match
        (<class 'TimeoutError'>,)
        >>> RetryPolicy.coerce(5).max_attempts
        5
        >>> policy.merge(max_attempts=10).max_attempts
        10

        ```
    """

    max_attempts: int
    timeout: float | None = None
    match: tuple[MatchRule, ...] = field(default_factory=tuple)
    backoff_base: float = DEFAULT_BACKOFF_BASE
    backoff_exponent: float = DEFAULT_BACKOFF_EXPONENT
    backoff_strategy: BaseBackoffStrategy | None = None
    max_delay: float | None = None
    name: str | None = None
    report: Reporter | None = None

    def __post_init__(self) -> None:
        """Validate the policy and normalize ``match``.

        Raises:
            InvalidArgumentError: If any parameter fails validation.
        """
        if self.match is None:
            self.match = ()
        elif isinstance(self.match, (str, type, re.Pattern)) or not isinstance(
            self.match, Iterable
        ):
            self.match = (self.match,)
        else:
            self.match = tuple(self.match)
        validate_match_rules(self.match)
        validate_retry_params(
            max_attempts=self.max_attempts,
            timeout=self.timeout,
            backoff_base=self.backoff_base,
            backoff_exponent=self.backoff_exponent,
            max_delay=self.max_delay,
        )
        if self.report is not None and not callable(self.report):
            msg = f"report must be callable, got {type(self.report).__name__}"
            raise InvalidArgumentError(msg)

    @classmethod
    def coerce(cls, value: RetryPolicy | Mapping[str, Any] | int) -> RetryPolicy:
        """Build a policy from the accepted shorthand forms.

        Args:
            value: A policy (returned as-is), a mapping of field names,
                or a bare integer used as ``max_attempts``.

        Returns:
            The policy.

        Raises:
            InvalidArgumentError: If ``value`` has none of these shapes
                or contains unknown fields.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(max_attempts=value)
        if isinstance(value, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = sorted(set(value) - known)
            if unknown:
                msg = f"Unknown retry policy fields: {', '.join(unknown)}"
                raise InvalidArgumentError(msg)
            if "max_attempts" not in value:
                msg = "A retry policy requires max_attempts"
                raise InvalidArgumentError(msg)
            return cls(**value)
        msg = f"policy must be a RetryPolicy, a mapping, or an integer, got {type(value).__name__}"
        raise InvalidArgumentError(msg)

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with the non-``None`` overrides applied.

        Args:
            **overrides: Keyword arguments for the fields to override.

        Returns:
            A new policy. The current one is unchanged.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the policy to a dictionary of its fields."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
