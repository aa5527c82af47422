r"""Retry strategy for calculating backoff delays.

This module provides the RetryStrategy class for calculating the waits
between retry attempts.
"""

from __future__ import annotations

__all__ = ["RetryStrategy"]

from typing import TYPE_CHECKING

from apromise.backoff.power import PowerBackoff
from apromise.config import DEFAULT_BACKOFF_BASE, DEFAULT_BACKOFF_EXPONENT

if TYPE_CHECKING:
    from apromise.backoff.base import BaseBackoffStrategy


class RetryStrategy:
    """Strategy for calculating retry delays.

    No jitter is applied: the same attempt always gets the same delay.

    Args:
        backoff_base: Base of the default ``PowerBackoff``.
        backoff_exponent: Exponent growth rate of the default
            ``PowerBackoff``.
        backoff_strategy: Optional strategy used instead of the default
            ``PowerBackoff``.
        max_delay: Optional maximum delay cap in milliseconds.

    Attributes:
        backoff_strategy: The backoff strategy in use.
        max_delay: Optional maximum delay cap in milliseconds.

    Example:
        ```pycon
        >>> from apromise.retries import RetryStrategy
        >>> strategy = RetryStrategy()
        >>> strategy.calculate_delay(1)
        100.0
        >>> RetryStrategy(backoff_base=0).calculate_delay(3)
        0.0

        ```
    """

    def __init__(
        self,
        backoff_base: float = DEFAULT_BACKOFF_BASE,
        backoff_exponent: float = DEFAULT_BACKOFF_EXPONENT,
        backoff_strategy: BaseBackoffStrategy | None = None,
        max_delay: float | None = None,
    ) -> None:
        self.backoff_strategy: BaseBackoffStrategy = (
            backoff_strategy
            if backoff_strategy is not None
            else PowerBackoff(base=backoff_base, exponent=backoff_exponent)
        )
        self.max_delay = max_delay

    def calculate_delay(self, attempt: int) -> float:
        """Calculate the wait after a failed attempt.

        Args:
            attempt: The number of the failed attempt (1-indexed).

        Returns:
            The delay in milliseconds before the next attempt.
        """
        return self.backoff_strategy.calculate(attempt - 1, max_delay=self.max_delay)
