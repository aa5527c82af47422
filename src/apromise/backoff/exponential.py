r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from apromise.backoff.base import BaseBackoffStrategy
from apromise.exceptions import InvalidArgumentError


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: base_delay * (factor ** attempt), with optional
    max_delay cap. Use it instead of the default ``PowerBackoff`` when a
    gentler, classic doubling ramp is wanted.

    Args:
        base_delay: The first delay in milliseconds (default: 100).
        factor: The multiplier applied per attempt (default: 2).
        max_delay: Optional maximum delay cap in milliseconds.

    Example:
        ```pycon
        >>> from apromise.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=300)
        >>> backoff.calculate(0)
        300
        >>> backoff.calculate(2)
        1200
        >>> ExponentialBackoff(base_delay=1000, max_delay=5000).calculate(10)
        5000

        ```
    """

    def __init__(
        self,
        base_delay: float = 100,
        factor: float = 2,
        max_delay: float | None = None,
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise InvalidArgumentError(msg)
        if factor < 1:
            msg = f"factor must be >= 1, got {factor}"
            raise InvalidArgumentError(msg)
        super().__init__(max_delay)
        self.base_delay = base_delay
        self.factor = factor

    def compute(self, attempt: int) -> float:
        return self.base_delay * (self.factor**attempt)
