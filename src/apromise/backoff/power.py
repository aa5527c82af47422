r"""Power backoff strategy, the default of the retry engine."""

from __future__ import annotations

__all__ = ["PowerBackoff"]

import math

from apromise.backoff.base import BaseBackoffStrategy
from apromise.config import DEFAULT_BACKOFF_BASE, DEFAULT_BACKOFF_EXPONENT
from apromise.exceptions import InvalidArgumentError


class PowerBackoff(BaseBackoffStrategy):
    """Backoff whose exponent itself grows exponentially.

    Calculates delay as: base ** (exponent ** attempt), with optional
    max_delay cap. The ramp is steeper than plain exponential backoff:
    with the defaults the waits are 100ms, ~158ms, ~263ms, ~459ms, and
    ~848ms before the sixth attempt.

    A base of 0 disables the wait entirely.

    Args:
        base: Base of the formula in milliseconds (default: 100).
        exponent: Growth rate of the exponent (default: 1.1).
        max_delay: Optional maximum delay cap in milliseconds.

    Example:
        ```pycon
        >>> from apromise.backoff import PowerBackoff
        >>> backoff = PowerBackoff()
        >>> backoff.calculate(0)  # Before the second attempt
        100.0
        >>> round(backoff.calculate(1), 2)
        158.49
        >>> PowerBackoff(base=2, exponent=2).calculate(3)  # 2 ** (2 ** 3)
        256.0
        >>> PowerBackoff(max_delay=1000.0).calculate(50)
        1000.0

        ```
    """

    def __init__(
        self,
        base: float = DEFAULT_BACKOFF_BASE,
        exponent: float = DEFAULT_BACKOFF_EXPONENT,
        max_delay: float | None = None,
    ) -> None:
        if base < 0:
            msg = f"base must be non-negative, got {base}"
            raise InvalidArgumentError(msg)
        if exponent < 0:
            msg = f"exponent must be non-negative, got {exponent}"
            raise InvalidArgumentError(msg)
        super().__init__(max_delay)
        self.base = base
        self.exponent = exponent

    def __repr__(self) -> str:
        return (
            f"{type(self).__qualname__}(base={self.base}, exponent={self.exponent}, "
            f"max_delay={self.max_delay})"
        )

    def compute(self, attempt: int) -> float:
        """Compute base ** (exponent ** attempt).

        Results too large for a float are ``math.inf``, so the
        ``max_delay`` cap still applies to them.
        """
        try:
            return float(self.base) ** (float(self.exponent) ** attempt)
        except OverflowError:
            return math.inf
