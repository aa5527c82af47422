r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from apromise.backoff.base import BaseBackoffStrategy
from apromise.exceptions import InvalidArgumentError


class ConstantBackoff(BaseBackoffStrategy):
    """Fixed backoff strategy.

    Returns the same delay before every retry. A delay of 0 retries
    immediately, without yielding to the event loop.

    Args:
        delay: The delay in milliseconds (default: 100).

    Example:
        ```pycon
        >>> from apromise.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay=250)
        >>> backoff.calculate(0)
        250
        >>> backoff.calculate(10)
        250

        ```
    """

    def __init__(self, delay: float = 100) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise InvalidArgumentError(msg)
        super().__init__()
        self.delay = delay

    def compute(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
