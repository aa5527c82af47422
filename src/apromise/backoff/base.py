r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

import logging
from abc import ABC, abstractmethod

from apromise.exceptions import InvalidArgumentError

logger: logging.Logger = logging.getLogger(__name__)


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    Subclasses implement ``compute`` with their formula. ``calculate``
    applies the ``max_delay`` caps on top of it and is what the retry
    engine calls. It is the only place where delays are capped.

    Args:
        max_delay: Optional maximum delay cap in milliseconds.

    Raises:
        InvalidArgumentError: If ``max_delay`` is not positive.
    """

    def __init__(self, max_delay: float | None = None) -> None:
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise InvalidArgumentError(msg)
        self.max_delay = max_delay

    @abstractmethod
    def compute(self, attempt: int) -> float:
        """Compute the uncapped delay for a given attempt.

        Args:
            attempt: The number of the attempt that just failed, minus
                one (0-indexed). For example, attempt=0 is the wait
                before the second attempt.

        Returns:
            The delay in milliseconds.
        """

    def calculate(self, attempt: int, max_delay: float | None = None) -> float:
        """Calculate the delay before the next attempt.

        Args:
            attempt: The 0-indexed attempt, see ``compute``.
            max_delay: Optional extra cap in milliseconds, applied
                together with the cap of the strategy. The smaller one
                wins.

        Returns:
            The delay in milliseconds before the next attempt.
        """
        delay = self.compute(attempt)
        caps = [cap for cap in (self.max_delay, max_delay) if cap is not None]
        if caps and delay > min(caps):
            logger.debug(f"Capping delay from {delay}ms to {min(caps)}ms")
            delay = min(caps)
        return delay
