r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that repeatedly
invokes an operation until it succeeds, the attempt budget is spent,
or a failure matches none of the policy rules.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import inspect
import logging
from typing import TYPE_CHECKING, Any

from apromise.retries.config import Attempt
from apromise.retries.decider import RetryDecider, describe_error
from apromise.retries.manager import ReportManager
from apromise.retries.strategy import RetryStrategy
from apromise.timing import delay, timeout

if TYPE_CHECKING:
    from collections.abc import Callable

    from apromise.retries.config import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes an operation with automatic retry logic.

    The executor orchestrates the following components:
    - RetryStrategy: Calculates backoff delays between attempts
    - RetryDecider: Determines whether a failure is retried
    - ReportManager: Invokes the user-defined reporter

    One executor owns the attempt counter of one invocation. Create a
    new executor for every call; ``retry`` does.

    Args:
        policy: The retry policy.
        name: The diagnostic name of the operation.

    Attributes:
        policy: The retry policy.
        strategy: Strategy for calculating retry delays.
        decider: Logic for deciding whether to retry.
        reports: Manager for invoking the reporter.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise.retries import AsyncRetryExecutor, RetryPolicy
        >>> async def flaky(attempt):
        ...     if attempt.current < 2:
        ...         raise ConnectionError("reset")
        ...     return attempt.current
        ...
        >>> executor = AsyncRetryExecutor(RetryPolicy(max_attempts=3, backoff_base=0), "flaky")
        >>> asyncio.run(executor.execute(flaky))
        2

        ```
    """

    def __init__(self, policy: RetryPolicy, name: str) -> None:
        self.policy = policy
        self.name = name
        self.strategy: RetryStrategy = RetryStrategy(
            backoff_base=policy.backoff_base,
            backoff_exponent=policy.backoff_exponent,
            backoff_strategy=policy.backoff_strategy,
            max_delay=policy.max_delay,
        )
        self.decider: RetryDecider = RetryDecider(policy.max_attempts, policy.match)
        self.reports: ReportManager = ReportManager(
            policy.report, name, policy.max_attempts, policy=policy
        )

    async def _attempt(self, operation: Callable[[Attempt], Any], current: int) -> Any:
        result = operation(Attempt(current=current))
        if not inspect.isawaitable(result):
            return result
        if self.policy.timeout is not None:
            result = timeout(result, self.policy.timeout)
        return await result

    async def execute(self, operation: Callable[[Attempt], Any]) -> Any:
        """Run the operation until it succeeds or retrying stops.

        Attempts run strictly one after the other: attempt ``k + 1``
        starts only after the failure of attempt ``k`` was observed and
        the backoff wait completed.

        Args:
            operation: Callable receiving an ``Attempt``. It may return
                an awaitable, which is awaited (raced against the
                per-attempt timeout when one is configured), or a plain
                value.

        Returns:
            The value of the first successful attempt.

        Raises:
            Exception: The exception of the last failed attempt,
                unchanged, when the attempts are exhausted or the
                failure matches none of the rules. ``BaseException``
                subclasses such as ``asyncio.CancelledError`` are never
                retried.
        """
        current = 1
        while True:
            self.reports.on_attempt(current)
            try:
                return await self._attempt(operation, current)
            except Exception as exc:
                self.reports.on_failure(current, exc)
                should_retry, reason = self.decider.should_retry(exc, current)
                if not should_retry:
                    logger.debug(
                        f"{self.name} failed after {current} attempt(s) ({reason}): "
                        f"{describe_error(exc)}"
                    )
                    raise

                retry_delay = self.strategy.calculate_delay(current)
                logger.debug(f"{self.name}: will retry ({reason}) after {retry_delay}ms")
                current += 1
                if retry_delay:
                    self.reports.on_backoff(current, retry_delay)
                    await delay(retry_delay)
