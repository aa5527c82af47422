r"""Report manager for the retry lifecycle.

This module provides the ReportManager class that formats the
diagnostic messages of a retry invocation and hands them to the
user-defined reporter.
"""

from __future__ import annotations

__all__ = ["ReportManager"]

import time
from typing import TYPE_CHECKING

from apromise.callbacks import RetryInfo, invoke_report
from apromise.retries.decider import describe_error

if TYPE_CHECKING:
    from apromise.callbacks import Reporter
    from apromise.retries.config import RetryPolicy


class ReportManager:
    """Manages reporter invocations during the retry lifecycle.

    Args:
        report: Optional reporter.
        name: The diagnostic name of the operation.
        max_attempts: Maximum number of attempts.
        policy: Optional policy attached to every snapshot.

    Attributes:
        report: The reporter, or ``None`` when reporting is disabled.
    """

    def __init__(
        self,
        report: Reporter | None,
        name: str,
        max_attempts: int,
        policy: RetryPolicy | None = None,
    ) -> None:
        self.report = report
        self.name = name
        self.max_attempts = max_attempts
        self.policy = policy

    def _info(self, attempt: int) -> RetryInfo:
        return RetryInfo(
            name=self.name, current=attempt, max_attempts=self.max_attempts, policy=self.policy
        )

    def on_attempt(self, attempt: int) -> None:
        """Report the start of an attempt.

        Args:
            attempt: The attempt number (1-indexed).
        """
        if self.report is None:
            return
        invoke_report(
            self.report,
            f"Trying {self.name} #{attempt} at {time.strftime('%H:%M:%S')}",
            self._info(attempt),
        )

    def on_failure(self, attempt: int, error: BaseException) -> None:
        """Report a failed attempt.

        Args:
            attempt: The number of the failed attempt (1-indexed).
            error: The exception raised by the attempt.
        """
        if self.report is None:
            return
        invoke_report(
            self.report,
            f"Try {self.name} #{attempt} failed: {describe_error(error)}",
            self._info(attempt),
            error,
        )

    def on_backoff(self, attempt: int, delay: float) -> None:
        """Report the wait before the next attempt.

        Args:
            attempt: The number of the next attempt (1-indexed).
            delay: The wait in milliseconds.
        """
        if self.report is None:
            return
        invoke_report(
            self.report,
            f"Delaying retry of {self.name} by {delay}",
            self._info(attempt),
        )
