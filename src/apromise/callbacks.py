r"""Diagnostic reporting for the retry engine.

A reporter is a plain callable invoked synchronously before each
attempt, after each failure, and before each backoff wait:

    report(message: str, info: RetryInfo, error: BaseException | None)

It has no return-value contract. A reporter that raises is logged and
ignored, so reporting never alters the retry control flow. Reporters
shared across concurrent retries are called interleaved, without
locking.

Example:
    ```pycon
    >>> import asyncio
    >>> from apromise import retry
    >>> def report(message, info, error=None):
    ...     print(f"[{info.current}/{info.max_attempts}] {message.split(' at ')[0]}")
    ...
    >>> async def ping(attempt):
    ...     return "pong"
    ...
    >>> asyncio.run(retry(ping, {"max_attempts": 2, "report": report}))
    [1/2] Trying ping #1
    'pong'

    ```
"""

from __future__ import annotations

__all__ = ["Reporter", "RetryInfo", "invoke_report", "make_logging_reporter"]

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from apromise.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable

    from apromise.retries.config import RetryPolicy

    Reporter = Callable[[str, "RetryInfo", BaseException | None], Any]
else:
    Reporter = Any

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryInfo:
    """Snapshot of a retry invocation passed to reporters.

    Attributes:
        name: The diagnostic name of the operation.
        current: The current attempt number (1-indexed). In the backoff
            report it is already the number of the next attempt.
        max_attempts: Maximum number of attempts configured.
        policy: The full policy of the invocation, when known. It is
            not part of equality.
    """

    name: str
    current: int
    max_attempts: int
    policy: RetryPolicy | None = field(default=None, compare=False, repr=False)


def invoke_report(
    report: Reporter | None,
    message: str,
    info: RetryInfo,
    error: BaseException | None = None,
) -> None:
    """Invoke a reporter if provided.

    The reporter always receives three positional arguments. Exceptions
    raised by the reporter are logged at WARNING level and swallowed.

    Args:
        report: Optional reporter.
        message: The human readable message.
        info: The snapshot of the retry invocation.
        error: The failure that triggered the report, or ``None``.
    """
    if report is None:
        return
    try:
        report(message, info, error)
    except Exception as exc:  # noqa: BLE001
        logger.warning(f"Error in retry report callback for {info.name}: {exc}")


def make_logging_reporter(
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
) -> Callable[..., None]:
    """Create a reporter that emits structured log records.

    Each record carries the ``retry_name``, ``attempt`` and
    ``max_attempts`` fields, plus ``error`` when the report is about a
    failure. Combine it with ``StructuredFormatter`` to get JSON output.

    Args:
        logger: The logger to use. Defaults to the ``apromise.retries``
            logger.
        level: The level of the records.

    Returns:
        The reporter.
    """
    target = logger if logger is not None else logging.getLogger("apromise.retries")

    def report(message: str, info: RetryInfo, error: BaseException | None = None) -> None:
        extra: dict[str, Any] = {
            "retry_name": info.name,
            "attempt": info.current,
            "max_attempts": info.max_attempts,
        }
        if error is not None:
            extra["error"] = repr(error)
        log_structured(target, level, message, **extra)

    return report
