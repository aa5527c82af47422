r"""apromise - Composable asyncio control-flow primitives.

This package provides small building blocks for asynchronous code:
racing an operation against a deadline, retrying a flaky operation with
policy-driven backoff and error classification, and bridging
callback-style and awaitable-returning functions without rewriting call
sites. All durations are expressed in milliseconds.

Key Features:
    - Retry with super-exponential backoff, per-attempt timeout, and
      match rules (strings, exception classes, regexes, predicates)
    - Timeout racing that never cancels the raced operation
    - Value-carrying delays and manually resolvable futures
    - promisify / callbackify / universalify adapters that preserve the
      wrapped function's name and attributes
    - Diagnostic reporting hooks with optional structured logging

Example:
    ```pycon
    >>> import asyncio
    >>> from apromise import retry, timeout, delay
    >>> async def fetch(attempt):
    ...     return await delay(10, f"payload on attempt {attempt.current}")
    ...
    >>> async def main():
    ...     return await retry(fetch, {"max_attempts": 3, "timeout": 1000})
    ...
    >>> asyncio.run(main())
    'payload on attempt 1'

    ```
"""

from __future__ import annotations

__all__ = [
    "Attempt",
    "CallbackError",
    "Deferred",
    "InvalidArgumentError",
    "RetryInfo",
    "RetryPolicy",
    "TimeoutExceededError",
    "__version__",
    "callbackify",
    "defer",
    "delay",
    "finally_",
    "nodeify",
    "promisify",
    "promisify_all",
    "props",
    "retry",
    "retrying",
    "timeout",
    "try_",
    "universalify",
    "universalify_from_promise",
]

from importlib.metadata import PackageNotFoundError, version

from apromise.bridge import (
    callbackify,
    nodeify,
    promisify,
    promisify_all,
    universalify,
    universalify_from_promise,
)
from apromise.callbacks import RetryInfo
from apromise.deferred import Deferred, defer
from apromise.exceptions import CallbackError, InvalidArgumentError, TimeoutExceededError
from apromise.helpers import finally_, props, try_
from apromise.retries import Attempt, RetryPolicy, retry, retrying
from apromise.timing import delay, timeout

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
