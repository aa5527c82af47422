r"""Default configuration values.

All durations handled by apromise are expressed in milliseconds.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_BASE",
    "DEFAULT_BACKOFF_EXPONENT",
    "DEFAULT_OPERATION_NAME",
    "DEFAULT_PROMISIFY_SUFFIX",
]

# Base of the backoff formula: delay = base ** (exponent ** (attempt - 1))
# With the defaults the waits are 100ms, ~158ms, ~263ms, ~459ms, ...
DEFAULT_BACKOFF_BASE = 100

# Growth rate of the exponent applied per attempt
DEFAULT_BACKOFF_EXPONENT = 1.1

# Name reported for operations without a usable __name__
DEFAULT_OPERATION_NAME = "unknown"

# Suffix appended to the attribute names created by promisify_all
DEFAULT_PROMISIFY_SUFFIX = "Async"
