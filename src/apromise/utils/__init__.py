r"""Utility functions shared by the apromise modules.

This package provides argument validation helpers that reject bad
arguments synchronously, and opt-in structured logging helpers.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "log_structured",
    "validate_awaitable",
    "validate_callable",
    "validate_duration",
    "validate_retry_params",
]

from apromise.utils.structured_logging import StructuredFormatter, log_structured
from apromise.utils.validation import (
    validate_awaitable,
    validate_callable,
    validate_duration,
    validate_retry_params,
)
