r"""Retry package implementing class-based composition pattern.

This package provides a modular retry execution system using composition
and strategy patterns.

Public API:
    - retry: Retry an operation according to a policy
    - retrying: Decorator form of ``retry``
    - RetryPolicy: Configuration for retry behavior
    - Attempt: Descriptor passed to the retried operation
    - RetryStrategy: Strategy for calculating retry delays
    - RetryDecider: Logic for deciding whether to retry
    - ReportManager: Manager for reporter invocations
    - AsyncRetryExecutor: Asynchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "Attempt",
    "MatchRule",
    "ReportManager",
    "RetryDecider",
    "RetryPolicy",
    "RetryStrategy",
    "retry",
    "retrying",
]

from apromise.retries.api import retry, retrying
from apromise.retries.config import Attempt, MatchRule, RetryPolicy
from apromise.retries.decider import RetryDecider
from apromise.retries.executor import AsyncRetryExecutor
from apromise.retries.manager import ReportManager
from apromise.retries.strategy import RetryStrategy
