r"""Backoff strategies for the waits between retry attempts.

All the strategies return delays in milliseconds. ``PowerBackoff`` is
the default of the retry engine.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "PowerBackoff",
]

from apromise.backoff.base import BaseBackoffStrategy
from apromise.backoff.constant import ConstantBackoff
from apromise.backoff.exponential import ExponentialBackoff
from apromise.backoff.power import PowerBackoff
