r"""Bridges between callback-style and awaitable-returning functions.

Public API:
    - nodeify: Deliver the outcome of an awaitable to a callback
    - callbackify: Dual-mode wrapper over an awaitable-returning function
    - universalify_from_promise: Same, returning a future of the callback's result
    - promisify: Awaitable-returning wrapper over a callback-style function
    - universalify: Dual-mode wrapper over a callback-style function
    - promisify_all: Promisified view of every method of an object
"""

from __future__ import annotations

__all__ = [
    "PromisifiedProxy",
    "callbackify",
    "nodeify",
    "promisify",
    "promisify_all",
    "universalify",
    "universalify_from_promise",
]

from apromise.bridge.callback import callbackify, nodeify, universalify_from_promise
from apromise.bridge.promisify import (
    PromisifiedProxy,
    promisify,
    promisify_all,
    universalify,
)
