r"""Adapters from callback-style functions to awaitable-returning functions.

A callback-style function takes a trailing ``callback(error, *values)``
argument and reports its outcome by calling it exactly once. A falsy
``error`` such as ``None``, ``0`` or ``""`` means success.
"""

from __future__ import annotations

__all__ = ["PromisifiedProxy", "promisify", "promisify_all", "universalify"]

import asyncio
import functools
import inspect
import logging
import types
from typing import TYPE_CHECKING, Any

from apromise.config import DEFAULT_PROMISIFY_SUFFIX
from apromise.deferred import settle_future
from apromise.exceptions import CallbackError
from apromise.utils.validation import validate_callable

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


def _bind(fn: Callable[..., Any], context: Any) -> Callable[..., Any]:
    """Bind ``fn`` to ``context``, replacing any previous receiver."""
    if context is None:
        return fn
    if inspect.ismethod(fn):
        fn = fn.__func__
    return types.MethodType(fn, context)


def _is_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


def _make_callback(
    loop: asyncio.AbstractEventLoop,
    future: asyncio.Future,
    multi_args: bool,
) -> Callable[..., None]:
    """Create the internal callback that settles ``future``.

    The callback may be invoked from any thread. Calls after the first
    one are ignored.
    """

    def _settle(*args: Any, **kwargs: Any) -> None:
        if _is_loop_thread(loop):
            settle_future(future, *args, **kwargs)
        else:
            loop.call_soon_threadsafe(functools.partial(settle_future, future, *args, **kwargs))

    if multi_args:

        def callback(*results: Any) -> None:
            if results and results[0]:
                error = CallbackError(list(results))
                if isinstance(results[0], BaseException):
                    error.__cause__ = results[0]
                _settle(error=error, failed=True)
            else:
                _settle(list(results[1:]))

    else:

        def callback(error: Any = None, value: Any = None, *_: Any) -> None:
            if error:
                _settle(error=error, failed=True)
            else:
                _settle(value)

    return callback


def call_with_callback(
    fn: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    *,
    multi_args: bool = False,
) -> asyncio.Future:
    """Call a callback-style function and return a future of its outcome.

    A synchronous exception raised by ``fn`` fails the future, unless
    the callback already settled it.

    Args:
        fn: The callback-style function.
        args: The positional arguments, without the callback.
        kwargs: The keyword arguments.
        multi_args: Whether the callback reports several values.

    Returns:
        A future settled by the callback.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()
    callback = _make_callback(loop, future, multi_args)
    try:
        fn(*args, callback, **kwargs)
    except Exception as exc:
        logger.debug(f"{getattr(fn, '__name__', fn)!s} raised before calling back: {exc!r}")
        settle_future(future, error=exc, failed=True)
    return future


def promisify(
    fn: Callable[..., Any],
    *,
    context: Any = None,
    multi_args: bool = False,
) -> Callable[..., asyncio.Future]:
    """Convert a callback-style function into an awaitable-returning
    function.

    The returned function must be called while an event loop is
    running. Without ``context`` it is a plain function, so it binds
    like ``fn`` when stored as a class attribute.

    Args:
        fn: The callback-style function.
        context: Optional receiver ``fn`` is bound to on every call.
        multi_args: If ``True``, the future resolves with the list of
            all the values passed after the error. On failure, it fails
            with a ``CallbackError`` whose ``value`` is the full list of
            callback arguments, error included.

    Returns:
        The awaitable-returning function. It carries the name,
        docstring, and attributes of ``fn``.

    Raises:
        InvalidArgumentError: If ``fn`` is not callable.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import promisify
        >>> def add(a, b, callback):
        ...     callback(None, a + b)
        ...
        >>> add_async = promisify(add)
        >>> async def main():
        ...     return await add_async(1, 2)
        ...
        >>> asyncio.run(main())
        3

        ```
    """
    validate_callable(fn)
    target = _bind(fn, context)

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> asyncio.Future:
        return call_with_callback(target, args, kwargs, multi_args=multi_args)

    return wrapper


def universalify(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Make a callback-style function callable with or without a
    callback.

    When the last positional argument is callable, the call goes to
    ``fn`` unchanged. Otherwise a future settled by an internal callback
    is returned.

    Args:
        fn: The callback-style function.

    Returns:
        The dual-mode function. It carries the name, docstring, and
        attributes of ``fn``.

    Raises:
        InvalidArgumentError: If ``fn`` is not callable.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import universalify
        >>> def read(path, callback):
        ...     callback(None, f"content of {path}")
        ...
        >>> read = universalify(read)
        >>> read("a.txt", print)
        None content of a.txt
        >>> async def main():
        ...     return await read("b.txt")
        ...
        >>> asyncio.run(main())
        'content of b.txt'

        ```
    """
    validate_callable(fn)

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if args and callable(args[-1]):
            return fn(*args, **kwargs)
        return call_with_callback(fn, args, kwargs)

    return wrapper


class PromisifiedProxy:
    """Delegate to a source object and expose promisified siblings.

    Attributes set on the proxy shadow the source without modifying it,
    and attribute lookups that miss the proxy fall through to the
    source, so later changes to the source stay visible.

    Args:
        source: The object to delegate to.
    """

    def __init__(self, source: Any) -> None:
        self._source = source

    def __getattr__(self, name: str) -> Any:
        if name == "_source":
            raise AttributeError(name)
        return getattr(self._source, name)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(dir(self._source)))

    def __repr__(self) -> str:
        return f"{type(self).__qualname__}({self._source!r})"


def promisify_all(
    source: Any,
    *,
    suffix: str | None = None,
    filter: Callable[[str], bool] | None = None,  # noqa: A002
    context: Any = None,
    multi_args: bool = False,
) -> Any:
    """Promisify every method of an object.

    A routine source is promisified directly. Otherwise the result is a
    ``PromisifiedProxy`` of ``source`` where every public or private
    (non-dunder) routine attribute ``name`` accepted by ``filter`` gains
    a promisified sibling ``name + suffix``. The source is not mutated.

    Args:
        source: The object or function to promisify.
        suffix: Suffix of the new attribute names. Defaults to
            ``"Async"``.
        filter: Optional predicate on the attribute name.
        context: Optional receiver the promisified functions are bound
            to instead of ``source``.
        multi_args: Forwarded to ``promisify``.

    Returns:
        The promisified function or proxy.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apromise import promisify_all
        >>> class Store:
        ...     def get(self, key, callback):
        ...         callback(None, key.upper())
        ...
        >>> store = promisify_all(Store())
        >>> async def main():
        ...     return await store.getAsync("a")
        ...
        >>> asyncio.run(main())
        'A'

        ```
    """
    if inspect.isroutine(source):
        return promisify(source, context=context, multi_args=multi_args)

    suffix = suffix or DEFAULT_PROMISIFY_SUFFIX
    proxy = PromisifiedProxy(source)
    for name, value in inspect.getmembers(source, inspect.isroutine):
        if name.startswith("__") and name.endswith("__"):
            continue
        if filter is not None and not filter(name):
            continue
        setattr(proxy, f"{name}{suffix}", promisify(value, context=context, multi_args=multi_args))
    return proxy
