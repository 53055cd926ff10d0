"""Free-function combinators over Option and pending Options.

The sync functions mirror the `Option` methods for code that prefers a
functional style (`when_some(opt, log)` rather than `opt.when_some(log)`).

The `*_async` functions accept either a resolved Option or any awaitable
producing one, and a callable that may be sync or async: a returned
awaitable is awaited before the combinator resolves. They all return an
`AsyncOption`, so they chain with its `a*` methods.

Example:
    ```python
    option = await when_none_async(fetch_user(1), alert_missing)
    name = await map_async(option, lambda u: u.name)
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from option_toolkit.async_.option import AsyncOption
from option_toolkit.option import Option

__all__ = [
    'map_async',
    'map_option',
    'on_any',
    'on_any_async',
    'on_any_with',
    'on_any_with_async',
    'on_none',
    'on_none_async',
    'on_some',
    'on_some_async',
    'when_any',
    'when_any_async',
    'when_none',
    'when_none_async',
    'when_some',
    'when_some_async',
]

type Pending[T] = Option[T] | Awaitable[Option[T]]


def _as_async[**P, R](fn: Callable[P, R | Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Adapt a sync-or-async callable into one that always returns an awaitable."""

    async def call(*args: P.args, **kwargs: P.kwargs) -> R:
        result = fn(*args, **kwargs)
        if inspect.isawaitable(result):
            return await result
        return result

    return call


# ---------------------------------------------------------------------
# Sync
# ---------------------------------------------------------------------


def when_some[T](option: Option[T], action: Callable[[T], Any]) -> Option[T]:
    """Call `action(value)` if present and return the original Option."""
    return option.when_some(action)


def when_none[T](option: Option[T], action: Callable[[], Any]) -> Option[T]:
    """Call `action()` if absent and return the original Option."""
    return option.when_none(action)


def when_any[T](option: Option[T], action: Callable[[Option[T]], Any]) -> Option[T]:
    """Call `action(option)` and return the original Option."""
    return option.when_any(action)


def on_some[T](option: Option[T], fn: Callable[[T], Option[T]]) -> Option[T]:
    """Return `fn(value)` if present, else the original Option."""
    return option.on_some(fn)


def on_none[T](option: Option[T], fn: Callable[[], Option[T]]) -> Option[T]:
    """Return `fn()` if absent, else the original Option."""
    return option.on_none(fn)


def on_any[T](option: Option[T], fn: Callable[[], Option[T]]) -> Option[T]:
    """Return `fn()`, discarding the original Option."""
    return option.on_any(fn)


def on_any_with[T](option: Option[T], fn: Callable[[Option[T]], Option[T]]) -> Option[T]:
    """Return `fn(option)`."""
    return option.on_any_with(fn)


def map_option[T, U](option: Option[T], fn: Callable[[T], U | None]) -> Option[U]:
    """Map the held value, collapsing a None result to an absent Option.

    Args:
        option: The Option to map.
        fn: Function applied to the held value.

    Returns:
        Option[U]: `from_nullable(fn(value))` if present, otherwise absent.
    """
    return option.map(fn)


# ---------------------------------------------------------------------
# Async
# ---------------------------------------------------------------------


def when_some_async[T](source: Pending[T], action: Callable[[T], Any]) -> AsyncOption[T]:
    """Resolve `source`, run `action(value)` if present, resolve to the same Option."""
    return AsyncOption.lift(source).awhen_some_async(_as_async(action))


def when_none_async[T](source: Pending[T], action: Callable[[], Any]) -> AsyncOption[T]:
    """Resolve `source`, run `action()` if absent, resolve to the same Option."""
    return AsyncOption.lift(source).awhen_none_async(_as_async(action))


def when_any_async[T](source: Pending[T], action: Callable[[Option[T]], Any]) -> AsyncOption[T]:
    """Resolve `source`, run `action(option)`, resolve to the same Option."""
    return AsyncOption.lift(source).awhen_any_async(_as_async(action))


def on_some_async[T](
    source: Pending[T],
    fn: Callable[[T], Option[T] | Awaitable[Option[T]]],
) -> AsyncOption[T]:
    """Resolve `source`; if present, resolve to the Option produced by `fn(value)`."""
    return AsyncOption.lift(source).aon_some_async(_as_async(fn))


def on_none_async[T](
    source: Pending[T],
    fn: Callable[[], Option[T] | Awaitable[Option[T]]],
) -> AsyncOption[T]:
    """Resolve `source`; if absent, resolve to the Option produced by `fn()`."""
    return AsyncOption.lift(source).aon_none_async(_as_async(fn))


def on_any_async[T](
    source: Pending[T],
    fn: Callable[[], Option[T] | Awaitable[Option[T]]],
) -> AsyncOption[T]:
    """Resolve `source`, then resolve to the Option produced by `fn()`."""
    return AsyncOption.lift(source).aon_any_async(_as_async(fn))


def on_any_with_async[T](
    source: Pending[T],
    fn: Callable[[Option[T]], Option[T] | Awaitable[Option[T]]],
) -> AsyncOption[T]:
    """Resolve `source`, then resolve to the Option produced by `fn(option)`."""
    return AsyncOption.lift(source).aon_any_with_async(_as_async(fn))


def map_async[T, U](
    source: Pending[T],
    fn: Callable[[T], U | None | Awaitable[U | None]],
) -> AsyncOption[U]:
    """Resolve `source` and map its value, awaiting `fn` if it is async."""
    return AsyncOption.lift(source).amap_async(_as_async(fn))
