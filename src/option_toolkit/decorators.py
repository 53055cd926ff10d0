"""@lift and @lift_async decorators for nullable-returning functions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from option_toolkit.option import Option

__all__ = ['lift', 'lift_async']


@overload
def lift[**P, T](
    func: Callable[P, T | None],
) -> Callable[P, Option[T]]: ...


@overload
def lift[**P, T](
    func: None = None,
    *,
    kind: type | None = None,
) -> Callable[[Callable[P, T | None]], Callable[P, Option[T]]]: ...


def lift[**P, T](
    func: Callable[P, T | None] | None = None,
    *,
    kind: type | None = None,
) -> Any:
    """Decorator that turns a `T | None` return value into an Option.

    Makes the None-to-absent conversion visible at the definition site
    instead of at every call site.

    Can be used with or without arguments:
        @lift
        def find(): ...

        @lift(kind=int)
        def lookup(): ...

    Args:
        func: The function to wrap (when used without parentheses).
        kind: Type tag for absent results.

    Returns:
        A wrapped function that returns Option[T] instead of T | None.

    Example:
        ```python
        @lift
        def find_port(name: str) -> int | None:
            return PORTS.get(name)
        find_port('http')
        # Some<int>(80)
        find_port('gopher')
        # None<object>
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T | None],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Option[T]:
        return Option.from_nullable(wrapped(*args, **kwargs), kind)

    if func is not None:
        return wrapper(func)
    return wrapper


@overload
def lift_async[**P, T](
    func: Callable[P, Awaitable[T | None]],
) -> Callable[P, Awaitable[Option[T]]]: ...


@overload
def lift_async[**P, T](
    func: None = None,
    *,
    kind: type | None = None,
) -> Callable[[Callable[P, Awaitable[T | None]]], Callable[P, Awaitable[Option[T]]]]: ...


def lift_async[**P, T](
    func: Callable[P, Awaitable[T | None]] | None = None,
    *,
    kind: type | None = None,
) -> Any:
    """Async decorator that turns a `T | None` result into an Option.

    Args:
        func: The async function to wrap (when used without parentheses).
        kind: Type tag for absent results.

    Returns:
        A wrapped async function that returns Option[T].

    Example:
        ```python
        @lift_async(kind=dict)
        async def fetch_profile(user_id: int) -> dict | None:
            return await cache.get(user_id)
        ```
    """

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T | None]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Option[T]:
        return Option.from_nullable(await wrapped(*args, **kwargs), kind)

    if func is not None:
        return wrapper(func)
    return wrapper
