"""AsyncOption type for async-aware Option operations.

AsyncOption wraps an Awaitable[Option[T]] and provides async-aware
combinators that compose cleanly in async contexts. Every combinator first
awaits the pending Option, then decides its branch, then (for the `*_async`
forms) awaits the user function. Chained calls therefore run strictly one
after another.

Example:
    ```python
    async def find_user(id: int) -> Option[User]:
        ...

    user = await (
        AsyncOption(find_user(1))
        .awhen_some_async(audit_access)
        .aon_none(lambda: some(GUEST))
        .amap(lambda u: u.name)
    )
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import Any

from anyio import to_thread

from option_toolkit.option import Option, _trace

__all__ = ['AsyncOption']


class AsyncOption[T]:
    """Async-aware Option wrapper for composing async Option operations.

    Methods prefixed with `a` take a sync callable; the `a*_async` variants
    take a callable returning an awaitable. All of them return a new
    AsyncOption, so nothing runs until the chain is awaited.

    Note:
        AsyncOption is single-shot when wrapping a coroutine object.
        Coroutines can only be awaited once; awaiting the same AsyncOption
        twice raises RuntimeError. Wrap a Task/Future for multi-await use.

    Attributes:
        _awaitable: The underlying awaitable that produces an Option.

    Example:
        ```python
        async def main():
            result = await AsyncOption.from_nullable(5).amap(lambda x: x * 2)
            assert result == some(10)
        ```
    """

    __slots__ = ('_awaitable',)

    def __init__(self, awaitable: Awaitable[Option[T]]) -> None:
        """Create an AsyncOption from an awaitable.

        Args:
            awaitable: An awaitable that produces an Option[T].
        """
        self._awaitable = awaitable

    def __await__(self) -> Generator[Any, Any, Option[T]]:
        """Support await syntax to get the underlying Option."""
        return self._awaitable.__await__()

    # --- Construction ---

    @classmethod
    def from_option(cls, option: Option[T]) -> AsyncOption[T]:
        """Create an AsyncOption resolving to an already known Option."""

        async def _option() -> Option[T]:
            return option

        return cls(_option())

    @classmethod
    def from_nullable(cls, value: T | None, kind: type | None = None) -> AsyncOption[T]:
        """Create an AsyncOption resolving to `from_nullable(value, kind)`."""
        return cls.from_option(Option.from_nullable(value, kind))

    @classmethod
    def lift(cls, source: Option[T] | Awaitable[Option[T]]) -> AsyncOption[T]:
        """Normalize an Option, an AsyncOption or any awaitable of an Option."""
        if isinstance(source, AsyncOption):
            return source
        if isinstance(source, Option):
            return cls.from_option(source)
        return cls(source)

    @classmethod
    def from_blocking(
        cls,
        fn: Callable[..., T | None],
        *args: Any,
        kind: type | None = None,
    ) -> AsyncOption[T]:
        """Run a blocking, nullable-returning function in a worker thread.

        Args:
            fn: Sync function returning a value or None.
            *args: Positional arguments for fn.
            kind: Type tag used when fn returns None.

        Returns:
            AsyncOption resolving to `from_nullable(fn(*args), kind)`.

        Example:
            ```python
            row = await AsyncOption.from_blocking(db.fetch_one, query)
            ```
        """

        async def _blocking() -> Option[T]:
            value = await to_thread.run_sync(fn, *args)
            return Option.from_nullable(value, kind)

        return cls(_blocking())

    # --- "when" family ---

    def awhen_some(self, action: Callable[[T], Any]) -> AsyncOption[T]:
        """Call a sync action with the value if present; resolves to the same Option."""

        async def _when() -> Option[T]:
            option = await self._awaitable
            return option.when_some(action)

        return AsyncOption(_when())

    def awhen_some_async(self, action: Callable[[T], Awaitable[Any]]) -> AsyncOption[T]:
        """Await an async action with the value if present; resolves to the same Option.

        Example:
            ```python
            async def notify(user: User) -> None: ...

            option = await AsyncOption(find_user(1)).awhen_some_async(notify)
            ```
        """

        async def _when() -> Option[T]:
            option = await self._awaitable
            _trace('when_some_async', option)
            if option.has_value:
                await action(option.value)
            return option

        return AsyncOption(_when())

    def awhen_none(self, action: Callable[[], Any]) -> AsyncOption[T]:
        """Call a sync action if absent; resolves to the same Option."""

        async def _when() -> Option[T]:
            option = await self._awaitable
            return option.when_none(action)

        return AsyncOption(_when())

    def awhen_none_async(self, action: Callable[[], Awaitable[Any]]) -> AsyncOption[T]:
        """Await an async action if absent; resolves to the same Option."""

        async def _when() -> Option[T]:
            option = await self._awaitable
            _trace('when_none_async', option)
            if option.is_none:
                await action()
            return option

        return AsyncOption(_when())

    def awhen_any(self, action: Callable[[Option[T]], Any]) -> AsyncOption[T]:
        """Call a sync action with the resolved Option; resolves to the same Option."""

        async def _when() -> Option[T]:
            option = await self._awaitable
            return option.when_any(action)

        return AsyncOption(_when())

    def awhen_any_async(self, action: Callable[[Option[T]], Awaitable[Any]]) -> AsyncOption[T]:
        """Await an async action with the resolved Option; resolves to the same Option."""

        async def _when() -> Option[T]:
            option = await self._awaitable
            _trace('when_any_async', option)
            await action(option)
            return option

        return AsyncOption(_when())

    # --- "on" family ---

    def aon_some(self, fn: Callable[[T], Option[T]]) -> AsyncOption[T]:
        """Replace with `fn(value)` if present.

        Example:
            ```python
            def validate(name: str) -> Option[str]:
                return some(name) if name else none(str)

            result = await AsyncOption.from_nullable('bob').aon_some(validate)
            ```
        """

        async def _on() -> Option[T]:
            option = await self._awaitable
            return option.on_some(fn)

        return AsyncOption(_on())

    def aon_some_async(self, fn: Callable[[T], Awaitable[Option[T]]]) -> AsyncOption[T]:
        """Replace with `await fn(value)` if present."""

        async def _on() -> Option[T]:
            option = await self._awaitable
            _trace('on_some_async', option)
            if option.has_value:
                return await fn(option.value)
            return option

        return AsyncOption(_on())

    def aon_none(self, fn: Callable[[], Option[T]]) -> AsyncOption[T]:
        """Replace with `fn()` if absent."""

        async def _on() -> Option[T]:
            option = await self._awaitable
            return option.on_none(fn)

        return AsyncOption(_on())

    def aon_none_async(self, fn: Callable[[], Awaitable[Option[T]]]) -> AsyncOption[T]:
        """Replace with `await fn()` if absent.

        Example:
            ```python
            async def load_default() -> Option[Config]: ...

            config = await AsyncOption(read_config()).aon_none_async(load_default)
            ```
        """

        async def _on() -> Option[T]:
            option = await self._awaitable
            _trace('on_none_async', option)
            if option.is_none:
                return await fn()
            return option

        return AsyncOption(_on())

    def aon_any(self, fn: Callable[[], Option[T]]) -> AsyncOption[T]:
        """Replace with `fn()` once the pending Option has resolved."""

        async def _on() -> Option[T]:
            option = await self._awaitable
            return option.on_any(fn)

        return AsyncOption(_on())

    def aon_any_async(self, fn: Callable[[], Awaitable[Option[T]]]) -> AsyncOption[T]:
        """Replace with `await fn()` once the pending Option has resolved."""

        async def _on() -> Option[T]:
            option = await self._awaitable
            _trace('on_any_async', option)
            return await fn()

        return AsyncOption(_on())

    def aon_any_with(self, fn: Callable[[Option[T]], Option[T]]) -> AsyncOption[T]:
        """Replace with `fn(option)`, handing over the resolved Option."""

        async def _on() -> Option[T]:
            option = await self._awaitable
            return option.on_any_with(fn)

        return AsyncOption(_on())

    def aon_any_with_async(self, fn: Callable[[Option[T]], Awaitable[Option[T]]]) -> AsyncOption[T]:
        """Replace with `await fn(option)`, handing over the resolved Option."""

        async def _on() -> Option[T]:
            option = await self._awaitable
            _trace('on_any_with_async', option)
            return await fn(option)

        return AsyncOption(_on())

    # --- map ---

    def amap[U](self, f: Callable[[T], U | None]) -> AsyncOption[U]:
        """Apply a sync function to the value, lifting the result with from_nullable.

        Example:
            ```python
            result = await AsyncOption.from_nullable(5).amap(lambda x: x * 2)
            assert result == some(10)
            ```
        """

        async def _mapped() -> Option[U]:
            option = await self._awaitable
            return option.map(f)

        return AsyncOption(_mapped())

    def amap_async[U](self, f: Callable[[T], Awaitable[U | None]]) -> AsyncOption[U]:
        """Apply an async function to the value, lifting the result with from_nullable."""

        async def _mapped() -> Option[U]:
            option = await self._awaitable
            _trace('map_async', option)
            if option.has_value:
                return Option.from_nullable(await f(option.value))
            return Option.none()

        return AsyncOption(_mapped())

    # --- Terminal helpers ---

    def avalue_or(self, fallback: T) -> Coroutine[Any, Any, T]:
        """Resolve and return the held value, or `fallback` if absent."""

        async def _value() -> T:
            option = await self._awaitable
            return option.value_or(fallback)

        return _value()

    def avalue_or_none(self) -> Coroutine[Any, Any, T | None]:
        """Resolve and return the held value, or None if absent."""

        async def _value() -> T | None:
            option = await self._awaitable
            return option.value_or_none()

        return _value()

    def __repr__(self) -> str:
        return f'AsyncOption({self._awaitable!r})'
