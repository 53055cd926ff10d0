"""Tests for async utilities: AsyncOption and the Option *_async methods."""

import threading

import anyio
import pytest
from hypothesis import given
from option_toolkit import AsyncOption, Option, none, some

from tests.strategies import options


async def get_some() -> Option[int]:
    return some(42)


async def get_none() -> Option[int]:
    return none(int)


class TestAsyncOptionConstruction:
    """Tests for wrapping and awaiting."""

    async def test_await_some(self):
        """Can await AsyncOption to get a present Option."""
        assert await AsyncOption(get_some()) == some(42)

    async def test_await_none(self):
        """Can await AsyncOption to get an absent Option."""
        assert (await AsyncOption(get_none())).is_none

    async def test_from_option(self):
        assert await AsyncOption.from_option(some(1)) == some(1)

    async def test_from_nullable(self):
        assert await AsyncOption.from_nullable(3) == some(3)
        result = await AsyncOption.from_nullable(None, int)
        assert str(result) == 'None<int>'

    async def test_lift_normalizes_sources(self):
        """lift accepts Options, AsyncOptions and plain awaitables."""
        pending = AsyncOption(get_some())
        assert AsyncOption.lift(pending) is pending
        assert await AsyncOption.lift(some(1)) == some(1)
        assert await AsyncOption.lift(get_none()) == none()

    async def test_single_shot_coroutine(self):
        """Awaiting a coroutine-backed AsyncOption twice fails."""
        pending = AsyncOption(get_some())
        await pending
        with pytest.raises(RuntimeError):
            await pending

    async def test_from_blocking_runs_in_worker_thread(self):
        """from_blocking runs fn off the event loop thread and lifts the result."""
        loop_thread = threading.get_ident()
        seen: list[int] = []

        def lookup(key: str) -> str | None:
            seen.append(threading.get_ident())
            return {'a': 'alpha'}.get(key)

        assert await AsyncOption.from_blocking(lookup, 'a') == some('alpha')
        missing = await AsyncOption.from_blocking(lookup, 'z', kind=str)
        assert str(missing) == 'None<str>'
        assert all(ident != loop_thread for ident in seen)

    async def test_repr(self):
        pending = AsyncOption.from_option(some(1))
        assert repr(pending).startswith('AsyncOption(')
        await pending


class TestAsyncWhen:
    """Tests for awhen_* methods."""

    async def test_awhen_some_sync_action(self, counter):
        result = await AsyncOption(get_some()).awhen_some(counter)
        assert result == some(42)
        assert counter.calls == [(42,)]

    async def test_awhen_some_skips_none(self, counter):
        result = await AsyncOption(get_none()).awhen_some(counter)
        assert result.is_none
        assert counter.count == 0

    async def test_awhen_some_async_action(self):
        seen: list[int] = []

        async def record(value: int) -> None:
            await anyio.sleep(0)
            seen.append(value)

        assert await AsyncOption(get_some()).awhen_some_async(record) == some(42)
        assert seen == [42]

    async def test_awhen_none_sync_and_async(self, counter):
        async def async_counter() -> None:
            counter('async')

        result = await AsyncOption(get_none()).awhen_none(counter).awhen_none_async(async_counter)
        assert result.is_none
        assert counter.calls == [(), ('async',)]

    async def test_awhen_none_skips_some(self, counter):
        async def never() -> None:
            counter()

        await AsyncOption(get_some()).awhen_none(counter).awhen_none_async(never)
        assert counter.count == 0

    async def test_awhen_any_receives_option(self, counter):
        async def record(option: Option[int]) -> None:
            counter(option)

        await AsyncOption(get_some()).awhen_any(counter).awhen_any_async(record)
        assert counter.calls == [(some(42),), (some(42),)]

    async def test_sample_chain(self):
        """The fluent chain from the library's README behaves like the sync one."""
        log: list[str] = []

        async def on_value(value: int) -> None:
            log.append(f'value {value}')

        async def on_missing() -> None:
            log.append('missing')

        result = await (
            AsyncOption(get_some())
            .awhen_some_async(on_value)
            .awhen_none_async(on_missing)
            .awhen_any(lambda o: log.append(f'has value {o.has_value}'))
        )
        assert result == some(42)
        assert log == ['value 42', 'has value True']

    @given(options)
    def test_when_returns_input(self, option):
        """Every awhen_* resolves to its input Option."""

        async def noop(*_args) -> None:
            return None

        async def chain() -> Option[object]:
            return await (
                AsyncOption.from_option(option)
                .awhen_some(lambda _: None)
                .awhen_some_async(noop)
                .awhen_none(lambda: None)
                .awhen_none_async(noop)
                .awhen_any(lambda _: None)
                .awhen_any_async(noop)
            )

        assert anyio.run(chain) == option


class TestAsyncOn:
    """Tests for aon_* methods."""

    async def test_aon_some(self):
        result = await AsyncOption(get_some()).aon_some(lambda v: some(v + 1))
        assert result == some(43)

    async def test_aon_some_async(self):
        async def halve(v: int) -> Option[int]:
            return some(v // 2)

        assert await AsyncOption(get_some()).aon_some_async(halve) == some(21)

    async def test_aon_some_skips_none(self, counter):
        async def never(v: int) -> Option[int]:
            counter(v)
            return some(v)

        result = await AsyncOption(get_none()).aon_some(counter).aon_some_async(never)
        assert result.is_none
        assert counter.count == 0

    async def test_aon_none(self):
        result = await AsyncOption(get_none()).aon_none(lambda: some(0))
        assert result == some(0)

    async def test_aon_none_async(self):
        async def fallback() -> Option[int]:
            return some(-1)

        assert await AsyncOption(get_none()).aon_none_async(fallback) == some(-1)

    async def test_aon_none_skips_some(self, counter):
        result = await AsyncOption(get_some()).aon_none(counter)
        assert result == some(42)
        assert counter.count == 0

    async def test_aon_any(self):
        assert await AsyncOption(get_some()).aon_any(lambda: none(int)) == none()
        assert await AsyncOption(get_none()).aon_any(lambda: some(1)) == some(1)

    async def test_aon_any_async_awaits_source_first(self):
        """aon_any_async lets the source finish before calling fn."""
        order: list[str] = []

        async def source() -> Option[int]:
            await anyio.sleep(0.01)
            order.append('source')
            return some(1)

        async def replacement() -> Option[int]:
            order.append('fn')
            return some(2)

        assert await AsyncOption(source()).aon_any_async(replacement) == some(2)
        assert order == ['source', 'fn']

    async def test_aon_any_with(self):
        result = await AsyncOption(get_none()).aon_any_with(lambda o: o.on_none(lambda: some(7)))
        assert result == some(7)

    async def test_aon_any_with_async(self):
        async def inspect_option(option: Option[int]) -> Option[int]:
            return some(option.value * 2) if option.has_value else some(0)

        assert await AsyncOption(get_some()).aon_any_with_async(inspect_option) == some(84)
        assert await AsyncOption(get_none()).aon_any_with_async(inspect_option) == some(0)


class TestAsyncMap:
    """Tests for amap and amap_async."""

    async def test_amap(self):
        assert await AsyncOption(get_some()).amap(lambda x: x + 1) == some(43)

    async def test_amap_changes_type(self):
        assert await AsyncOption(get_some()).amap(str) == some('42')

    async def test_amap_none_skips(self, counter):
        result = await AsyncOption(get_none()).amap(counter)
        assert result.is_none
        assert counter.count == 0

    async def test_amap_async(self):
        async def double(x: int) -> int:
            await anyio.sleep(0)
            return x * 2

        assert await AsyncOption(get_some()).amap_async(double) == some(84)

    async def test_amap_async_none_result_collapses(self):
        async def missing(_: int) -> None:
            return None

        assert (await AsyncOption(get_some()).amap_async(missing)).is_none

    async def test_amap_async_none_skips(self, counter):
        async def never(x: int) -> int:
            counter(x)
            return x

        assert (await AsyncOption(get_none()).amap_async(never)).is_none
        assert counter.count == 0


class TestAsyncTerminal:
    """Tests for avalue_or and avalue_or_none."""

    async def test_avalue_or(self):
        assert await AsyncOption(get_some()).avalue_or(0) == 42
        assert await AsyncOption(get_none()).avalue_or(0) == 0

    async def test_avalue_or_none(self):
        assert await AsyncOption(get_some()).avalue_or_none() == 42
        assert await AsyncOption(get_none()).avalue_or_none() is None


class TestOptionAsyncMethods:
    """Tests for the *_async methods on a resolved Option."""

    async def test_when_some_async(self, counter):
        async def record(value: str) -> None:
            counter(value)

        assert await some('a').when_some_async(record) == some('a')
        assert await none(str).when_some_async(record) == none()
        assert counter.calls == [('a',)]

    async def test_when_none_async(self, counter):
        async def record() -> None:
            counter()

        await some('a').when_none_async(record)
        await none(str).when_none_async(record)
        assert counter.count == 1

    async def test_when_any_async(self, counter):
        async def record(option: Option[str]) -> None:
            counter(option)

        await some('a').when_any_async(record)
        await none(str).when_any_async(record)
        assert counter.calls == [(some('a'),), (none(),)]

    async def test_on_some_async(self):
        async def upper(s: str) -> Option[str]:
            return some(s.upper())

        assert await some('a').on_some_async(upper) == some('A')
        assert (await none(str).on_some_async(upper)).is_none

    async def test_on_none_async(self):
        async def fallback() -> Option[str]:
            return some('fallback')

        assert await none(str).on_none_async(fallback) == some('fallback')
        assert await some('kept').on_none_async(fallback) == some('kept')

    async def test_on_any_async(self):
        async def forced() -> Option[int]:
            return some(9)

        assert await none(int).on_any_async(forced) == some(9)
        assert await some(1).on_any_async(forced) == some(9)

    async def test_on_any_with_async(self):
        async def bump(option: Option[int]) -> Option[int]:
            return option.map(lambda x: x + 1)

        assert await some(1).on_any_with_async(bump) == some(2)
        assert (await none(int).on_any_with_async(bump)).is_none

    async def test_map_async(self):
        async def length(s: str) -> int:
            return len(s)

        assert await some('abc').map_async(length) == some(3)
        assert (await none(str).map_async(length)).is_none

    async def test_chain_from_resolved_option(self):
        """*_async methods return AsyncOption, so a* methods chain after them."""
        seen: list[str] = []

        async def record(value: str) -> None:
            seen.append(value)

        result = await some('x').when_some_async(record).amap(str.upper).aon_none(lambda: some('?'))
        assert result == some('X')
        assert seen == ['x']


class TestAsyncSequencing:
    """Chained async steps run strictly one after another."""

    async def test_side_effects_complete_before_result(self):
        """The final await returns only after every async action has finished."""
        events: list[str] = []

        def slow(tag: str):
            async def action(*_args) -> None:
                await anyio.sleep(0.01)
                events.append(tag)

            return action

        result = await AsyncOption(get_some()).awhen_some_async(slow('first')).awhen_any_async(slow('second'))
        assert result == some(42)
        assert events == ['first', 'second']

    async def test_exception_in_action_propagates(self):
        async def boom(_: int) -> None:
            raise LookupError('missing')

        with pytest.raises(LookupError, match='missing'):
            await AsyncOption(get_some()).awhen_some_async(boom).amap(str)

    async def test_later_steps_skip_after_failure(self, counter):
        async def boom(_: int) -> None:
            raise LookupError('missing')

        with pytest.raises(LookupError):
            await AsyncOption(get_some()).awhen_some_async(boom).awhen_any(counter)
        assert counter.count == 0
