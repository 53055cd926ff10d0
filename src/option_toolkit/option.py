"""Option type: an immutable container holding exactly one value or none.

An Option is either present (`has_value` is True, `value` is readable) or
absent. It is built through three factories:

    >>> from_nullable(5)
    Some<int>(5)
    >>> from_nullable(None, int)
    None<int>
    >>> some(7).value
    7

`some(None)` raises InvalidArgumentError; reading `value` on an absent
Option raises InvalidStateError.

The combinators come in three families, all returning new Options and never
mutating the receiver:

- `when_*`: run a side effect and return the same Option, for fluent chains.
- `on_*`: replace the Option with one computed by a function (same wrapped type).
- `map`: transform the held value, the only way to change the wrapped type.

Each has an `*_async` form returning an `AsyncOption` for awaitable actions.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from option_toolkit._config import get_config
from option_toolkit._logging import get_logger
from option_toolkit.errors import InvalidArgumentError, InvalidStateError

if TYPE_CHECKING:
    from option_toolkit.async_.option import AsyncOption

__all__ = ['Option', 'from_nullable', 'none', 'some']

_log = get_logger(__name__)

# Canonical absent instances, keyed by type tag (see OptionConfig.share_none)
_none_cache: dict[type | None, Option[Any]] = {}


# Builtins whose no-argument call gives their zero value
_ZERO_VALUE_KINDS: frozenset[type] = frozenset({bool, bytes, complex, dict, float, frozenset, int, list, set, str, tuple})


def _clear_none_cache() -> None:
    _none_cache.clear()


def _trace(op: str, option: Option[Any]) -> None:
    if get_config().trace:
        _log.debug('option.combinator', op=op, has_value=option.has_value)


@dataclass(slots=True, frozen=True, eq=False, repr=False)
class Option[T]:
    """A value of type T that may be absent.

    Equality is structural: two absent Options are equal, two present Options
    are equal when their values are, and a present Option never equals an
    absent one. The type tag only feeds the string form.

    Do not call the constructor directly; use `some`, `none` or `from_nullable`.

    Attributes:
        has_value: True if the Option holds a value.

    Examples:
        >>> opt = from_nullable('a')
        >>> opt.on_some(lambda s: some(s.upper()))
        Some<str>(A)
        >>> none(int).map(lambda x: x + 1).has_value
        False
    """

    _value: T | None
    has_value: bool
    _kind: type | None = None

    def __post_init__(self) -> None:
        if self.has_value and self._value is None:
            raise InvalidArgumentError('value')

    # --- Construction ---

    @classmethod
    def some(cls, value: T) -> Option[T]:
        """Create a present Option.

        Raises:
            InvalidArgumentError: If value is None.
        """
        if value is None:
            raise InvalidArgumentError('value')
        return cls(value, True, type(value))

    @classmethod
    def none(cls, kind: type | None = None) -> Option[Any]:
        """Create an absent Option, tagged with `kind` for display.

        With `OptionConfig.share_none` enabled, one instance per tag is reused.
        """
        if not get_config().share_none:
            return cls(None, False, kind)
        cached = _none_cache.get(kind)
        if cached is None:
            cached = _none_cache.setdefault(kind, cls(None, False, kind))
        return cached

    @classmethod
    def from_nullable(cls, value: T | None, kind: type | None = None) -> Option[T]:
        """Lift `value` into an Option: None becomes absent, anything else present."""
        if value is None:
            return cls.none(kind)
        return cls.some(value)

    # --- Inspection ---

    @property
    def is_none(self) -> bool:
        """True if the Option holds no value."""
        return not self.has_value

    @property
    def value(self) -> T:
        """The held value.

        Raises:
            InvalidStateError: If the Option is absent. Check `has_value` first,
                or use the combinators / `value_or*` helpers instead.
        """
        if not self.has_value:
            raise InvalidStateError(str(self))
        return self._value  # type: ignore[return-value]

    @property
    def kind(self) -> type | None:
        """The type tag: the value's type when present, the declared one when absent."""
        return self._kind

    def value_or_none(self) -> T | None:
        """Return the held value, or None if absent."""
        return self._value if self.has_value else None

    def value_or(self, fallback: T) -> T:
        """Return the held value, or `fallback` if absent."""
        return self._value if self.has_value else fallback  # type: ignore[return-value]

    def value_or_default(self) -> T | None:
        """Return the held value, or the zero value of the type tag if absent.

        `none(int).value_or_default()` is `0`. Tags without a zero value
        (`none(date)`, any class whose constructor needs arguments) and untagged
        absent Options give None.
        """
        if self.has_value:
            return self._value
        if self._kind in _ZERO_VALUE_KINDS:
            return self._kind()
        return None

    # --- Equality / hashing / display ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        if not self.has_value:
            return not other.has_value
        return other.has_value and bool(self._value == other._value)

    def __hash__(self) -> int:
        if not self.has_value:
            return hash(False)
        return hash((True, self._value))

    def __str__(self) -> str:
        name = self._kind.__name__ if self._kind is not None else 'object'
        if self.has_value:
            return f'Some<{name}>({self._value})'
        return f'None<{name}>'

    __repr__ = __str__

    # --- "when" family: side effects, same Option back ---

    def when_some(self, action: Callable[[T], Any]) -> Option[T]:
        """Call `action(value)` if present. Returns self."""
        _trace('when_some', self)
        if self.has_value:
            action(self.value)
        return self

    def when_none(self, action: Callable[[], Any]) -> Option[T]:
        """Call `action()` if absent. Returns self."""
        _trace('when_none', self)
        if not self.has_value:
            action()
        return self

    def when_any(self, action: Callable[[Option[T]], Any]) -> Option[T]:
        """Call `action(self)` unconditionally. Returns self."""
        _trace('when_any', self)
        action(self)
        return self

    # --- "on" family: replacement Option of the same type ---

    def on_some(self, fn: Callable[[T], Option[T]]) -> Option[T]:
        """Replace with `fn(value)` if present; otherwise return self."""
        _trace('on_some', self)
        if self.has_value:
            return fn(self.value)
        return self

    def on_none(self, fn: Callable[[], Option[T]]) -> Option[T]:
        """Replace with `fn()` if absent; otherwise return self."""
        _trace('on_none', self)
        if not self.has_value:
            return fn()
        return self

    def on_any(self, fn: Callable[[], Option[T]]) -> Option[T]:
        """Replace with `fn()` unconditionally, discarding self."""
        _trace('on_any', self)
        return fn()

    def on_any_with(self, fn: Callable[[Option[T]], Option[T]]) -> Option[T]:
        """Replace with `fn(self)` unconditionally; `fn` sees the whole Option."""
        _trace('on_any_with', self)
        return fn(self)

    # --- map: the only type-changing combinator ---

    def map[U](self, fn: Callable[[T], U | None]) -> Option[U]:
        """Apply `fn` to the held value and lift the result with `from_nullable`.

        A None result collapses to an absent Option. Absent Options short-circuit
        without calling `fn`.
        """
        _trace('map', self)
        if self.has_value:
            return Option.from_nullable(fn(self.value))
        return Option.none()

    # --- Async forms on a resolved Option ---

    def when_some_async(self, action: Callable[[T], Awaitable[Any]]) -> AsyncOption[T]:
        """Await `action(value)` if present; resolves to self."""
        from option_toolkit.async_.option import AsyncOption

        return AsyncOption.from_option(self).awhen_some_async(action)

    def when_none_async(self, action: Callable[[], Awaitable[Any]]) -> AsyncOption[T]:
        """Await `action()` if absent; resolves to self."""
        from option_toolkit.async_.option import AsyncOption

        return AsyncOption.from_option(self).awhen_none_async(action)

    def when_any_async(self, action: Callable[[Option[T]], Awaitable[Any]]) -> AsyncOption[T]:
        """Await `action(self)` unconditionally; resolves to self."""
        from option_toolkit.async_.option import AsyncOption

        return AsyncOption.from_option(self).awhen_any_async(action)

    def on_some_async(self, fn: Callable[[T], Awaitable[Option[T]]]) -> AsyncOption[T]:
        """Resolve to `await fn(value)` if present, else to self."""
        from option_toolkit.async_.option import AsyncOption

        return AsyncOption.from_option(self).aon_some_async(fn)

    def on_none_async(self, fn: Callable[[], Awaitable[Option[T]]]) -> AsyncOption[T]:
        """Resolve to `await fn()` if absent, else to self."""
        from option_toolkit.async_.option import AsyncOption

        return AsyncOption.from_option(self).aon_none_async(fn)

    def on_any_async(self, fn: Callable[[], Awaitable[Option[T]]]) -> AsyncOption[T]:
        """Resolve to `await fn()` unconditionally."""
        from option_toolkit.async_.option import AsyncOption

        return AsyncOption.from_option(self).aon_any_async(fn)

    def on_any_with_async(self, fn: Callable[[Option[T]], Awaitable[Option[T]]]) -> AsyncOption[T]:
        """Resolve to `await fn(self)` unconditionally."""
        from option_toolkit.async_.option import AsyncOption

        return AsyncOption.from_option(self).aon_any_with_async(fn)

    def map_async[U](self, fn: Callable[[T], Awaitable[U | None]]) -> AsyncOption[U]:
        """Resolve to `from_nullable(await fn(value))` if present, else to an absent Option."""
        from option_toolkit.async_.option import AsyncOption

        return AsyncOption.from_option(self).amap_async(fn)


def some[T](value: T) -> Option[T]:
    """Wrap a non-None value in a present Option.

    Args:
        value: The value to wrap.

    Returns:
        Option[T]: A present Option holding value.

    Raises:
        InvalidArgumentError: If value is None.
    """
    return Option.some(value)


def none(kind: type | None = None) -> Option[Any]:
    """Return an absent Option.

    Args:
        kind: Optional type tag, shown as `None<kind>` in the string form.
    """
    return Option.none(kind)


def from_nullable[T](value: T | None, kind: type | None = None) -> Option[T]:
    """Convert a nullable value to an Option.

    Args:
        value: The value that may be None.
        kind: Type tag for the absent case.

    Returns:
        Option[T]: Present if value is not None, otherwise absent.
    """
    return Option.from_nullable(value, kind)
