"""Option error types: contract violations raised by Option construction and access."""

from __future__ import annotations

__all__ = [
    'InvalidArgumentError',
    'InvalidStateError',
    'OptionError',
]


class OptionError(Exception):
    """Base class for errors raised by option_toolkit."""


class InvalidArgumentError(OptionError, ValueError):
    """A present Option was constructed with None.

    Raised by `some()` (and direct `Option` construction) when the payload
    is None. Use `from_nullable()` when the input may legitimately be absent.
    """

    def __init__(self, argument: str = 'value') -> None:
        self.argument = argument
        super().__init__(f"Option.some cannot be assigned a None value (argument '{argument}')")


class InvalidStateError(OptionError, RuntimeError):
    """The value of an absent Option was read."""

    def __init__(self, option: str | None = None) -> None:
        self.option = option
        msg = 'Option has no value'
        if option:
            msg = f'{msg}: {option}'
        super().__init__(msg)
