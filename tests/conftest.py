"""Pytest configuration and shared fixtures for option_toolkit tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

ENV_VARS = (
    'OPTION_TOOLKIT_SHARE_NONE',
    'OPTION_TOOLKIT_TRACE',
    'OPTION_TOOLKIT_LOG_LEVEL',
    'OPTION_TOOLKIT_JSON_LOGS',
)


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate each test from global config, cached absent Options, log hooks and the library log handler."""
    from option_toolkit._config import reset
    from option_toolkit._logging import clear_log_hooks, reset_logging
    from option_toolkit.option import _clear_none_cache

    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset()
    _clear_none_cache()
    clear_log_hooks()
    reset_logging()
    yield
    reset()
    _clear_none_cache()
    clear_log_hooks()
    reset_logging()


@pytest.fixture
def sample_some():
    """Sample present Option for testing."""
    from option_toolkit import some

    return some('hello')


@pytest.fixture
def sample_none():
    """Sample absent Option for testing."""
    from option_toolkit import none

    return none(str)


class Counter:
    """Records how many times it was called and with what."""

    def __init__(self) -> None:
        self.calls: list[tuple[object, ...]] = []

    def __call__(self, *args: object) -> None:
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def counter() -> Counter:
    """A fresh call counter."""
    return Counter()
