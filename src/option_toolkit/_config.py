"""Library configuration: OptionConfig, environment detection and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from option_toolkit._logging import configure_logging

__all__ = [
    'OptionConfig',
    'get_config',
    'init',
    'reset',
]

_ENV_PREFIX = 'OPTION_TOOLKIT_'
_TRUE = frozenset({'1', 'true', 'yes', 'on'})
_FALSE = frozenset({'0', 'false', 'no', 'off'})

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionConfig:
    """Configuration for option_toolkit.

    Attributes:
        share_none: Reuse one canonical absent Option per type tag instead of
            allocating a fresh one on every `none()` call.
        trace: Emit a debug log event for every combinator call.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_logs: Render logs as JSON (True) or colored console output (False).
    """

    share_none: bool = True
    trace: bool = False
    log_level: str | None = None
    json_logs: bool = True


# Global configuration (set by init() or resolved lazily by get_config())
_config: OptionConfig | None = None


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from OPTION_TOOLKIT_<name>."""
    raw = os.environ.get(_ENV_PREFIX + name, '').strip().lower()
    if not raw:
        return default
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    _logger.warning("Unknown %s%s value '%s', defaulting to %s", _ENV_PREFIX, name, raw, default)
    return default


def _env_level() -> str | None:
    raw = os.environ.get(_ENV_PREFIX + 'LOG_LEVEL', '').strip()
    return raw.upper() or None


def init(
    share_none: bool | None = None,
    trace: bool | None = None,
    log_level: str | None = None,
    json_logs: bool | None = None,
) -> OptionConfig:
    """Initialize option_toolkit with the given configuration.

    Unset arguments are resolved from OPTION_TOOLKIT_* environment variables,
    then from the OptionConfig defaults.

    Args:
        share_none: Cache one absent Option per type tag.
        trace: Log every combinator call at debug level.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_logs: JSON (True) or console (False) log rendering.

    Returns:
        The OptionConfig that was set.

    Example:
        ```python
        import option_toolkit

        option_toolkit.init(trace=True, log_level='DEBUG', json_logs=False)
        option_toolkit.some(5).map(lambda x: x + 1)  # logs op='map'
        ```
    """
    global _config  # noqa: PLW0603

    defaults = OptionConfig()
    resolved_level = log_level.upper() if log_level is not None else _env_level()

    _config = OptionConfig(
        share_none=share_none if share_none is not None else _env_flag('SHARE_NONE', defaults.share_none),
        trace=trace if trace is not None else _env_flag('TRACE', defaults.trace),
        log_level=resolved_level,
        json_logs=json_logs if json_logs is not None else _env_flag('JSON_LOGS', defaults.json_logs),
    )

    # Cached absent instances may predate a share_none change
    from option_toolkit.option import _clear_none_cache

    _clear_none_cache()

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=_config.json_logs)

    return _config


def get_config() -> OptionConfig:
    """Get the current configuration, resolving it from the environment on first use.

    Unlike a runtime that must be started explicitly, Options are used from
    plain library code, so a missing `init()` is not an error.
    """
    if _config is None:
        return init()
    return _config


def reset() -> None:
    """Forget the current configuration; the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603
    _config = None
