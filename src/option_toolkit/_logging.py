"""Structured logging for option_toolkit.

Every logger the library hands out is a structlog BoundLogger wrapped around a
stdlib logger under the `option_toolkit` namespace. The library never touches
the root logger or the process-wide structlog configuration: an application
that embeds it keeps its own handlers, and records from the library reach them
through normal stdlib propagation.

`configure_logging()` (or `option_toolkit.init(log_level=...)`) is the opt-in
for a dedicated stream: it attaches one ProcessorFormatter handler to the
`option_toolkit` logger and stops propagation, so the library's records are
rendered once, as JSON or console output.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'LOGGER_NAME',
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
    'reset_logging',
]

LOGGER_NAME = 'option_toolkit'

# Marks the handler configure_logging() owns, so reconfiguring replaces only it
_HANDLER_NAME = 'option_toolkit.stream'


def _get_shared_processors() -> list[Any]:
    """Processors run for structlog events and for plain stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
        _create_hook_processor(),
    ]


def _get_structlog_processors() -> list[Any]:
    return [
        *_get_shared_processors(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _get_renderer(json_output: bool) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _qualified(name: str | None) -> str:
    """Place `name` under the library's logger namespace."""
    if not name or name == LOGGER_NAME:
        return LOGGER_NAME
    if name.startswith(LOGGER_NAME + '.'):
        return name
    return f'{LOGGER_NAME}.{name}'


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> logging.Logger:
    """Give the `option_toolkit` logger its own rendered stream on stderr.

    Calling it again swaps the previous stream handler for a new one. Handlers
    that were attached by anyone else are left in place, and the root logger is
    never modified.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON logs. If False, use colored console output.

    Returns:
        The configured `option_toolkit` stdlib logger.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    _remove_own_handlers(logger)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    return logger


def reset_logging() -> None:
    """Undo configure_logging(): drop its handler and propagate to the application again."""
    logger = logging.getLogger(LOGGER_NAME)
    _remove_own_handlers(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def _remove_own_handlers(logger: logging.Logger) -> None:
    for handler in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(handler)
        handler.close()


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger in the `option_toolkit` namespace.

    Names outside the namespace are nested under it, so `get_logger('cache')`
    logs as `option_toolkit.cache`.

    Args:
        name: Logger name. If None, the library's root logger is used.

    Returns:
        A structlog BoundLogger.
    """
    return structlog.wrap_logger(
        logging.getLogger(_qualified(name)),
        processors=_get_structlog_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )


# --- Logging Hooks ---

_log_hooks: list[Callable[[dict[str, Any]], None]] = []


def add_log_hook(hook: Callable[[dict[str, Any]], None]) -> None:
    """Register a hook to be called for each library log entry.

    Hooks receive a copy of the event dict, e.g. to count traced combinator
    calls or forward events elsewhere.
    """
    _log_hooks.append(hook)


def remove_log_hook(hook: Callable[[dict[str, Any]], None]) -> None:
    """Remove a previously registered log hook."""
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    """Remove all registered log hooks."""
    _log_hooks.clear()


def _create_hook_processor() -> Callable[[Any, str, dict[str, Any]], dict[str, Any]]:
    def hook_processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for hook in _log_hooks:
            try:
                hook(event_dict.copy())
            except Exception:  # noqa: BLE001, S110
                pass  # a failing hook must not break logging
        return event_dict

    return hook_processor
