"""option-toolkit: a composable Option type for Python 3.13+.

An Option holds exactly one value or none, with equality, hashing and a fixed
debug string, plus "when" (side effect), "on" (replacement) and "map"
(transformation) combinators in sync and async flavors.

Flat imports (preferred):
    from option_toolkit import Option, some, none, from_nullable
    from option_toolkit import AsyncOption, lift, lift_async

Submodule imports (for organization):
    from option_toolkit.option import Option
    from option_toolkit.async_ import AsyncOption
    from option_toolkit.combinators import when_some, map_async
"""

# Logging and configuration
from option_toolkit._config import OptionConfig, get_config, init
from option_toolkit._logging import configure_logging, get_logger

# Async
from option_toolkit.async_ import AsyncOption

# Combinators
from option_toolkit.combinators import (
    map_async,
    map_option,
    on_any,
    on_any_async,
    on_any_with,
    on_any_with_async,
    on_none,
    on_none_async,
    on_some,
    on_some_async,
    when_any,
    when_any_async,
    when_none,
    when_none_async,
    when_some,
    when_some_async,
)

# Decorators
from option_toolkit.decorators import lift, lift_async

# Errors
from option_toolkit.errors import InvalidArgumentError, InvalidStateError, OptionError

# Types
from option_toolkit.option import Option, from_nullable, none, some

__all__ = [
    # Async
    'AsyncOption',
    # Errors
    'InvalidArgumentError',
    'InvalidStateError',
    # Types
    'Option',
    # Configuration
    'OptionConfig',
    'OptionError',
    # Logging
    'configure_logging',
    'from_nullable',
    'get_config',
    'get_logger',
    'init',
    # Decorators
    'lift',
    'lift_async',
    # Combinators
    'map_async',
    'map_option',
    'none',
    'on_any',
    'on_any_async',
    'on_any_with',
    'on_any_with_async',
    'on_none',
    'on_none_async',
    'on_some',
    'on_some_async',
    'some',
    'when_any',
    'when_any_async',
    'when_none',
    'when_none_async',
    'when_some',
    'when_some_async',
]
