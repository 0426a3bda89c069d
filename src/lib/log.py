"""
Verbosity-gated logging for the webflow compiler, built on Loguru.

The CLI connects its ProgramState once; lexer, parser and compiler code then
call LOG() with a level and never see the state themselves. With no state
connected (library use, tests) LOG() is silent.

Levels:
    1 = pipeline stages (reading, compiling, writing)
    2 = import resolution and file paths
    3 = token counts, cache hits, parser trace
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger

_active_state: ContextVar[Optional[Any]] = ContextVar('webflow_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module}.{function}:{line}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """Make ``state.verbosity`` the threshold for LOG() in this context"""
    _active_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, or 0 when none is connected"""
    state = _active_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit ``message`` when the connected verbosity is at least ``level``.

    Records carry the caller's module, function and line.
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
