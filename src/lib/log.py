"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of whatever state object is currently connected
to the logging context, without passing that state around explicitly.

Two kinds of state get connected:
- the CLI ProgramState, for the duration of the pipeline
- a RenderContext, for the duration of one MenuRenderer.render() call

Usage:
    from menuwalk.lib.log import LOG, state_connectToLogger

    token = state_connectToLogger(context)
    LOG("Rendering 'mobile' at 'primary'", level=1)
    LOG("Node 42 rejected: no parent at depth 1", level=2)
    state_disconnectFromLogger(token)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar, Token
import sys

# Context variable to hold the state whose verbosity gates LOG()
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> Token:
    """
    Connect a state object to the logging context.

    Args:
        state: Any object with a ``verbosity`` attribute (ProgramState, RenderContext)

    Returns:
        ContextVar token; pass it to state_disconnectFromLogger() to restore
        whatever state was connected before.
    """
    return _program_state.set(state)


def state_disconnectFromLogger(token: Token) -> None:
    """Restore the logging context that was active before state_connectToLogger()"""
    _program_state.reset(token)


def state_getConnected() -> Optional[Any]:
    """Return the state currently connected to the logger, if any"""
    return _program_state.get()


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Menu document loaded", level=1)
        LOG("Resolved 14 strategy options", level=2)
        LOG("item_start id=42 depth=1", level=3)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
