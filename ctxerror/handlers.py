# ctxerror/handlers.py
"""
Handlers and the process-wide fallback.

A handler receives the context the error was captured in, the error and
the message. The fallback is resolved at dispatch time, so replacing it
affects every binding that was created without a handler.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .config import get_config
from .context import ContextLike


ErrorHandler = Callable[[ContextLike, BaseException, str], None]


def default_handler(ctx: ContextLike, err: BaseException, msg: str) -> None:
    """Log ``Error: <msg>: <err>`` on the configured logger."""
    config = get_config()
    logging.getLogger(config.logger_name).log(config.log_level, "Error: %s: %s", msg, err)


_fallback: ErrorHandler = default_handler


def set_default_handler(handler: Optional[ErrorHandler]) -> ErrorHandler:
    """
    Replace the process-wide fallback handler.

    Args:
        handler: New fallback, or None to restore ``default_handler``

    Returns:
        The fallback that was in effect before the call
    """
    global _fallback
    previous = _fallback
    _fallback = handler if handler is not None else default_handler
    return previous


def get_default_handler() -> ErrorHandler:
    return _fallback


__all__ = [
    "ErrorHandler",
    "default_handler",
    "get_default_handler",
    "set_default_handler",
]
