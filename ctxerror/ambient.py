# ctxerror/ambient.py
"""
Current context

Holds the context of the running task/thread in a ContextVar, so code
that is not handed a context explicitly can still capture into the
request's binding.

asyncio tasks inherit the current context when they are created. Worker
threads do so only when started through ``contextvars.copy_context().run``.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from .binder import new_context
from .context import ContextLike, background
from .handlers import ErrorHandler


CURRENT_CONTEXT: ContextVar[Optional[ContextLike]] = ContextVar(
    "CTXERROR_CURRENT_CONTEXT",
    default=None,
)


def current_context() -> ContextLike:
    """Return the current context, or background() when none is set."""
    ctx = CURRENT_CONTEXT.get()
    return ctx if ctx is not None else background()


@contextmanager
def use_context(ctx: ContextLike) -> Iterator[ContextLike]:
    """Make ``ctx`` current for the duration of the block."""
    token = CURRENT_CONTEXT.set(ctx)
    try:
        yield ctx
    finally:
        CURRENT_CONTEXT.reset(token)


@contextmanager
def bind(handler: Optional[ErrorHandler] = None) -> Iterator[ContextLike]:
    """
    Bind a handler for the block.

    Derives ``new_context(current_context(), handler)`` and makes it
    current until the block exits.

    Example:
        >>> with bind(report_to_sentry) as ctx:
        ...     handle_request(ctx, request)
    """
    with use_context(new_context(current_context(), handler)) as ctx:
        yield ctx


__all__ = [
    "CURRENT_CONTEXT",
    "bind",
    "current_context",
    "use_context",
]
