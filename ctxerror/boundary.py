# ctxerror/boundary.py
"""
Capture boundary

``capturing`` reports any Exception leaving its block and re-raises it.
Stacking boundaries along a call path is safe: the propagating exception
is the same object at every level, so it is reported once.

KeyboardInterrupt, SystemExit and task cancellation are not application
errors and pass through unreported.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from .ambient import current_context
from .context import ContextLike
from .dispatch import capture, capture_messagef


@contextmanager
def capturing(
    ctx: Optional[ContextLike] = None,
    msg_format: Optional[str] = None,
    *args: Any,
) -> Iterator[None]:
    """
    Report exceptions escaping the block, then re-raise.

    Args:
        ctx: Context to capture into (None means current_context() at the
            time the exception is seen)
        msg_format: Optional printf-style message; str(exc) when omitted
        *args: Arguments for msg_format

    Also works as a decorator for synchronous functions:

        >>> @capturing(None, "sync of %s failed", "orders")
        ... def sync_orders(): ...
    """
    try:
        yield
    except Exception as exc:
        target = ctx if ctx is not None else current_context()
        if msg_format is None:
            capture(target, exc)
        else:
            capture_messagef(target, exc, msg_format, *args)
        raise


__all__ = [
    "capturing",
]
