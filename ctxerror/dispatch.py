# ctxerror/dispatch.py
"""
Capture dispatcher

Reports an error to the handler bound to a context, at most once per
binding. Contexts without a binding are ignored silently: capturing is
best-effort and must never break the calling code, so the message is
only built once the handler is about to run, and building it cannot
raise.

Example:
    >>> ctx = new_context(background(), handler)
    >>> try:
    ...     load_profile(user_id)
    ... except LookupError as e:
    ...     capture_messagef(ctx, e, "profile %s unavailable", user_id)
    ...     raise
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

from .binder import _binding_of
from .context import ContextLike
from .handlers import get_default_handler


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        return f"<unprintable {type(x).__name__}>"


def _format(msg_format: str, args: Tuple[Any, ...]) -> str:
    if not args:
        return msg_format
    try:
        return msg_format % args
    except (TypeError, ValueError, KeyError):
        # bad format/argument pairing still yields a usable message
        return f"{msg_format} {_safe_str(args)}"


def _capture_message(
    ctx: Optional[ContextLike],
    err: Optional[BaseException],
    render: Callable[[], str],
) -> None:
    binding = _binding_of(ctx)
    if binding is None or err is None:
        return

    if not binding._mark(err):
        return

    # Runs outside the binding lock
    handler = binding._handler
    if handler is None:
        handler = get_default_handler()
    handler(ctx, err, render())


def capture(ctx: Optional[ContextLike], err: Optional[BaseException]) -> None:
    """Capture ``err`` using ``str(err)`` as the message."""
    _capture_message(ctx, err, lambda: _safe_str(err))


def capture_message(ctx: Optional[ContextLike], err: Optional[BaseException], msg: str) -> None:
    """Capture ``err`` with an explicit message."""
    _capture_message(ctx, err, lambda: msg)


def capture_messagef(
    ctx: Optional[ContextLike],
    err: Optional[BaseException],
    msg_format: str,
    *args: Any,
) -> None:
    """
    Capture ``err`` with a printf-style message.

    The message is ``msg_format % args``, formatted only when the handler
    runs. A format that does not match its arguments does not raise; the
    handler gets the raw format followed by the arguments instead.
    """
    _capture_message(ctx, err, lambda: _format(msg_format, args))


__all__ = [
    "capture",
    "capture_message",
    "capture_messagef",
]
