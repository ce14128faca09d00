# ctxerror/binder.py
"""
Context binder

Attaches a fresh binding (handler + reported errors) to a context. The
binding lives under a module-private key and exposes no public API, so
application code can neither collide with it nor read or alter it.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional, Set

from .context import ContextLike, background
from .handlers import ErrorHandler


# Private sentinel; only this package holds a reference to it
_BINDING_KEY = object()


class _Binding:
    """
    Per-request record of reported errors.

    The reported set only grows. Errors are keyed by their own
    ``__hash__``/``__eq__``; unhashable errors fall back to object identity
    and are kept referenced so their id cannot be reused.
    """

    __slots__ = ("_handler", "_lock", "_reported", "_reported_by_id")

    def __init__(self, handler: Optional[ErrorHandler] = None):
        self._handler = handler
        self._lock = threading.Lock()
        self._reported: Set[Any] = set()
        self._reported_by_id: Dict[int, BaseException] = {}

    def _mark(self, err: BaseException) -> bool:
        """Record ``err``; True only for the first call with this error."""
        with self._lock:
            try:
                if err in self._reported:
                    return False
                self._reported.add(err)
                return True
            except TypeError:
                # unhashable
                key = id(err)
                if key in self._reported_by_id:
                    return False
                self._reported_by_id[key] = err
                return True

    def __repr__(self) -> str:
        with self._lock:
            reported = len(self._reported) + len(self._reported_by_id)
        return f"<binding reported={reported}>"


def new_context(parent: Optional[ContextLike], handler: Optional[ErrorHandler] = None) -> ContextLike:
    """
    Derive a context carrying a new binding.

    Any binding already on ``parent`` is shadowed, not merged. The parent
    and its other children are unaffected.

    Args:
        parent: Context to derive from (None means background())
        handler: Called as handler(ctx, err, msg); None uses the
            process-wide fallback at dispatch time

    Returns:
        The derived context
    """
    if parent is None:
        parent = background()
    return parent.with_value(_BINDING_KEY, _Binding(handler))


def _binding_of(ctx: Optional[ContextLike]) -> Optional[_Binding]:
    """Return the nearest binding visible from ``ctx``, if any."""
    if ctx is None:
        return None
    binding = ctx.value(_BINDING_KEY)
    if isinstance(binding, _Binding):
        return binding
    return None


__all__ = [
    "new_context",
]
