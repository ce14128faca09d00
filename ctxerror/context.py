# ctxerror/context.py
"""
Context carrier

Immutable, parent-linked key/value chain. Deriving a child never changes
the parent, and lookups walk toward the root until a key is found.

Any object exposing ``with_value`` and ``value`` can stand in for
``Context`` (see ``ContextLike``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Optional, Protocol, runtime_checkable


_ROOT_KEY = object()


@runtime_checkable
class ContextLike(Protocol):
    """Minimal carrier interface used by the binder and dispatcher."""

    def with_value(self, key: Hashable, value: Any) -> "ContextLike":
        ...

    def value(self, key: Hashable, default: Any = None) -> Any:
        ...


@dataclass(frozen=True, eq=False, repr=False)
class Context:
    """
    One link in a context chain.

    Example:
        >>> root = background()
        >>> child = root.with_value("user", "alice")
        >>> child.value("user")
        'alice'
        >>> root.value("user") is None
        True
    """

    parent: Optional["Context"] = None
    key: Any = _ROOT_KEY
    val: Any = None

    def with_value(self, key: Hashable, value: Any) -> "Context":
        """Derive a child carrying ``key -> value``; shadows any ancestor value."""
        return Context(parent=self, key=key, val=value)

    def value(self, key: Hashable, default: Any = None) -> Any:
        node: Optional[Context] = self
        while node is not None:
            if node.key is not _ROOT_KEY and node.key == key:
                return node.val
            node = node.parent
        return default

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def __repr__(self) -> str:
        if self.parent is None:
            return "Context(background)"
        return f"Context(depth={self.depth})"


_BACKGROUND = Context()


def background() -> Context:
    """Return the empty root context shared by the whole process."""
    return _BACKGROUND


__all__ = [
    "Context",
    "ContextLike",
    "background",
]
