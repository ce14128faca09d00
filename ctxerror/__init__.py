# ctxerror/__init__.py
"""
ctxerror - request-scoped error capture

Bind a handler to a context once per request, pass the context down, and
capture errors wherever they are observed. Each distinct error is handed
to the handler at most once per binding.

Basic usage:
    >>> from ctxerror import background, new_context, capture
    >>> def report(ctx, err, msg):
    ...     print("reported:", msg)
    >>> ctx = new_context(background(), report)
    >>> err = ValueError("bad input")
    >>> capture(ctx, err)
    reported: bad input
    >>> capture(ctx, err)  # already reported, no-op

Ambient style:
    >>> from ctxerror import bind, capturing
    >>> with bind(report):
    ...     with capturing():
    ...         parse(payload)

No side effects on import.
"""

__version__ = "0.1.0"

from .context import Context, ContextLike, background
from .binder import new_context
from .dispatch import capture, capture_message, capture_messagef
from .handlers import ErrorHandler, default_handler, get_default_handler, set_default_handler
from .ambient import CURRENT_CONTEXT, bind, current_context, use_context
from .boundary import capturing
from .config import CaptureConfig, configure, get_config, load_config
from .errors import ConfigError, CtxErrorError

__all__ = [
    # Version
    "__version__",

    # Context carrier
    "Context",
    "ContextLike",
    "background",

    # Binder
    "new_context",

    # Dispatcher
    "capture",
    "capture_message",
    "capture_messagef",

    # Handlers
    "ErrorHandler",
    "default_handler",
    "get_default_handler",
    "set_default_handler",

    # Ambient context
    "CURRENT_CONTEXT",
    "bind",
    "current_context",
    "use_context",
    "capturing",

    # Configuration
    "CaptureConfig",
    "configure",
    "get_config",
    "load_config",

    # Errors
    "ConfigError",
    "CtxErrorError",
]
