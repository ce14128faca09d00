# ctxerror/errors.py
"""
Exceptions raised by ctxerror itself.

Capture paths never raise these; they only surface from explicit
configuration calls.
"""

from __future__ import annotations


class CtxErrorError(Exception):
    """Base class for ctxerror's own exceptions."""


class ConfigError(CtxErrorError, ValueError):
    """Invalid configuration value passed in code."""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"invalid {field}={value!r}: {reason}")
