# tests/unit/test_dispatch.py
"""
Dispatcher: once-per-binding delivery, isolation, fallback and formatting
"""

from dataclasses import dataclass

import pytest

from ctxerror import (
    background,
    capture,
    capture_message,
    capture_messagef,
    new_context,
    set_default_handler,
)


def test_repeated_capture_calls_handler_once(recorder):
    ctx = new_context(background(), recorder)
    err = ValueError("bad input")

    for _ in range(5):
        capture(ctx, err)

    assert recorder.errors == [err]
    assert recorder.messages == ["bad input"]


def test_handler_receives_capturing_context(recorder):
    ctx = new_context(background(), recorder)
    child = ctx.with_value("step", "parse")
    err = ValueError("bad input")

    capture(child, err)

    assert recorder.calls[0][0] is child


def test_distinct_errors_each_reported(recorder):
    ctx = new_context(background(), recorder)
    e1 = ValueError("first")
    e2 = ValueError("second")

    capture(ctx, e1)
    capture(ctx, e2)
    capture(ctx, e1)

    assert recorder.errors == [e1, e2]


def test_equal_text_distinct_instances_are_distinct(recorder):
    ctx = new_context(background(), recorder)

    capture(ctx, KeyError("missing"))
    capture(ctx, KeyError("missing"))

    assert len(recorder.calls) == 2


def test_dedup_spans_entry_points(recorder):
    ctx = new_context(background(), recorder)
    err = OSError("disk full")

    capture_message(ctx, err, "writing report")
    capture(ctx, err)
    capture_messagef(ctx, err, "writing %s", "report")

    assert recorder.messages == ["writing report"]


def test_dedup_spans_derived_contexts(recorder):
    ctx = new_context(background(), recorder)
    err = TimeoutError("upstream")

    capture(ctx.with_value("layer", "db"), err)
    capture(ctx.with_value("layer", "service"), err)
    capture(ctx, err)

    assert len(recorder.calls) == 1


def test_sibling_bindings_are_isolated(recorder):
    parent = background().with_value("request_id", "r-1")
    a = new_context(parent, recorder)
    b = new_context(parent, recorder)
    err = RuntimeError("shared")

    capture(a, err)
    capture(b, err)
    capture(a, err)

    assert len(recorder.calls) == 2
    assert recorder.calls[0][0] is a
    assert recorder.calls[1][0] is b


def test_inner_binding_does_not_consult_outer(recorder):
    outer = new_context(background(), recorder)
    inner = new_context(outer, recorder)
    err = RuntimeError("boom")

    capture(outer, err)
    capture(inner, err)

    assert len(recorder.calls) == 2


def test_no_binding_is_silent_noop(recorder):
    set_default_handler(recorder)

    capture(background(), ValueError("x"))
    capture_message(background().with_value("k", 1), ValueError("x"), "msg")
    capture_messagef(background(), ValueError("x"), "%s", "msg")
    capture(None, ValueError("x"))

    assert recorder.calls == []


def test_none_error_is_ignored(recorder):
    ctx = new_context(background(), recorder)

    capture(ctx, None)
    capture_message(ctx, None, "nothing")
    capture_messagef(ctx, None, "nothing %d", 1)

    assert recorder.calls == []


def test_capture_returns_none(recorder):
    ctx = new_context(background(), recorder)
    assert capture(ctx, ValueError("x")) is None


def test_messagef_formats_message(recorder):
    ctx = new_context(background(), recorder)
    err = ValueError("boom")

    capture_messagef(ctx, err, "failed on %s item %d", "widget", 5)

    assert recorder.messages == ["failed on widget item 5"]


def test_messagef_without_args_keeps_format_verbatim(recorder):
    ctx = new_context(background(), recorder)

    capture_messagef(ctx, ValueError("boom"), "100% failed")

    assert recorder.messages == ["100% failed"]


def test_none_handler_uses_process_fallback(recorder):
    ctx = new_context(background(), None)
    set_default_handler(recorder)
    err = ValueError("late fallback")

    capture(ctx, err)

    assert recorder.calls == [(ctx, err, "late fallback")]


def test_handler_exception_propagates_and_error_stays_reported():
    calls = []

    def failing(ctx, err, msg):
        calls.append(err)
        raise RuntimeError("handler broke")

    ctx = new_context(background(), failing)
    err = ValueError("x")

    with pytest.raises(RuntimeError, match="handler broke"):
        capture(ctx, err)
    capture(ctx, err)

    assert calls == [err]


def test_handler_may_capture_another_error(recorder):
    secondary = LookupError("while reporting")

    def reporting(ctx, err, msg):
        recorder(ctx, err, msg)
        capture(ctx, secondary)

    ctx = new_context(background(), reporting)
    primary = ValueError("primary")

    capture(ctx, primary)

    assert recorder.errors == [primary, secondary]


@dataclass
class DataclassError(Exception):
    code: str


def test_unhashable_errors_dedup_by_identity(recorder):
    ctx = new_context(background(), recorder)
    err = DataclassError("E1")

    capture(ctx, err)
    capture(ctx, err)
    capture(ctx, DataclassError("E1"))

    assert len(recorder.calls) == 2


class CodedError(Exception):
    def __init__(self, code):
        super().__init__(code)
        self.code = code

    def __eq__(self, other):
        return isinstance(other, CodedError) and other.code == self.code

    def __hash__(self):
        return hash(self.code)


def test_native_equality_is_honoured(recorder):
    ctx = new_context(background(), recorder)

    capture(ctx, CodedError("E42"))
    capture(ctx, CodedError("E42"))
    capture(ctx, CodedError("E43"))

    assert [e.code for e in recorder.errors] == ["E42", "E43"]


def test_messagef_mismatch_without_binding_is_silent():
    capture_messagef(background(), ValueError("x"), "item %d", "widget")
    capture_messagef(None, ValueError("x"), "%s and %s", "one")


def test_messagef_mismatch_still_reports(recorder):
    ctx = new_context(background(), recorder)
    err = ValueError("x")

    capture_messagef(ctx, err, "%s and %s", "one")

    assert recorder.errors == [err]
    assert recorder.messages == ["%s and %s ('one',)"]


def test_messagef_wrong_type_still_reports(recorder):
    ctx = new_context(background(), recorder)

    capture_messagef(ctx, ValueError("x"), "item %d", "widget")

    assert recorder.messages == ["item %d ('widget',)"]


def test_messagef_formats_only_for_first_report(recorder):
    formatted = []

    class Tracked:
        def __str__(self):
            formatted.append(1)
            return "tracked"

    ctx = new_context(background(), recorder)
    err = ValueError("x")

    capture_messagef(ctx, err, "%s", Tracked())
    capture_messagef(ctx, err, "%s", Tracked())
    capture_messagef(background(), ValueError("y"), "%s", Tracked())

    assert formatted == [1]
    assert recorder.messages == ["tracked"]


class UnprintableError(Exception):
    def __str__(self):
        raise RuntimeError("cannot render")


def test_unprintable_error_without_binding_is_silent():
    capture(background(), UnprintableError())


def test_unprintable_error_still_reports(recorder):
    ctx = new_context(background(), recorder)
    err = UnprintableError()

    capture(ctx, err)

    assert recorder.errors == [err]
    assert recorder.messages == ["<unprintable UnprintableError>"]
