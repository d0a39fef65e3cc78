"""Tests for failure rendering and stack trace truncation."""

import io

import pytest

from pyjsonnet.diagnostics import ELLIPSIS, format_failure, format_stack_trace, render_failure
from pyjsonnet.exceptions import EvaluationError, Location, StaticError, TraceFrame
from pyjsonnet.tests.utils import make_frames


def frame_line(i):
    return f"\t<test>:{i}:1\tfunction <f{i}>"


def test_twenty_one_frames_elide_one():
    lines = format_stack_trace(make_frames(21))
    assert lines == [frame_line(i) for i in range(10)] + [ELLIPSIS] + [frame_line(i) for i in range(11, 21)]
    assert lines.count(ELLIPSIS) == 1


def test_twenty_frames_print_everything():
    lines = format_stack_trace(make_frames(20))
    assert lines == [frame_line(i) for i in range(20)]
    assert ELLIPSIS not in lines


def test_long_trace_single_ellipsis():
    lines = format_stack_trace(make_frames(100))
    assert len(lines) == 21
    assert lines[10] == ELLIPSIS
    assert lines[11] == frame_line(90)
    assert lines[-1] == frame_line(99)


@pytest.mark.parametrize("count", [0, 1, 5])
def test_short_traces(count):
    assert format_stack_trace(make_frames(count)) == [frame_line(i) for i in range(count)]


def test_custom_bounds():
    lines = format_stack_trace(make_frames(6), max_above=1, max_below=2)
    assert lines == [frame_line(0), ELLIPSIS, frame_line(4), frame_line(5)]


def test_static_failure():
    error = StaticError(Location("<cmdline>", 1, 4), "Unknown variable: x")
    assert format_failure(error) == ["STATIC ERROR: <cmdline>:1:4: Unknown variable: x"]


def test_runtime_failure():
    error = EvaluationError("boom", [TraceFrame("a:1:1", "function <f>"), TraceFrame("a:2:1", "")])
    assert format_failure(error) == ["RUNTIME ERROR: boom", "\ta:1:1\tfunction <f>", "\ta:2:1\t"]


def test_render_writes_lines():
    stream = io.StringIO()
    render_failure(EvaluationError("boom", make_frames(25)), stream)
    lines = stream.getvalue().splitlines()
    assert lines[0] == "RUNTIME ERROR: boom"
    assert len(lines) == 22
