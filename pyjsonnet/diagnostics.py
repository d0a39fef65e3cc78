"""Failure rendering.

Formats static and runtime failures for the terminal. Long stack traces keep
the innermost and outermost frames and replace the middle with a single
``...`` line.


File: diagnostics.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from pyjsonnet.exceptions import EvaluationError, JsonnetError, StaticError

MAX_ABOVE = 10
MAX_BELOW = 10
ELLIPSIS = "\t..."


def format_stack_trace(frames, max_above: int = MAX_ABOVE, max_below: int = MAX_BELOW) -> list[str]:
    """
    Format stack frames, eliding the middle of long traces.

    Frames with index below ``max_above``, or within ``max_below`` of the end,
    are printed as ``\\t<location>\\t<name>``. The rest are replaced by one
    ellipsis line, emitted where the first skipped frame would have been.

    Parameters:
        frames (Sequence[TraceFrame]): The stack, in the order it was recorded.
        max_above (int): Frames kept from the start.
        max_below (int): Frames kept from the end.

    Returns:
        list[str]: The lines to print, without trailing newlines.
    """
    size = len(frames)
    lines = []
    for i, frame in enumerate(frames):
        if max_above <= i < size - max_below:
            if i == max_above:
                lines.append(ELLIPSIS)
        else:
            lines.append(f"\t{frame.location}\t{frame.name}")
    return lines


def format_failure(error: JsonnetError) -> list[str]:
    """
    Format a failure raised by the language core.

    Returns:
        list[str]: The lines to print.
    """
    match error:
        case StaticError():
            return [f"STATIC ERROR: {error}"]
        case EvaluationError(message, stack_trace):
            return [f"RUNTIME ERROR: {message}"] + format_stack_trace(stack_trace)
        case _:
            raise TypeError(f"Cannot render {type(error).__name__}")


def render_failure(error: JsonnetError, stream) -> None:
    """
    Write a failure to ``stream``.
    """
    for line in format_failure(error):
        print(line, file=stream)
