"""Errors.

Every failure the driver can report is one of the classes below. Configuration
errors come from the option parser, input errors from the input acquirer,
static errors from lexing, parsing and static analysis, and evaluation errors
from the interpreter. Only the top-level in ``pyjsonnet.driver`` catches them.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from collections import namedtuple


TraceFrame = namedtuple("TraceFrame", ["location", "name"])


class Location:
    """
    A position in a source file.
    """
    def __init__(self, file, line, column):
        self.file = file
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"Location({self.file!r}, {self.line}, {self.column})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return (self.file, self.line, self.column) == (other.file, other.line, other.column)

    def __hash__(self) -> int:
        return hash((self.file, self.line, self.column))


class ConfigurationError(Exception):
    """
    Error for malformed or contradictory command-line arguments.
    """
    def __init__(self, message):
        self.message = message
        super().__init__(message)


class UsageRequested(Exception):
    """
    Control flow handling for the help flags.
    """
    pass


class InputError(Exception):
    """
    Error for input that cannot be opened or decoded.
    """
    def __init__(self, path, reason=None, action="Opening input file"):
        self.path = path
        self.reason = reason
        message = f"{action}: {path}"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)


class JsonnetError(Exception):
    """
    Base class for failures raised by the language core.
    """
    pass


class StaticError(JsonnetError):
    """
    Error detected before evaluation begins.
    """
    __match_args__ = ("location", "message")

    def __init__(self, location, message):
        self.location = location
        self.message = message
        super().__init__(f"{location}: {message}" if location is not None else message)


class EvaluationError(JsonnetError):
    """
    Error raised during evaluation, with the call stack at that point.
    """
    __match_args__ = ("message", "stack_trace")

    def __init__(self, message, stack_trace=None):
        self.message = message
        self.stack_trace = list(stack_trace) if stack_trace is not None else []
        super().__init__(message)
