"""Program input.

Resolves a request's filename into program text. The filename is either the
program itself (``-e``), ``-`` for standard input, or a path to read.


File: source.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import sys
from dataclasses import dataclass

from pyjsonnet.args import ExecutionRequest
from pyjsonnet.exceptions import InputError

CMDLINE_LABEL = "<cmdline>"
STDIN_LABEL = "<stdin>"


@dataclass(frozen=True)
class SourceText:
    """
    Program text and where it came from.
    """
    text: str
    label: str


def read_source(request: ExecutionRequest, stdin=None) -> SourceText:
    """
    Read the program named by the request.

    Parameters:
        request (ExecutionRequest): The parsed command line.
        stdin (TextIO | None): Stream to read for ``-``. Defaults to ``sys.stdin``.

    Returns:
        SourceText: The program text with its label.

    Raises:
        InputError: If the input cannot be opened or is not valid UTF-8.
    """
    if request.filename_is_code:
        return SourceText(request.filename, CMDLINE_LABEL)

    if request.reads_stdin:
        stream = stdin if stdin is not None else sys.stdin
        return SourceText(_read_text(stream, STDIN_LABEL), STDIN_LABEL)

    try:
        f = open(request.filename, "r", encoding="utf-8")
    except OSError as e:
        raise InputError(request.filename, e.strerror) from e
    with f:
        return SourceText(_read_text(f, request.filename), request.filename)


def _read_text(stream, path: str) -> str:
    try:
        return stream.read()
    except UnicodeDecodeError as e:
        raise InputError(path, "invalid UTF-8", action="Reading input") from e
