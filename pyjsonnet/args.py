"""Command-line arguments.

Arguments go through two passes before anything is read or evaluated.

1. Normalization
``simplify_args()`` expands combined short options, so ``-abc`` becomes
``-a -b -c``. Everything from a literal ``--`` onwards is copied through
untouched, since a program given with ``-e`` may itself begin with ``-``.

2. Option parsing
``parse_args()`` scans the normalized tokens with a cursor. Each option is
handled by a transition that takes the current request and returns a new
one; requests are frozen dataclasses and are never updated in place. Bad
input raises ``ConfigurationError`` and the help flags raise
``UsageRequested``. Neither pass prints or exits: that is left to the caller.


File: args.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import re
from dataclasses import dataclass, replace

from pyjsonnet.exceptions import ConfigurationError, UsageRequested

END_OF_OPTIONS = "--"
STDIN_FILENAME = "-"

USAGE = (
    "Usage:\n"
    "jsonnet {<option>} [<filename>]\n"
    "where <filename> defaults to - (stdin)\n"
    "and <option> can be:\n"
    "    -h / --help            This message\n"
    "    -e / --exec            Treat filename as code (requires explicit filename)\n"
    "    -s / --max-stack <n>   Number of allowed stack frames\n"
    "    --gc-min-objects       Do not run garbage collector until this many\n"
    "    --gc-growth-trigger    Run garbage collector after this amount of object growth\n"
    "    --debug-ast            Unparse the parsed AST without executing it\n"
    "\n"
    "Multichar options are expanded e.g. -abc becomes -a -b -c.\n"
    "The -- option suppresses option processing.  Note that since jsonnet programs can\n"
    "begin with -, it is advised to use -- with -e if the program is unknown."
)

# strtol/strtod accept leading whitespace and a sign, nothing trailing.
_INTEGER = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")
_NUMBER = re.compile(
    r"[ \t\n\v\f\r]*[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ExecutionRequest:
    """
    Everything needed to run one program.
    """
    filename: str = STDIN_FILENAME
    filename_is_code: bool = False
    max_stack: int = 500
    gc_min_objects: int = 1000
    gc_growth_trigger: float = 2.0
    debug_ast: bool = False

    @property
    def reads_stdin(self) -> bool:
        return not self.filename_is_code and self.filename == STDIN_FILENAME


def simplify_args(argv) -> tuple[str, ...]:
    """
    Expand ``-abc`` into ``-a -b -c``.

    Parameters:
        argv (Iterable[str]): The raw process arguments, without the program name.

    Returns:
        tuple[str, ...]: The normalized tokens.
    """
    argv = list(argv)
    result = []
    for i, arg in enumerate(argv):
        if arg == END_OF_OPTIONS:
            result.extend(argv[i:])
            break
        if len(arg) > 2 and arg[0] == "-" and arg[1] != "-":
            result.extend("-" + ch for ch in arg[1:])
        else:
            result.append(arg)
    return tuple(result)


def parse_integer(raw: str) -> int:
    """
    Parse a base 10 integer, rejecting empty strings and trailing garbage.

    Raises:
        ConfigurationError: If the whole string is not an integer.
    """
    if not _INTEGER.fullmatch(raw):
        raise ConfigurationError(f'Invalid integer "{raw}"')
    return int(raw)


def parse_number(raw: str) -> float:
    """
    Parse a floating point number, rejecting empty strings and trailing garbage.

    Raises:
        ConfigurationError: If the whole string is not a number.
    """
    if not _NUMBER.fullmatch(raw):
        raise ConfigurationError(f'Invalid number "{raw}"')
    return float(raw)


def _next_arg(tokens: tuple, cursor: int) -> tuple[int, str]:
    """
    Step onto the value following an option.

    Returns:
        tuple[int, str]: The new cursor and the raw value.
    """
    cursor += 1
    if cursor >= len(tokens):
        raise ConfigurationError("Expected another commandline argument.")
    return cursor, tokens[cursor]


def _set_max_stack(request: ExecutionRequest, raw: str) -> ExecutionRequest:
    value = parse_integer(raw)
    if value < 1:
        raise ConfigurationError(f"Invalid --max-stack value {value}")
    return replace(request, max_stack=value)


def _set_gc_min_objects(request: ExecutionRequest, raw: str) -> ExecutionRequest:
    value = parse_integer(raw)
    if value < 1:
        raise ConfigurationError(f"Invalid --gc-min-objects value {value}")
    return replace(request, gc_min_objects=value)


def _set_gc_growth_trigger(request: ExecutionRequest, raw: str) -> ExecutionRequest:
    value = parse_number(raw)
    if value < 0:
        raise ConfigurationError(f'Invalid --gc-growth-trigger "{raw}"')
    return replace(request, gc_growth_trigger=value)


HELP_OPTIONS = frozenset({"-h", "--help"})

VALUE_OPTIONS = {
    "-s": _set_max_stack,
    "--max-stack": _set_max_stack,
    "--gc-min-objects": _set_gc_min_objects,
    "--gc-growth-trigger": _set_gc_growth_trigger,
}

FLAG_OPTIONS = {
    "-e": "filename_is_code",
    "--exec": "filename_is_code",
    "--debug-ast": "debug_ast",
}


def _step(tokens: tuple, cursor: int, request: ExecutionRequest, positional: tuple):
    """
    Consume the option at ``cursor``.

    Returns:
        The cursor of the next unread token, the updated request and the
        updated positional arguments.

    Raises:
        UsageRequested: On a help flag.
        ConfigurationError: If an option value is missing or invalid.
    """
    arg = tokens[cursor]
    if arg in HELP_OPTIONS:
        raise UsageRequested()
    if arg == END_OF_OPTIONS:
        return len(tokens), request, positional + tokens[cursor + 1:]
    if arg in VALUE_OPTIONS:
        cursor, raw = _next_arg(tokens, cursor)
        return cursor + 1, VALUE_OPTIONS[arg](request, raw), positional
    if arg in FLAG_OPTIONS:
        return cursor + 1, replace(request, **{FLAG_OPTIONS[arg]: True}), positional
    return cursor + 1, request, positional + (arg,)


def parse_args(tokens) -> ExecutionRequest:
    """
    Build an execution request from normalized tokens.

    Parameters:
        tokens (Iterable[str]): Output of ``simplify_args()``.

    Returns:
        ExecutionRequest: The frozen request.

    Raises:
        UsageRequested: If ``-h`` or ``--help`` is reached.
        ConfigurationError: On any invalid or contradictory argument.
    """
    tokens = tuple(tokens)
    request = ExecutionRequest()
    positional: tuple[str, ...] = ()
    cursor = 0
    while cursor < len(tokens):
        cursor, request, positional = _step(tokens, cursor, request, positional)

    if len(positional) > 1:
        raise ConfigurationError(f'Filename already specified as "{positional[0]}"')
    if request.filename_is_code and not positional:
        raise ConfigurationError("Must give filename when using -e, --exec")
    if positional:
        request = replace(request, filename=positional[0])
    return request
