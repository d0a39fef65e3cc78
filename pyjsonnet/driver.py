"""Jsonnet command-line driver.

This is the main entry point for the jsonnet command.

Workflow:
1. The arguments are normalized and parsed into an ExecutionRequest.
2. The program text is read from the command line, a file, or stdin.
3. The Parser turns the text into an AST.
4. With --debug-ast the AST is unparsed and printed, and nothing else runs.
5. Otherwise the AST is statically checked, evaluated, and the result printed.

Every failure is raised as a typed exception and handled once, in main(),
which prints it to stderr and returns the exit status.


File: driver.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import os
import sys
from collections import namedtuple

from pyjsonnet import interpreter, parser, static_analysis, unparser
from pyjsonnet.args import USAGE, ExecutionRequest, parse_args, simplify_args
from pyjsonnet.diagnostics import render_failure
from pyjsonnet.exceptions import (
    ConfigurationError,
    InputError,
    JsonnetError,
    UsageRequested,
)
from pyjsonnet.lexer import tokenize
from pyjsonnet.source import SourceText, read_source

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

Stages = namedtuple("Stages", ["parse", "unparse", "static_check", "evaluate"])

DEFAULT_STAGES = Stages(
    parse=parser.parse,
    unparse=unparser.unparse,
    static_check=static_analysis.check,
    evaluate=interpreter.evaluate,
)


def print_usage(stream) -> None:
    """
    Print usage.
    """
    print(USAGE, file=stream)


def debug_print_tokens_ast(source: SourceText, ast) -> None:
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n", file=sys.stderr)
    print(tokenize(source.text, source.label), file=sys.stderr)
    print("\nAST:\n", file=sys.stderr)
    print(ast, file=sys.stderr)
    print(" ", file=sys.stderr)


def run_pipeline(request: ExecutionRequest, source: SourceText, stages: Stages | None = None) -> str:
    """
    Run a program through the language stages.

    Parameters:
        request (ExecutionRequest): The parsed command line.
        source (SourceText): The program to run.
        stages (Stages | None): The language core. Defaults to the bundled one.

    Returns:
        str: The text to print, either the unparsed AST or the program's value.

    Raises:
        StaticError: If parsing or static analysis fails.
        EvaluationError: If evaluation fails.
    """
    stages = stages if stages is not None else DEFAULT_STAGES
    ast = stages.parse(source.text, source.label)

    if os.environ.get('PYJSONNET_DEBUG') and stages is DEFAULT_STAGES:
        debug_print_tokens_ast(source, ast)

    if request.debug_ast:
        return stages.unparse(ast)

    stages.static_check(ast)
    return stages.evaluate(
        ast,
        request.max_stack,
        request.gc_min_objects,
        request.gc_growth_trigger,
    )


def main(argv: list[str], stages: Stages | None = None) -> int:
    """
    Entry point for the CLI.

    Parameters:
        argv (list[str]): The process arguments, without the program name.
        stages (Stages | None): The language core. Defaults to the bundled one.

    Returns:
        int: The process exit status.
    """
    try:
        request = parse_args(simplify_args(argv))
    except UsageRequested:
        print_usage(sys.stdout)
        return EXIT_SUCCESS
    except ConfigurationError as e:
        print(f"ERROR: {e.message}\n", file=sys.stderr)
        print_usage(sys.stderr)
        return EXIT_FAILURE

    try:
        source = read_source(request)
        output = run_pipeline(request, source, stages)
    except InputError as e:
        print(e, file=sys.stderr)
        return EXIT_FAILURE
    except JsonnetError as e:
        render_failure(e, sys.stderr)
        return EXIT_FAILURE

    print(output)
    return EXIT_SUCCESS


def run() -> None:
    """
    Console script entry point.
    """
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    run()
