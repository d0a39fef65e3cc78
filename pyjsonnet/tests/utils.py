"""
Utility functions shared across pyjsonnet tests.
"""
from pathlib import Path

from pyjsonnet.exceptions import TraceFrame
from pyjsonnet.interpreter import evaluate
from pyjsonnet.parser import parse
from pyjsonnet.static_analysis import check

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def parse_source(source: str):
    """
    Parse source code and return the AST.
    """
    return parse(source, "<test>")


def run_source(source: str, **kwargs) -> str:
    """
    Parse, check and evaluate source code, returning the manifested output.
    """
    ast = parse_source(source)
    check(ast)
    return evaluate(ast, **kwargs)


def make_frames(count: int) -> list[TraceFrame]:
    """
    Build ``count`` distinguishable stack frames.
    """
    return [TraceFrame(f"<test>:{i}:1", f"function <f{i}>") for i in range(count)]
