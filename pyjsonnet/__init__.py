"""Jsonnet command-line driver and reference language core.

The driver turns command-line arguments into an ExecutionRequest, reads the
program, and runs it through parse, static analysis and evaluation. The
language stages are reached through ``pyjsonnet.driver.Stages`` so another
core can be plugged in.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from .args import ExecutionRequest, parse_args, simplify_args
from .driver import Stages, main, run_pipeline

__all__ = [
    "ExecutionRequest",
    "Stages",
    "main",
    "parse_args",
    "run_pipeline",
    "simplify_args",
]
