"""Static analysis.

Walks the AST once before evaluation and rejects programs that reference
variables nobody binds, bind the same name twice in one ``local``, or
declare the same function parameter twice.


File: static_analysis.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from pyjsonnet.exceptions import StaticError


def _check(node, scope: frozenset) -> None:
    op = node[0]
    loc = node[-1]
    match op:
        case 'number' | 'string' | 'literal':
            pass
        case 'var':
            if node[1] not in scope:
                raise StaticError(loc, f"Unknown variable: {node[1]}")
        case 'array':
            for element in node[1]:
                _check(element, scope)
        case 'object':
            for key, value in node[1]:
                _check(key, scope)
                _check(value, scope)
        case 'local':
            _, binds, body, _ = node
            names = set()
            for name, _value in binds:
                if name in names:
                    raise StaticError(loc, f"Duplicate local var: {name}")
                names.add(name)
            inner = scope | names
            for _name, value in binds:
                _check(value, inner)
            _check(body, inner)
        case 'if':
            _, cond, branch_true, branch_false, _ = node
            _check(cond, scope)
            _check(branch_true, scope)
            if branch_false is not None:
                _check(branch_false, scope)
        case 'function':
            _, params, body, _ = node
            if len(set(params)) != len(params):
                seen = set()
                for param in params:
                    if param in seen:
                        raise StaticError(loc, f"Duplicate function parameter: {param}")
                    seen.add(param)
            _check(body, scope | set(params))
        case 'error':
            _check(node[1], scope)
        case 'binary':
            _check(node[2], scope)
            _check(node[3], scope)
        case 'unary':
            _check(node[2], scope)
        case 'apply':
            _check(node[1], scope)
            for arg in node[2]:
                _check(arg, scope)
        case 'index':
            _check(node[1], scope)
            _check(node[2], scope)
        case _:
            raise StaticError(loc, f"Invalid AST node: {op}")


def check(ast: tuple) -> None:
    """
    Statically check a parsed program.

    Raises:
        StaticError: On the first problem found.
    """
    _check(ast, frozenset())
