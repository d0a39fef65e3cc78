"""Unparser.

Converts an AST back into source text, used by ``--debug-ast``. Nested binary
expressions are fully parenthesized so the output shows how the program was
grouped.


File: unparser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import json
import re

from pyjsonnet.exceptions import StaticError
from pyjsonnet.lexer import KEYWORDS

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.fullmatch(name)) and name not in KEYWORDS


def _format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 2 ** 53:
        return str(int(value))
    return repr(value)


def _format_key(key) -> str:
    if key[0] == 'string':
        if _is_identifier(key[1]):
            return key[1]
        return json.dumps(key[1], ensure_ascii=False)
    return f"[{unparse(key)}]"


def unparse(node) -> str:
    """
    Convert an AST back into source text.

    Args:
        node (tuple): An expression node.

    Returns:
        str: Source text that parses to an equivalent node.
    """
    op = node[0]
    match op:
        case 'number':
            return _format_number(node[1])
        case 'string':
            return json.dumps(node[1], ensure_ascii=False)
        case 'literal':
            return {True: 'true', False: 'false', None: 'null'}[node[1]]
        case 'var':
            return node[1]
        case 'array':
            return '[' + ', '.join(unparse(e) for e in node[1]) + ']'
        case 'object':
            if not node[1]:
                return '{ }'
            fields = ', '.join(f"{_format_key(k)}: {unparse(v)}" for k, v in node[1])
            return '{ ' + fields + ' }'
        case 'local':
            binds = ', '.join(f"{name} = {unparse(value)}" for name, value in node[1])
            return f"local {binds}; {unparse(node[2])}"
        case 'if':
            text = f"if {unparse(node[1])} then {unparse(node[2])}"
            if node[3] is not None:
                text += f" else {unparse(node[3])}"
            return text
        case 'function':
            return f"function({', '.join(node[1])}) {unparse(node[2])}"
        case 'error':
            return f"error {unparse(node[1])}"
        case 'binary':
            return f"({_unparse_target(node[2])} {node[1]} {unparse(node[3])})"
        case 'unary':
            return f"{node[1]}({unparse(node[2])})"
        case 'apply':
            return f"{_unparse_target(node[1])}({', '.join(unparse(a) for a in node[2])})"
        case 'index':
            index = node[2]
            if index[0] == 'string' and _is_identifier(index[1]):
                return f"{_unparse_target(node[1])}.{index[1]}"
            return f"{_unparse_target(node[1])}[{unparse(index)}]"
        case _:
            raise StaticError(node[-1], f"Invalid AST node: {op}")


def _unparse_target(node) -> str:
    # Forms that extend to the right must be wrapped before a postfix.
    text = unparse(node)
    if node[0] in ('local', 'if', 'function', 'error', 'unary'):
        return f"({text})"
    return text
