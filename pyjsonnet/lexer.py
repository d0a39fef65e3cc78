"""Lexer.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, value and source location.

Tokens cover literals (numbers, strings), keywords (``local``, ``function``,
``if`` …), operators and delimiters. Comments beginning with ``//`` or ``#``,
or enclosed in ``/* … */``, are skipped while keeping line numbers accurate.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import json
import math
import re

from pyjsonnet.exceptions import Location, StaticError

KEYWORDS = {
    "local": "LOCAL",
    "function": "FUNCTION",
    "if": "IF",
    "then": "THEN",
    "else": "ELSE",
    "error": "ERROR",
    "true": "TRUE",
    "false": "FALSE",
    "null": "NULL",
}

TOKEN_SPECIFICATION = [
    # Literals
    ('NUMBER',    r'\d+(?:\.\d+)?(?:[eE][+-]?\d+)?'),
    ('STRING',    r'"(?:[^"\\\n]|\\.)*"'),
    ('SQSTRING',  r"'(?:[^'\\\n]|\\.)*'"),

    # Identifiers and keywords
    ('ID',        r'[A-Za-z_][A-Za-z0-9_]*'),

    # Comments
    ('BLOCKCOMMENT', r'/\*(?:.|\n)*?\*/'),
    ('OPENCOMMENT', r'/\*'),
    ('COMMENT',   r'(?://|\#)[^\n]*'),

    # Operators
    ('EQ',        r'=='),
    ('NE',        r'!='),
    ('LE',        r'<='),
    ('GE',        r'>='),
    ('AND',       r'&&'),
    ('OR',        r'\|\|'),
    ('LT',        r'<'),
    ('GT',        r'>'),
    ('NOT',       r'!'),
    ('ASSIGN',    r'='),
    ('PLUS',      r'\+'),
    ('MINUS',     r'-'),
    ('MUL',       r'\*'),
    ('DIV',       r'/'),
    ('MOD',       r'%'),

    # Delimiters
    ('LBRACE',    r'\{'),
    ('RBRACE',    r'\}'),
    ('LPAREN',    r'\('),
    ('RPAREN',    r'\)'),
    ('LBRACKET',  r'\['),
    ('RBRACKET',  r'\]'),
    ('COMMA',     r','),
    ('SEMI',      r';'),
    ('COLON',     r':'),
    ('DOT',       r'\.'),

    # Miscellaneous
    ('NEWLINE',   r'\n'),
    ('SKIP',      r'[ \t\r]+'),
    ('MISMATCH',  r'.'),
]

TOKEN_REGEX = re.compile('|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION))


class Token:
    """
    Represents a lexical token with a type, value and location.
    """
    def __init__(self, type_, value, location):
        self.type = type_
        self.value = value
        self.location = location

    @property
    def line(self) -> int:
        return self.location.line

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, {self.location})"


_SINGLE_QUOTE_ESCAPES = re.compile(r'\\(.)|"')


def _requote(match_obj) -> str:
    """
    Rewrite a single-quoted string body into double-quoted JSON form.
    """
    if match_obj.group(0) == '"':
        return '\\"'
    if match_obj.group(1) == "'":
        return "'"
    return match_obj.group(0)


def _decode_string(raw: str, location: Location) -> str:
    """
    Decode the escapes of a quoted string literal.
    """
    body = raw[1:-1]
    if raw[0] == "'":
        body = _SINGLE_QUOTE_ESCAPES.sub(_requote, body)
    try:
        return json.loads(f'"{body}"', strict=False)
    except json.JSONDecodeError as e:
        raise StaticError(location, f"Invalid string literal {raw}") from e


def tokenize(code: str, file: str = "<stdin>") -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.
        file (str): Label used in token locations.

    Returns:
        list[Token]: The tokens, terminated by an ``EOF`` token.

    Raises:
        StaticError: If an unexpected character is encountered.
    """
    tokens = []
    line_num = 1
    line_start = 0

    for match_obj in TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()
        location = Location(file, line_num, match_obj.start() - line_start + 1)

        if kind == 'NEWLINE':
            line_num += 1
            line_start = match_obj.end()
            continue
        if kind in ('SKIP', 'COMMENT'):
            continue
        if kind == 'BLOCKCOMMENT':
            line_num += value.count('\n')
            if '\n' in value:
                line_start = match_obj.start() + value.rindex('\n') + 1
            continue
        if kind == 'OPENCOMMENT':
            raise StaticError(location, "Multi-line comment has no terminating */")
        if kind == 'MISMATCH':
            if value in ('"', "'"):
                raise StaticError(location, "Unterminated string")
            raise StaticError(location, f"Unexpected character '{value}'")

        if kind == 'NUMBER':
            number = float(value)
            if math.isinf(number):
                raise StaticError(location, f"Number literal out of range: {value}")
            tokens.append(Token('NUMBER', number, location))
        elif kind in ('STRING', 'SQSTRING'):
            tokens.append(Token('STRING', _decode_string(value, location), location))
        elif kind == 'ID':
            tokens.append(Token(KEYWORDS.get(value, 'ID'), value, location))
        else:
            tokens.append(Token(kind, value, location))

    tokens.append(Token('EOF', None, Location(file, line_num, len(code) - line_start + 1)))
    return tokens
