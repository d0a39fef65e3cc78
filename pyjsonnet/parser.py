"""Parser.

This is a recursive descent parser that operates in an LL(1) fashion.

1. Parsing
The parser implements a set of mutually recursive methods (expr(), _binary(),
_unary(), _postfix(), _primary()), each corresponding to a nonterminal in the
grammar. Binary operators are parsed by a single method that walks the
precedence table from the loosest binding level to the tightest.

2. Token Consumption
Tokens are consumed with eat(), which checks the current token against the
expected type and advances the stream if they match.

3. AST
Nodes are tuples. The first element names the node, the last element is the
Location of the first token of the construct:

    ('number', value, loc)                ('string', value, loc)
    ('literal', True | False | None, loc) ('var', name, loc)
    ('array', [elements], loc)            ('object', [(key, value)], loc)
    ('local', [(name, expr)], body, loc)  ('if', cond, then, else | None, loc)
    ('function', [params], body, loc)     ('error', expr, loc)
    ('binary', op, left, right, loc)      ('unary', op, operand, loc)
    ('apply', target, [args], loc)        ('index', target, index, loc)


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from pyjsonnet.exceptions import StaticError
from pyjsonnet.lexer import tokenize

# Loosest binding first.
PRECEDENCE = [
    ('OR',),
    ('AND',),
    ('EQ', 'NE'),
    ('LT', 'LE', 'GT', 'GE'),
    ('PLUS', 'MINUS'),
    ('MUL', 'DIV', 'MOD'),
]

UNARY_OPERATORS = ('MINUS', 'PLUS', 'NOT')

LITERALS = {'TRUE': True, 'FALSE': False, 'NULL': None}


def _describe(tok) -> str:
    if tok.type == 'EOF':
        return "end of file"
    if tok.type == 'STRING':
        return f'string "{tok.value}"'
    if tok.type == 'NUMBER':
        return f"number {tok.value:g}"
    return f"'{tok.value}'"


class Parser:
    """
    Jsonnet parser.
    """
    def __init__(self, tokens: list, file: str):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending with ``EOF``.
            file (str): The name of the program.
        """
        self._tokens = tokens
        self._position = 0
        self._source_file = file

    @property
    def curr_token(self):
        return self._tokens[self._position]

    def eat(self, token_type: str):
        """
        Consume the current token if it matches the expected type.

        Returns:
            Token: The consumed token.

        Raises:
            StaticError: If the token does not match the expected type.
        """
        tok = self.curr_token
        if tok.type != token_type:
            raise StaticError(
                tok.location,
                f"Expected token {token_type} but got {_describe(tok)}"
            )
        self._position += 1
        return tok

    def _accept(self, token_type: str) -> bool:
        if self.curr_token.type == token_type:
            self._position += 1
            return True
        return False

    def parse(self) -> tuple:
        """
        Parse the whole program.

        Returns:
            tuple: The root expression node.
        """
        node = self.expr()
        if self.curr_token.type != 'EOF':
            raise StaticError(
                self.curr_token.location,
                f"Did not expect: {_describe(self.curr_token)}"
            )
        return node

    def expr(self) -> tuple:
        """
        Parse an expression, including the forms that extend as far right as possible.
        """
        tok = self.curr_token
        if tok.type == 'LOCAL':
            return self._local()
        if tok.type == 'IF':
            self.eat('IF')
            cond = self.expr()
            self.eat('THEN')
            branch_true = self.expr()
            branch_false = self.expr() if self._accept('ELSE') else None
            return ('if', cond, branch_true, branch_false, tok.location)
        if tok.type == 'FUNCTION':
            self.eat('FUNCTION')
            params = self._params()
            return ('function', params, self.expr(), tok.location)
        if tok.type == 'ERROR':
            self.eat('ERROR')
            return ('error', self.expr(), tok.location)
        return self._binary(0)

    def _local(self) -> tuple:
        """
        Parse ``local a = e1, f(x) = e2; body``.
        """
        start = self.eat('LOCAL')
        binds = []
        while True:
            name_tok = self.eat('ID')
            if self.curr_token.type == 'LPAREN':
                params = self._params()
                self.eat('ASSIGN')
                value = ('function', params, self.expr(), name_tok.location)
            else:
                self.eat('ASSIGN')
                value = self.expr()
            binds.append((name_tok.value, value))
            if not self._accept('COMMA'):
                break
        self.eat('SEMI')
        return ('local', binds, self.expr(), start.location)

    def _params(self) -> list[str]:
        self.eat('LPAREN')
        params = []
        while self.curr_token.type != 'RPAREN':
            params.append(self.eat('ID').value)
            if not self._accept('COMMA'):
                break
        self.eat('RPAREN')
        return params

    def _binary(self, level: int) -> tuple:
        if level == len(PRECEDENCE):
            return self._unary()
        left = self._binary(level + 1)
        while self.curr_token.type in PRECEDENCE[level]:
            op_tok = self.curr_token
            self.eat(op_tok.type)
            right = self._binary(level + 1)
            left = ('binary', op_tok.value, left, right, op_tok.location)
        return left

    def _unary(self) -> tuple:
        tok = self.curr_token
        if tok.type in UNARY_OPERATORS:
            self.eat(tok.type)
            return ('unary', tok.value, self._unary(), tok.location)
        return self._postfix()

    def _postfix(self) -> tuple:
        node = self._primary()
        while True:
            tok = self.curr_token
            if tok.type == 'LPAREN':
                self.eat('LPAREN')
                args = []
                while self.curr_token.type != 'RPAREN':
                    args.append(self.expr())
                    if not self._accept('COMMA'):
                        break
                self.eat('RPAREN')
                node = ('apply', node, args, tok.location)
            elif tok.type == 'DOT':
                self.eat('DOT')
                field = self.eat('ID')
                node = ('index', node, ('string', field.value, field.location), tok.location)
            elif tok.type == 'LBRACKET':
                self.eat('LBRACKET')
                index = self.expr()
                self.eat('RBRACKET')
                node = ('index', node, index, tok.location)
            else:
                return node

    def _primary(self) -> tuple:
        """
        Parse a literal, variable, array, object or parenthesized expression.

        Raises:
            StaticError: If the syntax is invalid or unexpected.
        """
        tok = self.curr_token
        if tok.type == 'NUMBER':
            self.eat('NUMBER')
            return ('number', tok.value, tok.location)

        elif tok.type == 'STRING':
            self.eat('STRING')
            return ('string', tok.value, tok.location)

        elif tok.type in LITERALS:
            self.eat(tok.type)
            return ('literal', LITERALS[tok.type], tok.location)

        elif tok.type == 'ID':
            self.eat('ID')
            return ('var', tok.value, tok.location)

        elif tok.type == 'LPAREN':
            self.eat('LPAREN')
            node = self.expr()
            self.eat('RPAREN')
            return node

        elif tok.type == 'LBRACKET':
            self.eat('LBRACKET')
            elements = []
            while self.curr_token.type != 'RBRACKET':
                elements.append(self.expr())
                if not self._accept('COMMA'):
                    break
            self.eat('RBRACKET')
            return ('array', elements, tok.location)

        elif tok.type == 'LBRACE':
            return self._object()

        elif tok.type in ('LOCAL', 'IF', 'FUNCTION', 'ERROR'):
            return self.expr()

        raise StaticError(tok.location, f"Unexpected: {_describe(tok)} while parsing terminal")

    def _object(self) -> tuple:
        start = self.eat('LBRACE')
        fields = []
        while self.curr_token.type != 'RBRACE':
            key_tok = self.curr_token
            if key_tok.type == 'ID':
                self.eat('ID')
                key = ('string', key_tok.value, key_tok.location)
            elif key_tok.type == 'STRING':
                self.eat('STRING')
                key = ('string', key_tok.value, key_tok.location)
            elif key_tok.type == 'LBRACKET':
                self.eat('LBRACKET')
                key = self.expr()
                self.eat('RBRACKET')
            else:
                raise StaticError(
                    key_tok.location,
                    f"Expected a field name but got {_describe(key_tok)}"
                )
            self.eat('COLON')
            fields.append((key, self.expr()))
            if not self._accept('COMMA'):
                break
        self.eat('RBRACE')
        return ('object', fields, start.location)


def parse(code: str, file: str) -> tuple:
    """
    Tokenize and parse a program.

    Raises:
        StaticError: On any lexical or syntax error.
    """
    parser = Parser(tokenize(code, file), file)
    try:
        return parser.parse()
    except RecursionError:
        raise StaticError(parser.curr_token.location, "Exceeded maximum nesting depth") from None
