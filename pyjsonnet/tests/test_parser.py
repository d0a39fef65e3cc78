"""Tests for the lexer and parser."""

import pytest

from pyjsonnet.exceptions import Location, StaticError
from pyjsonnet.lexer import tokenize
from pyjsonnet.tests.utils import parse_source


def test_token_locations():
    tokens = tokenize("local x = 1;\n  x", "<test>")
    assert [t.type for t in tokens] == ['LOCAL', 'ID', 'ASSIGN', 'NUMBER', 'SEMI', 'ID', 'EOF']
    assert tokens[5].location == Location("<test>", 2, 3)


def test_comments_are_skipped():
    tokens = tokenize("// one\n# two\n/* three\nfour */ 5", "<test>")
    assert [t.type for t in tokens] == ['NUMBER', 'EOF']
    assert tokens[0].line == 4


def test_string_escapes():
    tokens = tokenize(r'"a\n\"b\"" ' + r"'it\'s \"q\"'", "<test>")
    assert tokens[0].value == 'a\n"b"'
    assert tokens[1].value == 'it\'s "q"'


@pytest.mark.parametrize("source, message", [
    ('"abc', "Unterminated string"),
    ("1 /* open", "Multi-line comment has no terminating */"),
    ("1 $ 2", "Unexpected character '$'"),
])
def test_lexical_errors(source, message):
    with pytest.raises(StaticError) as excinfo:
        tokenize(source, "<test>")
    assert excinfo.value.message == message


def test_precedence():
    ast = parse_source("1 + 2 * 3")
    assert ast[0] == 'binary' and ast[1] == '+'
    assert ast[3][0] == 'binary' and ast[3][1] == '*'


def test_left_associative():
    ast = parse_source("8 - 4 - 2")
    assert ast[1] == '-'
    assert ast[2][0] == 'binary'
    assert ast[3] == ('number', 2.0, Location("<test>", 1, 9))


def test_local_function_sugar():
    ast = parse_source("local f(a, b) = a; f(1, 2)")
    assert ast[0] == 'local'
    name, value = ast[1][0]
    assert name == 'f'
    assert value[0] == 'function' and value[1] == ['a', 'b']
    assert ast[2][0] == 'apply'


def test_object_keys():
    ast = parse_source('{a: 1, "b c": 2, [k]: 3,}')
    keys = [key for key, _ in ast[1]]
    assert keys[0][:2] == ('string', 'a')
    assert keys[1][:2] == ('string', 'b c')
    assert keys[2][:2] == ('var', 'k')


def test_field_access_and_index():
    ast = parse_source("x.y[0]")
    assert ast[0] == 'index'
    assert ast[1][0] == 'index'
    assert ast[1][2][:2] == ('string', 'y')


def test_if_without_else():
    ast = parse_source("if true then 1")
    assert ast[0] == 'if'
    assert ast[3] is None


def test_keyword_expression_as_operand():
    ast = parse_source("1 + if true then 2 else 3")
    assert ast[3][0] == 'if'


@pytest.mark.parametrize("source", ["1 +", "{a 1}", "[1 2]", "local x = 1 x", "(1", "1 2"])
def test_syntax_errors(source):
    with pytest.raises(StaticError):
        parse_source(source)


def test_syntax_error_location():
    with pytest.raises(StaticError) as excinfo:
        parse_source("{a: }")
    assert excinfo.value.location == Location("<test>", 1, 5)
    assert str(excinfo.value).startswith("<test>:1:5: ")


def test_number_literal_out_of_range():
    with pytest.raises(StaticError) as excinfo:
        tokenize("1e400", "<test>")
    assert excinfo.value.message == "Number literal out of range: 1e400"
    assert excinfo.value.location == Location("<test>", 1, 1)


def test_deep_nesting_is_a_static_error():
    with pytest.raises(StaticError) as excinfo:
        parse_source("[" * 2000 + "]" * 2000)
    assert excinfo.value.message == "Exceeded maximum nesting depth"
    assert excinfo.value.location.file == "<test>"
