"""Tests for static analysis."""

import pytest

from pyjsonnet.exceptions import StaticError
from pyjsonnet.static_analysis import check
from pyjsonnet.tests.utils import parse_source


@pytest.mark.parametrize("source", [
    "local x = 1; x",
    "local a = b, b = 1; a",
    "local f(n) = if n == 0 then 0 else f(n - 1); f(3)",
    "function(x) x",
    "{a: local k = 'b'; {[k]: k}}",
])
def test_valid_programs(source):
    check(parse_source(source))


def test_unknown_variable():
    with pytest.raises(StaticError) as excinfo:
        check(parse_source("local x = 1; y"))
    assert excinfo.value.message == "Unknown variable: y"
    assert excinfo.value.location.column == 14


def test_locals_do_not_leak():
    with pytest.raises(StaticError, match="Unknown variable: x"):
        check(parse_source("[local x = 1; x, x]"))


def test_parameters_are_scoped_to_body():
    with pytest.raises(StaticError, match="Unknown variable: a"):
        check(parse_source("local f(a) = a; a"))


def test_duplicate_local():
    with pytest.raises(StaticError, match="Duplicate local var: x"):
        check(parse_source("local x = 1, x = 2; x"))


def test_duplicate_parameter():
    with pytest.raises(StaticError, match="Duplicate function parameter: a"):
        check(parse_source("function(a, b, a) a"))
