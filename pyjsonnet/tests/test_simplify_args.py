"""Tests for command-line argument normalization."""

import pytest

from pyjsonnet.args import simplify_args


def test_combined_short_options_are_split():
    assert simplify_args(["-abc"]) == ("-a", "-b", "-c")


@pytest.mark.parametrize("token", ["-es", "-xyz", "-s10", "-e1+1"])
def test_split_tokens_reconstruct_original(token):
    result = simplify_args([token])
    assert len(result) == len(token) - 1
    assert all(len(t) == 2 and t[0] == "-" for t in result)
    assert "-" + "".join(t[1] for t in result) == token


@pytest.mark.parametrize("token", ["-e", "-", "-1", "--exec", "--", "file.jsonnet", ""])
def test_short_and_long_tokens_pass_through(token):
    assert simplify_args([token]) == (token,)


def test_end_of_options_copies_rest_verbatim():
    argv = ["-es", "10", "--", "-abc", "--help", "-e"]
    assert simplify_args(argv) == ("-e", "-s", "10", "--", "-abc", "--help", "-e")


def test_end_of_options_is_emitted_first():
    assert simplify_args(["--", "--"]) == ("--", "--")


def test_tokens_after_double_dash_option_still_split():
    assert simplify_args(["--debug-ast", "-ee"]) == ("--debug-ast", "-e", "-e")


def test_empty_argv():
    assert simplify_args([]) == ()
