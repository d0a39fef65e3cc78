"""Tests for reading program input."""

import io

import pytest

from pyjsonnet.args import ExecutionRequest
from pyjsonnet.exceptions import InputError
from pyjsonnet.source import SourceText, read_source


def test_literal_code():
    request = ExecutionRequest(filename="1+1", filename_is_code=True)
    assert read_source(request) == SourceText("1+1", "<cmdline>")


def test_literal_code_named_like_stdin():
    request = ExecutionRequest(filename="-", filename_is_code=True)
    assert read_source(request, stdin=io.StringIO("ignored")) == SourceText("-", "<cmdline>")


def test_stdin_stream():
    source = read_source(ExecutionRequest(), stdin=io.StringIO("{a: 1}\n"))
    assert source == SourceText("{a: 1}\n", "<stdin>")


def test_stdin_defaults_to_sys_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("[1, 2]"))
    assert read_source(ExecutionRequest()).text == "[1, 2]"


def test_file(tmp_path):
    path = tmp_path / "main.jsonnet"
    path.write_text("local x = 1; x", encoding="utf-8")
    source = read_source(ExecutionRequest(filename=str(path)))
    assert source.text == "local x = 1; x"
    assert source.label == str(path)


def test_missing_file(tmp_path):
    path = tmp_path / "missing.jsonnet"
    with pytest.raises(InputError) as excinfo:
        read_source(ExecutionRequest(filename=str(path)))
    assert excinfo.value.path == str(path)
    assert str(excinfo.value).startswith(f"Opening input file: {path}")
    assert "No such file or directory" in str(excinfo.value)


def test_file_with_invalid_utf8(tmp_path):
    path = tmp_path / "latin1.jsonnet"
    path.write_bytes(b'"caf\xe9"')
    with pytest.raises(InputError) as excinfo:
        read_source(ExecutionRequest(filename=str(path)))
    assert excinfo.value.path == str(path)
    assert str(excinfo.value) == f"Reading input: {path}: invalid UTF-8"


def test_stdin_with_invalid_utf8():
    stream = io.TextIOWrapper(io.BytesIO(b'"caf\xe9"'), encoding="utf-8")
    with pytest.raises(InputError) as excinfo:
        read_source(ExecutionRequest(), stdin=stream)
    assert str(excinfo.value) == "Reading input: <stdin>: invalid UTF-8"
