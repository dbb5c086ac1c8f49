import pytest

from mddkit.errors import ModelicaError, message, warning


def test_message_goes_to_stdout_unchanged(capsys):
    message("SoftingCAN: Initialize channel ...")
    captured = capsys.readouterr()
    assert captured.out == "SoftingCAN: Initialize channel ..."
    assert captured.err == ""


def test_message_keeps_embedded_newlines(capsys):
    message("first\nsecond\n")
    assert capsys.readouterr().out == "first\nsecond\n"


def test_warning_goes_to_stderr(capsys):
    warning("careful\n")
    captured = capsys.readouterr()
    assert captured.err == "careful\n"
    assert captured.out == ""


def test_modelica_error_carries_message():
    error = ModelicaError("MDDUtilities.h: Could not open file x.\n")
    assert str(error) == "MDDUtilities.h: Could not open file x.\n"
    assert error.args == ("MDDUtilities.h: Could not open file x.\n",)


def test_modelica_error_is_caught_as_runtime_error():
    error = ModelicaError("boom")
    with pytest.raises(RuntimeError, match="boom") as info:
        raise error
    assert info.value is error
    assert str(info.value) == "boom"