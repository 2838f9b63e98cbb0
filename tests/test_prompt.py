"""Tests for the confirmation prompt"""
import pytest

from git_shortcuts.exceptions import AbortedError
from git_shortcuts.utils.prompt import confirm


def answering(value):
    def _input(prompt):
        assert prompt.endswith(" ([y]/n)?: ")
        if isinstance(value, Exception):
            raise value
        return value
    return _input


@pytest.mark.parametrize("answer", ["", "y", "yes", "y "])
def test_accepting_answers(answer):
    confirm("delete?", input_func=answering(answer))


def test_eof_accepts():
    confirm("delete?", input_func=answering(EOFError()))


@pytest.mark.parametrize("answer", ["n", "no", "Y", "x", " ", "  y", "  y  ", " n"])
def test_declining_answers(answer):
    with pytest.raises(AbortedError):
        confirm("delete?", input_func=answering(answer))


def test_assume_yes_never_asks():
    confirm("delete?", assume_yes=True, input_func=answering(AssertionError("asked")))
