# tests/conftest.py
import pytest

from statecomb.Parsec import ParseError, ParseState


@pytest.fixture
def initial_state():
    def _make(input_data, index=0):
        return ParseState(input_data, index)

    return _make


@pytest.fixture
def erroring_state():
    def _make(input_data, index=0):
        return ParseState(input_data, index).fail(ParseError("earlier failure", index, "test"))

    return _make
