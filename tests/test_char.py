import re

from hypothesis import given
from hypothesis import strategies as st

from statecomb.Char import (
    any_char,
    char,
    digit,
    digits,
    eof,
    letter,
    letters,
    newlines,
    regex,
    satisfy,
    sfloat,
    sint,
    space,
    spaces,
    string,
    uint,
    word,
)
from statecomb.Parsec import ParseState
from statecomb.Prim import run_parser


def run(parser, input_str):
    return run_parser(parser, input_str)


# --- Single unit matchers ---


@given(st.characters())
def test_char_parser(c):
    # Should match the character
    res, err = run(char(c), c)
    assert res == c
    assert err is None

    # Should fail on different character
    diff = chr((ord(c) + 1) % 0x110000)
    res_fail, err_fail = run(char(c), diff)
    assert res_fail is None
    assert err_fail is not None
    assert err_fail.index == 0


@given(st.characters(), st.text())
def test_satisfy(c, text):
    p = satisfy(lambda x: x == c)

    if text.startswith(c):
        state = p.run(text)
        assert state.result == c
        assert state.index == 1
    else:
        state = p.run(text)
        assert state.is_error
        assert state.index == 0


def test_satisfy_end_of_input():
    _, err = run(digit(), "")
    assert "end of input" in err.message


def test_simple_classes():
    assert run(digit(), "5")[0] == "5"
    assert run(letter(), "q")[0] == "q"
    assert run(space(), "\t")[0] == "\t"
    assert run(any_char(), "?")[0] == "?"
    assert run(letter(), "5")[0] is None


def test_token_input():
    tokens = [("num", 1), ("op", "+"), ("num", 2)]
    num = satisfy(lambda t: t[0] == "num", "number").map(lambda t: t[1])
    state = num.run(tokens)
    assert state.result == 1
    assert state.index == 1


# --- Multi unit matchers ---


@given(st.text(), st.text())
def test_string(prefix, rest):
    state = string(prefix).run(prefix + rest)
    assert state.result == prefix
    assert state.index == len(prefix)


def test_string_failure_keeps_index():
    state = string("let").run("xlex", 1)
    assert state.is_error
    assert state.index == 1
    assert state.error.index == 1
    assert "'let'" in state.error.message


def test_string_on_bytes_and_lists():
    assert run(string(b"GET"), b"GET /")[0] == b"GET"
    assert run(string(["a", "b"]), ["a", "b", "c"])[0] == ["a", "b"]


def test_regex():
    state = regex(r"[a-z]+").run("abc123")
    assert state.result == "abc"
    assert state.index == 3

    assert run(regex(r"(\d+)px", group=1), "12px")[0] == "12"
    assert run(regex(r"abc", flags=re.IGNORECASE), "ABC")[0] == "ABC"


def test_regex_is_anchored_at_index():
    assert regex(r"\d+").run("ab12").is_error
    assert regex(r"\d+").run("ab12", 2).result == "12"


def test_runs():
    assert run(spaces(), "  \tx")[0] == "  \t"
    assert run(newlines(), "\n\nx")[0] == "\n\n"
    assert run(word(), "foo_1 bar")[0] == "foo_1"
    assert run(letters(), "abc1")[0] == "abc"
    assert run(digits(), "0042x")[0] == "0042"

    _, err = run(digits(), "x")
    assert err.message == "expected digits"


def test_numbers():
    assert run(uint(), "42")[0] == 42
    assert run(uint(), "-42")[0] is None
    assert run(sint(), "-42")[0] == -42
    assert run(sint(), "+7")[0] == 7
    assert run(sfloat(), "-1.5e3")[0] == -1500.0
    assert run(sfloat(), ".25")[0] == 0.25
    assert run(sfloat(), "3")[0] == 3.0


def test_eof():
    assert eof().run("ab", 2) == ParseState("ab", 2, None)
    state = eof().run("ab", 1)
    assert state.is_error
    assert "end of input" in state.error.message
