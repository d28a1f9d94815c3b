import re
from typing import Any, Callable, Optional, Sequence, Union

from .Parsec import Parser, ParseState, ParseError


def _show(tokens: Any) -> str:
    return repr(tokens) if tokens else "end of input"


# Core function: Succeeds if the next input unit satisfies a predicate
def satisfy(f: Callable[[Any], bool], expected: Optional[str] = None) -> Parser[Any]:
    """Succeeds for any input unit where f returns True. Returns the parsed unit."""
    def parse(state: ParseState) -> ParseState[Any]:
        if state.is_error:
            return state
        if state.index >= len(state.input):
            return state.fail(ParseError(
                f"expected {expected}, got end of input" if expected else "unexpected end of input",
                state.index))
        token = state.input[state.index]
        if f(token):
            return state.advance(state.index + 1, token)
        return state.fail(ParseError(
            f"expected {expected}, got {token!r}" if expected else f"unexpected {token!r}",
            state.index))
    return Parser(parse)


def char(c: Any) -> Parser[Any]:
    """Parses a single character (or token) c and returns it."""
    return satisfy(lambda x: x == c, repr(c))


def any_char() -> Parser[Any]:
    """Parses any single input unit and returns it."""
    return satisfy(lambda _: True, "any character")


def digit() -> Parser[str]:
    """Parses an ASCII digit and returns it."""
    return satisfy(lambda c: isinstance(c, str) and c in '0123456789', "digit")


def letter() -> Parser[str]:
    """Parses an alphabetic character and returns it."""
    return satisfy(lambda c: isinstance(c, str) and c.isalpha(), "letter")


def space() -> Parser[str]:
    """Parses a whitespace character and returns it."""
    return satisfy(lambda c: isinstance(c, str) and c.isspace(), "space")


def string(s: Sequence[Any]) -> Parser[Sequence[Any]]:
    """Parses the exact sequence s (a str, bytes or list of tokens) and returns it."""
    def parse(state: ParseState) -> ParseState[Sequence[Any]]:
        if state.is_error:
            return state
        end = state.index + len(s)
        found = state.input[state.index:end]
        if found == s:
            return state.advance(end, found)
        return state.fail(ParseError(f"expected {s!r}, got {_show(found)}", state.index))
    return Parser(parse)


def regex(pattern: Union[str, 're.Pattern[str]'], flags: int = 0, group: Union[int, str] = 0) -> Parser[str]:
    """
    Matches a regular expression at the current index and returns the matched text
    (or the given group). Only text input is supported.
    """
    compiled = re.compile(pattern, flags) if isinstance(pattern, str) else pattern

    def parse(state: ParseState) -> ParseState[str]:
        if state.is_error:
            return state
        match = compiled.match(state.input, state.index)
        if match is None:
            found = state.input[state.index:state.index + 10]
            return state.fail(ParseError(
                f"expected match for /{compiled.pattern}/, got {_show(found)}", state.index))
        return state.advance(match.end(), match.group(group))
    return Parser(parse)


def spaces() -> Parser[str]:
    """One or more whitespace characters."""
    return regex(r'\s+').label("white space")


def newlines() -> Parser[str]:
    return regex(r'\n+').label("new-line")


def word() -> Parser[str]:
    return regex(r'\w+').label("word")


def letters() -> Parser[str]:
    return regex(r'[A-Za-z]+').label("letters")


def digits() -> Parser[str]:
    return regex(r'\d+').label("digits")


def uint() -> Parser[int]:
    """Unsigned integer, converted to int."""
    return regex(r'\d+').label("unsigned integer").map(int)


def sint() -> Parser[int]:
    """Optionally signed integer, converted to int."""
    return regex(r'[+-]?\d+').label("signed integer").map(int)


def sfloat() -> Parser[float]:
    """Optionally signed decimal number with optional fraction and exponent."""
    return regex(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?').label("number").map(float)


def eof() -> Parser[None]:
    """Succeeds only if no input remains."""
    def parse(state: ParseState) -> ParseState[None]:
        if state.is_error:
            return state
        if state.index < len(state.input):
            return state.fail(ParseError(
                f"expected end of input, got {state.input[state.index]!r}", state.index))
        return state.advance(state.index, None)
    return Parser(parse)
