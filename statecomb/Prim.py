from typing import Any, Callable, Optional, Sequence, Tuple

from .Parsec import ParseError, ParseState, Parser, ParserUsageError, T


def succeed(value: T) -> Parser[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(state: ParseState) -> ParseState[T]:
        if state.is_error:
            return state
        return state.advance(state.index, value)
    return Parser(parse)


def fail(msg: str) -> Parser[Any]:
    """A parser that always fails with a message."""
    def parse(state: ParseState) -> ParseState[Any]:
        if state.is_error:
            return state
        return state.fail(ParseError(msg, state.index))
    return Parser(parse)


# Succeeds without consuming input and carries no result; seed for chains.
void: Parser[None] = succeed(None)


def lazy(parser_factory: Callable[[], Parser[T]]) -> Parser[T]:
    """
    Defer building a parser until it is first run.
    Lets recursive grammars refer to themselves without building an infinite tree.
    """
    cache = []

    def parse(state: ParseState) -> ParseState[T]:
        if state.is_error:
            return state
        if not cache:
            cache.append(parser_factory())
        return cache[0](state)
    return Parser(parse)


class Forward(Parser[T]):
    """A parser cell whose contents are assigned after construction."""
    __slots__ = ('_inner',)

    def __init__(self) -> None:
        super().__init__(self._run_inner)
        object.__setattr__(self, '_inner', None)

    def define(self, parser: Parser[T]) -> None:
        """Define the parser created earlier as a forward declaration."""
        object.__setattr__(self, '_inner', parser)

    def _run_inner(self, state: ParseState) -> ParseState[T]:
        if state.is_error:
            return state
        if self._inner is None:
            raise ParserUsageError("forward_decl: parser used before define() was called")
        return self._inner(state)


def forward_decl() -> Forward[Any]:
    """
    Return an undefined parser usable as a forward declaration.

        expr = forward_decl()
        expr.define(between(char('('), char(')'))(expr) | digit())
    """
    return Forward()


def run_parser(parser: Parser[T],
               input_data: Sequence[Any],
               index: int = 0) -> Tuple[Optional[T], Optional[ParseError]]:
    final_state = parser.run(input_data, index)
    return final_state.result, final_state.error


def parse_test(parser: Parser[T], input_data: Sequence[Any]) -> None:
    """Test a parser and print the result."""
    value, err = run_parser(parser, input_data)
    if err:
        print(err)
    else:
        print(value)
