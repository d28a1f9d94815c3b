from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar, Union

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


class ParserUsageError(TypeError):
    """Raised when a grammar breaks the engine's contract (never a parse failure)."""


@dataclass(frozen=True)
class ParseError:
    """A structured parse failure: what went wrong, where, and who reported it."""
    message: str
    index: int
    combinator: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only: errors are shared by every state derived from them
        object.__setattr__(self, 'extra', MappingProxyType(dict(self.extra)))

    def with_combinator(self, combinator: str, **extra: Any) -> 'ParseError':
        """Re-stamp the error with an outer combinator, keeping message and index."""
        return replace(self, combinator=combinator, extra={**self.extra, **extra})

    def __str__(self) -> str:
        where = f" ({self.combinator})" if self.combinator else ""
        return f"Parse error at index {self.index}{where}: {self.message}"


@dataclass(frozen=True)
class ParseState(Generic[T]):
    """Parser state: the whole input, the current index and the last result or error."""
    input: Sequence[Any]
    index: int = 0
    result: Optional[T] = None
    error: Optional[ParseError] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def remaining(self) -> Sequence[Any]:
        return self.input[self.index:]

    def advance(self, index: int, result: U) -> 'ParseState[U]':
        return ParseState(self.input, index, result, None)

    def fail(self, error: ParseError, index: Optional[int] = None) -> 'ParseState[Any]':
        # index only moves when a matcher consumed input before failing
        return ParseState(self.input, self.index if index is None else index, None, error)

    def replace_result(self, result: U) -> 'ParseState[U]':
        return ParseState(self.input, self.index, result, None)


class Parser(Generic[T]):
    """A parser combinator: a wrapper around a ParseState -> ParseState function."""
    __slots__ = ('parse_fn',)

    def __init__(self, parse_fn: Callable[[ParseState], ParseState]):
        object.__setattr__(self, 'parse_fn', parse_fn)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __call__(self, state: ParseState) -> ParseState:
        return self.parse_fn(state)

    def run(self, input: Sequence[Any], index: int = 0) -> ParseState[T]:
        """Run the parser from `index` of `input` and return the final state."""
        return self(ParseState(input, index))

    # Functor map (<$>)
    def map(self, f: Callable[[T], U]) -> 'Parser[U]':
        def parse(state: ParseState) -> ParseState[U]:
            new_state = self(state)
            if new_state.is_error:
                return new_state
            return new_state.advance(new_state.index, f(new_state.result))
        return Parser(parse)

    def map_error(self, f: Callable[[ParseError], ParseError]) -> 'Parser[T]':
        """Rewrite the error record of a failed run; successes pass through."""
        def parse(state: ParseState) -> ParseState[T]:
            if state.is_error:
                return state
            new_state = self(state)
            if not new_state.is_error:
                return new_state
            return new_state.fail(f(new_state.error))
        return Parser(parse)

    # Monadic bind (>>=)
    def chain(self, f: Callable[[T], 'Parser[U]']) -> 'Parser[U]':
        def parse(state: ParseState) -> ParseState[U]:
            new_state = self(state)
            if new_state.is_error:
                # The first parser failed, f is never consulted.
                return new_state
            next_parser: 'Parser[U]' = f(new_state.result)
            return next_parser(new_state)
        return Parser(parse)

    bind = chain

    # Label (<?>)
    def label(self, msg: str) -> 'Parser[T]':
        return self.map_error(lambda err: replace(err, message=f"expected {msg}"))

    # Alternative (<|>)
    def __or__(self, other: 'Parser[T]') -> 'Parser[T]':
        from .Combinators import choice
        return choice(self, other)

    # Sequence (*>) for a parser, bind (>>=) for a function
    def __rshift__(self, other: Union['Parser[U]', Callable[[T], 'Parser[U]']]) -> 'Parser[U]':
        if isinstance(other, Parser):
            return self.chain(lambda _: other)
        return self.chain(other)

    # Sequence (<*)
    def __lshift__(self, other: 'Parser[Any]') -> 'Parser[T]':
        def parse(state: ParseState) -> ParseState[T]:
            state1 = self(state)
            if state1.is_error:
                return state1
            state2 = other(state1)
            if state2.is_error:
                return state2
            return state2.replace_result(state1.result)
        return Parser(parse)
