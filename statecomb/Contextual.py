"""
Generator-driven sequencing.

A contextual parser is written as a generator function: every ``yield`` hands a
parser to the driver and suspends until that parser has run, and ``return``
finishes with the overall result::

    @contextual
    def sized_word():
        size = yield uint()
        yield char(':')
        text = yield regex(r'\\w{%d}' % size)
        return text

Suspension is purely logical: everything runs synchronously, one step at a time.
"""
from typing import Any, Callable, Generator

from .Parsec import Parser, ParseState, ParserUsageError, T
from .Prim import succeed, void

ContextualFn = Callable[[], Generator[Parser[Any], Any, T]]
StateContextualFn = Callable[[], Generator[Parser[Any], ParseState, ParseState[T]]]


def _check_yield(name: str, value: Any) -> Parser[Any]:
    if not isinstance(value, Parser):
        raise ParserUsageError(
            f"{name}: yielded values must always be parsers, got {type(value).__name__}")
    return value


def contextual(generator_fn: ContextualFn[T]) -> Parser[T]:
    """
    Flattened version of chained binds using yields.
    Each yielded parser receives the state left by the previous one, and its
    result is sent back into the generator. The first failure aborts the run.
    """
    def driver(_: None) -> Parser[T]:
        steps = generator_fn()

        def parse(state: ParseState) -> ParseState[T]:
            try:
                next_parser = next(steps)
            except StopIteration as done:
                return succeed(done.value)(state)

            while True:
                state = _check_yield('contextual', next_parser)(state)
                if state.is_error:
                    steps.close()
                    return state.fail(state.error.with_combinator('contextual'))
                try:
                    next_parser = steps.send(state.result)
                except StopIteration as done:
                    return succeed(done.value)(state)
        return Parser(parse)

    # A fresh generator per run keeps the parser reusable.
    return void.chain(driver)


def state_contextual(generator_fn: StateContextualFn[T]) -> Parser[T]:
    """
    Same as contextual, but the generator gets the full ParseState produced by
    each yielded parser, errors included, and returns the final ParseState itself.
    """
    def parse(state: ParseState) -> ParseState[T]:
        if state.is_error:
            return state

        steps = generator_fn()
        current = state
        try:
            next_parser = next(steps)
            while True:
                current = _check_yield('stateContextual', next_parser)(current)
                next_parser = steps.send(current)
        except StopIteration as done:
            final_state = done.value

        if not isinstance(final_state, ParseState):
            raise ParserUsageError(
                f"stateContextual: generator must return a ParseState, got {type(final_state).__name__}")
        return final_state
    return Parser(parse)
