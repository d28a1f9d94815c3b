import logging
from typing import Any, List, Optional, Sequence, Union, Callable

from .Parsec import Parser, ParseState, ParseError, T, U

log = logging.getLogger("statecomb")


# 1. sequence_of: Runs parsers in order, threading the state through them
def sequence_of(parsers: Sequence[Parser[Any]], min: int = -1) -> Parser[List[Any]]:
    """
    Runs a sequence of parsers in order and returns the list of their results.
    `min` is the number of parsers that must succeed; -1 (the default) means all of them.
    When fewer are required, failed parsers leave a None placeholder in the result.
    """
    parsers = list(parsers)

    def parse(state: ParseState) -> ParseState[List[Any]]:
        if state.is_error:
            return state

        results: List[Any] = []
        next_state = state
        final_error: Optional[ParseError] = None
        succeeded = 0
        last_index = state.index

        for p in parsers:
            next_state = p(next_state)
            if next_state.is_error:
                # Later parsers see an erroring state and pass it through untouched.
                final_error = next_state.error
            else:
                succeeded += 1
                last_index = next_state.index
            results.append(next_state.result)

        if final_error is not None and (min == -1 or succeeded < min):
            return next_state.fail(
                final_error.with_combinator('sequenceOf', min=min, nparsers=succeeded))
        return state.advance(last_index, results)
    return Parser(parse)


# 2. choice: Tries parsers against the same state until one succeeds
def choice(*parsers: Union[Parser[T], Sequence[Parser[T]]]) -> Parser[T]:
    """
    Applies parsers in order, each from the original state, until one succeeds.
    Returns the successful state verbatim, or fails if none succeed.
    Accepts the parsers as arguments or as a single list.
    """
    if len(parsers) == 1 and not isinstance(parsers[0], Parser):
        parsers = tuple(parsers[0])

    def parse(state: ParseState) -> ParseState[T]:
        if state.is_error:
            return state

        errors = []
        for p in parsers:
            next_state = p(state)
            if not next_state.is_error:
                return next_state
            errors.append(next_state.error)

        return state.fail(ParseError(
            "Unable to match with any parser",
            state.index,
            'choice',
            {'errors': tuple(errors)},
        ))
    return Parser(parse)


# 3. many: Applies a parser zero or more times
def many(p: Parser[T], min: int = 0) -> Parser[List[T]]:
    """
    Applies parser p as many times as possible, returning the list of results.
    Fails if fewer than `min` matches were found.
    """
    def parse(state: ParseState) -> ParseState[List[T]]:
        if state.is_error:
            return state

        results: List[T] = []
        current = state
        while True:
            next_state = p(current)
            if next_state.is_error:
                # The failed attempt ends the loop; its error is not ours.
                break
            results.append(next_state.result)
            current = next_state

        if len(results) < min:
            return state.fail(ParseError(
                f"Unable to match at least {min} input(s), matched {len(results)} instead",
                state.index,
                'many',
                {'min': min, 'nmatches': len(results)},
            ))
        return current.replace_result(results)
    return Parser(parse)


# 4. many1: Applies a parser one or more times
def many1(p: Parser[T]) -> Parser[List[T]]:
    return many(p, 1)


# 5. between: Parses content surrounded by two delimiters
def between(left: Parser[Any], right: Parser[Any]) -> Callable[[Parser[T]], Parser[T]]:
    """
    Builds a parser creator for content found between `left` and `right`.

        parens = between(char('('), char(')'))
        parens(digits())  # "(42)" -> "42"
    """
    def wrap(content: Parser[T]) -> Parser[T]:
        return (sequence_of([left, content, right])
                .map(lambda results: results[1])
                .map_error(lambda err: err.with_combinator('between')))
    return wrap


# 6. join / join_wjr: Parses a fixed sequence of parsers separated by a joiner
def _join(parsers: Sequence[Parser[Any]], joiner: Parser[Any],
          min: int, join_results: bool) -> Parser[List[Any]]:
    joined: List[Parser[Any]] = []
    for i, p in enumerate(parsers):
        if i == 0:
            joined.append(p)
        elif join_results:
            # Joiner and parser succeed or fail together, so `min` counts parsers only.
            joined.append(sequence_of([joiner, p]))
        else:
            joined.append(sequence_of([joiner, p]).map(lambda pair: pair[1]))

    seq = sequence_of(joined, min)
    if join_results:
        seq = seq.map(_flatten_joined)
    return seq.map_error(lambda err: err.with_combinator('join'))


def _flatten_joined(results: List[Any]) -> List[Any]:
    flat = results[:1]
    for pair in results[1:]:
        flat.extend(pair if pair is not None else (None, None))
    return flat


def join(parsers: Sequence[Parser[Any]], joiner: Parser[Any], min: int = -1) -> Parser[List[Any]]:
    """
    Runs a sequence of parsers interconnected by `joiner`, returning the parsers'
    results only. `min` counts the parsers (joiners excluded); -1 means all of them.
    """
    return _join(parsers, joiner, min, False)


def join_wjr(parsers: Sequence[Parser[Any]], joiner: Parser[Any], min: int = -1) -> Parser[List[Any]]:
    """
    Like join, but the joiner results are kept, interleaved with the parsers' results.
    """
    return _join(parsers, joiner, min, True)


# 7. many_join / many_join_wjr: Repeats a parser separated by a joiner
def _many_join(p: Parser[T], joiner: Parser[Any], min: int, join_results: bool) -> Parser[List[Any]]:
    def parse(state: ParseState) -> ParseState[List[Any]]:
        if state.is_error:
            return state

        results: List[Any] = []
        matches = 0
        current = state
        first = p(current)
        if not first.is_error:
            results.append(first.result)
            matches = 1
            current = first
            while True:
                after_joiner = joiner(current)
                if after_joiner.is_error:
                    break
                if join_results:
                    results.append(after_joiner.result)
                # A matched joiner stays consumed even if `p` fails after it.
                current = after_joiner
                next_state = p(current)
                if next_state.is_error:
                    break
                results.append(next_state.result)
                matches += 1
                current = next_state

        if matches < min:
            return state.fail(ParseError(
                f"Unable to match at least {min} input(s), matched {matches} instead",
                state.index,
                'manyJoin',
                {'min': min, 'nmatches': matches},
            ))
        return current.replace_result(results)
    return Parser(parse)


def many_join(p: Parser[T], joiner: Parser[Any], min: int = 0) -> Parser[List[T]]:
    """
    Runs `p` as many times as possible, separated by `joiner`.
    Only the results of `p` are returned; at least `min` of them are required.
    """
    return _many_join(p, joiner, min, False)


def many_join_wjr(p: Parser[T], joiner: Parser[U], min: int = 0) -> Parser[List[Union[T, U]]]:
    """Like many_join, but the joiner results are kept in between."""
    return _many_join(p, joiner, min, True)


# 8. parser_trace: Debugging parser that logs the upcoming input
def parser_trace(label_str: str) -> Parser[None]:
    def parse(state: ParseState) -> ParseState[None]:
        if state.is_error:
            return state
        ahead = state.remaining
        log.debug('%s: %r%s at index %d', label_str, ahead[:30],
                  '...' if len(ahead) > 30 else '', state.index)
        return state.advance(state.index, None)
    return Parser(parse)


# 9. parser_traced: Debugging parser that logs how `p` went
def parser_traced(label_str: str, p: Parser[T]) -> Parser[T]:
    def parse(state: ParseState) -> ParseState[T]:
        if state.is_error:
            return state
        log.debug('trying %s at index %d', label_str, state.index)
        new_state = p(state)
        if new_state.is_error:
            log.debug('%s failed: %s', label_str, new_state.error)
        else:
            log.debug('%s matched %r, now at index %d', label_str, new_state.result, new_state.index)
        return new_state
    return Parser(parse)
