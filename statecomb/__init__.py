# Core
from .Parsec import Parser, ParseState, ParseError, ParserUsageError
from .Prim import succeed, fail, void, lazy, Forward, forward_decl, run_parser, parse_test

# Combinators
from .Combinators import (
    sequence_of, choice, many, many1, between,
    join, join_wjr, many_join, many_join_wjr,
    parser_trace, parser_traced
)

# Generator-driven chaining
from .Contextual import contextual, state_contextual

# Leaf matchers
from .Char import (
    satisfy, char, any_char, digit, letter, space,
    string, regex, spaces, newlines, word, letters, digits,
    uint, sint, sfloat, eof
)
