import json
import sys

from statecomb import (
    between, char, choice, contextual, eof, forward_decl, many_join,
    regex, run_parser, sfloat, string, succeed,
)

# 1. Lexical helpers
# Every token swallows the whitespace that follows it.
ws = regex(r'\s*')


def token(p):
    return p << ws


def symbol(s):
    return token(string(s))


string_literal = token(regex(r'"((?:[^"\\]|\\.)*)"').map(lambda s: json.loads(s)))
number = token(sfloat().map(lambda f: int(f) if f.is_integer() and abs(f) < 2 ** 53 else f))
null_val = symbol("null") >> succeed(None)
true_val = symbol("true") >> succeed(True)
false_val = symbol("false") >> succeed(False)

# 2. Recursive JSON Parser
json_value = forward_decl()

json_array = between(symbol("["), symbol("]"))(many_join(json_value, symbol(",")))


@contextual
def entry():
    key = yield string_literal
    yield symbol(":")
    value = yield json_value
    return key, value


json_object = between(symbol("{"), symbol("}"))(many_join(entry, symbol(","))).map(dict)

json_value.define(choice(
    null_val,
    true_val,
    false_val,
    string_literal,
    number,
    json_object,
    json_array,
))

parser = (ws >> json_value) << eof()

if __name__ == "__main__":
    if len(sys.argv) > 1:
        with open(sys.argv[1]) as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    result, err = run_parser(parser, text)

    if err:
        print("Parsing Failed:", err)
    else:
        print("Successfully Parsed:")
        print(json.dumps(result, indent=4))
