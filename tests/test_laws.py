# tests/test_laws.py
from hypothesis import given, strategies as st

from statecomb.Parsec import ParseState
from statecomb.Prim import succeed

# Strategy to generate arbitrary values
vals = st.integers() | st.text()


def run_p(p, input_str=""):
    """Helper to run a parser on a fresh state"""
    return p(ParseState(input_str))


# 1. Left Identity: return a >>= f  === f a
@given(vals)
def test_monad_left_identity(v):
    f = lambda x: succeed([x])

    lhs = succeed(v).chain(f)
    rhs = f(v)

    assert run_p(lhs) == run_p(rhs)


# 2. Right Identity: m >>= return === m
@given(vals)
def test_monad_right_identity(v):
    m = succeed(v)

    lhs = m.chain(succeed)
    rhs = m

    assert run_p(lhs) == run_p(rhs)


# 3. Associativity: (m >>= f) >>= g === m >>= (\x -> f x >>= g)
@given(st.integers())
def test_monad_associativity(v):
    m = succeed(v)
    f = lambda x: succeed(x + 1)
    g = lambda y: succeed(y * 2)

    lhs = m.chain(f).chain(g)
    rhs = m.chain(lambda x: f(x).chain(g))

    assert run_p(lhs) == run_p(rhs)


# 4. Functor identity: fmap id === id
@given(vals)
def test_functor_identity(v):
    m = succeed(v)
    assert run_p(m.map(lambda x: x)) == run_p(m)
