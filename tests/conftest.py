import math

from pytest import Item, fixture

from rpnexpr.arithmetic import Arithmetic
from rpnexpr.number import DecimalNumber


class FloatNumber(Arithmetic):
    '''
    Plain float wrapped into the Arithmetic operations, to check the
    machine against Python's own arithmetic.
    '''
    __slots__ = ('inner',)

    def __init__(self, inner):
        self.inner = inner

    def add(self, other):
        return FloatNumber(self.inner + other.inner)

    def sub(self, other):
        return FloatNumber(self.inner - other.inner)

    def mul(self, other):
        return FloatNumber(self.inner * other.inner)

    def div(self, other):
        return FloatNumber(self.inner / other.inner)

    def log10(self):
        return FloatNumber(math.log10(self.inner))

    def max(self, other):
        if self.inner >= other.inner:
            return FloatNumber(self.inner)
        return FloatNumber(other.inner)


@fixture
def floats():
    '''
    Return a function turning keyword floats into FloatNumber bindings.
    '''
    def bind(**values):
        return {name: FloatNumber(value) for name, value in values.items()}
    return bind


@fixture
def decimals():
    '''
    Return a function turning keyword literals into DecimalNumber bindings.
    '''
    def bind(**literals):
        return {name: DecimalNumber.from_string(literal)
                for name, literal
                in literals.items()}
    return bind


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Only called with enable_assertion_pass_hook set. Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
