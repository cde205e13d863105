'''
Operations a brain can hold on its program stack, and the registry of the
ones it knows by symbol.
'''

from collections import namedtuple
from functools import wraps
from types import MappingProxyType
from sys import maxsize

import operator
import math


# Precedence of anything that can't be torn apart by parentheses.
ATOMIC = maxsize


class Operand(namedtuple('Operand', 'value')):
    '''
    Literal number.
    '''
    __slots__ = ()
    precedence = ATOMIC
    arity = 0

    def __str__(self):
        return repr(self.value)


class Constant(namedtuple('Constant', 'symbol producer')):
    '''
    Named number, produced on evaluation.
    '''
    __slots__ = ()
    precedence = ATOMIC
    arity = 0

    def __str__(self):
        return self.symbol


class Unary(namedtuple('Unary', 'symbol function')):
    __slots__ = ()
    precedence = ATOMIC
    arity = 1

    def __str__(self):
        return self.symbol


class Binary(namedtuple('Binary', 'symbol function precedence')):
    '''
    Infix operator. function(left, right) reads left to right, left being
    pushed first.
    '''
    __slots__ = ()
    arity = 2

    def __new__(cls, symbol, function, precedence=ATOMIC):
        return super().__new__(cls, symbol, function, precedence)

    def __str__(self):
        return self.symbol


class Variable(namedtuple('Variable', 'symbol')):
    '''
    Name looked up in the brain's variables when evaluated, not when pushed.
    '''
    __slots__ = ()
    precedence = ATOMIC
    arity = 0

    def __str__(self):
        return self.symbol


def _ieee(f):
    '''
    Give NaN or infinity where IEEE 754 would, instead of raising.

    Python's math raises on domain errors (sqrt(-1), sin(inf)) and division
    by zero; a calculator wants a number it can show.
    '''
    @wraps(f)
    def wrapped(*args):
        try:
            return f(*args)
        except ZeroDivisionError:
            left, right = args
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1, right)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
    return wrapped


def _sqrt(x):
    if x < 0:
        return math.nan
    return math.sqrt(x)


def _pi():
    return math.pi


DEFAULT_OPERATIONS = (
    Binary('×', _ieee(operator.__mul__), 2),
    Binary('÷', _ieee(operator.__truediv__), 2),
    Binary('+', _ieee(operator.__add__), 1),
    Binary('−', _ieee(operator.__sub__), 1),
    Unary('√', _sqrt),
    Unary('sin', _ieee(math.sin)),
    Unary('cos', _ieee(math.cos)),
    Unary('±', operator.__neg__),
    Constant('π', _pi),
)


class Registry:
    '''
    Read-only table of known operations, by symbol.

    Later operations overwrite earlier ones with the same symbol.
    '''

    def __init__(self, operations=DEFAULT_OPERATIONS):
        known = dict()
        for operation in operations:
            known[str(operation)] = operation
        self.known = MappingProxyType(known)

    def lookup(self, symbol):
        '''
        Return operation with symbol, or None if unknown.
        '''
        return self.known.get(symbol)

    def __contains__(self, symbol):
        return symbol in self.known

    def __iter__(self):
        return iter(self.known)

    def __len__(self):
        return len(self.known)
