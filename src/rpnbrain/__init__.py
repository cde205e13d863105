'''
RPN calculator brain.

Stack-based expression engine with its presentation kept apart: push
operands, operators and variable names in postfix order, then ask for the
result and for an infix description with no more parentheses than needed.

Comes with a thin console front end: a lexer for key input, a session
standing in for the calculator screen, and a command line.
'''

from .brain import Brain
from .operations import (Registry, Operand, Constant, Unary, Binary,
                         Variable)
from .lexer import Lexer
from .session import Session
from .cli import CLI
from .util import RPNError


__all__ = ('Brain', 'Registry', 'Operand', 'Constant', 'Unary', 'Binary',
           'Variable', 'Lexer', 'Session', 'CLI', 'RPNError')
