'''
Infix expression engine over arbitrary precision decimals.

Expressions such as 0.75 + 2 * log(x) or 2,5 * max(a; b) are tokenized by
character-driven state machines, reordered to postfix by a shunting yard,
and run on a stack machine against bindings of any type implementing the
Arithmetic operations. DecimalNumber is the one shipped here: exact
decimal arithmetic on integers, logarithms included.

Both the comma and the point are decimal points inside numbers; outside of
them, the comma separates function arguments, as does the semicolon.
'''

from .arithmetic import Arithmetic
from .cli import CLI
from .expression import Expression
from .lexer import Lexer
from .machine import Machine
from .number import DecimalNumber
from .parser import ShuntingYard
from .statemachine import CharStateMachine, Token
from .util import (ExpressionError, LexError, IncompleteInputError,
                   ParseError, EvaluationError, UnboundVariableError,
                   StackError)


__all__ = ('Arithmetic', 'CLI', 'Expression', 'Lexer', 'Machine',
           'DecimalNumber', 'ShuntingYard', 'CharStateMachine', 'Token',
           'ExpressionError', 'LexError', 'IncompleteInputError',
           'ParseError', 'EvaluationError', 'UnboundVariableError',
           'StackError')
