from collections import deque
from types import MappingProxyType

from .arithmetic import Arithmetic
from .util import (EvaluationError, StackError, UnboundVariableError,
                   wrap_user_errors)


class Machine:
    '''
    Operand stack machine (RPN evaluator).

    Takes postfix tokens and runs them against a set of bindings. Values can
    be of any type implementing Arithmetic, as long as a single evaluation
    sticks to one type.
    '''

    # Operator symbol to Arithmetic operation.
    OPERATORS = MappingProxyType({
        '+': 'add',
        '-': 'sub',
        '*': 'mul',
        '/': 'div',
        '\N{MINUS SIGN}': 'sub',
        '\N{MULTIPLICATION SIGN}': 'mul',
        '\N{DIVISION SIGN}': 'div',
    })

    # Function name to Arithmetic operation and arity.
    FUNCTIONS = MappingProxyType({
        'log': ('log10', 1),
        'log10': ('log10', 1),
        'max': ('max', 2),
    })

    def evaluate(self, tokens, bindings):
        '''
        Run postfix tokens, return the only value left on the stack.

        :param tokens: Postfix tokens, as converted by ShuntingYard.
        :param bindings: Mapping of variable names to values.
        '''
        stack = deque()
        for token in tokens:
            if token.kind == 'number':
                if token.value is None:
                    raise EvaluationError('Number {} has no value'.format(
                        repr(token.text)))
                stack.append(token.value)
            elif token.kind == 'variable':
                try:
                    stack.append(bindings[token.text])
                except KeyError:
                    raise UnboundVariableError(token.text) from None
            elif token.kind in ('operator', 'function'):
                name, arity = self._operation(token)
                # If you don't reverse, you'll compute b - a for a - b.
                operands = list(reversed(self._popstack(stack, arity)))
                stack.append(self._apply(name, operands))
            else:
                raise EvaluationError('Cannot evaluate {} token {}'.format(
                    token.kind, repr(token.text)))
        if len(stack) != 1:
            raise StackError('{} element(s) left on stack, expected 1'.format(
                len(stack)))
        return stack.pop()

    def _operation(self, token):
        '''
        Return the Arithmetic operation name and arity of token.
        '''
        cls = type(self)
        if token.kind == 'operator' and token.text in cls.OPERATORS:
            return cls.OPERATORS[token.text], 2
        elif token.kind == 'function' and token.text in cls.FUNCTIONS:
            return cls.FUNCTIONS[token.text]
        raise EvaluationError('No such {} {}'.format(token.kind,
                                                     repr(token.text)))

    def _popstack(self, stack, n=1):
        '''
        Pop specified number of values from stack, topmost first.
        '''
        if len(stack) < n:
            raise StackError('Less than {} element(s) on stack'.format(n))
        return [stack.pop() for _ in range(n)]

    def _apply(self, name, operands):
        '''
        Apply the operation, looked up on the type of the leftmost operand.
        '''
        first = operands[0]
        if not isinstance(first, Arithmetic):
            raise EvaluationError('Cannot compute with {}'.format(
                type(first).__name__))
        return self._call(getattr(type(first), name), name, operands)

    @wrap_user_errors('Cannot apply {2}')
    def _call(self, operation, name, operands):
        return operation(*operands)
