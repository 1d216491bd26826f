'''
Lexer for infix expressions, such as 0.75 + 2 * log(x).

Numbers are not lexed here: on a digit, or on a sign where an operand is
due, the rest of the input is handed to the number tokenizer, and the token
it produces carries the number's own tokens as children.
'''

from .machine import Machine
from .matchers import (is_digit, is_sign, is_separator,
                       is_closing, is_bracket, is_whitespace)
from .number import TOKENIZER as NUMBER_TOKENIZER
from .statemachine import CharStateMachine


def _expects_operand(run):
    previous = run.current
    if previous.kind is None:
        return True
    elif previous.kind == 'bracket':
        return not previous.closing
    return previous.kind in ('operator', 'comma', 'function')


def _delimits(char):
    return char is None or \
        char in Machine.OPERATORS or \
        is_separator(char) or \
        is_bracket(char) or \
        is_whitespace(char)


def dispatch(char, run):
    if is_digit(char) or is_sign(char) and _expects_operand(run):
        if run.delegate(NUMBER_TOKENIZER, 'number'):
            return dispatch

    if char is None:
        return run.end()
    elif char in Machine.OPERATORS:
        run.token('operator')
        run.eat()
    elif is_separator(char):
        run.token('comma')
        run.eat()
    elif is_bracket(char):
        run.token('bracket', closing=is_closing(char))
        run.eat()
    elif not is_whitespace(char):
        run.token('variable')
        return identifier(char, run)
    return dispatch


def identifier(char, run):
    if _delimits(char):
        # Only now do we know the whole name.
        if run.text in Machine.FUNCTIONS:
            run.update(kind='function')
        return dispatch(char, run)
    run.eat()
    return identifier


class Lexer:
    '''
    Lexer for the infix expression grammar.

    Holds no state; one instance can lex any number of expressions.
    '''
    MACHINE = CharStateMachine('dispatch', {
        'dispatch': dispatch,
        'identifier': identifier,
    })

    def lex(self, text):
        '''
        Return the tokens of text, in order.

        Number tokens still hold the tokens of the literal as children; the
        caller decides what to make of them.
        '''
        return type(self).MACHINE.run(text).tokens
