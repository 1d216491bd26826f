from .lexer import Lexer
from .machine import Machine
from .number import DecimalNumber
from .parser import ShuntingYard
from .statemachine import Token
from .util import ParseError


class Expression:
    '''
    Infix expression, compiled once to postfix and evaluated on demand.

    >>> Expression('(a + b) / 2').evaluate({
    ...     'a': DecimalNumber.from_string('1.52'),
    ...     'b': DecimalNumber.from_string('5e-1'),
    ... }).to_string()
    '1,01'
    '''
    LEXER = Lexer()
    CONVERTER = ShuntingYard()
    MACHINE = Machine()

    def __init__(self, text):
        cls = type(self)
        tokens = cls.LEXER.lex(text)
        for token in tokens:
            if token.kind == 'number':
                token.value = DecimalNumber.from_tokens(token.children)
                token.children = None
        self.text = text
        self._tokens = tuple(cls.CONVERTER.convert(tokens))

    @classmethod
    def from_postfix(cls, tokens):
        '''
        Build an expression straight from postfix tokens.

        Number tokens without a value are parsed from their text. Nothing
        else checks that the tokens make sense until evaluation.
        '''
        parsed = []
        for token in tokens:
            if token.kind in ('bracket', 'comma'):
                raise ParseError('No {} tokens in postfix, got {}'.format(
                    token.kind, repr(token.text)))
            if token.kind == 'number' and token.value is None:
                token = Token('number', token.text,
                              value=DecimalNumber.from_string(token.text))
            parsed.append(token)
        expression = cls.__new__(cls)
        expression.text = None
        expression._tokens = tuple(parsed)
        return expression

    @property
    def tokens(self):
        return self._tokens

    @property
    def variables(self):
        '''
        Names of the variables referenced, in order of first appearance.
        '''
        return tuple(dict.fromkeys(token.text
                                   for token
                                   in self._tokens
                                   if token.kind == 'variable'))

    def evaluate(self, bindings):
        return type(self).MACHINE.evaluate(self._tokens, bindings)

    def __str__(self):
        return ' '.join(token.text for token in self._tokens)

    def __repr__(self):
        if self.text is None:
            return '{}.from_postfix({})'.format(type(self).__name__,
                                                repr(self._tokens))
        return '{}({})'.format(type(self).__name__, repr(self.text))
