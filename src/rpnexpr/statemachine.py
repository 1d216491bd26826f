'''
Character-driven tokenizing state machines.

A machine is a set of named state functions. Each state is called with one
character of input (None once the input is exhausted) and the Run driving
it, and returns the next state: itself, another state (function or name),
or one of the markers handed out by Run.end() and Run.fail().

Tokens are either appended to a list (ordered machines) or stored under
caller chosen keys (keyed machines), in which case transformers can rewrite
their text once the run is over.
'''

from collections import namedtuple
from enum import Enum
from types import MappingProxyType
import logging

from .util import LexError, IncompleteInputError


logger = logging.getLogger(__name__)

ORDERED = 'ordered'
KEYED = 'keyed'


class Signal(Enum):
    END = 'end'
    FAILED = 'failed'


Tokenization = namedtuple('Tokenization', ['tokens', 'consumed'])


class Token:
    '''
    Lexeme: a kind, the text eaten under it, and whatever metadata the
    states attach to it.
    '''
    FIELDS = ('kind', 'text', 'children', 'closing', 'value')

    def __init__(self, kind=None, text='', children=None, closing=None,
                 value=None):
        self.kind = kind
        self.text = text
        # Tokens of a nested machine, for delegated tokens.
        self.children = children
        # Brackets only.
        self.closing = closing
        # Filled in by whoever interprets the children.
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return all(getattr(self, field) == getattr(other, field)
                   for field
                   in type(self).FIELDS)

    __hash__ = None

    def __repr__(self):
        fields = ['{}={}'.format(field, repr(getattr(self, field)))
                  for field
                  in type(self).FIELDS
                  if getattr(self, field) is not None]
        return 'Token({})'.format(', '.join(fields))


class Run:
    '''
    One pass of a machine over one input.

    This is what state functions get to talk to: they open tokens, eat the
    current character, peek ahead, and delegate to nested machines through
    it.
    '''

    def __init__(self, machine, text):
        self.machine = machine
        self.input = text
        self.index = 0
        self.char = None
        self.tokens = dict() if machine.mode == KEYED else list()
        # Catches whatever is eaten before the first token is opened.
        # Never part of the result.
        self.current = Token()
        self._advance = 1
        self._reason = None

    @property
    def text(self):
        '''
        Text eaten so far under the active token.
        '''
        return self.current.text

    def token(self, kind=None, key=None, **meta):
        '''
        Open a new token and make it the active one.

        :param key: Name to store the token under. Keyed machines only.
        '''
        if self.machine.mode == KEYED:
            if key is None:
                raise ValueError('Keyed machines need a token key')
            token = self.tokens[key] = Token(kind, **meta)
        else:
            if key is not None:
                raise ValueError('Ordered machines take no token key')
            token = Token(kind, **meta)
            self.tokens.append(token)
        self.current = token
        return token

    def eat(self):
        '''
        Append the current character to the active token.
        '''
        if self.char is None:
            raise ValueError('Nothing to eat past the end of input')
        self.current.text += self.char

    def update(self, **meta):
        '''
        Change metadata of the active token in place.
        '''
        for field, value in meta.items():
            if field not in Token.FIELDS:
                raise AttributeError('Tokens have no {} field'.format(field))
            setattr(self.current, field, value)

    def peek(self, offset=1):
        '''
        Return the character offset places ahead, None past the end.
        '''
        index = self.index + offset
        if index < len(self.input):
            return self.input[index]
        return None

    def delegate(self, machine, kind=None, key=None, **meta):
        '''
        Run machine over the rest of the input, from the current character.

        On success, its tokens become the children of a new token, the text
        it consumed that token's text, and the cursor skips past it.

        Return False, changing nothing, if the nested machine failed.
        '''
        rest = self.input[self.index:]
        try:
            nested = machine.run(rest)
        except LexError as e:
            logger.debug('Delegation over %r rejected: %s', rest, e)
            return False
        if not nested.consumed:
            return False
        token = self.token(kind, key, children=nested.tokens, **meta)
        token.text = rest[:nested.consumed]
        self._advance = nested.consumed
        return True

    def end(self):
        '''
        Signal the end of the token stream.

        The current character is not consumed.
        '''
        return Signal.END

    def fail(self, reason='unexpected character'):
        '''
        Signal that the current character cannot be tokenized.
        '''
        self._reason = reason
        return Signal.FAILED

    def _resolve(self, state):
        if isinstance(state, str):
            return self.machine.states[state]
        return state

    def execute(self):
        state = self._resolve(self.machine.start)
        while True:
            if self.index < len(self.input):
                self.char = self.input[self.index]
            else:
                self.char = None
            self._advance = 1
            result = state(self.char, self)
            if result is Signal.END:
                break
            elif result is Signal.FAILED:
                if self.char is None:
                    raise IncompleteInputError(
                        'Incomplete input {0}: {1}'.format(repr(self.input),
                                                           self._reason))
                raise LexError(
                    "Couldn't lex {0} at position {1}: {2}".format(
                        repr(self.input), self.index, self._reason))
            elif self.char is None:
                raise IncompleteInputError(
                    'Incomplete input {0}: ended in state {1}'.format(
                        repr(self.input),
                        getattr(result, '__name__', result)))
            state = self._resolve(result)
            self.index += self._advance
        self._transform()
        logger.debug('Tokenized %r, %d character(s) consumed',
                     self.input, self.index)
        return Tokenization(self.tokens, self.index)

    def _transform(self):
        for key, transformer in self.machine.transformers.items():
            if key in self.tokens:
                token = self.tokens[key]
                token.text = transformer(token.text)


class CharStateMachine:
    '''
    Reusable tokenizer definition.

    Holds no run state: every call to run() starts afresh, so one machine
    can be shared, and nested inside another one.
    '''

    def __init__(self, start, states, mode=ORDERED, transformers=None):
        '''
        :param start: Name of the first state.
        :param states: Mapping of state names to state functions.
        :param mode: ORDERED or KEYED.
        :param transformers: Mapping of token keys to functions applied to
                             the text of those tokens after a run. Keyed
                             machines only.
        '''
        if start not in states:
            raise ValueError('No start state {}'.format(repr(start)))
        if mode not in (ORDERED, KEYED):
            raise ValueError('No such mode {}'.format(repr(mode)))
        if transformers and mode != KEYED:
            raise ValueError('Transformers need a keyed machine')
        self.start = start
        self.states = MappingProxyType(dict(states))
        self.mode = mode
        self.transformers = MappingProxyType(dict(transformers or {}))

    def run(self, text):
        '''
        Tokenize text, stopping where the states end the run.

        Return the tokens and the number of characters consumed.
        Raise LexError (or IncompleteInputError) on failure.
        '''
        return Run(self, text).execute()
