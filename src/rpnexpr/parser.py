from types import MappingProxyType
import logging

from .util import ParseError


logger = logging.getLogger(__name__)


class ShuntingYard:
    '''
    Infix to postfix converter, after Dijkstra's shunting yard.

    Brackets and separators only steer the conversion; none of them make it
    to the output.
    '''

    PRECEDENCE = MappingProxyType({
        '+': 1,
        '-': 1,
        '*': 2,
        '/': 2,
        '\N{MINUS SIGN}': 1,
        '\N{MULTIPLICATION SIGN}': 2,
        '\N{DIVISION SIGN}': 2,
    })

    def isopening(self, token):
        '''
        Return True if token opens a group: opening brackets, and separators,
        which open the next argument.
        '''
        return token.kind == 'comma' or \
            token.kind == 'bracket' and not token.closing

    def convert(self, tokens):
        '''
        Return tokens, infix, reordered to postfix.
        '''
        precedence = type(self).PRECEDENCE
        output = []
        stack = []
        for token in tokens:
            if token.kind in ('number', 'variable'):
                output.append(token)
            elif token.kind == 'function':
                stack.append(token)
            elif token.kind == 'operator':
                # Operators only; a bracket or function on top stops the
                # loop before any precedence is looked up. Equal precedence
                # pops too, so a - b - c is (a - b) - c.
                while stack and stack[-1].kind == 'operator' and \
                        precedence[stack[-1].text] >= precedence[token.text]:
                    output.append(stack.pop())
                stack.append(token)
            elif token.kind == 'comma':
                self._unwind(stack, output, token)
                stack.append(token)
            elif token.kind == 'bracket' and not token.closing:
                stack.append(token)
            elif token.kind == 'bracket':
                self._unwind(stack, output, token)
                # The bracket closed a call: the function goes right after
                # its arguments.
                if stack and stack[-1].kind == 'function':
                    output.append(stack.pop())
            else:
                raise ParseError('Unexpected {} token {}'.format(
                    token.kind, repr(token.text)))
        while stack:
            token = stack.pop()
            if self.isopening(token):
                raise ParseError('Unclosed {}'.format(repr(token.text)))
            output.append(token)
        logger.debug('Converted to postfix: %s',
                     ' '.join(token.text for token in output))
        return output

    def _unwind(self, stack, output, token):
        '''
        Pop to output up to the innermost opening token, which is discarded.
        '''
        while stack and not self.isopening(stack[-1]):
            output.append(stack.pop())
        if not stack:
            raise ParseError('Unbalanced {}'.format(repr(token.text)))
        stack.pop()
