from os import isatty
import sys
from sys import stdin, stdout, exit
from argparse import ArgumentParser, ArgumentTypeError, REMAINDER, OPTIONAL
import logging

import regex
from prompt_toolkit import PromptSession

from .util import ExpressionError
from .number import DecimalNumber
from .expression import Expression


logger = logging.getLogger(__name__)

NAME = r'[^\W\d]\w*'
# name = expression
ASSIGNMENT = regex.compile(r'\s*(?<name>' + NAME + r')\s*=(?<expression>.*)',
                           flags=regex.DOTALL)
# name=value, on the command line
BINDING = regex.compile(r'(?<name>' + NAME + r')=(?<value>.+)')


def binding(text):
    '''
    Parse a NAME=VALUE command line binding.
    '''
    match = BINDING.fullmatch(text)
    if match is None:
        raise ArgumentTypeError('Expected NAME=VALUE, got {}'.format(
            repr(text)))
    try:
        value = DecimalNumber.from_string(match.group('value'))
    except ExpressionError as e:
        raise ArgumentTypeError(e.args[0])
    return match.group('name'), value


def precision(text):
    '''
    Parse a count of digits to render after the comma.
    '''
    try:
        value = int(text)
    except ValueError:
        raise ArgumentTypeError('Expected a digit count, got {}'.format(
            repr(text)))
    if value < 0:
        raise ArgumentTypeError('Negative digit count {}'.format(value))
    return value


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    mouse_support=True,
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the expression engine.
    '''

    DEFAULT_PROMPT = '> '
    DEFAULT_PRECISION = 2

    def _split(self, line):
        '''
        Return the name assigned to by line, if any, and its expression.
        '''
        match = ASSIGNMENT.fullmatch(line)
        if match is None:
            return None, line
        return match.group('name'), match.group('expression')

    def _lines(self):
        for line in self.args.expressions:
            line = line.strip()
            if line:
                yield line

    def _report(self, error):
        logger.debug('Failed', exc_info=error)
        print(error.args[0], file=sys.stderr)

    def format(self, value):
        if isinstance(value, DecimalNumber):
            return value.to_string(self.args.precision)
        return str(value)

    def dumper(self):
        '''
        Dump the postfix tokens of each expression.
        '''
        print('<kind>\t<repr(text)>')
        for line in self._lines():
            try:
                expression = Expression(self._split(line)[1])
            except ExpressionError as e:
                self._report(e)
                continue
            for token in expression.tokens:
                print(token.kind, repr(token.text), sep='\t')

    def executor(self):
        '''
        Evaluate each expression, storing assigned results as bindings.
        '''
        bindings = dict(self.args.bindings)
        for line in self._lines():
            name, text = self._split(line)
            # Abort just this line, later ones may not depend on it
            try:
                result = Expression(text).evaluate(bindings)
            except ExpressionError as e:
                self._report(e)
                continue
            if name is not None:
                bindings[name] = result
            print(self.format(result))

    def _prompting_input(self):
        '''
        Return the source of expression lines when none were given.

        Lines are read through a prompt when one was asked for with -p, or
        when both stdin and stdout are terminals; otherwise straight from
        stdin.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Infix expression calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=precision,
                                          default=self.DEFAULT_PRECISION,
                                          help='digits after the comma')
        self.argument_parser.add_argument('-b', '--bind',
                                          type=binding,
                                          action='append',
                                          default=[],
                                          dest='bindings',
                                          metavar='NAME=VALUE')
        self.argument_parser.add_argument('-D', '--dump',
                                          action='store_const',
                                          const=self.dumper,
                                          dest='action')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(levelname)s [%(name)s] %(message)s')
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
