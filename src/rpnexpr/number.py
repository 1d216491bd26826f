'''
Arbitrary precision decimal numbers.

A number is an integer magnitude and a count of decimal places:
magnitude × 10^-places. Everything, logarithms included, is computed on
Python integers; floats never take part.

Literals are tokenized by a keyed state machine with a token per part of
the number: sign, integral, fraction and exponent. The expression lexer
delegates to the same machine when it meets a digit.
'''

from functools import total_ordering

from .arithmetic import Arithmetic
from .matchers import is_digit, is_sign, is_point, is_exponent
from .statemachine import CharStateMachine, KEYED
from .util import LexError


def start(char, run):
    if is_sign(char):
        run.token(key='sign')
        run.eat()
        return integral_start
    return integral_start(char, run)


def integral_start(char, run):
    if not is_digit(char):
        return run.fail('expected a digit')
    run.token(key='integral')
    run.eat()
    return integral


def integral(char, run):
    if is_digit(char):
        run.eat()
        return integral
    # A point not followed by a digit belongs to whatever comes next, e.g.
    # the argument separator in max(2, x).
    if is_point(char) and is_digit(run.peek()):
        run.token(key='fraction')
        return fraction
    return exponent_mark(char, run)


def fraction(char, run):
    if is_digit(char):
        run.eat()
        return fraction
    return exponent_mark(char, run)


def exponent_mark(char, run):
    if is_exponent(char):
        following = run.peek()
        if is_digit(following) or \
           is_sign(following) and is_digit(run.peek(2)):
            run.token(key='exponent')
            return exponent_sign
    return run.end()


def exponent_sign(char, run):
    if is_sign(char):
        run.eat()
        return exponent_start
    return exponent_start(char, run)


def exponent_start(char, run):
    if not is_digit(char):
        return run.fail('expected an exponent digit')
    run.eat()
    return exponent


def exponent(char, run):
    if is_digit(char):
        run.eat()
        return exponent
    return run.end()


TOKENIZER = CharStateMachine('start',
                             {
                                 'start': start,
                                 'integral_start': integral_start,
                                 'integral': integral,
                                 'fraction': fraction,
                                 'exponent_mark': exponent_mark,
                                 'exponent_sign': exponent_sign,
                                 'exponent_start': exponent_start,
                                 'exponent': exponent,
                             },
                             mode=KEYED,
                             transformers={
                                 'exponent': int,
                             })


def _shift(magnitude, digits):
    '''
    Multiply by 10^digits, truncating when digits is negative.
    '''
    if digits >= 0:
        return magnitude * 10 ** digits
    return _divide(magnitude, 10 ** -digits)


def _divide(dividend, divisor):
    '''
    Integer division truncating toward zero.
    '''
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        return -quotient
    return quotient


def _normalize(magnitude, places, digits):
    '''
    Split a positive number into a mantissa within [0.7, 7), scaled by
    10^digits, and the power of ten it was shifted by.
    '''
    text = str(magnitude)
    shift = len(text) - 1 - places
    if int(text[0]) >= 7:
        shift += 1
    return _shift(magnitude, digits - places - shift), shift


def _dunder(name):
    def operator(self, other):
        if not isinstance(other, DecimalNumber):
            return NotImplemented
        return getattr(self, name)(other)
    operator.__name__ = '__{}__'.format(name)
    return operator


@total_ordering
class DecimalNumber(Arithmetic):
    '''
    Immutable decimal number of arbitrary precision.
    '''
    __slots__ = ('_magnitude', '_places')

    TOKENIZER = TOKENIZER
    # Digits kept beyond the dividend's own when dividing.
    EXTRA_DIGITS = 20
    # Working precision of log10, and the length of its series. The count is
    # empirical: at the edges of the reduced range, |x| near 0.3, 60 terms of
    # ln(1 + x) leave an error of about 1e-34, so only some 33 of the 40
    # digits are exact.
    LOG_DIGITS = 40
    LOG_TERMS = 60
    # 1/ln(10), truncated to LOG_DIGITS digits.
    INV_LN10 = 4342944819032518276511289189166050822943
    # Dirichlet's approximation theorem puts a power in the band below 9.
    MAX_POWER = 16

    def __init__(self, magnitude, places=0):
        magnitude = int(magnitude)
        places = int(places)
        if places < 0:
            magnitude *= 10 ** -places
            places = 0
        self._magnitude = magnitude
        self._places = places

    @property
    def magnitude(self):
        return self._magnitude

    @property
    def places(self):
        return self._places

    @classmethod
    def from_tokens(cls, tokens):
        '''
        Build from the tokens of a TOKENIZER run.
        '''
        sign = tokens['sign'].text if 'sign' in tokens else ''
        digits = tokens['integral'].text
        fraction = tokens['fraction'].text if 'fraction' in tokens else ''
        exponent = tokens['exponent'].text if 'exponent' in tokens else 0
        return cls(int(sign + digits + fraction), len(fraction) - exponent)

    @classmethod
    def from_string(cls, text):
        '''
        Parse a literal such as 9.44, -4,5e-3 or 42E10.

        The whole text must be the literal.
        '''
        text = text.strip()
        result = cls.TOKENIZER.run(text)
        if result.consumed != len(text):
            raise LexError("Couldn't lex {0} at position {1}: "
                           "trailing characters".format(repr(text),
                                                        result.consumed))
        return cls.from_tokens(result.tokens)

    def raw_length(self):
        '''
        Number of digits of the magnitude.
        '''
        return len(str(abs(self._magnitude)))

    def to_string(self, decimals=2):
        '''
        Render with one leading digit, decimals digits after the comma, and
        an exponent unless it is zero.

        Rounds half away from zero, on the digits themselves.
        '''
        if decimals < 0:
            raise ValueError('Negative decimal count {}'.format(decimals))
        digits = abs(self._magnitude)
        if not digits:
            return '0,' + '0' * decimals if decimals else '0'
        length = len(str(digits))
        exponent = length - 1 - self._places
        kept = decimals + 1
        if length > kept:
            unit = 10 ** (length - kept)
            digits = (digits + unit // 2) // unit
            # 9,996 rounds up to 10,00
            if len(str(digits)) > kept:
                digits //= 10
                exponent += 1
        else:
            digits *= 10 ** (kept - length)
        text = str(digits)
        rendered = text[0]
        if decimals:
            rendered += ',' + text[1:]
        if self._magnitude < 0:
            rendered = '-' + rendered
        if exponent:
            rendered += 'e{}'.format(exponent)
        return rendered

    def _aligned(self, other):
        places = max(self._places, other._places)
        return (_shift(self._magnitude, places - self._places),
                _shift(other._magnitude, places - other._places),
                places)

    def add(self, other):
        left, right, places = self._aligned(other)
        return type(self)(left + right, places)

    def sub(self, other):
        left, right, places = self._aligned(other)
        return type(self)(left - right, places)

    def mul(self, other):
        return type(self)(self._magnitude * other._magnitude,
                          self._places + other._places)

    def div(self, other):
        '''
        Divide, keeping EXTRA_DIGITS more places than the dividend has.

        Digits beyond those are truncated.
        '''
        if not other._magnitude:
            raise ZeroDivisionError('division by zero')
        extra = type(self).EXTRA_DIGITS
        dividend = self._magnitude * 10 ** (extra + other._places)
        return type(self)(_divide(dividend, other._magnitude),
                          self._places + extra)

    def neg(self):
        return type(self)(-self._magnitude, self._places)

    def max(self, other):
        if other > self:
            return other
        return self

    def log10(self):
        '''
        Base 10 logarithm, computed with LOG_DIGITS digits; the result is
        good to about 1e-33.

        The argument is raised to the smallest power whose mantissa lies in
        [0.7, 1.3), where the series of ln(1 + x) converges quickly; the
        power and the decades shifted away are then divided and added back.
        '''
        if self._magnitude <= 0:
            raise ValueError('math domain error')
        cls = type(self)
        digits = cls.LOG_DIGITS
        scale = 10 ** digits
        low, high = 7 * scale // 10, 13 * scale // 10

        base, base_shift = _normalize(self._magnitude, self._places, digits)
        mantissa, shift = base, base_shift
        for power in range(1, cls.MAX_POWER + 1):
            if low <= mantissa < high:
                break
            mantissa, extra = _normalize(mantissa * base, 2 * digits, digits)
            shift += base_shift + extra
        else:
            raise ArithmeticError('log10 argument reduction failed')

        delta = mantissa - scale
        series = 0
        term = delta
        for n in range(1, cls.LOG_TERMS + 1):
            series += _divide(term, n)
            term = -_divide(term * delta, scale)
        series = _divide(series * cls.INV_LN10, scale)

        return cls(_divide(series + shift * scale, power), digits)

    __add__ = _dunder('add')
    __sub__ = _dunder('sub')
    __mul__ = _dunder('mul')
    __truediv__ = _dunder('div')

    def __neg__(self):
        return self.neg()

    def __eq__(self, other):
        if not isinstance(other, DecimalNumber):
            return NotImplemented
        left, right, _ = self._aligned(other)
        return left == right

    def __lt__(self, other):
        if not isinstance(other, DecimalNumber):
            return NotImplemented
        left, right, _ = self._aligned(other)
        return left < right

    def __hash__(self):
        magnitude, places = self._magnitude, self._places
        while places and not magnitude % 10:
            magnitude //= 10
            places -= 1
        return hash((magnitude, places))

    def __float__(self):
        return self._magnitude / 10 ** self._places

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return '{}({}, {})'.format(type(self).__name__,
                                   self._magnitude,
                                   self._places)
