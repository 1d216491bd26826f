'''
Character classes shared by the tokenizers.

Every predicate accepts None (end of input) and answers False for it.
'''

import regex


DIGIT = regex.compile(r'[0-9]')
SIGN = regex.compile(r'[+\-]')
# Decimal point, either notation.
POINT = regex.compile(r'[.,]')
EXPONENT = regex.compile(r'[eE]')
SEPARATOR = regex.compile(r'[,;]')
OPENING = regex.compile(r'[(\[]')
CLOSING = regex.compile(r'[)\]]')
WHITESPACE = regex.compile(r'[ \t\r\n]')


def _matcher(pattern):
    def matches(char):
        return char is not None and pattern.fullmatch(char) is not None
    return matches


is_digit = _matcher(DIGIT)
is_sign = _matcher(SIGN)
is_point = _matcher(POINT)
is_exponent = _matcher(EXPONENT)
is_separator = _matcher(SEPARATOR)
is_opening = _matcher(OPENING)
is_closing = _matcher(CLOSING)
is_whitespace = _matcher(WHITESPACE)


def is_bracket(char):
    return is_opening(char) or is_closing(char)
