'''
CharStateMachine tests
'''

import regex
from pytest import raises

from rpnexpr.number import TOKENIZER as NUMBER_TOKENIZER
from rpnexpr.statemachine import CharStateMachine, KEYED, Token
from rpnexpr.util import LexError, IncompleteInputError


def words(char, run):
    if char is None:
        return run.end()
    elif char == ' ':
        return words
    run.token('word')
    return letters(char, run)


def letters(char, run):
    if char is None or char == ' ':
        return words(char, run)
    run.eat()
    return letters


WORDS = CharStateMachine('words', {'words': words, 'letters': letters})


def test_ordered_tokens():
    result = WORDS.run('  foo bar  ')
    assert [token.text for token in result.tokens] == ['foo', 'bar']
    assert all(token.kind == 'word' for token in result.tokens)
    assert result.consumed == 11


def test_empty_input():
    assert WORDS.run('').tokens == []


def key(char, run):
    if char == '=':
        run.token(key='value')
        return 'value'
    elif char is None:
        return run.fail('expected =')
    run.eat()
    return key


def start(char, run):
    run.token(key='key')
    return key(char, run)


def value(char, run):
    if char is None:
        return run.end()
    run.eat()
    return value


def test_keyed_tokens_and_transformers():
    calls = []

    def count(text):
        calls.append(text)
        return int(text)

    machine = CharStateMachine('start',
                               {'start': start, 'value': value},
                               mode=KEYED,
                               transformers={'value': count, 'missing': int})
    tokens = machine.run('width=42').tokens
    assert set(tokens) == {'key', 'value'}
    assert tokens['key'].text == 'width'
    assert tokens['value'].text == 42
    assert calls == ['42']


def test_failure_at_end_of_input_is_incomplete():
    machine = CharStateMachine('start', {'start': start, 'value': value},
                               mode=KEYED)
    with raises(IncompleteInputError, match='expected ='):
        machine.run('width')


def quoted(char, run):
    if char != '"':
        return run.fail('expected a quote')
    run.token('string')
    return inside


def inside(char, run):
    if char == '"':
        return closed
    elif char is not None:
        run.eat()
    return inside


def closed(char, run):
    return run.end()


QUOTED = CharStateMachine('quoted', {'quoted': quoted, 'inside': inside})


def test_running_out_of_input_is_incomplete():
    with raises(IncompleteInputError, match=regex.escape(
            "Incomplete input '\"abc': ended in state inside")):
        QUOTED.run('"abc')


def test_failure():
    with raises(LexError, match=regex.escape(
            "Couldn't lex 'abc' at position 0: expected a quote")):
        QUOTED.run('abc')


def test_end_leaves_current_character():
    result = QUOTED.run('"abc" rest')
    assert result.tokens == [Token('string', 'abc')]
    assert result.consumed == 5


def outer(char, run):
    if char is None:
        return run.end()
    elif char.isdigit() or char == '-':
        if run.delegate(NUMBER_TOKENIZER, 'number'):
            return outer
    run.token('other')
    run.eat()
    return outer


OUTER = CharStateMachine('outer', {'outer': outer})


def test_delegation():
    tokens = OUTER.run('x12.5e3y').tokens
    assert [(token.kind, token.text) for token in tokens] == [
        ('other', 'x'),
        ('number', '12.5e3'),
        ('other', 'y'),
    ]
    children = tokens[1].children
    assert children['integral'].text == '12'
    assert children['fraction'].text == '5'
    assert children['exponent'].text == 3


def test_rejected_delegation_changes_nothing():
    tokens = OUTER.run('-x').tokens
    assert [(token.kind, token.text) for token in tokens] == [
        ('other', '-'),
        ('other', 'x'),
    ]


def test_update_and_peek():
    seen = []

    def state(char, run):
        if char is None:
            return run.end()
        seen.append(run.peek())
        run.token('letter')
        run.eat()
        if run.text == 'b':
            run.update(kind='bee', closing=False)
        return state

    tokens = CharStateMachine('state', {'state': state}).run('ab').tokens
    assert seen == ['b', None]
    assert tokens[1] == Token('bee', 'b', closing=False)


def test_update_rejects_unknown_fields():
    def state(char, run):
        run.token('letter')
        run.update(colour='red')

    with raises(AttributeError):
        CharStateMachine('state', {'state': state}).run('a')


def test_configuration_errors():
    with raises(ValueError):
        CharStateMachine('nowhere', {'words': words})
    with raises(ValueError):
        CharStateMachine('words', {'words': words}, mode='sorted')
    with raises(ValueError):
        CharStateMachine('words', {'words': words}, transformers={'a': int})


def test_token_keys_follow_the_mode():
    def keyless(char, run):
        run.token('thing')

    def keyed(char, run):
        run.token('thing', key='thing')

    with raises(ValueError):
        CharStateMachine('keyless', {'keyless': keyless},
                         mode=KEYED).run('a')
    with raises(ValueError):
        CharStateMachine('keyed', {'keyed': keyed}).run('a')
