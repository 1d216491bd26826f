'''
Command line interface tests
'''

from argparse import ArgumentTypeError

from pytest import raises

from rpnexpr.cli import CLI, binding, precision
from rpnexpr.number import DecimalNumber


def run(capsys, *args):
    CLI().run(args=list(args))
    return capsys.readouterr()


def test_evaluates_with_bindings(capsys):
    captured = run(capsys, '-b', 'a=1.52', '-b', 'b=5e-1',
                   '-e', '(a + b) / 2')
    assert captured.out == '1,01\n'


def test_assignments_become_bindings(capsys):
    captured = run(capsys, '-e', 'x = 2,5', 'y=x * 2', 'max(x; y)')
    assert captured.out == '2,50\n5,00\n5,00\n'


def test_precision(capsys):
    captured = run(capsys, '-k', '4', '-e', '1 / 3')
    assert captured.out == '3,3333e-1\n'


def test_errors_skip_the_line(capsys):
    captured = run(capsys, '-e', 'y + 1', '(1', '1 + 1')
    assert captured.out == '2,00\n'
    assert captured.err.splitlines() == [
        "Unbound variable 'y'",
        "Unclosed '('",
    ]


def test_dump(capsys):
    captured = run(capsys, '-D', '-e', 'a + b * 2')
    assert captured.out.splitlines() == [
        '<kind>\t<repr(text)>',
        "variable\t'a'",
        "variable\t'b'",
        "number\t'2'",
        "operator\t'*'",
        "operator\t'+'",
    ]


def test_binding():
    assert binding('rate=4.5e-2') == ('rate', DecimalNumber(45, 3))


def test_bad_bindings(capsys):
    with raises(SystemExit):
        CLI().run(args=['-b', 'rate', '-e', 'rate'])
    with raises(SystemExit):
        CLI().run(args=['-b', 'rate=fast', '-e', 'rate'])


def test_precision_must_be_a_count(capsys):
    assert precision('0') == 0
    with raises(ArgumentTypeError, match='Negative digit count -1'):
        precision('-1')
    with raises(SystemExit):
        CLI().run(args=['-k', '-1', '-e', '1'])
    assert 'Negative digit count -1' in capsys.readouterr().err
