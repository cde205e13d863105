'''
Command line tests
'''

from io import StringIO

from rpnbrain.cli import CLI

from pytest import fixture


@fixture
def stderr(monkeypatch):
    '''
    Capture what the CLI complains about.
    '''
    buffer = StringIO()
    monkeypatch.setattr('rpnbrain.cli.stderr', buffer)
    return buffer


def test_expressions(capsys, stderr):
    CLI().run(args=['-e', '3 4 +', '5 ×'])
    out, _ = capsys.readouterr()
    assert out == '3 + 4 = 7\n(3 + 4) × 5 = 35\n'
    assert stderr.getvalue() == ''


def test_program(capsys):
    CLI().run(args=['-P', '-e', 'x 2 * pi +'])
    out, _ = capsys.readouterr()
    assert out.splitlines() == ['x × 2 + π =', 'x 2.0 × π +']


def test_bad_input(capsys, stderr):
    CLI().run(args=['-e', '3 $', '4 +'])
    out, _ = capsys.readouterr()
    assert out == '3 = 3\n3 + 4 = 7\n'
    assert stderr.getvalue() == "Couldn't lex $\n"


def test_verbose_bad_input(stderr):
    CLI().run(args=['-v', '-e', '$'])
    assert 'Traceback' in stderr.getvalue()
    assert stderr.getvalue().endswith("Couldn't lex $\n")


def test_dump(capsys):
    CLI().run(args=['-D', '-e', '3 sin'])
    out, _ = capsys.readouterr()
    assert out.splitlines() == ['[groups]\t<repr(lexeme)>\t<action>',
                                "number\t'3'\tpushnumber '3'",
                                "space\t' '\tNone",
                                "word\t'sin'\tperform 'sin'"]


def test_raw_grammar(capsys):
    CLI().run(args=['-G', '-e'])
    out, _ = capsys.readouterr()
    assert '(?<number>' in out
    assert '(?<store>' in out
