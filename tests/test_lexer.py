'''
Key input lexer tests
'''

import regex

from rpnbrain.util import RPNError
from rpnbrain.lexer import Lexer
from rpnbrain.operations import Registry, Binary

from pytest import raises


def test_lexemes(lexer):
    matches = lexer.lex('3 4+')
    assert [m.group(0) for m in matches] == ['3', ' ', '4', '+']


def test_thousands_separators(lexer):
    matches = list(lexer.lex('1_200.5'))
    assert len(matches) == 1
    assert lexer.matchedgroups(matches[0]) == {'number': '1_200.5'}


def test_words(lexer):
    matches = list(lexer.lex('sin M'))
    assert [lexer.matchedgroups(m) for m in matches] == [{'word': 'sin'},
                                                         {'space': ' '},
                                                         {'word': 'M'}]
    assert lexer.isoperator('sin')
    assert not lexer.isoperator('M')


def test_store(lexer):
    for line in '→M', '>M':
        match, = lexer.lex(line)
        assert lexer.matchedgroups(match) == {'store': 'M'}


def test_aliases(lexer):
    match, = lexer.lex('*')
    assert lexer.matchedgroups(match) == {'operator': '*'}
    assert lexer.canonical('*') == '×'
    assert lexer.canonical('sqrt') == '√'
    assert lexer.canonical('×') == '×'


def test_unicode_operators(lexer):
    matches = lexer.lex('×÷−±√')
    assert [lexer.matchedgroups(m) for m in matches] == [{'operator': '×'},
                                                         {'operator': '÷'},
                                                         {'operator': '−'},
                                                         {'operator': '±'},
                                                         {'operator': '√'}]


def test_not_feedable(lexer):
    space, = lexer.lex('   ')
    assert not lexer.isfeedable(space)


def test_commands(lexer):
    assert lexer.iscommand('undo')
    assert lexer.iscommand('clear')
    assert not lexer.iscommand('sin')


def test_unknown_character(lexer):
    with raises(RPNError, match=regex.escape("Couldn't lex $ 4")):
        list(lexer.lex('3 $ 4'))


def test_good_lexemes_before_bad():
    l = Lexer()
    matches = l.lex('3 $')
    assert next(matches).group(0) == '3'
    assert next(matches).group(0) == ' '
    with raises(RPNError):
        next(matches)


def test_custom_registry():
    l = Lexer(Registry([Binary('^', pow, 3)]))
    match, = l.lex('^')
    assert l.matchedgroups(match) == {'operator': '^'}
    with raises(RPNError):
        list(l.lex('÷'))


def test_aliases_only_for_known_operations():
    l = Lexer(Registry([Binary('^', pow, 3)]))
    assert l.canonical('/') == '/'
    assert not l.isoperator('sqrt')
    with raises(RPNError, match=regex.escape("Couldn't lex /")):
        list(l.lex('/'))


def test_word_operators_only():
    l = Lexer(Registry([Binary('max', max)]))
    assert [l.matchedgroups(m) for m in l.lex('max')] == [{'word': 'max'}]
    with raises(RPNError):
        list(l.lex('+'))
