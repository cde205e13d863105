from functools import reduce
import operator

import regex

from .util import RPNError
from .operations import Registry


class Lexer:
    '''
    Lexer for the calculator's key input, a *regular* grammar.

    Operator symbols come from the registry the lexer's built for, plus ASCII
    aliases for those hard to type.
    '''
    # Easier to type than the real thing.
    ALIASES = {
        '*': '×',
        '/': '÷',
        '-': '−',
        '~': '±',
        'neg': '±',
        'sqrt': '√',
        'pi': 'π',
    }
    # Words that act on the session rather than pushing anything.
    COMMANDS = 'undo', 'clear'

    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Support not just digits, but thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d+
                      |
                      (?:
                          \d{3}
                          (?:
                              _\d{3}
                          )*
                          (?:
                              _\d{1,2}
                          )?
                      )*
                  )
                  '''
    # Unsigned; negate with ±. Keeps - unambiguous.
    NUMBER = r'''
              (?:
                  # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                  {INTEGRAL}
                  (?:
                      \.
                      {FRACTIONAL}?
                  )?
              )|(?:
                  # .2, 0.2, 0.200_200 but not 0.2_200
                  {INTEGRAL}?
                  \.
                  {FRACTIONAL}
              )
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL)
    # Variable names, and word operators (sin, pi) and commands (undo).
    WORD = r'[\p{L}_][\p{L}\p{N}_]*'
    # →M, like the memory key. > for those without the arrow.
    STORE = r'(?:→|>)(?<store>' + WORD + r')'
    SPACE = r'\s+'

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, registry=None):
        '''
        Build grammar for operations in registry, the calculator's by default.
        '''
        if registry is None:
            registry = Registry()
        # Only aliases for what the registry knows.
        self.aliases = {alias: symbol
                        for alias, symbol
                        in type(self).ALIASES.items()
                        if symbol in registry}
        self.symbols = set(registry) | set(self.aliases)
        # Longest first, so alternation doesn't settle for a prefix.
        punctuation = sorted((symbol
                              for symbol
                              in self.symbols
                              if not regex.fullmatch(type(self).WORD, symbol)),
                             key=len,
                             reverse=True)
        # (?!) never matches; an empty alternation matches the empty string.
        self.OPERATOR = r'(?:' + (r'|'.join(map(regex.escape, punctuation))
                                  or r'(?!)') + r')'
        # All possible lexemes.
        self.LEXEME = r'(?<number>' + type(self).NUMBER + r')|' + \
                      type(self).STORE + r'|' \
                      r'(?<operator>' + self.OPERATOR + r')|' \
                      r'(?<word>' + type(self).WORD + r')|' \
                      r'(?<space>' + type(self).SPACE + r')'
        self.pattern = regex.compile(self.LEXEME, flags=type(self).FLAGS)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Doesn't yield incomplete or incorrect lexemes, stopping on first bad.
        '''
        while line:
            match = self.pattern.match(line)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise RPNError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to a session.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def isoperator(self, word):
        '''
        Return True if word names an operation, directly or by alias.
        '''
        return word in self.symbols

    def iscommand(self, word):
        return word in type(self).COMMANDS

    def canonical(self, symbol):
        '''
        Return registry symbol for symbol or its alias.
        '''
        return self.aliases.get(symbol, symbol)

    def matchedgroups(self, match):
        '''
        Return lexeme's matched groups, by name.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}
