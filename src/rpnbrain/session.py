from functools import partial

from .util import RPNError, wrap_user_errors
from .brain import Brain
from .lexer import Lexer


class Session:
    '''
    Calculator screen over a brain: feeds it keys, shows what it says.

    A number is only typed in at first, like on the keypad; it's pushed
    (entered) by whatever comes next, or at the end of the line. Until then
    it can be negated in place, stored into a variable, or backspaced over.
    '''

    NEGATE = '±'

    def __init__(self, brain=None, lexer=None):
        self.brain = Brain() if brain is None else brain
        self.lexer = Lexer(self.brain.registry) if lexer is None else lexer
        self.display = None
        self.typing = False
        self.digits = ''

    def run(self, line):
        '''
        Feed every lexeme on line, then enter whatever number's typed in.

        Lexemes before a bad one still get fed.
        '''
        try:
            for match in self.lexer.lex(line):
                if self.lexer.isfeedable(match):
                    self.feed(self.lexer.matchedgroups(match))
        finally:
            if self.typing:
                self.enter()

    def feed(self, groups):
        '''
        Run lexeme on session.

        :param groups: Lexer's matched groups for lexeme.
        '''
        self.parse(groups)()

    def parse(self, groups):
        '''
        Parse lexeme into the session action it stands for.
        '''
        if 'number' in groups:
            return partial(self.pushnumber, groups['number'])
        elif 'store' in groups:
            return partial(self.store, groups['store'])
        elif 'operator' in groups:
            return partial(self.perform,
                           self.lexer.canonical(groups['operator']))
        elif 'word' in groups:
            word = groups['word']
            if self.lexer.iscommand(word):
                return getattr(self, word)
            elif self.lexer.isoperator(word):
                return partial(self.perform, self.lexer.canonical(word))
            return partial(self.pushvariable, word)
        raise RPNError('Nothing to do with {}'.format(groups))

    @wrap_user_errors('Cannot convert {1}')
    def _iconvert(self, number):
        '''
        Convert number lexeme, thousands separators and all.
        '''
        return float(number.replace('_', ''))

    def _oconvert(self, value):
        '''
        Format value for display; blank if there's none.
        '''
        if value is None:
            return ''
        return self.brain.formatnumber(value)

    def enter(self):
        '''
        Push number typed in.
        '''
        self.typing = False
        if self.display is not None:
            self.display = self.brain.pushoperand(self.display)

    def pushnumber(self, number):
        '''
        Start typing in number lexeme.
        '''
        if self.typing:
            self.enter()
        self.digits = number
        self.display = self._iconvert(number)
        self.typing = True

    def pushvariable(self, name):
        if self.typing:
            self.enter()
        self.display = self.brain.pushoperand(name)

    def perform(self, symbol):
        if self.typing:
            if symbol == type(self).NEGATE:
                if self.digits.startswith('-'):
                    self.digits = self.digits[1:]
                else:
                    self.digits = '-' + self.digits
                self.display = -self.display
                return
            self.enter()
        self.display = self.brain.perform(symbol)

    def store(self, name):
        '''
        Set variable to the displayed value, and re-evaluate.

        A number typed in is stored, not pushed.
        '''
        if self.display is None:
            raise RPNError('Nothing to store in {}'.format(name))
        self.typing = False
        self.brain.variables[name] = self.display
        self.display = self.brain.evaluate()

    def undo(self):
        '''
        Backspace over number typed in, or else take back the last thing
        pushed.
        '''
        if self.typing:
            self.digits = self.digits[:-1].rstrip('_')
            if self.digits.strip('-.'):
                self.display = self._iconvert(self.digits)
            else:
                # Nothing left typed in; blank, like the keypad.
                self.typing = False
                self.display = None
        else:
            self.display = self.brain.popoperand()

    def clear(self):
        '''
        Start over: no program, no variables, nothing on display.
        '''
        self.brain.reset()
        self.display = None
        self.typing = False

    def __str__(self):
        '''
        History line and display, the way the calculator shows them.
        '''
        return '{} = {}'.format(self.brain.description,
                                self._oconvert(self.display)).strip()
