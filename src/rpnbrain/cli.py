from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import RPNError
from .session import Session


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Persistent
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.rpnbrain_history'

    def dumper(self):
        '''
        Dump all lexeme matches, and what they'd do.
        '''
        session = Session()
        print('[groups]\t<repr(lexeme)>\t<action>')
        for line in self.args.expressions:
            try:
                for match in session.lexer.lex(line):
                    matched = match.group(0)  # the lexeme text itself
                    groups = session.lexer.matchedgroups(match)
                    if session.lexer.isfeedable(match):
                        action = self._describe(session.parse(groups))
                    else:
                        action = None
                    print(*groups.keys(), repr(matched), action, sep='\t')
            except RPNError as e:
                self._complain(e)

    def _describe(self, action):
        '''
        Name session action, with its argument if any.
        '''
        func = getattr(action, 'func', action)
        args = getattr(action, 'args', ())
        return ' '.join([func.__name__] + [repr(arg) for arg in args])

    def executor(self):
        '''
        Run session (RPN calculator), showing it after every line.
        '''
        session = Session()
        for line in self.args.expressions:
            try:
                session.run(line)
            # Abort entire rest of line, makes sense anyway
            except RPNError as e:
                self._complain(e)
            print(session)
        if self.args.program:
            print(*session.brain.program)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Session().lexer.LEXEME)

    def _complain(self, e):
        '''
        Report rejected input on stderr; with a stack trace if verbose.
        '''
        if self.args.verbose:
            traceback.print_exception(type(e), e, e.__traceback__,
                                      file=stderr)
        print(e.args[0], file=stderr)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-P', '--program',
                                          action='store_true',
                                          help='print program tokens at end')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
