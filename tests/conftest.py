from pytest import fixture

from rpnbrain import Brain, Lexer, Session


@fixture
def brain() -> Brain:
    '''
    Fresh brain, calculator's own operations.
    '''
    return Brain()


@fixture
def lexer() -> Lexer:
    return Lexer()


@fixture
def session() -> Session:
    return Session()


@fixture
def feed(brain: Brain):
    '''
    Push numbers onto the brain fixture and perform everything else, like a
    calculator would.

    Strings that aren't known symbols are pushed as variables.
    '''
    def feeder(*keys) -> Brain:
        for key in keys:
            if isinstance(key, str) and key in brain.registry:
                brain.perform(key)
            else:
                brain.pushoperand(key)
        return brain
    return feeder
