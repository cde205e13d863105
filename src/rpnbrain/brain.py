import regex

from .operations import (Registry, Operand, Constant, Unary, Binary,
                         Variable, ATOMIC)


class Brain:
    '''
    Postfix expression engine behind a calculator.

    Records what it's fed on a program stack, evaluates it on demand, and
    describes it in infix notation. Holds no presentation state: display
    formatting and input handling are the caller's business.

    Never raises on user input. A missing result (None) is the only failure:
    empty or incomplete programs, unbound variables.
    '''

    # Program tokens, for reloading exported programs.
    NUMBER = regex.compile(r'''
                            [+-]?
                            (?:
                                (?:
                                    # 1, 1., 1.5, .5
                                    \d+(?:\.\d*)?
                                    |
                                    \.\d+
                                )
                                # 1e+16
                                (?:[eE][+-]?\d+)?
                                |
                                inf
                                |
                                nan
                            )
                            ''', flags=regex.VERBOSE)

    # Top level context; never parenthesized.
    OUTERMOST = 0
    PLACEHOLDER = '?'
    SEPARATOR = ', '

    def __init__(self, registry=None):
        '''
        Create brain with empty program and no variables set.

        :param registry: Known operations. Defaults to the calculator's.
        '''
        self.registry = Registry() if registry is None else registry
        self.stack = []
        self.variables = dict()

    def pushoperand(self, value):
        '''
        Push number, or variable if given a name, and evaluate.
        '''
        if isinstance(value, str):
            self.stack.append(Variable(value))
        else:
            self.stack.append(Operand(float(value)))
        return self.evaluate()

    def perform(self, symbol):
        '''
        Push known operation with symbol, and evaluate.

        Unknown symbols are ignored.
        '''
        operation = self.registry.lookup(symbol)
        if operation is not None:
            self.stack.append(operation)
        return self.evaluate()

    def popoperand(self):
        '''
        Drop last thing pushed, if any, and evaluate.
        '''
        if self.stack:
            self.stack.pop()
        return self.evaluate()

    def reset(self):
        '''
        Forget program and variables, together.

        Both are replaced rather than cleared, so references handed out
        earlier keep their old contents.
        '''
        self.stack = []
        self.variables = dict()
        return self.evaluate()

    def evaluate(self):
        '''
        Return value of expression on top of the stack, or None.
        '''
        ops = tuple(self.stack)
        start, missing = self._start(ops, len(ops))
        values = [None] * missing
        for op in ops[start:]:
            if isinstance(op, Operand):
                values.append(op.value)
            elif isinstance(op, Constant):
                values.append(op.producer())
            elif isinstance(op, Variable):
                values.append(self.variables.get(op.symbol))
            elif isinstance(op, Unary):
                operand = values.pop()
                values.append(None if operand is None
                              else op.function(operand))
            elif isinstance(op, Binary):
                right = values.pop()
                left = values.pop()
                values.append(None if left is None or right is None
                              else op.function(left, right))
            else:
                raise TypeError('Not an operation: {!r}'.format(op))
        return values.pop() if values else None

    def _start(self, ops, end):
        '''
        Find where the expression ending just before end starts.

        Return its start, and how many operands it's missing once the
        stack's exhausted. Those are the leftmost ones, in postfix order.
        '''
        needed = 1
        start = end
        while needed and start:
            start -= 1
            needed += ops[start].arity - 1
        return start, needed

    @property
    def description(self):
        '''
        Infix rendering of everything on the stack.

        Expressions still waiting for an operator are separated by commas,
        oldest first.
        '''
        ops = tuple(self.stack)
        end = len(ops)
        pieces = []
        while end:
            text, end = self._render(ops, end)
            pieces.append(text)
        return type(self).SEPARATOR.join(reversed(pieces))

    def _render(self, ops, end):
        '''
        Render expression ending just before end.

        Return text and where the expression starts.
        '''
        start, missing = self._start(ops, end)
        # Text of each pending subexpression, with its own precedence.
        texts = [(type(self).PLACEHOLDER, ATOMIC)] * missing
        for op in ops[start:end]:
            if isinstance(op, Operand):
                text = self.formatnumber(op.value)
            elif isinstance(op, (Constant, Variable)):
                text = str(op)
            elif isinstance(op, Unary):
                text = str(op) + self._nest(texts.pop(), op.precedence)
            elif isinstance(op, Binary):
                right = self._nest(texts.pop(), op.precedence)
                left = self._nest(texts.pop(), op.precedence)
                text = '{} {} {}'.format(left, op, right)
            else:
                raise TypeError('Not an operation: {!r}'.format(op))
            texts.append((text, op.precedence))
        text, precedence = texts.pop()
        return self._nest((text, precedence), type(self).OUTERMOST), start

    def _nest(self, rendered, precedence):
        '''
        Parenthesize rendered subexpression if it sits within a tighter
        operator.
        '''
        text, own = rendered
        if precedence > own:
            return '(' + text + ')'
        return text

    def formatnumber(self, value):
        '''
        Format number for display: 3, not 3.0.
        '''
        text = repr(value)
        if text.endswith('.0'):
            return text[:-2]
        return text

    @property
    def program(self):
        '''
        Stack as a list of tokens, first pushed first.
        '''
        return [str(op) for op in self.stack]

    @program.setter
    def program(self, tokens):
        '''
        Replace stack with tokens: known symbols, then numbers, then any
        other string as a variable name. Empty strings and non-strings are
        skipped.

        A variable named like a symbol or a number (π, inf, 2) comes back as
        that symbol or number; tokens carry no type. Variables are left
        alone.
        '''
        stack = []
        for token in tokens:
            if not isinstance(token, str):
                continue
            operation = self.registry.lookup(token)
            if operation is not None:
                stack.append(operation)
            elif type(self).NUMBER.fullmatch(token):
                stack.append(Operand(float(token)))
            elif token:
                stack.append(Variable(token))
        self.stack = stack

    def __str__(self):
        return self.description

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.program)
