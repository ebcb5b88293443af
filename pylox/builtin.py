"""Keywords, operators, values and errors supported in pylox.
"""

# Errors

class LoxError(Exception):
    """Base exception class for all Lox errors."""

    def __init__(self, msg, token, line=None) -> None:
        super().__init__(msg)
        self.token = token
        self.line = line
        if token:
            self.line = token.line

    def msg(self) -> str:
        return self.args[0]

    @property
    def where(self) -> str:
        """Describes the location of the offending token."""
        if not self.token:
            return ''
        if self.token.type == 'EOF':
            return ' at end'
        return f" at '{self.token.lexeme}'"

    def report(self) -> str:
        """Returns the location and message as a formatted string"""
        return f"[line {self.line}] Error{self.where}: {self.msg()}"

class ParseError(LoxError):
    """Custom error raised by scanner and parser."""

class LogicError(LoxError):
    """Custom error raised by resolver."""

class RuntimeError(LoxError):
    """Custom error raised by interpreter."""

    def report(self) -> str:
        return f"{self.msg()}\n[line {self.line}]"



# Control signals
# Returned (never raised) by statement executors.

class Signal:
    __slots__ = ("name", )

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"

BREAK = Signal('BREAK')



# Values

def isTruthy(value) -> bool:
    """nil and false are falsy; everything else is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True

def isEqual(x, y) -> bool:
    # bool is a subclass of int in Python, so tags are compared first
    if type(x) is not type(y):
        return False
    return x == y

def stringify(value) -> str:
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if value.is_integer():
            # -0 keeps its sign
            return f"{value:.0f}"
        return str(value)
    return str(value)

def isNumber(value) -> bool:
    return isinstance(value, float)



# Operators
# These operators are used internally by the interpreter.
# Operand types are checked by the interpreter before they are called.
def add(x, y):
    return x + y

def sub(x, y):
    return x - y

def neg(x):
    return -x

def mul(x, y):
    return x * y

def div(x, y):
    return x / y

def lt(x, y):
    return x < y

def lte(x, y):
    return x <= y

def gt(x, y):
    return x > y

def gte(x, y):
    return x >= y

def ne(x, y):
    return not isEqual(x, y)

def eq(x, y):
    return isEqual(x, y)

def NOT(x):
    return not isTruthy(x)



# Token types

KEYWORDS = {
    'and': 'AND',
    'break': 'BREAK',
    'class': 'CLASS',
    'else': 'ELSE',
    'false': 'FALSE',
    'for': 'FOR',
    'fun': 'FUN',
    'if': 'IF',
    'nil': 'NIL',
    'or': 'OR',
    'print': 'PRINT',
    'return': 'RETURN',
    'super': 'SUPER',
    'this': 'THIS',
    'true': 'TRUE',
    'var': 'VAR',
    'while': 'WHILE',
}

VALUES = {
    'true': True,
    'false': False,
    'nil': None,
}

SYM_SINGLE = {
    '(': 'LEFT_PAREN',
    ')': 'RIGHT_PAREN',
    '{': 'LEFT_BRACE',
    '}': 'RIGHT_BRACE',
    ',': 'COMMA',
    '.': 'DOT',
    '-': 'MINUS',
    '+': 'PLUS',
    ';': 'SEMICOLON',
    '*': 'STAR',
    '/': 'SLASH',
}

# Symbols which may be followed by '='
SYM_MULTI = {
    '!': ('BANG', 'BANG_EQUAL'),
    '=': ('EQUAL', 'EQUAL_EQUAL'),
    '<': ('LESS', 'LESS_EQUAL'),
    '>': ('GREATER', 'GREATER_EQUAL'),
}

OPERATORS = {
    'PLUS': add,
    'MINUS': sub,
    'STAR': mul,
    'SLASH': div,
    'LESS': lt,
    'LESS_EQUAL': lte,
    'GREATER': gt,
    'GREATER_EQUAL': gte,
    'BANG_EQUAL': ne,
    'EQUAL_EQUAL': eq,
}

UNARY = {
    'MINUS': neg,
    'BANG': NOT,
}

NUMERIC_OPERATORS = (sub, mul, div, lt, lte, gt, gte)

# Tokens which begin a new declaration or statement
STATEMENT_STARTS = (
    'CLASS', 'FUN', 'VAR', 'FOR', 'IF', 'WHILE', 'PRINT', 'RETURN',
)
