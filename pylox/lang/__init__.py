"""lang
This package defines the entities and types used by pylox.

types.py contains type aliases used across the interpreter.
environment.py contains the Environment scope chain.

Token
    A token in the source code

Context
    The environment chain and resolution table used while interpreting

Expr, Stmt
    Nodes of the syntax tree produced by the parser
"""
from dataclasses import dataclass
from typing import (
    Iterable,
    Optional,
    Sequence,
)

# Merge namespace
from .environment import *
from .types import *

from . import (
    environment as e,
    types as t,
)

# Plurals
Stmts = Sequence["Stmt"]


@dataclass(eq=False, frozen=True)
class Token:
    """Tokens encapsulate data needed by the parser to construct Exprs
    and Stmts.
    It also encapsulates code information for error reporting.
    """
    __slots__ = ("type", "lexeme", "literal", "line")
    type: t.TokenType
    lexeme: str
    literal: t.Value
    line: int

    def __str__(self) -> str:
        return f"{self.type} {self.lexeme} {self.literal!r}"


@dataclass
class Context:
    """Encapsulates the context in which interpreting is carried out.

    Arguments/Attributes
    --------------------
    - env: Environment
        The innermost environment
    - globals: Environment
        The outermost environment, used for unresolved names
    - locals: Locals
        Scope distances computed by the resolver
    """
    env: e.Environment
    globals: e.Environment
    locals: t.Locals

    def with_env(self, env: e.Environment) -> "Context":
        """Returns a new Context with the new environment."""
        return type(self)(env, self.globals, self.locals)


class Expr:
    """Represents an expression in Lox.
    An expression can be evaluated to a Value.
    An Expr must return an associated token for error-reporting
    purposes.

    Exprs compare and hash by identity, so that the resolver can key
    scope distances on each node.

    Attributes
    ----------
    token: Token
        Returns the token asociated with the expr
    """
    __slots__: Iterable[str] = tuple()

    @property
    def token(self) -> Optional[Token]:
        raise NotImplementedError


@dataclass(eq=False)
class Literal(Expr):
    """A Literal represents any value coming directly from the source
    code.
    """
    __slots__ = ("value", )
    value: t.Value

    @property
    def token(self) -> None:
        return None


@dataclass(eq=False)
class Grouping(Expr):
    """A parenthesised expression."""
    __slots__ = ("expression", )
    expression: "Expr"

    @property
    def token(self):
        return self.expression.token


@dataclass(eq=False)
class Unary(Expr):
    """A Unary Expr represents a prefix operator applied to a single
    operand.
    """
    __slots__ = ("operator", "right")
    operator: Token
    right: "Expr"

    @property
    def token(self):
        return self.operator


@dataclass(eq=False)
class Binary(Expr):
    """A Binary Expr represents an arithmetic, comparison or equality
    operator applied to two operands.
    """
    __slots__ = ("left", "operator", "right")
    left: "Expr"
    operator: Token
    right: "Expr"

    @property
    def token(self):
        return self.operator


@dataclass(eq=False)
class Logical(Expr):
    """A Logical Expr represents `and`/`or`, which evaluate the right
    operand only when the left one does not decide the result.
    """
    __slots__ = ("left", "operator", "right")
    left: "Expr"
    operator: Token
    right: "Expr"

    @property
    def token(self):
        return self.operator


@dataclass(eq=False)
class Variable(Expr):
    """A Variable Expr reads the value bound to a name."""
    __slots__ = ("name", )
    name: Token

    @property
    def token(self):
        return self.name


@dataclass(eq=False)
class Assign(Expr):
    """An Assign Expr represents an assignment operation.
    The evaluated value is bound to the name and is also the value of
    the expression.
    """
    __slots__ = ("name", "value")
    name: Token
    value: "Expr"

    @property
    def token(self):
        return self.name


class Stmt:
    """Represents a statement in Lox.
    A statement usually has one or more expressions, and represents an
    effect: console output or environment mutation.
    """
    __slots__: Iterable[str] = tuple()


class ExprStmt(Stmt):
    """Base class for statements that contain only a single Expr."""
    __slots__ = ("expression", )


@dataclass(eq=False)
class Expression(ExprStmt):
    """Expression evaluates an Expr for its side effects."""
    expression: "Expr"


@dataclass(eq=False)
class Print(ExprStmt):
    """Print encapsulates a value to be displayed in a terminal/console.
    """
    expression: "Expr"


@dataclass(eq=False)
class Var(Stmt):
    """Var declares a name in the current scope, with an optional
    initializer.
    """
    __slots__ = ("name", "initializer")
    name: Token
    initializer: Optional["Expr"]


@dataclass(eq=False)
class Block(Stmt):
    """Block encapsulates statements executed in a new scope."""
    __slots__ = ("statements", )
    statements: Stmts


@dataclass(eq=False)
class If(Stmt):
    """If executes thenBranch when the condition is truthy, otherwise
    the optional elseBranch.
    """
    __slots__ = ("condition", "thenBranch", "elseBranch")
    condition: "Expr"
    thenBranch: Stmt
    elseBranch: Optional[Stmt]


@dataclass(eq=False)
class While(Stmt):
    """While represents a pre-condition loop; `for` loops are also
    parsed into Whiles.
    """
    __slots__ = ("condition", "body")
    condition: "Expr"
    body: Stmt


@dataclass(eq=False)
class Break(Stmt):
    """Break ends the innermost enclosing loop."""
    __slots__ = ("keyword", )
    keyword: Token
