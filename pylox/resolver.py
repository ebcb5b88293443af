"""resolver

Resolver(statements, reporter).inspect() -> locals
    Resolves every local variable reference in statements to the
    number of scopes between it and its declaration.
    Names which do not resolve to a local scope are left for the
    interpreter to find in the global environment.
"""

import logging
from typing import Dict, List, Optional
from functools import singledispatch

from . import builtin, lang
from .reporter import Reporter

logger = logging.getLogger(__name__)

# Maps a name to True once its initializer has been resolved
Scope = Dict[lang.NameKey, bool]

# **********************************************************************

# Resolver helper classes


class Scopes:
    """A stack of block scopes, innermost last.
    The global scope is not tracked; an empty stack means the
    resolver is at the top level.

    Methods
    -------
    push()
        enters a new block scope
    pop()
        leaves the innermost block scope
    declare(name)
        adds name to the innermost scope, not yet usable
    define(name)
        marks name in the innermost scope as usable
    resolveLocal(expr, name)
        records the distance from expr to the scope declaring name
    """
    __slots__ = ("stack", "locals", "reporter")

    def __init__(self, reporter: Reporter) -> None:
        self.stack: List[Scope] = []
        self.locals: lang.Locals = {}
        self.reporter = reporter

    def __repr__(self) -> str:
        return repr(self.stack)

    @property
    def innermost(self) -> Optional[Scope]:
        return self.stack[-1] if self.stack else None

    def push(self) -> None:
        self.stack.append({})

    def pop(self) -> None:
        self.stack.pop()

    def error(self, token: lang.Token, msg: str) -> None:
        self.reporter.report(builtin.LogicError(msg, token))

    def declare(self, name: lang.Token) -> None:
        scope = self.innermost
        if scope is None:
            return
        if name.lexeme in scope:
            self.error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def define(self, name: lang.Token) -> None:
        scope = self.innermost
        if scope is None:
            return
        scope[name.lexeme] = True

    def resolveLocal(self, expr: lang.Expr, name: lang.Token) -> None:
        for distance, scope in enumerate(reversed(self.stack)):
            if name.lexeme in scope:
                self.locals[expr] = distance
                return
        # Not found; assumed global


class Resolver:
    """Resolves a list of statements, reporting errors to reporter."""
    __slots__ = ('statements', 'scopes')

    def __init__(self, statements: lang.Stmts, reporter: Reporter) -> None:
        self.statements = statements
        self.scopes = Scopes(reporter)

    def inspect(self) -> lang.Locals:
        verifyStmts(self.statements, self.scopes)
        logger.debug("Resolved %d local references", len(self.scopes.locals))
        return self.scopes.locals


@singledispatch
def resolve(expr, scopes):
    """Dispatcher for Expr resolvers."""
    raise TypeError(f"No resolver found for {expr}")


@resolve.register
def _(expr: lang.Literal, scopes: Scopes) -> None:
    pass


@resolve.register
def _(expr: lang.Grouping, scopes: Scopes) -> None:
    resolve(expr.expression, scopes)


@resolve.register
def _(expr: lang.Unary, scopes: Scopes) -> None:
    resolve(expr.right, scopes)


@resolve.register
def _(expr: lang.Binary, scopes: Scopes) -> None:
    resolve(expr.left, scopes)
    resolve(expr.right, scopes)


@resolve.register
def _(expr: lang.Logical, scopes: Scopes) -> None:
    resolve(expr.left, scopes)
    resolve(expr.right, scopes)


@resolve.register
def _(expr: lang.Variable, scopes: Scopes) -> None:
    scope = scopes.innermost
    if scope is not None and scope.get(expr.name.lexeme) is False:
        scopes.error(
            expr.name, "Can't read local variable in its own initializer."
        )
    scopes.resolveLocal(expr, expr.name)


@resolve.register
def _(expr: lang.Assign, scopes: Scopes) -> None:
    resolve(expr.value, scopes)
    scopes.resolveLocal(expr, expr.name)


# Verifiers


def verifyStmts(stmts: lang.Stmts, scopes: Scopes) -> None:
    """Verify a list of statements."""
    for stmt in stmts:
        verify(stmt, scopes)


@singledispatch
def verify(stmt, scopes):
    """Dispatcher for Stmt verifiers."""
    raise TypeError(f"No verifier found for {stmt}")


@verify.register
def _(stmt: lang.ExprStmt, scopes: Scopes) -> None:
    resolve(stmt.expression, scopes)


@verify.register
def _(stmt: lang.Var, scopes: Scopes) -> None:
    scopes.declare(stmt.name)
    if stmt.initializer is not None:
        resolve(stmt.initializer, scopes)
    scopes.define(stmt.name)


@verify.register
def _(stmt: lang.Block, scopes: Scopes) -> None:
    scopes.push()
    verifyStmts(stmt.statements, scopes)
    scopes.pop()


@verify.register
def _(stmt: lang.If, scopes: Scopes) -> None:
    resolve(stmt.condition, scopes)
    verify(stmt.thenBranch, scopes)
    if stmt.elseBranch is not None:
        verify(stmt.elseBranch, scopes)


@verify.register
def _(stmt: lang.While, scopes: Scopes) -> None:
    resolve(stmt.condition, scopes)
    verify(stmt.body, scopes)


@verify.register
def _(stmt: lang.Break, scopes: Scopes) -> None:
    pass
