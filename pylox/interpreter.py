"""interpreter

Interpreter(env, statements, locals).interpret() -> None
    Interprets and executes a list of statements
"""

import logging
from typing import (
    Callable as function,
    Optional,
)
from functools import singledispatch
from dataclasses import dataclass, field

from . import (builtin, lang)

logger = logging.getLogger(__name__)

# The result of executing a statement: None, or a control signal
Completion = Optional[builtin.Signal]

# ----------------------------------------------------------------------

# Helper functions


def numbersElseError(*values: lang.Value,
                     errmsg: str = "Operands must be numbers.",
                     token: lang.Token) -> None:
    """Takes in one or more operand values.
    Raises an error if any of them is not a number.
    """
    if not all(builtin.isNumber(value) for value in values):
        raise builtin.RuntimeError(errmsg, token=token)


def declaredElseError(env: lang.Environment, name: lang.Token,
                      errmsg: str = "Undefined variable") -> None:
    """Takes in an environment and a name token.
    Raises an error if the name is not declared in the environment.
    """
    if not env.has(name.lexeme):
        raise builtin.RuntimeError(f"{errmsg} '{name.lexeme}'.", name)


def environmentFor(expr: lang.Expr, context: lang.Context) -> lang.Environment:
    """Returns the environment that expr's name was resolved to.
    Names without a resolved distance are global.
    """
    distance = context.locals.get(expr)
    if distance is None:
        return context.globals
    return context.env.ancestor(distance)


@dataclass
class Interpreter:
    """Interprets a list of statements with a given global environment
    and the resolver's scope distances.
    """
    env: lang.Environment
    statements: lang.Stmts
    locals: lang.Locals = field(default_factory=dict)
    outputHandler: function = field(default=print, init=False)

    def registerOutputHandler(self, handler: function) -> None:
        """Register handler as the function to use to handle any output
        from the executed statements.
        The default handler is Python's print().
        """
        self.outputHandler = handler  # type: ignore

    def interpret(self) -> None:
        context = lang.Context(self.env, self.env, self.locals)
        executeStmts(self.statements, context, output=self.outputHandler)


# Evaluators
# Evaluation functions return the evaluated value of Exprs.


def evalBinary(expr: lang.Binary, context: lang.Context) -> lang.Value:
    leftval = evaluate(expr.left, context)
    rightval = evaluate(expr.right, context)
    oper = builtin.OPERATORS[expr.operator.type]
    if oper is builtin.add:
        if not (
            (builtin.isNumber(leftval) and builtin.isNumber(rightval))
            or (isinstance(leftval, str) and isinstance(rightval, str))
        ):
            raise builtin.RuntimeError(
                "Operands must be two numbers or two strings.",
                token=expr.operator,
            )
    elif oper in builtin.NUMERIC_OPERATORS:
        numbersElseError(leftval, rightval, token=expr.operator)
    if oper is builtin.div and rightval == 0:
        raise builtin.RuntimeError("Division by zero.", token=expr.operator)
    return oper(leftval, rightval)


@singledispatch
def evaluate(expr, context, **kwargs):
    """Dispatcher for Expr evaluators."""
    raise TypeError(f"Unexpected expr {expr}")


@evaluate.register
def _(expr: lang.Literal, context: lang.Context, **kw) -> lang.Value:
    return expr.value


@evaluate.register
def _(expr: lang.Grouping, context: lang.Context, **kw) -> lang.Value:
    return evaluate(expr.expression, context)


@evaluate.register
def _(expr: lang.Unary, context: lang.Context, **kw) -> lang.Value:
    rightval = evaluate(expr.right, context)
    if expr.operator.type == 'MINUS':
        numbersElseError(
            rightval, errmsg="Operand must be a number.", token=expr.operator
        )
    return builtin.UNARY[expr.operator.type](rightval)


@evaluate.register
def _(expr: lang.Binary, context: lang.Context, **kw) -> lang.Value:
    return evalBinary(expr, context)


@evaluate.register
def _(expr: lang.Logical, context: lang.Context, **kw) -> lang.Value:
    leftval = evaluate(expr.left, context)
    if expr.operator.type == 'OR':
        if builtin.isTruthy(leftval):
            return leftval
    elif not builtin.isTruthy(leftval):
        return leftval
    return evaluate(expr.right, context)


@evaluate.register
def _(expr: lang.Variable, context: lang.Context, **kw) -> lang.Value:
    env = environmentFor(expr, context)
    declaredElseError(env, expr.name)
    return env.get(expr.name.lexeme)


@evaluate.register
def _(expr: lang.Assign, context: lang.Context, **kw) -> lang.Value:
    value = evaluate(expr.value, context)
    env = environmentFor(expr, context)
    declaredElseError(env, expr.name)
    env.assign(expr.name.lexeme, value)
    return value


# Executors


def executeStmts(
        stmts: lang.Stmts, context: lang.Context,
        **kwargs) -> Completion:
    """Execute a list of statements.
    Stops at the first statement which returns a control signal, and
    passes the signal back.
    """
    for stmt in stmts:
        signal = execute(stmt, context, **kwargs)
        if signal is not None:
            return signal
    return None


@singledispatch
def execute(stmt: lang.Stmt, context: lang.Context, **kwargs):
    """Dispatcher for statement executors."""
    raise TypeError(f"Invalid Stmt {stmt}")


@execute.register
def _(stmt: lang.Expression, context: lang.Context, **kwargs) -> None:
    evaluate(stmt.expression, context)


@execute.register
def _(stmt: lang.Print, context: lang.Context, *, output: function,
      **kwargs) -> None:
    value = evaluate(stmt.expression, context)
    output(builtin.stringify(value))


@execute.register
def _(stmt: lang.Var, context: lang.Context, **kwargs) -> None:
    value = None
    if stmt.initializer is not None:
        value = evaluate(stmt.initializer, context)
    context.env.define(stmt.name.lexeme, value)


@execute.register
def _(stmt: lang.Block, context: lang.Context, **kwargs) -> Completion:
    local = lang.Environment(enclosing=context.env)
    return executeStmts(stmt.statements, context.with_env(local), **kwargs)


@execute.register
def _(stmt: lang.If, context: lang.Context, **kwargs) -> Completion:
    if builtin.isTruthy(evaluate(stmt.condition, context)):
        return execute(stmt.thenBranch, context, **kwargs)
    if stmt.elseBranch is not None:
        return execute(stmt.elseBranch, context, **kwargs)
    return None


@execute.register
def _(stmt: lang.While, context: lang.Context, **kwargs) -> None:
    while builtin.isTruthy(evaluate(stmt.condition, context)):
        signal = execute(stmt.body, context, **kwargs)
        if signal is builtin.BREAK:
            break
    return None


@execute.register
def _(stmt: lang.Break, context: lang.Context, **kwargs) -> Completion:
    return builtin.BREAK
