"""parser

parse(tokens: list, reporter: Reporter) -> statements: list
    Parses tokens and returns a list of statements.
    Statements which fail to parse are reported and left out.
"""

import logging
from typing import Optional, List, Mapping
from typing import TypeVar, Callable as function

from . import builtin, lang
from .reporter import Reporter

logger = logging.getLogger(__name__)

R = TypeVar('R')  # Return type



class Tokens:
    """
    Encapsulates the token list and the parser's position in it.

    Used by the parser.
    """
    def __init__(self, tokens: List[lang.Token], reporter: Reporter):
        self.tokens = tokens
        self.reporter = reporter
        self.cursor: int = 0
        # Number of loops enclosing the cursor; break is legal when > 0
        self.loopDepth: int = 0



# Helper functions

def atEnd(tokens: Tokens) -> bool:
    """Returns True if at last token."""
    return check(tokens).type == 'EOF'

def check(tokens: Tokens) -> lang.Token:
    """Returns token at cursor."""
    return tokens.tokens[tokens.cursor]

def previous(tokens: Tokens) -> lang.Token:
    """Returns the token before the cursor."""
    return tokens.tokens[tokens.cursor - 1]

def consume(tokens: Tokens) -> lang.Token:
    """Returns token at cursor, advances cursor.
    The cursor never moves past the EOF token.
    """
    token = check(tokens)
    if not atEnd(tokens):
        tokens.cursor += 1
    return token

def expectType(
    tokens: Tokens,
    *types: lang.TokenType,
) -> Optional[lang.Token]:
    """Returns token at cursor if its type matches given sequence of
    types, otherwise returns None.
    """
    if check(tokens).type in types:
        return check(tokens)
    return None

def matchType(
    tokens: Tokens,
    *types: lang.TokenType,
) -> Optional[lang.Token]:
    """Returns token at cursor if its type matches given sequence of
    types, otherwise returns None.

    matchType differs from expectType by advancing the cursor upon a
    match.
    """
    if check(tokens).type in types:
        return consume(tokens)
    return None

def matchTypeElseError(
    tokens: Tokens,
    *types: lang.TokenType,
    msg: str,
) -> lang.Token:
    """Returns token at cursor if its type matches given sequence of
    types.

    matchTypeElseError differs from matchType by raising an error
    instead of returning None if there is no match.
    """
    token = matchType(tokens, *types)
    if token:
        return token
    raise builtin.ParseError(msg, check(tokens))

def buildExprWhileType(
    tokens: Tokens,
    parserMap: Mapping[lang.TokenType, function[[Tokens], lang.Expr]],
    rootExpr: lang.Expr,
    makeExpr: function[[lang.Expr, lang.Token, lang.Expr], lang.Expr],
) -> lang.Expr:
    """
    Builds a left-associative expression tree from a starting expr,
    using the operand parser provided for each matching operator type.

    Used for binary and logical expressions
    """
    while expectType(tokens, *parserMap.keys()):
        operator = consume(tokens)
        right = parserMap[operator.type](tokens)
        rootExpr = makeExpr(rootExpr, operator, right)
    return rootExpr

def parseUntilType(
    tokens: Tokens,
    endType: lang.TokenType,
    parse: function[[Tokens], Optional[R]],
) -> List[R]:
    """
    Calls a parser until a token of endType (or EOF) is found.
    Does not consume the end token.
    Returns a list of all parsed statements, leaving out failed ones.
    """
    parsedStmts = []
    while not expectType(tokens, endType) and not atEnd(tokens):
        stmt = parse(tokens)
        if stmt is not None:
            parsedStmts += [stmt]
    return parsedStmts

def inLoop(tokens: Tokens, parse: function[[Tokens], R]) -> R:
    """Calls a parser with the loop depth raised by one."""
    tokens.loopDepth += 1
    try:
        return parse(tokens)
    finally:
        tokens.loopDepth -= 1

def synchronize(tokens: Tokens) -> None:
    """Discards tokens until a statement boundary: just after a
    semicolon, or just before a token which begins a statement.
    """
    consume(tokens)
    while not atEnd(tokens):
        if previous(tokens).type == 'SEMICOLON':
            return
        if expectType(tokens, *builtin.STATEMENT_STARTS):
            return
        consume(tokens)



# Precedence parsers
# The expression parsers use the recursive descent parsing technique to
# handle expression precedence.
#
# Expressions are parsed with this precedence (highest to lowest):
# 1. <literal> | <name> | <grouping>
# 2. ! | - (unary)
# 3. *, /
# 4. +, -
# 5. < | <= | > | >=
# 6. != | ==
# 7. and
# 8. or
# 9. = (assignment)

def primary(tokens: Tokens) -> lang.Expr:
    if matchType(tokens, 'FALSE', 'TRUE', 'NIL', 'NUMBER', 'STRING'):
        return lang.Literal(previous(tokens).literal)
    if matchType(tokens, 'IDENTIFIER'):
        return lang.Variable(previous(tokens))
    if matchType(tokens, 'LEFT_PAREN'):
        expr = expression(tokens)
        matchTypeElseError(
            tokens, 'RIGHT_PAREN', msg="Expect ')' after expression."
        )
        return lang.Grouping(expr)
    raise builtin.ParseError("Expect expression.", check(tokens))

def unary(tokens: Tokens) -> lang.Expr:
    if matchType(tokens, 'BANG', 'MINUS'):
        oper = previous(tokens)
        right = unary(tokens)
        return lang.Unary(oper, right)
    return primary(tokens)

def factor(tokens: Tokens) -> lang.Expr:
    # *, /
    return buildExprWhileType(
        tokens,
        parserMap={'SLASH': unary, 'STAR': unary},
        rootExpr=unary(tokens),
        makeExpr=lang.Binary,
    )

def term(tokens: Tokens) -> lang.Expr:
    # +, -
    return buildExprWhileType(
        tokens,
        parserMap={'MINUS': factor, 'PLUS': factor},
        rootExpr=factor(tokens),
        makeExpr=lang.Binary,
    )

def comparison(tokens: Tokens) -> lang.Expr:
    # <, <=, >, >=
    return buildExprWhileType(
        tokens,
        parserMap={
            'GREATER': term,
            'GREATER_EQUAL': term,
            'LESS': term,
            'LESS_EQUAL': term,
        },
        rootExpr=term(tokens),
        makeExpr=lang.Binary,
    )

def equality(tokens: Tokens) -> lang.Expr:
    # !=, ==
    return buildExprWhileType(
        tokens,
        parserMap={'BANG_EQUAL': comparison, 'EQUAL_EQUAL': comparison},
        rootExpr=comparison(tokens),
        makeExpr=lang.Binary,
    )

def logicAnd(tokens: Tokens) -> lang.Expr:
    return buildExprWhileType(
        tokens,
        parserMap={'AND': equality},
        rootExpr=equality(tokens),
        makeExpr=lang.Logical,
    )

def logicOr(tokens: Tokens) -> lang.Expr:
    return buildExprWhileType(
        tokens,
        parserMap={'OR': logicAnd},
        rootExpr=logicAnd(tokens),
        makeExpr=lang.Logical,
    )

def assignment(tokens: Tokens) -> lang.Expr:
    expr = logicOr(tokens)
    equals = matchType(tokens, 'EQUAL')
    if not equals:
        return expr
    value = assignment(tokens)
    if isinstance(expr, lang.Variable):
        return lang.Assign(expr.name, value)
    # Reported without raising; parsing continues
    tokens.reporter.report(
        builtin.ParseError("Invalid assignment target.", equals)
    )
    return expr

def expression(tokens: Tokens) -> lang.Expr:
    return assignment(tokens)

# Statement parsers
# Statements are detected based on their first token.
# Statements beginning with anything else are ExprStmts.

def printStmt(tokens: Tokens) -> lang.Print:
    value = expression(tokens)
    matchTypeElseError(tokens, 'SEMICOLON', msg="Expect ';' after value.")
    return lang.Print(value)

def exprStmt(tokens: Tokens) -> lang.Expression:
    expr = expression(tokens)
    matchTypeElseError(
        tokens, 'SEMICOLON', msg="Expect ';' after expression."
    )
    return lang.Expression(expr)

def varDecl(tokens: Tokens) -> lang.Var:
    name = matchTypeElseError(
        tokens, 'IDENTIFIER', msg="Expect variable name."
    )
    initializer = None
    if matchType(tokens, 'EQUAL'):
        initializer = expression(tokens)
    matchTypeElseError(
        tokens, 'SEMICOLON', msg="Expect ';' after variable declaration."
    )
    return lang.Var(name, initializer)

def block(tokens: Tokens) -> List[lang.Stmt]:
    statements = parseUntilType(tokens, 'RIGHT_BRACE', declaration)
    matchTypeElseError(tokens, 'RIGHT_BRACE', msg="Expect '}' after block.")
    return statements

def ifStmt(tokens: Tokens) -> lang.If:
    matchTypeElseError(tokens, 'LEFT_PAREN', msg="Expect '(' after 'if'.")
    condition = expression(tokens)
    matchTypeElseError(
        tokens, 'RIGHT_PAREN', msg="Expect ')' after if condition."
    )
    thenBranch = statement(tokens)
    elseBranch = None
    if matchType(tokens, 'ELSE'):
        elseBranch = statement(tokens)
    return lang.If(condition, thenBranch, elseBranch)

def whileStmt(tokens: Tokens) -> lang.While:
    matchTypeElseError(
        tokens, 'LEFT_PAREN', msg="Expect '(' after 'while'."
    )
    condition = expression(tokens)
    matchTypeElseError(
        tokens, 'RIGHT_PAREN', msg="Expect ')' after condition."
    )
    body = statement(tokens)
    return lang.While(condition, body)

def forStmt(tokens: Tokens) -> lang.Stmt:
    """for loops have no node of their own; they are desugared into
    an initializer and a While in a Block.
    """
    matchTypeElseError(tokens, 'LEFT_PAREN', msg="Expect '(' after 'for'.")
    initializer: Optional[lang.Stmt]
    if matchType(tokens, 'SEMICOLON'):
        initializer = None
    elif matchType(tokens, 'VAR'):
        initializer = varDecl(tokens)
    else:
        initializer = exprStmt(tokens)

    condition: Optional[lang.Expr] = None
    if not expectType(tokens, 'SEMICOLON'):
        condition = expression(tokens)
    matchTypeElseError(
        tokens, 'SEMICOLON', msg="Expect ';' after loop condition."
    )

    increment: Optional[lang.Expr] = None
    if not expectType(tokens, 'RIGHT_PAREN'):
        increment = expression(tokens)
    matchTypeElseError(
        tokens, 'RIGHT_PAREN', msg="Expect ')' after for clauses."
    )

    body = statement(tokens)
    if increment is not None:
        body = lang.Block([body, lang.Expression(increment)])
    if condition is None:
        condition = lang.Literal(True)
    body = lang.While(condition, body)
    if initializer is not None:
        body = lang.Block([initializer, body])
    return body

def breakStmt(tokens: Tokens) -> lang.Break:
    keyword = previous(tokens)
    if tokens.loopDepth <= 0:
        raise builtin.ParseError(
            "break can only be used inside a loop.", keyword
        )
    matchTypeElseError(tokens, 'SEMICOLON', msg="Expect ';' after break.")
    return lang.Break(keyword)

# Statement hierarchy
# 1. var -> (2)
#    declarations
# 2. for | if | print | while | break | { | <expr>
#    statements, usable as the body of a loop or branch

def statement(tokens: Tokens) -> lang.Stmt:
    if matchType(tokens, 'FOR'):
        return inLoop(tokens, forStmt)
    if matchType(tokens, 'IF'):
        return ifStmt(tokens)
    if matchType(tokens, 'PRINT'):
        return printStmt(tokens)
    if matchType(tokens, 'WHILE'):
        return inLoop(tokens, whileStmt)
    if matchType(tokens, 'BREAK'):
        return breakStmt(tokens)
    if matchType(tokens, 'LEFT_BRACE'):
        return lang.Block(block(tokens))
    return exprStmt(tokens)

def declaration(tokens: Tokens) -> Optional[lang.Stmt]:
    """Parses a declaration or statement.
    A ParseError is reported once, and the parser synchronizes to the
    next statement boundary; the failed statement returns None.
    """
    try:
        if matchType(tokens, 'VAR'):
            return varDecl(tokens)
        return statement(tokens)
    except builtin.ParseError as err:
        tokens.reporter.report(err)
        synchronize(tokens)
        return None

# Main parsing loop

def parse(tokens: List[lang.Token], reporter: Reporter) -> List[lang.Stmt]:
    """Select a parsing function to use, from the next token, and use it.
    """
    stream = Tokens(tokens, reporter)
    statements = []
    while not atEnd(stream):
        stmt = declaration(stream)
        if stmt is not None:
            statements += [stmt]
    logger.debug("Parsed %d statements", len(statements))
    return statements
