"""types.py

Attribute types used in Lox tokens, nodes and environments.
"""

from typing import (
    Literal as LiteralType,
    MutableMapping,
    Union,
)

__all__ = [
    'TokenType',
    'Value',
    'NameKey',
    'Locals',
]

TokenType = LiteralType[
    # Single-character tokens
    'LEFT_PAREN', 'RIGHT_PAREN', 'LEFT_BRACE', 'RIGHT_BRACE',
    'COMMA', 'DOT', 'MINUS', 'PLUS', 'SEMICOLON', 'SLASH', 'STAR',
    # One or two character tokens
    'BANG', 'BANG_EQUAL',
    'EQUAL', 'EQUAL_EQUAL',
    'GREATER', 'GREATER_EQUAL',
    'LESS', 'LESS_EQUAL',
    # Literals
    'IDENTIFIER', 'STRING', 'NUMBER',
    # Keywords
    'AND', 'BREAK', 'CLASS', 'ELSE', 'FALSE', 'FUN', 'FOR', 'IF', 'NIL',
    'OR', 'PRINT', 'RETURN', 'SUPER', 'THIS', 'TRUE', 'VAR', 'WHILE',
    'EOF',
]

Value = Union[None, bool, float, str]  # nil | boolean | number | string

NameKey = str  # for Environment

# Maps an Expr to the number of scopes between it and its declaration
Locals = MutableMapping["Expr", int]
