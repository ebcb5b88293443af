"""scanner

scan(src: str, reporter: Reporter) -> tokens: list
    Scans src string, returns a list of tokens terminated by an EOF
    token. Unscannable text is reported and skipped.
"""

import logging
from typing import List, Optional

from . import builtin, lang
from .reporter import Reporter

logger = logging.getLogger(__name__)



# Helper functions

def atEnd(code: "Code") -> bool:
    """Returns True if at end of code."""
    return code.cursor >= code.length

def check(code: "Code") -> str:
    """Returns char at cursor, or an empty string at end of code."""
    if atEnd(code):
        return ''
    return code.src[code.cursor]

def checkNext(code: "Code") -> str:
    """Returns char after cursor, or an empty string past end of code."""
    if code.cursor + 1 >= code.length:
        return ''
    return code.src[code.cursor + 1]

def consume(code: "Code") -> str:
    """Returns char at cursor, advances cursor."""
    char = check(code)
    code.cursor += 1
    if char == '\n':
        code.line += 1
    return char

def match(code: "Code", expected: str) -> bool:
    """Consumes the char at cursor only if it is the expected char."""
    if check(code) != expected:
        return False
    consume(code)
    return True

def makeToken(
    code: "Code",
    type: lang.TokenType,
    literal: lang.Value = None,
) -> lang.Token:
    """Factory function for a Token."""
    text = code.src[code.start:code.cursor]
    return lang.Token(type, text, literal, code.line)

def error(code: "Code", msg: str) -> None:
    code.reporter.report(builtin.ParseError(msg, None, line=code.line))

def isalpha(char: str) -> bool:
    return char == '_' or ('a' <= char <= 'z') or ('A' <= char <= 'Z')

def isdigit(char: str) -> bool:
    return '0' <= char <= '9'

def isalnum(char: str) -> bool:
    return isalpha(char) or isdigit(char)



# Scanning functions

def word(code: "Code") -> lang.Token:
    """A word is a sequence of chars starting with a letter or
    underscore, and continuing with letters, digits or underscores.
    Words which are keywords are given the keyword's type.
    """
    while isalnum(check(code)):
        consume(code)
    text = code.src[code.start:code.cursor]
    if text in builtin.KEYWORDS:
        return makeToken(
            code, builtin.KEYWORDS[text], builtin.VALUES.get(text)
        )
    return makeToken(code, 'IDENTIFIER')

def number(code: "Code") -> lang.Token:
    """A number is a sequence of digits, with 0 or 1 period which is
    neither the first nor the last char.
    """
    while isdigit(check(code)):
        consume(code)
    if check(code) == '.' and isdigit(checkNext(code)):
        consume(code)  # '.'
        while isdigit(check(code)):
            consume(code)
    text = code.src[code.start:code.cursor]
    return makeToken(code, 'NUMBER', float(text))

def string(code: "Code") -> Optional[lang.Token]:
    """A string is a sequence of chars that are enclosed in
    double-quotes ("). Strings may span lines.
    """
    while not atEnd(code) and check(code) != '"':
        consume(code)
    if atEnd(code):
        error(code, "Unterminated string.")
        return None
    consume(code)  # closing '"'
    text = code.src[code.start + 1:code.cursor - 1]
    return makeToken(code, 'STRING', text)

def lineComment(code: "Code") -> None:
    """A line comment runs to the end of the line. The line break is
    left for the main loop.
    """
    while not atEnd(code) and check(code) != '\n':
        consume(code)

def blockComment(code: "Code") -> None:
    """A block comment runs to the first */ and may span lines.
    Block comments do not nest.
    """
    while not atEnd(code):
        if check(code) == '*' and checkNext(code) == '/':
            consume(code)
            consume(code)
            return
        consume(code)
    error(code, "Unterminated block comment.")

def symbol(code: "Code", char: str) -> lang.Token:
    """A symbol is one char, or one char followed by '='."""
    if char in builtin.SYM_MULTI:
        single, double = builtin.SYM_MULTI[char]
        return makeToken(code, double if match(code, '=') else single)
    return makeToken(code, builtin.SYM_SINGLE[char])



class Code:
    """
    Encapsulates the source code and its properties.

    Used by the scanner.
    """
    def __init__(
        self,
        src: str,
        reporter: Reporter,
    ):
        self.src = src
        self.reporter = reporter
        self.start: int = 0
        self.cursor: int = 0
        self.line: int = 1

    @property
    def length(self):
        return len(self.src)

    def nextToken(self):
        """Marks the cursor as the start of the next token."""
        self.start = self.cursor



# Main scanning loop

def scan(src: str, reporter: Reporter) -> List[lang.Token]:
    """Select a scanning function to use, from the next char in the code
    string, and use it.
    """
    code = Code(src, reporter)
    tokens = []
    while not atEnd(code):
        code.nextToken()
        char = consume(code)
        if char in [' ', '\r', '\t', '\n']:
            continue
        elif char == '/' and match(code, '/'):
            lineComment(code)
            continue
        elif char == '/' and match(code, '*'):
            blockComment(code)
            continue
        elif char == '"':
            token = string(code)
            if token is None:
                continue
        elif isdigit(char):
            token = number(code)
        elif isalpha(char):
            token = word(code)
        elif char in builtin.SYM_SINGLE or char in builtin.SYM_MULTI:
            token = symbol(code, char)
        else:
            error(code, "Unexpected character.")
            continue
        tokens += [token]

    tokens += [lang.Token('EOF', "", None, code.line)]
    logger.debug("Scanned %d tokens over %d lines", len(tokens), code.line)
    return tokens
