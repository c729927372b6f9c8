"""Tokeniser for the S-expression level format.

The format is a small lisp dialect: parenthesised lists, ``;`` line comments,
double-quoted strings, integers, reals, ``#t``/``#f`` booleans and bare
symbols. The lexer turns the raw text into a flat token stream annotated with
line numbers so the document parser can report useful positions.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Union

from .errors import ParserError


class TokenType(Enum):
    OPEN = "("
    CLOSE = ")"
    SYMBOL = "symbol"
    STRING = "string"
    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"


@dataclass
class Token:
    """Single lexical token.

    Attributes:
        type (TokenType): Token category.
        value: Decoded Python value (str, int, float, bool) or None for parentheses.
        line (int): 1-based line the token starts on.
    """

    type: TokenType
    value: Union[str, int, float, bool, None]
    line: int


_INTEGER_RE = re.compile(r"[+-]?\d+")
_REAL_RE = re.compile(r"[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?")
_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}
_DELIMITERS = set("();\"") | set(" \t\r\n")


def _atom_token(text: str, line: int) -> Token:
    """Classifies a bare atom as boolean, number or symbol."""
    if text in ("#t", "#f"):
        return Token(TokenType.BOOLEAN, text == "#t", line)
    if _INTEGER_RE.fullmatch(text):
        return Token(TokenType.INTEGER, int(text), line)
    if _REAL_RE.fullmatch(text):
        return Token(TokenType.REAL, float(text), line)
    if text.startswith("#"):
        raise ParserError(f"invalid literal '{text}'", line=line)
    return Token(TokenType.SYMBOL, text, line)


def tokenize(text: str) -> Iterator[Token]:
    """Yields tokens from ``text`` in order.

    Args:
        text (str): Complete document text.

    Yields:
        Token: The next token in the document.

    Raises:
        ParserError: On an unterminated string or an unknown escape sequence.
    """
    pos = 0
    line = 1
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == "\n":
            line += 1
            pos += 1
        elif char in " \t\r":
            pos += 1
        elif char == ";":
            end = text.find("\n", pos)
            pos = length if end == -1 else end
        elif char == "(":
            yield Token(TokenType.OPEN, None, line)
            pos += 1
        elif char == ")":
            yield Token(TokenType.CLOSE, None, line)
            pos += 1
        elif char == '"':
            start_line = line
            pos += 1
            chars: List[str] = []
            while True:
                if pos >= length:
                    raise ParserError("unterminated string", line=start_line)
                char = text[pos]
                if char == '"':
                    pos += 1
                    break
                if char == "\\":
                    if pos + 1 >= length:
                        raise ParserError("unterminated string", line=start_line)
                    escaped = text[pos + 1]
                    if escaped not in _ESCAPES:
                        raise ParserError(f"unknown escape sequence '\\{escaped}'", line=line)
                    chars.append(_ESCAPES[escaped])
                    pos += 2
                    continue
                if char == "\n":
                    line += 1
                chars.append(char)
                pos += 1
            yield Token(TokenType.STRING, "".join(chars), start_line)
        else:
            start = pos
            while pos < length and text[pos] not in _DELIMITERS:
                pos += 1
            yield _atom_token(text[start:pos], line)
