"""
Lexical analyzer for the C-Minus language.

This module converts a complete in-memory source buffer into classified tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: An immutable token with kind, lexeme, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace and `/* ... */` comments (not nested; the first `*/` closes)
    - Recognizes the keywords `if else int return void while` (case-sensitive)
    - Identifiers are a letter followed by letters or digits
    - Integer literals are kept as raw digit text; a sign is never part of a literal
    - Longest match for `== != <= >=` before the single-character operators
    - Any other character becomes an ERROR token for the parser to reject

Raises:
    ScanError: If a comment is still open at end of input.

Example:
    >>> tokens = tokenize("int x;")
    >>> [t.kind for t in tokens]
    ['INT', 'ID', 'SEMICOLON', 'EOF']
"""

import logging
from dataclasses import dataclass

from cminus.cminus_constants import (
    EOF,
    ERROR,
    ID,
    KEYWORDS,
    NUM,
    ONE_CHAR_OPERATORS,
    OPERATOR_CHARS,
    SYMBOL_CHARS,
    SYMBOLS,
    TWO_CHAR_OPERATORS,
)
from cminus.cminus_errors import ScanError

logger = logging.getLogger(__name__)


class CharacterStream:
    """
    Reads characters from a source string while tracking line and column.

    The line counter is incremented on every newline consumed, whether it sits
    in whitespace, inside a comment, or anywhere else.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or '' if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        kind (str): The token kind (e.g. 'ID', 'NUM', 'LE', 'EOF').
        lexeme (str): The literal source text; empty for EOF.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    kind: str
    lexeme: str
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, line={self.line})"


def _is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


class Lexer:
    """Lexical analyzer for C-Minus.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace_and_comments(self) -> None:
        """Skips whitespace and block comments until a significant character or EOF."""
        while not self.stream.end_of_file():
            if self.peek() in " \t\r\n\f\v":
                self.advance()
            elif self.peek() == "/" and self.peek(1) == "*":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Consumes a `/* ... */` comment, including its delimiters.

        Raises:
            ScanError: If end of input is reached before the closing `*/`.
        """
        self.advance()
        self.advance()
        while not self.stream.end_of_file():
            if self.advance() == "*" and self.peek() == "/":
                self.advance()
                return
        raise ScanError("Unterminated comment", EOF, "", self.stream.line)

    def read_identifier(self, line: int, col: int) -> Token:
        text = ""
        while _is_letter(self.peek()) or _is_digit(self.peek()):
            text += self.advance()
        return Token(KEYWORDS.get(text, ID), text, line, col)

    def read_number(self, line: int, col: int) -> Token:
        digits = ""
        while _is_digit(self.peek()):
            digits += self.advance()
        return Token(NUM, digits, line, col)

    def read_operator(self, line: int, col: int) -> Token:
        pair = self.peek() + self.peek(1)
        if pair in TWO_CHAR_OPERATORS:
            self.advance()
            self.advance()
            return Token(TWO_CHAR_OPERATORS[pair], pair, line, col)
        ch = self.advance()
        # A lone '!' has no single-character form.
        return Token(ONE_CHAR_OPERATORS.get(ch, ERROR), ch, line, col)

    def next_token(self) -> Token:
        """Consumes and returns the next token.

        Past end of input the EOF token is returned on every call.

        Raises:
            ScanError: If an unterminated comment is encountered.
        """
        self.skip_whitespace_and_comments()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(EOF, "", line, col)

        ch = self.peek()
        if _is_letter(ch):
            return self.read_identifier(line, col)
        if _is_digit(ch):
            return self.read_number(line, col)
        if ch in OPERATOR_CHARS:
            return self.read_operator(line, col)
        if ch in SYMBOL_CHARS:
            return Token(SYMBOLS[self.advance()], ch, line, col)

        return Token(ERROR, self.advance(), line, col)

    def tokenize(self) -> list[Token]:
        """Scans the whole stream eagerly.

        Returns:
            list[Token]: Every token in order, ending with exactly one EOF token.
        """
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.kind == EOF:
                break
        logger.debug("Scanned %d tokens", len(tokens))
        return tokens


def tokenize(source: str) -> list[Token]:
    """Tokenizes a complete source string; see `Lexer.tokenize`."""
    return Lexer(CharacterStream(source)).tokenize()


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
