"""
Fatal diagnostics raised by the C-Minus front end.

Classes:
    CompileError: Common base, a `SyntaxError` carrying the offending token data.
    ScanError: Raised by the lexer (unterminated comment).
    ParseError: Raised by the parser at the first unexpected token.

Both failures abort the current pass. There is no warning tier and no recovery.
"""

from __future__ import annotations


class CompileError(SyntaxError):
    """Base class for scan and parse failures.

    Attributes:
        message (str): Human-readable description of the failure.
        kind (str): Kind of the offending token (e.g. 'ERROR', 'LT', 'EOF').
        lexeme (str): Literal text of the offending token.
        line (int): 1-based source line of the offending token.
    """

    def __init__(self, message: str, kind: str, lexeme: str, line: int) -> None:
        self.message = message
        self.kind = kind
        self.lexeme = lexeme
        self.line = line
        super().__init__(self._render())

    def _render(self) -> str:
        return f"{self.message} at line {self.line} (found {self.kind} {self.lexeme!r})"

    def __str__(self) -> str:
        return self._render()


class ScanError(CompileError):
    """Raised when the source cannot be split into tokens."""


class ParseError(CompileError):
    """Raised when a token does not fit the grammar.

    Attributes:
        expected (tuple[str, ...]): Token kinds that would have been accepted.
    """

    def __init__(
        self,
        message: str,
        kind: str,
        lexeme: str,
        line: int,
        expected: tuple[str, ...] = (),
    ) -> None:
        self.expected = expected
        super().__init__(message, kind, lexeme, line)


__all__ = ["CompileError", "ParseError", "ScanError"]
