"""
Lookahead window over an eagerly scanned token list.

The parser reads through a `TokenWindow` rather than the raw list: it can see
the current token and one token past it, consume tokens, and on the single
`type-specifier identifier` ambiguity hand the last two tokens back.

Pushback is a cursor decrement; the token list is never mutated.
"""

from __future__ import annotations

from cminus.cminus_constants import EOF
from cminus.cminus_lexer import Token


class TokenWindow:
    """
    Cursor over a token list ending in EOF.

    Attributes:
        tokens (list[Token]): The full token sequence; the last item is EOF.
        position (int): Index of the current token.
    """

    # Depth of the only unconsume the grammar needs (type token + identifier).
    PUSHBACK_DEPTH = 2

    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[-1].kind != EOF:
            raise ValueError("Token sequence must end with an EOF token")
        self.tokens: list[Token] = tokens
        self.position: int = 0

    def current(self) -> Token:
        return self.tokens[self.position]

    def peek(self) -> Token:
        """Returns the token one past the cursor (EOF once the end is reached)."""
        return self.tokens[min(self.position + 1, len(self.tokens) - 1)]

    def advance(self) -> Token:
        """Consumes the current token and returns it. The cursor never moves past EOF."""
        tok = self.current()
        if tok.kind != EOF:
            self.position += 1
        return tok

    def unconsume(self, first: Token, second: Token) -> None:
        """Pushes back the two most recently consumed tokens.

        Args:
            first: The earlier of the two tokens (the type specifier).
            second: The later of the two tokens (the identifier).

        Raises:
            ValueError: If the tokens are not the two just consumed.
        """
        start = self.position - self.PUSHBACK_DEPTH
        if start < 0 or self.tokens[start : self.position] != [first, second]:
            raise ValueError(
                f"Can only unconsume the last {self.PUSHBACK_DEPTH} tokens read, "
                f"got {first!r}, {second!r}"
            )
        self.position = start

    def at_end(self) -> bool:
        return self.current().kind == EOF


__all__ = ["TokenWindow"]
