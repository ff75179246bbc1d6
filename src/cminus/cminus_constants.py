"""
Token tables for the C-Minus scanner and parser.

The scanner classifies lexemes through these maps; the parser uses the
FIRST sets to choose productions without backtracking.

Exports:
    - KEYWORDS: reserved word -> token kind
    - TWO_CHAR_OPERATORS / ONE_CHAR_OPERATORS: operator text -> token kind
    - SYMBOLS: punctuation character -> token kind
    - OPERATOR_CHARS / SYMBOL_CHARS: characters that start an operator or symbol
    - TYPE_SPECIFIERS, RELATIONAL_OPS, ADD_OPS, MUL_OPS, STATEMENT_START
"""

EOF = "EOF"
ERROR = "ERROR"
ID = "ID"
NUM = "NUM"

KEYWORDS: dict[str, str] = {
    "if": "IF",
    "else": "ELSE",
    "int": "INT",
    "return": "RETURN",
    "void": "VOID",
    "while": "WHILE",
}

# Checked before the single-character table (longest match wins).
TWO_CHAR_OPERATORS: dict[str, str] = {
    "==": "EQ",
    "!=": "NE",
    "<=": "LE",
    ">=": "GE",
}

ONE_CHAR_OPERATORS: dict[str, str] = {
    "+": "PLUS",
    "-": "MINUS",
    "*": "TIMES",
    "/": "DIVIDE",
    "=": "ASSIGN",
    "<": "LT",
    ">": "GT",
}

SYMBOLS: dict[str, str] = {
    ";": "SEMICOLON",
    ",": "COMMA",
    "(": "LPAREN",
    ")": "RPAREN",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "{": "LBRACE",
    "}": "RBRACE",
}

OPERATOR_CHARS = "+-*/=!<>"
SYMBOL_CHARS = "".join(SYMBOLS)

TOKEN_KINDS: tuple[str, ...] = (
    *KEYWORDS.values(),
    *ONE_CHAR_OPERATORS.values(),
    *TWO_CHAR_OPERATORS.values(),
    *SYMBOLS.values(),
    ID,
    NUM,
    EOF,
    ERROR,
)

TYPE_SPECIFIERS: frozenset[str] = frozenset({"INT", "VOID"})
RELATIONAL_OPS: frozenset[str] = frozenset({"LT", "LE", "GT", "GE", "EQ", "NE"})
ADD_OPS: frozenset[str] = frozenset({"PLUS", "MINUS"})
MUL_OPS: frozenset[str] = frozenset({"TIMES", "DIVIDE"})

EXPRESSION_START: frozenset[str] = frozenset({ID, NUM, "LPAREN"})
STATEMENT_START: frozenset[str] = EXPRESSION_START | {
    "SEMICOLON",
    "LBRACE",
    "IF",
    "WHILE",
    "RETURN",
}

__all__ = [
    "ADD_OPS",
    "EOF",
    "ERROR",
    "EXPRESSION_START",
    "ID",
    "KEYWORDS",
    "MUL_OPS",
    "NUM",
    "ONE_CHAR_OPERATORS",
    "OPERATOR_CHARS",
    "RELATIONAL_OPS",
    "STATEMENT_START",
    "SYMBOLS",
    "SYMBOL_CHARS",
    "TOKEN_KINDS",
    "TWO_CHAR_OPERATORS",
    "TYPE_SPECIFIERS",
]
