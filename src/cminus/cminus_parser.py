"""
C-Minus Parser

Recursive-descent parser that turns the token sequence produced by
`cminus.cminus_lexer` into the tree defined in `cminus.cminus_ast`.

Grammar
-------
    program           -> declaration+ EOF
    declaration       -> var_declaration | fun_declaration
    var_declaration   -> type ID ';' | type ID '[' NUM ']' ';'
    fun_declaration   -> type ID '(' params? ')' compound_stmt
    params            -> 'void' | param (',' param)*
    param             -> type ID ('[' ']')?
    compound_stmt     -> '{' var_declaration* statement* '}'
    statement         -> expr_stmt | compound_stmt | if_stmt | while_stmt | return_stmt
    expr_stmt         -> expression? ';'
    if_stmt           -> 'if' '(' expression ')' statement ('else' statement)?
    while_stmt        -> 'while' '(' expression ')' statement
    return_stmt       -> 'return' expression? ';'
    expression        -> var '=' expression | simple_expression
    simple_expression -> additive (relop additive)?
    additive          -> term (('+'|'-') term)*
    term              -> factor (('*'|'/') factor)*
    factor            -> '(' expression ')' | var | call | NUM
    var               -> ID ('[' expression ']')?
    call              -> ID '(' args? ')'
    args              -> expression (',' expression)*
    type              -> 'int' | 'void'

Parser Behavior
---------------
- Fail-fast: the first unexpected token raises `ParseError`; there is no
  resynchronization and no partial tree.
- `additive` and `term` loop instead of recursing, so `1-2-3` is `(1-2)-3`.
- A relational operator appears at most once per `simple_expression`.
- Local declarations are only recognized at the top of a block.
- `type ID` followed by anything but `(` is handed back to the token window
  and re-read as a variable declaration.
- An `else` binds to the innermost open `if`.
- Nested constructs use native recursion; pathologically deep input can
  raise `RecursionError`.

Entry Points
------------
- `parse(source)`: Parse a full program, raising on failure.
- `parse_source(source)`: Parse a full program into a `ParseResult`.
- `parse_expression(source)` / `parse_statement(source)`: Parse a lone
  expression or statement (debugging and tests).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cminus.cminus_ast import (
    ArrayDeclaration,
    AssignExpr,
    BinOp,
    Call,
    CompoundStmt,
    Declaration,
    Expression,
    ExpressionStmt,
    FunDeclaration,
    IterationStmt,
    LocalDeclaration,
    Num,
    Param,
    Program,
    ReturnStmt,
    SelectionStmt,
    SimpleExpr,
    Statement,
    Var,
    VarDeclaration,
)
from cminus.cminus_constants import (
    ADD_OPS,
    EOF,
    ERROR,
    EXPRESSION_START,
    ID,
    MUL_OPS,
    NUM,
    RELATIONAL_OPS,
    STATEMENT_START,
    TYPE_SPECIFIERS,
)
from cminus.cminus_errors import CompileError, ParseError, ScanError
from cminus.cminus_lexer import Token, tokenize
from cminus.cminus_tokens import TokenWindow

logger = logging.getLogger(__name__)

_TYPES = tuple(sorted(TYPE_SPECIFIERS))


class Parser:
    """
    C-Minus Parser Class

    One `parse_*` method per grammar nonterminal. Each method consumes the
    tokens of its production from the token window and returns the node it
    built.

    Attributes
    ----------
    window : TokenWindow
        Lookahead window over the scanned tokens.

    Raises
    ------
    ParseError
        When a token does not fit the grammar at the current decision point.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.window = TokenWindow(tokens)

    @classmethod
    def from_source(cls, source: str) -> Parser:
        """Scans `source` eagerly and returns a parser over its tokens."""
        return cls(tokenize(source))

    # Token helpers

    def current(self) -> Token:
        return self.window.current()

    def peek(self) -> Token:
        return self.window.peek()

    def advance(self) -> Token:
        return self.window.advance()

    def check(self, *kinds: str) -> bool:
        return self.current().kind in kinds

    def error(self, message: str, expected: tuple[str, ...] = ()) -> ParseError:
        tok = self.current()
        if tok.kind == ERROR:
            message = f"{message}: unrecognized character"
        return ParseError(message, tok.kind, tok.lexeme, tok.line, expected)

    def match(self, *kinds: str, message: str | None = None) -> Token:
        """Consumes the current token if its kind is one of `kinds`.

        Raises:
            ParseError: If the current token is of any other kind.
        """
        tok = self.current()
        if tok.kind in kinds:
            return self.advance()
        raise self.error(message or f"Expected {' or '.join(kinds)}", kinds)

    def number_value(self, tok: Token) -> int:
        """Converts a NUM token to its integer value.

        Raises:
            ParseError: If the literal is too long for integer conversion.
        """
        try:
            return int(tok.lexeme)
        except ValueError as err:
            raise ParseError(
                "Integer literal too long", tok.kind, tok.lexeme, tok.line, (NUM,)
            ) from err

    # Declarations

    def parse(self) -> Program:
        """Parse a full program and return its `Program` root."""
        logger.debug("Starting to parse program")
        declarations = [self.parse_declaration()]
        while self.check(*TYPE_SPECIFIERS):
            declarations.append(self.parse_declaration())
        self.match(*_TYPES, EOF, message="Expected declaration")
        logger.debug("Finished parsing program: %d declarations", len(declarations))
        return Program(tuple(declarations), line=1)

    def parse_declaration(self) -> Declaration:
        """Parse a variable or function declaration at the top level."""
        type_tok = self.match(*_TYPES, message="Expected type specifier")
        id_tok = self.match(ID, message="Expected identifier after type specifier")

        if self.check("LPAREN"):
            return self.parse_fun_declaration(type_tok, id_tok)

        self.window.unconsume(type_tok, id_tok)
        return self.parse_var_declaration()

    def parse_var_declaration(self) -> LocalDeclaration:
        """Parse `type ID ;` or `type ID [ NUM ] ;`."""
        type_tok = self.match(*_TYPES, message="Expected type specifier")
        id_tok = self.match(ID, message="Expected identifier after type specifier")

        if self.check("LBRACKET"):
            self.advance()
            num_tok = self.match(NUM, message="Expected number in array declaration")
            size = self.number_value(num_tok)
            if size <= 0:
                raise ParseError(
                    "Array size must be positive",
                    num_tok.kind,
                    num_tok.lexeme,
                    num_tok.line,
                    (NUM,),
                )
            self.match("RBRACKET")
            self.match("SEMICOLON")
            logger.debug("Array declaration: %s %s[%d]", type_tok.lexeme, id_tok.lexeme, size)
            return ArrayDeclaration(type_tok.lexeme, id_tok.lexeme, size, line=type_tok.line)

        self.match("SEMICOLON")
        logger.debug("Variable declaration: %s %s", type_tok.lexeme, id_tok.lexeme)
        return VarDeclaration(type_tok.lexeme, id_tok.lexeme, line=type_tok.line)

    def parse_fun_declaration(self, type_tok: Token, id_tok: Token) -> FunDeclaration:
        """Parse the remainder of a function declaration after `type ID`."""
        logger.debug("Function declaration: %s %s", type_tok.lexeme, id_tok.lexeme)
        self.match("LPAREN", message="Expected '(' after function name")
        params = self.parse_params()
        self.match("RPAREN", message="Expected ')' after parameters")
        body = self.parse_compound_stmt()
        return FunDeclaration(
            type_tok.lexeme, id_tok.lexeme, tuple(params), body, line=type_tok.line
        )

    def parse_params(self) -> list[Param]:
        """Parse a parameter list; `(void)` and `()` both yield no parameters."""
        if self.check("RPAREN"):
            return []
        if self.check("VOID") and self.peek().kind == "RPAREN":
            self.advance()
            return []

        params = [self.parse_param()]
        while self.check("COMMA"):
            self.advance()
            params.append(self.parse_param())
        return params

    def parse_param(self) -> Param:
        """Parse `type ID` or `type ID [ ]`."""
        type_tok = self.match(*_TYPES, message="Expected type specifier in parameter")
        id_tok = self.match(ID, message="Expected identifier in parameter")
        is_array = False
        if self.check("LBRACKET"):
            self.advance()
            self.match("RBRACKET")
            is_array = True
        return Param(type_tok.lexeme, id_tok.lexeme, is_array, line=type_tok.line)

    # Statements

    def parse_compound_stmt(self) -> CompoundStmt:
        """Parse `{ local_declarations statement_list }`."""
        open_tok = self.match("LBRACE")

        declarations: list[LocalDeclaration] = []
        while self.check(*TYPE_SPECIFIERS):
            declarations.append(self.parse_var_declaration())

        statements: list[Statement] = []
        while self.check(*STATEMENT_START):
            statements.append(self.parse_statement())

        self.match("RBRACE", message="Expected statement or '}'")
        return CompoundStmt(tuple(declarations), tuple(statements), line=open_tok.line)

    def parse_statement(self) -> Statement:
        """Parse one statement, dispatching on its first token."""
        tok = self.current()
        if tok.kind == "LBRACE":
            return self.parse_compound_stmt()
        if tok.kind == "IF":
            return self.parse_selection_stmt()
        if tok.kind == "WHILE":
            return self.parse_iteration_stmt()
        if tok.kind == "RETURN":
            return self.parse_return_stmt()
        if tok.kind == "SEMICOLON" or tok.kind in EXPRESSION_START:
            return self.parse_expression_stmt()
        raise self.error("Unexpected token in statement", tuple(sorted(STATEMENT_START)))

    def parse_expression_stmt(self) -> ExpressionStmt:
        """Parse `expression ;` or the empty statement `;`."""
        line = self.current().line
        expression = None
        if not self.check("SEMICOLON"):
            expression = self.parse_expression()
        self.match("SEMICOLON")
        return ExpressionStmt(expression, line=line)

    def parse_selection_stmt(self) -> SelectionStmt:
        """Parse `if ( expression ) statement` with an optional `else`."""
        if_tok = self.match("IF")
        self.match("LPAREN", message="Expected '(' after 'if'")
        condition = self.parse_expression()
        self.match("RPAREN")
        then_branch = self.parse_statement()

        else_branch = None
        # Greedy: the innermost open 'if' takes the 'else'.
        if self.check("ELSE"):
            self.advance()
            else_branch = self.parse_statement()
        return SelectionStmt(condition, then_branch, else_branch, line=if_tok.line)

    def parse_iteration_stmt(self) -> IterationStmt:
        """Parse `while ( expression ) statement`."""
        while_tok = self.match("WHILE")
        self.match("LPAREN", message="Expected '(' after 'while'")
        condition = self.parse_expression()
        self.match("RPAREN")
        body = self.parse_statement()
        return IterationStmt(condition, body, line=while_tok.line)

    def parse_return_stmt(self) -> ReturnStmt:
        """Parse `return ;` or `return expression ;`."""
        return_tok = self.match("RETURN")
        expression = None
        if not self.check("SEMICOLON"):
            expression = self.parse_expression()
        self.match("SEMICOLON")
        return ReturnStmt(expression, line=return_tok.line)

    # Expressions

    def parse_expression(self) -> Expression:
        """Parse `var = expression` or a simple expression.

        The left side is parsed as a simple expression first; it becomes an
        assignment target only if it is a bare variable that began at an
        identifier and is followed by `=`. Assignment is right-associative.
        """
        start = self.current()
        expr = self.parse_simple_expression()
        if self.check("ASSIGN") and start.kind == ID and isinstance(expr, Var):
            self.advance()
            value = self.parse_expression()
            return AssignExpr(expr, value, line=expr.line)
        return expr

    def parse_var(self) -> Var:
        """Parse `ID` or `ID [ expression ]`."""
        id_tok = self.match(ID, message="Expected identifier for variable")
        index = None
        if self.check("LBRACKET"):
            self.advance()
            index = self.parse_expression()
            self.match("RBRACKET")
        return Var(id_tok.lexeme, index, line=id_tok.line)

    def parse_simple_expression(self) -> Expression:
        """Parse an additive expression with at most one relational operator."""
        left = self.parse_additive_expression()
        if self.check(*RELATIONAL_OPS):
            op = self.advance().kind
            right = self.parse_additive_expression()
            return SimpleExpr(left, op, right, line=left.line)
        return left

    def parse_additive_expression(self) -> Expression:
        """Parse a left-associative chain of `+` and `-`."""
        left = self.parse_term()
        while self.check(*ADD_OPS):
            op = self.advance().kind
            left = BinOp(op, left, self.parse_term(), line=left.line)
        return left

    def parse_term(self) -> Expression:
        """Parse a left-associative chain of `*` and `/`."""
        left = self.parse_factor()
        while self.check(*MUL_OPS):
            op = self.advance().kind
            left = BinOp(op, left, self.parse_factor(), line=left.line)
        return left

    def parse_factor(self) -> Expression:
        """Parse a parenthesized expression, variable, call or number."""
        tok = self.current()
        if tok.kind == "LPAREN":
            self.advance()
            expr = self.parse_expression()
            self.match("RPAREN")
            return expr
        if tok.kind == ID:
            if self.peek().kind == "LPAREN":
                return self.parse_call()
            return self.parse_var()
        if tok.kind == NUM:
            self.advance()
            return Num(self.number_value(tok), line=tok.line)
        raise self.error("Unexpected token in expression", tuple(sorted(EXPRESSION_START)))

    def parse_call(self) -> Call:
        """Parse `ID ( args )`."""
        id_tok = self.match(ID)
        self.match("LPAREN")
        args: list[Expression] = []
        if not self.check("RPAREN"):
            args.append(self.parse_expression())
            while self.check("COMMA"):
                self.advance()
                args.append(self.parse_expression())
        self.match("RPAREN", message="Expected ',' or ')' in argument list")
        return Call(id_tok.lexeme, tuple(args), line=id_tok.line)

    # Fragment entry points

    def parse_expr_entrypoint(self) -> Expression:
        """Parse a single expression that must span the whole input."""
        expr = self.parse_expression()
        self.match(EOF, message="Expected end of input")
        return expr

    def parse_stmt_entrypoint(self) -> Statement:
        """Parse a single statement that must span the whole input."""
        stmt = self.parse_statement()
        self.match(EOF, message="Expected end of input")
        return stmt


@dataclass(frozen=True)
class ParseResult:
    """Outcome of `parse_source`: exactly one of `program` and `error` is set."""

    program: Program | None = None
    error: ScanError | ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Program:
        """Returns the program, or raises the recorded error."""
        if self.error is not None:
            raise self.error
        if self.program is None:
            raise ValueError("ParseResult holds neither a program nor an error")
        return self.program


def parse(source: str) -> Program:
    """Scan and parse a complete C-Minus program.

    Raises:
        ScanError: If the source contains an unterminated comment.
        ParseError: If the tokens do not form a valid program.
    """
    return Parser.from_source(source).parse()


def parse_source(source: str) -> ParseResult:
    """Scan and parse a complete program, returning failures as a value."""
    try:
        return ParseResult(program=parse(source))
    except CompileError as err:
        logger.debug("Compilation failed: %s", err)
        return ParseResult(error=err)  # type: ignore[arg-type]


def parse_expression(source: str) -> Expression:
    return Parser.from_source(source).parse_expr_entrypoint()


def parse_statement(source: str) -> Statement:
    return Parser.from_source(source).parse_stmt_entrypoint()


__all__ = [
    "ParseResult",
    "Parser",
    "parse",
    "parse_expression",
    "parse_source",
    "parse_statement",
]
