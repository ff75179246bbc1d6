"""
Defines the abstract syntax tree (AST) for the C-Minus language.

The tree is a closed set of sixteen node kinds. Every node is an immutable
dataclass that owns its children outright, so the tree is acyclic and
single-owner. Each node records the source line it came from; the line is
diagnostic metadata only and never takes part in equality.

Node kinds:
    Declarations: Program, VarDeclaration, ArrayDeclaration, FunDeclaration, Param
    Statements:   CompoundStmt, ExpressionStmt, SelectionStmt, IterationStmt, ReturnStmt
    Expressions:  AssignExpr, SimpleExpr, Var, Call, Num, BinOp

Consumers discriminate on the `kind` class attribute (e.g. "var_declaration")
or on the class itself; `NODE_KINDS` maps one to the other.

Example:
    node = BinOp("MINUS", Num(1), Num(2), line=1)
    node.to_dict()["kind"]  # "bin_op"
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Union

ASTDict = dict[str, Any]
"""Plain-dict form of a node, suitable for JSON output."""


class _NodeMixin:
    kind: ClassVar[str]
    line: int

    def children(self) -> list[Node]:
        """Returns the direct child nodes in source order."""
        out: list[Node] = []
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if isinstance(value, _NodeMixin):
                out.append(value)  # type: ignore[arg-type]
            elif isinstance(value, tuple):
                out.extend(v for v in value if isinstance(v, _NodeMixin))
        return out

    def to_dict(self) -> ASTDict:
        result: ASTDict = {"kind": self.kind}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if isinstance(value, _NodeMixin):
                value = value.to_dict()
            elif isinstance(value, tuple):
                value = [v.to_dict() for v in value]
            result[f.name] = value
        return result


# Declarations


@dataclass(frozen=True)
class VarDeclaration(_NodeMixin):
    kind: ClassVar[str] = "var_declaration"

    type: str
    name: str
    line: int = field(default=0, compare=False)

    @property
    def is_array(self) -> bool:
        return False


@dataclass(frozen=True)
class ArrayDeclaration(_NodeMixin):
    kind: ClassVar[str] = "array_declaration"

    type: str
    name: str
    size: int
    line: int = field(default=0, compare=False)

    @property
    def is_array(self) -> bool:
        return True


@dataclass(frozen=True)
class Param(_NodeMixin):
    kind: ClassVar[str] = "param"

    type: str
    name: str
    is_array: bool = False
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class FunDeclaration(_NodeMixin):
    """A function definition; `params` is in declaration order and empty for `(void)`."""

    kind: ClassVar[str] = "fun_declaration"

    return_type: str
    name: str
    params: tuple[Param, ...]
    body: CompoundStmt
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Program(_NodeMixin):
    kind: ClassVar[str] = "program"

    declarations: tuple[Declaration, ...]
    line: int = field(default=1, compare=False)


# Statements


@dataclass(frozen=True)
class CompoundStmt(_NodeMixin):
    """A `{ ... }` block. Local declarations always precede the statements."""

    kind: ClassVar[str] = "compound_stmt"

    declarations: tuple[LocalDeclaration, ...]
    statements: tuple[Statement, ...]
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class ExpressionStmt(_NodeMixin):
    """An expression followed by `;`. `expression` is None for the empty statement."""

    kind: ClassVar[str] = "expression_stmt"

    expression: Expression | None = None
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class SelectionStmt(_NodeMixin):
    kind: ClassVar[str] = "selection_stmt"

    condition: Expression
    then_branch: Statement
    else_branch: Statement | None = None
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class IterationStmt(_NodeMixin):
    kind: ClassVar[str] = "iteration_stmt"

    condition: Expression
    body: Statement
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class ReturnStmt(_NodeMixin):
    """`return;` leaves `expression` as None."""

    kind: ClassVar[str] = "return_stmt"

    expression: Expression | None = None
    line: int = field(default=0, compare=False)


# Expressions


@dataclass(frozen=True)
class Var(_NodeMixin):
    kind: ClassVar[str] = "var"

    name: str
    index: Expression | None = None
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class AssignExpr(_NodeMixin):
    kind: ClassVar[str] = "assign_expr"

    target: Var
    value: Expression
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class SimpleExpr(_NodeMixin):
    """A single relational comparison; `op` is one of LT LE GT GE EQ NE."""

    kind: ClassVar[str] = "simple_expr"

    left: Expression
    op: str
    right: Expression
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Call(_NodeMixin):
    kind: ClassVar[str] = "call"

    name: str
    args: tuple[Expression, ...] = ()
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Num(_NodeMixin):
    kind: ClassVar[str] = "num"

    value: int
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class BinOp(_NodeMixin):
    """An arithmetic operation; `op` is one of PLUS MINUS TIMES DIVIDE."""

    kind: ClassVar[str] = "bin_op"

    op: str
    left: Expression
    right: Expression
    line: int = field(default=0, compare=False)


LocalDeclaration = Union[VarDeclaration, ArrayDeclaration]
Declaration = Union[VarDeclaration, ArrayDeclaration, FunDeclaration]
Statement = Union[
    CompoundStmt, ExpressionStmt, SelectionStmt, IterationStmt, ReturnStmt
]
Expression = Union[AssignExpr, SimpleExpr, Var, Call, Num, BinOp]
Node = Union[Program, Param, Declaration, Statement, Expression]

NODE_KINDS: dict[str, type[_NodeMixin]] = {
    cls.kind: cls
    for cls in (
        Program,
        VarDeclaration,
        ArrayDeclaration,
        FunDeclaration,
        Param,
        CompoundStmt,
        ExpressionStmt,
        SelectionStmt,
        IterationStmt,
        ReturnStmt,
        AssignExpr,
        SimpleExpr,
        Var,
        Call,
        Num,
        BinOp,
    )
}


def walk(node: Node) -> Iterator[Node]:
    """Yields `node` and all of its descendants, depth-first and in source order."""
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


__all__ = [
    "ASTDict",
    "ArrayDeclaration",
    "AssignExpr",
    "BinOp",
    "Call",
    "CompoundStmt",
    "Declaration",
    "Expression",
    "ExpressionStmt",
    "FunDeclaration",
    "IterationStmt",
    "LocalDeclaration",
    "NODE_KINDS",
    "Node",
    "Num",
    "Param",
    "Program",
    "ReturnStmt",
    "SelectionStmt",
    "SimpleExpr",
    "Statement",
    "Var",
    "VarDeclaration",
    "walk",
]
