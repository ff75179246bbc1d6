"""
Debug pretty-printer for C-Minus syntax trees.

`TreePrinter` walks a finished tree and renders an indented outline, two
spaces per level. Nodes are dispatched on their `kind` to `print_<kind>`
methods, so every node kind in `cminus.cminus_ast.NODE_KINDS` has exactly
one printer method.

Example:
    >>> print(TreePrinter().render(parse("int x;")))
    Program:
      VarDeclaration: int x
"""

from cminus.cminus_ast import (
    ArrayDeclaration,
    AssignExpr,
    BinOp,
    Call,
    CompoundStmt,
    ExpressionStmt,
    FunDeclaration,
    IterationStmt,
    Node,
    Num,
    Param,
    Program,
    ReturnStmt,
    SelectionStmt,
    SimpleExpr,
    Var,
    VarDeclaration,
)


class TreePrinter:
    """Renders AST nodes as an indented text outline.

    Attributes:
        lines (list[str]): Accumulated output lines.
        indent (int): Current indentation level.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "  " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def render(self, node: Node) -> str:
        """Renders `node` and its subtree, returning the outline as one string."""
        self.lines = []
        self.indent = 0
        self._visit(node)
        return self.get_output()

    def emit(self, text: str) -> None:
        self.lines.append(f"{self.indent_str()}{text}")

    def _visit(self, node: Node) -> None:
        """Invokes the printer method for `node.kind`.

        Raises:
            NotImplementedError: If there is no printer method for the node kind.
        """
        method_name = f"print_{node.kind}"
        if not hasattr(self, method_name):
            raise NotImplementedError(
                f"No printer method for node kind '{node.kind}' (line {node.line})"
            )
        getattr(self, method_name)(node)

    def _nested(self, node: Node, levels: int = 1) -> None:
        self.indent += levels
        self._visit(node)
        self.indent -= levels

    def _section(self, label: str, node: Node) -> None:
        self.indent += 1
        self.emit(f"{label}:")
        self._nested(node)
        self.indent -= 1

    def print_program(self, node: Program) -> None:
        self.emit("Program:")
        for decl in node.declarations:
            self._nested(decl)

    def print_var_declaration(self, node: VarDeclaration) -> None:
        self.emit(f"VarDeclaration: {node.type} {node.name}")

    def print_array_declaration(self, node: ArrayDeclaration) -> None:
        self.emit(f"ArrayDeclaration: {node.type} {node.name}[{node.size}]")

    def print_fun_declaration(self, node: FunDeclaration) -> None:
        self.emit(f"FunDeclaration: {node.return_type} {node.name}(")
        for param in node.params:
            self._nested(param)
        self.emit(")")
        self._nested(node.body)

    def print_param(self, node: Param) -> None:
        suffix = "[]" if node.is_array else ""
        self.emit(f"Param: {node.type} {node.name}{suffix}")

    def print_compound_stmt(self, node: CompoundStmt) -> None:
        self.emit("CompoundStmt: {")
        self.indent += 1
        self.emit("LocalDeclarations:")
        for decl in node.declarations:
            self._nested(decl)
        self.emit("Statements:")
        for stmt in node.statements:
            self._nested(stmt)
        self.indent -= 1
        self.emit("}")

    def print_expression_stmt(self, node: ExpressionStmt) -> None:
        if node.expression is None:
            self.emit("ExpressionStmt: ;")
            return
        self.emit("ExpressionStmt:")
        self._nested(node.expression)

    def print_selection_stmt(self, node: SelectionStmt) -> None:
        self.emit("IfStmt:")
        self._section("Condition", node.condition)
        self._section("Then", node.then_branch)
        if node.else_branch is not None:
            self._section("Else", node.else_branch)

    def print_iteration_stmt(self, node: IterationStmt) -> None:
        self.emit("WhileStmt:")
        self._section("Condition", node.condition)
        self._section("Body", node.body)

    def print_return_stmt(self, node: ReturnStmt) -> None:
        if node.expression is None:
            self.emit("ReturnStmt: (void)")
            return
        self.emit("ReturnStmt:")
        self._nested(node.expression)

    def print_assign_expr(self, node: AssignExpr) -> None:
        self.emit("AssignExpression:")
        self._section("Left", node.target)
        self._section("Right", node.value)

    def print_simple_expr(self, node: SimpleExpr) -> None:
        self.emit(f"SimpleExpression ({node.op}):")
        self._section("Left", node.left)
        self._section("Right", node.right)

    def print_bin_op(self, node: BinOp) -> None:
        self.emit(f"BinaryOp: {node.op}")
        self._section("Left", node.left)
        self._section("Right", node.right)

    def print_var(self, node: Var) -> None:
        if node.index is None:
            self.emit(f"Variable: {node.name}")
            return
        self.emit(f"Variable: {node.name}[")
        self._nested(node.index)
        self.emit("]")

    def print_call(self, node: Call) -> None:
        self.emit(f"Call: {node.name}(")
        for arg in node.args:
            self._nested(arg)
        self.emit(")")

    def print_num(self, node: Num) -> None:
        self.emit(f"Number: {node.value}")


def format_tree(node: Node) -> str:
    """Shorthand for `TreePrinter().render(node)`."""
    return TreePrinter().render(node)


__all__ = ["TreePrinter", "format_tree"]
