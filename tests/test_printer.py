from typing import Any

import pytest

from cminus.cminus_ast import NODE_KINDS
from cminus.cminus_parser import parse, parse_expression, parse_statement
from cminus.cminus_printer import TreePrinter, format_tree


def test_every_node_kind_has_a_printer() -> None:
    for kind in NODE_KINDS:
        assert hasattr(TreePrinter, f"print_{kind}")


def test_declarations_outline() -> None:
    program = parse("int x; int a[10]; void f(int p, int q[]) { }")
    assert format_tree(program) == "\n".join(
        [
            "Program:",
            "  VarDeclaration: int x",
            "  ArrayDeclaration: int a[10]",
            "  FunDeclaration: void f(",
            "    Param: int p",
            "    Param: int q[]",
            "  )",
            "    CompoundStmt: {",
            "      LocalDeclarations:",
            "      Statements:",
            "    }",
        ]
    )


def test_function_body_outline() -> None:
    program = parse("int f(void) { int y; y = g(1); return; }")
    assert format_tree(program) == "\n".join(
        [
            "Program:",
            "  FunDeclaration: int f(",
            "  )",
            "    CompoundStmt: {",
            "      LocalDeclarations:",
            "        VarDeclaration: int y",
            "      Statements:",
            "        ExpressionStmt:",
            "          AssignExpression:",
            "            Left:",
            "              Variable: y",
            "            Right:",
            "              Call: g(",
            "                Number: 1",
            "              )",
            "        ReturnStmt: (void)",
            "    }",
        ]
    )


def test_if_else_outline() -> None:
    stmt = parse_statement("if (a < 1) ; else return b[0];")
    assert format_tree(stmt) == "\n".join(
        [
            "IfStmt:",
            "  Condition:",
            "    SimpleExpression (LT):",
            "      Left:",
            "        Variable: a",
            "      Right:",
            "        Number: 1",
            "  Then:",
            "    ExpressionStmt: ;",
            "  Else:",
            "    ReturnStmt:",
            "      Variable: b[",
            "        Number: 0",
            "      ]",
        ]
    )


def test_while_and_binop_outline() -> None:
    stmt = parse_statement("while (n) n = n - 1;")
    assert format_tree(stmt) == "\n".join(
        [
            "WhileStmt:",
            "  Condition:",
            "    Variable: n",
            "  Body:",
            "    ExpressionStmt:",
            "      AssignExpression:",
            "        Left:",
            "          Variable: n",
            "        Right:",
            "          BinaryOp: MINUS",
            "            Left:",
            "              Variable: n",
            "            Right:",
            "              Number: 1",
        ]
    )


def test_render_resets_between_calls() -> None:
    printer = TreePrinter()
    first = printer.render(parse_expression("1"))
    second = printer.render(parse_expression("1"))
    assert first == second == "Number: 1"


def test_unknown_kind_raises() -> None:
    fake: Any = type("Fake", (), {"kind": "mystery", "line": 4})()
    with pytest.raises(NotImplementedError, match="mystery"):
        TreePrinter().render(fake)


def test_sample_program_renders(sample_program: str) -> None:
    text = format_tree(parse(sample_program))
    assert text.startswith("Program:\n  FunDeclaration: int gcd(")
    assert "  ArrayDeclaration: int data[10]" in text
    assert text.count("IfStmt:") == 1
    assert "BinaryOp: TIMES" in text
