"""
Tests for the AST data model, the tree dump and the source printer.
"""

import dataclasses

import pytest

from mylang.errors import SourceLocation
from mylang.frontend.ast import (
    ASTVisitor,
    BinaryExpr,
    BinaryOperator,
    Identifier,
    Literal,
    ReturnStmt,
    dump_ast,
    format_source,
    iter_children,
)
from mylang.frontend.lexer import TokenType
from mylang.frontend.parser import parse_source
from mylang.frontend.types import TypeTag


# =============================================================================
# Node Model
# =============================================================================

class TestNodes:
    """Node identity, equality and immutability."""

    def test_location_excluded_from_equality(self):
        a = Identifier(location=SourceLocation("a.ml", 1, 1), name="x")
        b = Identifier(location=SourceLocation("b.ml", 9, 9), name="x")
        assert a == b

    def test_attributes_compared(self):
        loc = SourceLocation("<test>", 1, 1)
        assert Identifier(location=loc, name="x") != Identifier(location=loc, name="y")

    def test_nodes_are_frozen(self):
        node = Identifier(location=SourceLocation("<test>", 1, 1), name="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.name = "y"

    def test_line_and_column(self):
        node = Literal(location=SourceLocation("<test>", 3, 7), text="1")
        assert (node.line, node.column) == (3, 7)
        assert repr(node) == "Literal@3:7"

    def test_operator_from_token(self):
        assert BinaryOperator.from_token_type(TokenType.PLUS) is BinaryOperator.ADD
        assert BinaryOperator.from_token_type(TokenType.SLASH) is BinaryOperator.DIV
        assert BinaryOperator.MUL.symbol == "*"

    def test_iter_children_in_field_order(self):
        program = parse_source("int main() { return a + b; }")
        ret = program.declarations[0].body.statements[0]
        expr = ret.value
        assert list(iter_children(ret)) == [expr]
        assert [c.name for c in iter_children(expr)] == ["a", "b"]


class TestVisitor:
    """ASTVisitor dispatch."""

    def test_generic_visit_walks_tree(self):
        class NameCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_Identifier(self, node):
                self.names.append(node.name)

        collector = NameCollector()
        collector.visit(parse_source("int main() { int z = a * (b - c); { d; } return e; }"))
        assert collector.names == ["a", "b", "c", "d", "e"]

    def test_visit_returns_method_result(self):
        class Counter(ASTVisitor):
            def visit_Literal(self, node):
                return 1

            def visit_BinaryExpr(self, node):
                return self.visit(node.left) + self.visit(node.right)

        expr = parse_source("int f() { return 1 + 2 * 3; }").declarations[0].body.statements[0].value
        assert Counter().visit(expr) == 3


# =============================================================================
# Tree Dump
# =============================================================================

class TestDump:
    """The stable textual tree dump."""

    def test_simple_program(self):
        dump = dump_ast(parse_source("int main() { return 0; }"))
        assert dump == (
            "Program\n"
            "  FunctionDecl main : int\n"
            "    BlockStmt\n"
            "      ReturnStmt\n"
            "        Literal 0"
        )

    def test_all_node_kinds(self):
        source = 'string f() { float x = 1.5 - y / 2; { z; } string s; return "hi"; }'
        assert dump_ast(parse_source(source)).split("\n") == [
            "Program",
            "  FunctionDecl f : string",
            "    BlockStmt",
            "      VarDecl x : float",
            "        BinaryExpr -",
            "          Literal 1.5",
            "          BinaryExpr /",
            "            Identifier y",
            "            Literal 2",
            "      BlockStmt",
            "        ExprStmt",
            "          Identifier z",
            "      VarDecl s : string",
            '      ReturnStmt',
            '        Literal "hi"',
        ]

    def test_void_return_has_no_child(self):
        dump = dump_ast(parse_source("void f() { return; }"))
        assert dump.split("\n")[-1] == "      ReturnStmt"

    def test_fallback_literal_has_no_trailing_space(self):
        dump = dump_ast(parse_source("int main() { return ); }"))
        assert "        Literal" in dump.split("\n")
        assert not any(line.endswith(" ") for line in dump.split("\n"))

    def test_no_trailing_newline(self):
        assert not dump_ast(parse_source("void f() { }")).endswith("\n")

    def test_empty_program(self):
        assert dump_ast(parse_source("")) == "Program"


# =============================================================================
# Source Printer
# =============================================================================

class TestSourcePrinter:
    """Rendering trees back to parseable source."""

    def test_format_function(self):
        text = format_source(parse_source("int main(){int x=1;return x;}"))
        assert text == (
            "int main() {\n"
            "    int x = 1;\n"
            "    return x;\n"
            "}"
        )

    def test_nested_operands_parenthesized(self):
        expr = parse_source("int f() { return (a + b) * c; }").declarations[0].body.statements[0].value
        assert format_source(expr) == "(a + b) * c"

    def test_format_void_return_and_block(self):
        text = format_source(parse_source("void f() { { } return; }"))
        assert text == (
            "void f() {\n"
            "    {\n"
            "    }\n"
            "    return;\n"
            "}"
        )

    @pytest.mark.parametrize("source", [
        "int main() { return 0; }",
        "int main() { int x = 1 + 2 * 3; return x; }",
        "int f() { return a - b - c; } int g() { return a - (b - c); }",
        "float f() { float x = (1.5 + y) / (z * 2.0); { float x; x; } return x; }",
        'string s() { string t = "a \\" b"; return t + "c"; }',
        "void v() { return; }",
    ])
    def test_round_trip(self, source):
        """Parsing the printed source rebuilds an equal tree."""
        program = parse_source(source)
        assert parse_source(format_source(program)) == program

    def test_round_trip_is_shape_sensitive(self):
        """Equality distinguishes different groupings."""
        left = parse_source("int f() { return a - b - c; }")
        right = parse_source("int f() { return a - (b - c); }")
        assert left != right

    def test_literal_node_from_parser(self):
        ret = parse_source("int f() { return 7; }").declarations[0].body.statements[0]
        assert isinstance(ret, ReturnStmt)
        assert ret.value == Literal(
            location=SourceLocation("<input>", 1, 1), text="7", literal_type=TypeTag.INT
        )
        assert not isinstance(ret.value, BinaryExpr)
