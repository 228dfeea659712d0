"""
mylang Abstract Syntax Tree (AST) Definitions
=============================================

This module defines the AST node types produced by the parser and read
by the semantic analyzer, plus two printers: the stable tree dump used by
the driver and tests, and a source printer that renders a tree back into
parseable text.

Node Hierarchy
--------------
ASTNode (base)
├── Program - translation-unit root
├── Declarations
│   ├── FunctionDecl - the only top-level declaration
│   └── VarDecl - local variable (also a statement)
├── Statements
│   ├── BlockStmt - { ... }, introduces a scope
│   ├── ReturnStmt - return with optional value
│   └── ExprStmt - expression evaluated for effect
└── Expressions
    ├── BinaryExpr - + - * /
    ├── Identifier - variable reference
    └── Literal - number or string constant

Design Notes
------------
- All nodes are frozen dataclasses; child sequences are tuples. The tree
  cannot be changed after the parser returns it.
- Each node stores the location of its defining token. Locations are
  excluded from equality, so == compares tree shape and attributes only.
- The analyzer keeps computed types in its own side table; nodes have no
  slot for them.

Dump Format
-----------
    Program
      FunctionDecl main : int
        BlockStmt
          VarDecl x : int
            BinaryExpr +
              Literal 1
              Identifier y
          ReturnStmt
            Identifier x
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from mylang.errors import SourceLocation
from mylang.frontend.lexer import TokenType
from mylang.frontend.types import TypeTag


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location of the node's defining token
    """
    location: SourceLocation = field(compare=False)

    def __repr__(self) -> str:
        """Default representation showing node type."""
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column


@dataclass(frozen=True, repr=False)
class Expression(ASTNode):
    """Base class for nodes that evaluate to a value."""
    pass


@dataclass(frozen=True, repr=False)
class Statement(ASTNode):
    """Base class for nodes executed for their effect."""
    pass


@dataclass(frozen=True, repr=False)
class Declaration(ASTNode):
    """Base class for nodes that introduce a name."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

class BinaryOperator(Enum):
    """The four arithmetic operators, valued by their source symbol."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_token_type(cls, token_type: TokenType) -> "BinaryOperator":
        return {
            TokenType.PLUS: cls.ADD,
            TokenType.MINUS: cls.SUB,
            TokenType.STAR: cls.MUL,
            TokenType.SLASH: cls.DIV,
        }[token_type]


@dataclass(frozen=True, repr=False)
class BinaryExpr(Expression):
    """
    Binary arithmetic expression (left op right).

    Located at the operator token.

    Attributes:
        operator: The binary operator
        left: Left operand (never None)
        right: Right operand (never None)
    """
    operator: BinaryOperator = BinaryOperator.ADD
    left: Expression = None
    right: Expression = None


@dataclass(frozen=True, repr=False)
class Identifier(Expression):
    """
    Variable reference.

    Attributes:
        name: The variable name
    """
    name: str = ""


@dataclass(frozen=True, repr=False)
class Literal(Expression):
    """
    Constant value.

    Attributes:
        text: The literal's source text (quotes included for strings,
            empty for the parser's error fallback)
        literal_type: Type derived from text by classify_literal()
    """
    text: str = ""
    literal_type: TypeTag = TypeTag.INT


# =============================================================================
# Statement and Declaration Nodes
# =============================================================================

@dataclass(frozen=True, repr=False)
class VarDecl(Declaration, Statement):
    """
    Variable declaration, located at the variable name.

    Attributes:
        name: Variable name
        var_type: Declared type
        initializer: Optional initialization expression
    """
    name: str = ""
    var_type: TypeTag = TypeTag.INT
    initializer: Optional[Expression] = None


@dataclass(frozen=True, repr=False)
class ReturnStmt(Statement):
    """
    Return statement, located at the 'return' keyword.

    Attributes:
        value: Optional return value
    """
    value: Optional[Expression] = None


@dataclass(frozen=True, repr=False)
class ExprStmt(Statement):
    """
    Expression used as a statement.

    Attributes:
        expression: The expression
    """
    expression: Expression = None


@dataclass(frozen=True, repr=False)
class BlockStmt(Statement):
    """
    Block statement enclosed in braces.

    Attributes:
        statements: Statements in source order
    """
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True, repr=False)
class FunctionDecl(Declaration):
    """
    Function definition with an empty parameter list.

    Attributes:
        name: Function name
        return_type: Declared return type
        body: The function body (always a BlockStmt)
    """
    name: str = ""
    return_type: TypeTag = TypeTag.INT
    body: BlockStmt = None


@dataclass(frozen=True, repr=False)
class Program(ASTNode):
    """
    Root node of the AST.

    Attributes:
        declarations: Top-level function declarations in source order
    """
    declarations: tuple[FunctionDecl, ...] = ()


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Dispatches on the node's class name to a visit_<ClassName> method.
    Subclasses override the methods for the node types they care about;
    everything else falls through to generic_visit, which visits children.

    Usage:
        class NameCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_Identifier(self, node):
                self.names.append(node.name)

        collector = NameCollector()
        collector.visit(program)
    """

    def visit(self, node: ASTNode) -> Any:
        """
        Visit a node by dispatching to the appropriate method.

        Args:
            node: The AST node to visit

        Returns:
            The result of the visit method (varies by visitor)
        """
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes in field order."""
        for child in iter_children(node):
            self.visit(child)


def iter_children(node: ASTNode):
    """Yield the direct child nodes of node in field order."""
    for value in node.__dict__.values():
        if isinstance(value, ASTNode):
            yield value
        elif isinstance(value, tuple):
            for item in value:
                if isinstance(item, ASTNode):
                    yield item


# =============================================================================
# AST Dump
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Produces the stable tree dump.

    One line per node, two spaces of indentation per depth level, each
    line starting with the node's class name followed by its salient
    attributes.

    Usage:
        printer = ASTPrinter()
        output = printer.print(program)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the tree and return it as a string (no trailing newline)."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        """Emit a line with current indentation."""
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _children(self, *nodes: Optional[ASTNode]) -> None:
        """Visit nodes one level deeper, skipping absent ones."""
        self.indent_level += 1
        for node in nodes:
            if node is not None:
                self.visit(node)
        self.indent_level -= 1

    def visit_Program(self, node: Program):
        self._emit("Program")
        self._children(*node.declarations)

    def visit_FunctionDecl(self, node: FunctionDecl):
        self._emit(f"FunctionDecl {node.name} : {node.return_type}")
        self._children(node.body)

    def visit_BlockStmt(self, node: BlockStmt):
        self._emit("BlockStmt")
        self._children(*node.statements)

    def visit_VarDecl(self, node: VarDecl):
        self._emit(f"VarDecl {node.name} : {node.var_type}")
        self._children(node.initializer)

    def visit_ReturnStmt(self, node: ReturnStmt):
        self._emit("ReturnStmt")
        self._children(node.value)

    def visit_ExprStmt(self, node: ExprStmt):
        self._emit("ExprStmt")
        self._children(node.expression)

    def visit_BinaryExpr(self, node: BinaryExpr):
        self._emit(f"BinaryExpr {node.operator.symbol}")
        self._children(node.left, node.right)

    def visit_Identifier(self, node: Identifier):
        self._emit(f"Identifier {node.name}")

    def visit_Literal(self, node: Literal):
        self._emit(f"Literal {node.text}" if node.text else "Literal")


def dump_ast(node: ASTNode) -> str:
    """Return the tree dump of node."""
    return ASTPrinter().print(node)


# =============================================================================
# Source Printer
# =============================================================================

class SourcePrinter(ASTVisitor):
    """
    Renders a tree back into source text.

    Operands that are themselves binary expressions are parenthesized, so
    re-parsing the output rebuilds the same tree regardless of operator
    precedence. Statements are indented four spaces per block level.
    """

    INDENT = "    "

    def __init__(self):
        self.lines: list[str] = []
        self.depth = 0

    def print(self, node: ASTNode) -> str:
        """Render node; expressions render inline, everything else as lines."""
        if isinstance(node, Expression):
            return self.visit(node)
        self.lines = []
        self.depth = 0
        self.visit(node)
        return "\n".join(self.lines)

    def _line(self, text: str) -> None:
        self.lines.append(f"{self.INDENT * self.depth}{text}")

    def visit_Program(self, node: Program):
        for index, decl in enumerate(node.declarations):
            if index:
                self.lines.append("")
            self.visit(decl)

    def visit_FunctionDecl(self, node: FunctionDecl):
        self._line(f"{node.return_type} {node.name}() {{")
        self._block_body(node.body)
        self._line("}")

    def visit_BlockStmt(self, node: BlockStmt):
        self._line("{")
        self._block_body(node)
        self._line("}")

    def _block_body(self, block: Optional[BlockStmt]) -> None:
        if block is None:
            return
        self.depth += 1
        for stmt in block.statements:
            self.visit(stmt)
        self.depth -= 1

    def visit_VarDecl(self, node: VarDecl):
        if node.initializer is not None:
            self._line(f"{node.var_type} {node.name} = {self.visit(node.initializer)};")
        else:
            self._line(f"{node.var_type} {node.name};")

    def visit_ReturnStmt(self, node: ReturnStmt):
        if node.value is not None:
            self._line(f"return {self.visit(node.value)};")
        else:
            self._line("return;")

    def visit_ExprStmt(self, node: ExprStmt):
        self._line(f"{self.visit(node.expression)};")

    def visit_BinaryExpr(self, node: BinaryExpr) -> str:
        return f"{self._operand(node.left)} {node.operator.symbol} {self._operand(node.right)}"

    def _operand(self, expr: Expression) -> str:
        text = self.visit(expr)
        if isinstance(expr, BinaryExpr):
            return f"({text})"
        return text

    def visit_Identifier(self, node: Identifier) -> str:
        return node.name

    def visit_Literal(self, node: Literal) -> str:
        return node.text


def format_source(node: ASTNode) -> str:
    """Render node as source text."""
    return SourcePrinter().print(node)
