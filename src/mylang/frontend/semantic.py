"""
mylang Semantic Analyzer
========================

This module checks a parsed Program against the language's scope and
type rules. It never raises and never changes the tree: diagnostics go
to a DiagnosticCollector and computed expression types go to a side
table on the analyzer.

Scope Discipline
----------------
A scope is pushed for the whole translation unit, for every function,
and for every block (so a function body sits two scopes deep). Lookup
walks inner to outer; a declaration that repeats a name already bound in
the innermost scope is a redefinition and leaves the first binding in
place.

Type Rules
----------
| Construct          | Rule                                         |
|--------------------|----------------------------------------------|
| VarDecl with init  | init type == declared type                   |
| return expr        | expr type == function return type            |
| return             | function return type == void                 |
| a op b             | type(a) == type(b); result is type(a)        |
| identifier         | type of its binding; unresolved -> int       |
| literal            | classify_literal(text)                       |

No rule stops the traversal: after a mismatch the analyzer carries on
with the conservative type shown above.

Example Usage
-------------
>>> from mylang.frontend.parser import parse_source
>>> from mylang.frontend.semantic import SemanticAnalyzer
>>> analyzer = SemanticAnalyzer()
>>> analyzer.analyze(parse_source('int main() { return y; }'))
False
>>> print(analyzer.diagnostics[0])
[1:21] use of undeclared identifier 'y'
"""

import logging
from typing import Optional

from mylang.frontend.ast import (
    ASTVisitor,
    Program,
    FunctionDecl,
    BlockStmt,
    VarDecl,
    ReturnStmt,
    ExprStmt,
    Expression,
    BinaryExpr,
    Identifier,
    Literal,
)
from mylang.frontend.errors import (
    DiagnosticCollector,
    FrontEndError,
    RedefinitionError,
    TypeMismatchError,
    UndeclaredIdentifierError,
)
from mylang.frontend.scopes import ScopeStack
from mylang.frontend.types import TypeTag, classify_literal, types_compatible

logger = logging.getLogger(__name__)


class SemanticAnalyzer(ASTVisitor):
    """
    Scope-and-type checker for a Program.

    Statement visitors return None; expression visitors return the
    expression's TypeTag. One analyzer can check several programs in
    turn; each analyze() call starts from a clean state.

    Attributes:
        collector: Sink for diagnostics (a private one if not given)
    """

    def __init__(self, collector: Optional[DiagnosticCollector] = None):
        self.collector = collector if collector is not None else DiagnosticCollector()
        self._scopes = ScopeStack()
        self._functions: dict[str, FunctionDecl] = {}
        self._current_return: TypeTag = TypeTag.VOID
        self._expression_types: dict[int, TypeTag] = {}
        self._raised: list[FrontEndError] = []

    # =========================================================================
    # Public API
    # =========================================================================

    def analyze(self, program: Program) -> bool:
        """
        Check the whole program.

        Args:
            program: Root of the tree to check

        Returns:
            True if and only if this pass raised no diagnostic
        """
        self._scopes = ScopeStack()
        self._functions = {}
        self._expression_types = {}
        self._raised = []

        self.visit(program)

        # Traversal reports operands before their operator; publish by position
        self._raised.sort(
            key=lambda e: e.location.sort_key() if e.location else (0, 0)
        )
        self.collector.extend(self._raised)

        logger.debug(
            "analyzed %d function(s), %d diagnostic(s)",
            len(program.declarations),
            len(self._raised),
        )
        return not self._raised

    @property
    def diagnostics(self) -> list[FrontEndError]:
        """Diagnostics raised by the last analyze() call, in source order."""
        return list(self._raised)

    def type_of(self, expr: Expression) -> Optional[TypeTag]:
        """Type computed for expr during the last analysis, if visited."""
        return self._expression_types.get(id(expr))

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def _report(self, error: FrontEndError) -> None:
        self._raised.append(error)

    def _find_similar_names(self, name: str) -> list[str]:
        """
        Find visible names close to name for 'did you mean' hints.

        Uses simple edit distance heuristic.
        """
        name_lower = name.lower()
        similar = []

        for candidate in self._scopes.visible_names():
            candidate_lower = candidate.lower()
            if (
                candidate_lower == name_lower or
                abs(len(candidate) - len(name)) <= 1 and
                _edit_distance(name_lower, candidate_lower) <= 2
            ):
                similar.append(candidate)

        return similar[:3]

    # =========================================================================
    # Declarations and Statements
    # =========================================================================

    def visit_Program(self, node: Program) -> None:
        with self._scopes.scope():
            for decl in node.declarations:
                self.visit(decl)

    def visit_FunctionDecl(self, node: FunctionDecl) -> None:
        first = self._functions.get(node.name)
        if first is not None:
            self._report(RedefinitionError(
                node.name,
                location=node.location,
                what="function",
                original_location=first.location,
            ))
        else:
            self._functions[node.name] = node

        self._current_return = node.return_type
        with self._scopes.scope():
            self.visit(node.body)

    def visit_BlockStmt(self, node: BlockStmt) -> None:
        with self._scopes.scope():
            for stmt in node.statements:
                self.visit(stmt)

    def visit_VarDecl(self, node: VarDecl) -> None:
        if not self._scopes.declare(node.name, node.var_type, node.location):
            first = self._scopes.local_binding(node.name)
            self._report(RedefinitionError(
                node.name,
                location=node.location,
                original_location=first.location if first else None,
            ))

        if node.initializer is not None:
            init_type = self.visit(node.initializer)
            if not types_compatible(node.var_type, init_type):
                self._report(TypeMismatchError(
                    f"type mismatch in initialization of '{node.name}': "
                    f"expected {node.var_type}, got {init_type}",
                    expected_type=str(node.var_type),
                    actual_type=str(init_type),
                    location=node.initializer.location,
                ))

    def visit_ReturnStmt(self, node: ReturnStmt) -> None:
        value_type = TypeTag.VOID
        if node.value is not None:
            value_type = self.visit(node.value)

        if not types_compatible(self._current_return, value_type):
            self._report(TypeMismatchError(
                f"return type mismatch: expected {self._current_return}, got {value_type}",
                expected_type=str(self._current_return),
                actual_type=str(value_type),
                location=node.location,
            ))

    def visit_ExprStmt(self, node: ExprStmt) -> None:
        self.visit(node.expression)

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_BinaryExpr(self, node: BinaryExpr) -> TypeTag:
        left = self.visit(node.left)
        right = self.visit(node.right)

        if not types_compatible(left, right):
            self._report(TypeMismatchError(
                f"type mismatch in binary expression: {left} {node.operator.symbol} {right}",
                expected_type=str(left),
                actual_type=str(right),
                location=node.location,
            ))

        return self._record(node, left)

    def visit_Identifier(self, node: Identifier) -> TypeTag:
        type_tag = self._scopes.lookup(node.name)
        if type_tag is None:
            self._report(UndeclaredIdentifierError(
                node.name,
                location=node.location,
                similar_identifiers=self._find_similar_names(node.name),
            ))
            type_tag = TypeTag.INT

        return self._record(node, type_tag)

    def visit_Literal(self, node: Literal) -> TypeTag:
        return self._record(node, classify_literal(node.text))

    def _record(self, node: Expression, type_tag: TypeTag) -> TypeTag:
        self._expression_types[id(node)] = type_tag
        return type_tag


# =============================================================================
# Helpers
# =============================================================================

def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = range(len(s2) + 1)
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min((
                    distances[j],
                    distances[j + 1],
                    new_distances[-1]
                )))
        distances = new_distances

    return distances[-1]


def analyze(
    program: Program,
    collector: Optional[DiagnosticCollector] = None,
) -> bool:
    """
    Check a program with a fresh analyzer.

    Args:
        program: Root of the tree to check
        collector: Optional sink for diagnostics

    Returns:
        True if no diagnostic was raised
    """
    return SemanticAnalyzer(collector).analyze(program)
