"""
mylang Compiler Front End
=========================

This package implements the front end of a compiler for mylang, a small
statically typed C-like language. Given one source file it produces
either a validated AST with a textual dump, or a list of diagnostics.

- A lexer (scanner) that never fails
- A recursive descent parser that recovers from syntax errors
- A scope-and-type semantic analyzer
- The AST data model with a tree dump and a source printer

Pipeline
--------
    Source → Lexer → Parser → AST → Semantic Analyzer → Dump / Diagnostics

Usage
-----
>>> from mylang.frontend import compile_source
>>> result = compile_source('int main() { int x = 1 + 2 * 3; return x; }')
>>> result.success
True

Language Subset
---------------
Supported:
- Types: int, float, string, void
- Functions with empty parameter lists, returning a value or void
- Local variable declarations with optional initializer
- return, expression statements and nested blocks
- Arithmetic + - * / with the usual precedence and parentheses

Not supported:
- Parameters and calls, conditionals and loops (if/while are reserved)
- Implicit conversions between types
"""

from mylang.frontend.compiler import (
    FrontEnd,
    FrontEndOptions,
    CompilationResult,
    compile_source,
    compile_file,
    dump_source,
)
from mylang.frontend.errors import (
    FrontEndError,
    CompilationError,
    LexicalError,
    InvalidCharacterError,
    SyntaxDiagnostic,
    UnexpectedTokenError,
    MissingTokenError,
    SemanticError,
    RedefinitionError,
    UndeclaredIdentifierError,
    TypeMismatchError,
    DiagnosticCollector,
)
from mylang.frontend.lexer import Lexer, Token, TokenType, tokenize
from mylang.frontend.parser import Parser, parse_source
from mylang.frontend.semantic import SemanticAnalyzer, analyze
from mylang.frontend.types import TypeTag, classify_literal
from mylang.frontend.ast import (
    ASTNode,
    Program,
    FunctionDecl,
    BlockStmt,
    VarDecl,
    ReturnStmt,
    ExprStmt,
    BinaryExpr,
    BinaryOperator,
    Identifier,
    Literal,
    ASTVisitor,
    ASTPrinter,
    SourcePrinter,
    dump_ast,
    format_source,
)

__all__ = [
    # Main API
    "FrontEnd",
    "FrontEndOptions",
    "CompilationResult",
    "compile_source",
    "compile_file",
    "dump_source",
    # Errors
    "FrontEndError",
    "CompilationError",
    "LexicalError",
    "InvalidCharacterError",
    "SyntaxDiagnostic",
    "UnexpectedTokenError",
    "MissingTokenError",
    "SemanticError",
    "RedefinitionError",
    "UndeclaredIdentifierError",
    "TypeMismatchError",
    "DiagnosticCollector",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # Parser
    "Parser",
    "parse_source",
    # Semantic analysis
    "SemanticAnalyzer",
    "analyze",
    # Types
    "TypeTag",
    "classify_literal",
    # AST
    "ASTNode",
    "Program",
    "FunctionDecl",
    "BlockStmt",
    "VarDecl",
    "ReturnStmt",
    "ExprStmt",
    "BinaryExpr",
    "BinaryOperator",
    "Identifier",
    "Literal",
    "ASTVisitor",
    "ASTPrinter",
    "SourcePrinter",
    "dump_ast",
    "format_source",
]
