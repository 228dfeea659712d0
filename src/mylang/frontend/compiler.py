"""
mylang Front-End Driver
=======================

This module runs the complete front-end pipeline over one translation
unit:

    Source bytes → Lexer → Parser → Semantic Analyzer → AST dump

Usage
-----
Command line:
    $ mylangc hello.ml

Programmatic:
    >>> from mylang.frontend import compile_source
    >>> result = compile_source('int main() { return 0; }')
    >>> result.success
    True
    >>> print(result.dump)
    Program
      FunctionDecl main : int
        BlockStmt
          ReturnStmt
            Literal 0

Error Handling
--------------
No stage stops the pipeline. Syntax diagnostics from the parser and
semantic diagnostics from the analyzer are merged into one list in source
order, and the compilation succeeds only if that list is empty. The
result always carries the tree and its dump, even on failure.

Each FrontEnd run owns its lexer, parser and analyzer, so independent
compilations can run side by side.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from mylang.frontend.ast import Program, dump_ast
from mylang.frontend.errors import DiagnosticCollector, FrontEndError
from mylang.frontend.lexer import Lexer, Token
from mylang.frontend.parser import Parser
from mylang.frontend.semantic import SemanticAnalyzer

logger = logging.getLogger(__name__)


@dataclass
class FrontEndOptions:
    """
    Front-end configuration options.

    Attributes:
        line_comments: Treat // to end of line as a comment. When off,
            comments scan as SLASH tokens and fail to parse.
        float_literals: Scan 1.5 as one NUMBER token (typed float).
        syntax_diagnostics: Report parser recovery points as diagnostics.
            When off, the parser recovers silently and only semantic
            diagnostics decide success.
    """
    line_comments: bool = True
    float_literals: bool = True
    syntax_diagnostics: bool = True


@dataclass
class CompilationResult:
    """
    Result of running the front end over one source.

    Attributes:
        filename: Source filename
        success: True if no diagnostics were raised
        tokens: The token stream, ending with EOF
        ast: The parsed tree (present even when success is False)
        dump: Tree dump of ast
        diagnostics: All diagnostics in source order
        token_count: Number of tokens excluding EOF
    """
    filename: str = ""
    success: bool = False
    tokens: list[Token] = field(default_factory=list)
    ast: Optional[Program] = None
    dump: str = ""
    diagnostics: list[FrontEndError] = field(default_factory=list)
    token_count: int = 0

    def raise_if_errors(self) -> None:
        """Raise CompilationError if the compilation produced diagnostics."""
        collector = DiagnosticCollector()
        collector.extend(self.diagnostics)
        collector.raise_if_errors()


class FrontEnd:
    """
    Runs lexer, parser and analyzer over a translation unit.

    Example:
        front_end = FrontEnd()
        result = front_end.compile_file("hello.ml")
        print(result.dump)

    Attributes:
        options: Front-end configuration options
    """

    def __init__(self, options: Optional[FrontEndOptions] = None):
        self.options = options or FrontEndOptions()

    def compile_source(
        self,
        source: Union[str, bytes],
        filename: str = "<input>",
    ) -> CompilationResult:
        """
        Run the pipeline over in-memory source.

        Args:
            source: Source text or raw bytes
            filename: Source filename for locations

        Returns:
            CompilationResult with tree, dump and diagnostics
        """
        result = CompilationResult(filename=filename)

        # Stage 1: Lexical analysis
        result.tokens = self._lex(source, filename)
        result.token_count = len(result.tokens) - 1

        # Stage 2: Parsing
        syntax = DiagnosticCollector()
        result.ast = self._parse(result.tokens, filename, syntax)
        result.dump = dump_ast(result.ast)

        # Stage 3: Semantic analysis
        semantic = DiagnosticCollector()
        self._analyze(result.ast, semantic)

        merged = DiagnosticCollector()
        merged.extend(syntax.errors)
        merged.extend(semantic.errors)
        result.diagnostics = merged.sorted()
        result.success = not merged.has_errors()

        logger.debug(
            "%s: %d token(s), %d syntax and %d semantic diagnostic(s)",
            filename,
            result.token_count,
            syntax.error_count(),
            semantic.error_count(),
        )
        return result

    def compile_file(self, filepath: Union[str, Path]) -> CompilationResult:
        """
        Run the pipeline over a source file.

        Args:
            filepath: Path to the source file

        Returns:
            CompilationResult with tree, dump and diagnostics

        Raises:
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        return self.compile_source(path.read_bytes(), str(filepath))

    def _lex(self, source: Union[str, bytes], filename: str) -> list[Token]:
        """Tokenize source."""
        lexer = Lexer(
            source,
            filename,
            line_comments=self.options.line_comments,
            float_literals=self.options.float_literals,
        )
        return list(lexer.tokenize())

    def _parse(
        self,
        tokens: list[Token],
        filename: str,
        collector: DiagnosticCollector,
    ) -> Program:
        """Parse tokens into an AST."""
        sink = collector if self.options.syntax_diagnostics else None
        return Parser(tokens, filename, sink).parse()

    def _analyze(self, ast: Program, collector: DiagnosticCollector) -> bool:
        """Check the AST."""
        return SemanticAnalyzer(collector).analyze(ast)


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_source(
    source: Union[str, bytes],
    filename: str = "<input>",
    options: Optional[FrontEndOptions] = None,
) -> CompilationResult:
    """
    Run the front end over source with the given (or default) options.

    Args:
        source: Source text or bytes
        filename: Source filename for locations
        options: Front-end configuration

    Returns:
        CompilationResult (never raises for bad input)
    """
    return FrontEnd(options).compile_source(source, filename)


def compile_file(
    filepath: Union[str, Path],
    options: Optional[FrontEndOptions] = None,
) -> CompilationResult:
    """
    Run the front end over a source file.

    Raises:
        FileNotFoundError: If source file not found
    """
    return FrontEnd(options).compile_file(filepath)


def dump_source(
    source: Union[str, bytes],
    filename: str = "<input>",
    options: Optional[FrontEndOptions] = None,
) -> str:
    """
    Return the AST dump of a valid program.

    Args:
        source: Source text or bytes
        filename: Source filename for locations
        options: Front-end configuration

    Returns:
        The tree dump

    Raises:
        CompilationError: If the program has any diagnostic

    Example:
        >>> print(dump_source('int main() { return 0; }'))
        Program
          FunctionDecl main : int
            BlockStmt
              ReturnStmt
                Literal 0
    """
    result = compile_source(source, filename, options)
    result.raise_if_errors()
    return result.dump
