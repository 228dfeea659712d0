"""
mylang - Compiler Front End for a Small C-like Language
=======================================================

This package provides the front end of the mylang compiler: scanning,
parsing and semantic analysis of a single translation unit.

Main Components
---------------
- **frontend**: lexer, parser, AST, scope-and-type analyzer
    Turns source bytes into a checked AST or a list of diagnostics

- **cli**: command-line driver (mylangc)
    Prints the AST dump to stdout and diagnostics to stderr

Quick Start
-----------
Check a program:
    >>> from mylang import compile_source
    >>> result = compile_source('void f() { return 1; }')
    >>> result.success
    False
    >>> print(result.diagnostics[0])
    [1:12] return type mismatch: expected void, got int

Or use the command-line tool:
    $ mylangc hello.ml
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mylang.errors import MyLangError, SourceLocation
from mylang.frontend import (
    FrontEnd,
    FrontEndOptions,
    CompilationResult,
    CompilationError,
    compile_source,
    compile_file,
    dump_source,
)

__all__ = [
    "__version__",
    "MyLangError",
    "SourceLocation",
    "FrontEnd",
    "FrontEndOptions",
    "CompilationResult",
    "CompilationError",
    "compile_source",
    "compile_file",
    "dump_source",
]
