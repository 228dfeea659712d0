"""
mylang Error Hierarchy
======================

This module defines the root of the exception hierarchy for the whole
mylang toolchain. All exceptions inherit from MyLangError, allowing callers
to catch every toolchain-related error with a single except clause.

Exception Hierarchy
-------------------
MyLangError (base)
└── FrontEndError (scanner, parser and semantic analyzer diagnostics)
    See mylang.frontend.errors for the full tree.

Design Philosophy
-----------------
Every diagnostic captures a source location (filename, line, column). The
front end collects diagnostics instead of raising them, so the location is
what lets a driver print them in source order after the pass completes.
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class MyLangError(Exception):
    """
    Base exception for all mylang errors.

    All exceptions in the toolchain inherit from this class, allowing
    callers to catch them with a single except clause:

        try:
            dump = dump_source(source)
        except MyLangError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Used by tokens, AST nodes and diagnostics. The immutable (frozen)
    design ensures locations cannot be accidentally modified.

    Attributes:
        filename: Name of the source file (or "<input>" for in-memory input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column'."""
        return f"{self.filename}:{self.line}:{self.column}"

    @property
    def position(self) -> str:
        """Format as '[line:column]', the diagnostic prefix."""
        return f"[{self.line}:{self.column}]"

    def sort_key(self) -> tuple[int, int]:
        """Key for ordering diagnostics by source position."""
        return (self.line, self.column)
