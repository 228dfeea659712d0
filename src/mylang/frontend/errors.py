"""
Front-End Diagnostic Hierarchy
==============================

This module defines the diagnostics produced by the scanner, parser and
semantic analyzer. All of them inherit from FrontEndError, which itself
inherits from the base MyLangError.

Diagnostics are exception objects, but the front end never raises them:
they are appended to a DiagnosticCollector and reported after the pass
completes. Only the convenience APIs raise, and then only the aggregate
CompilationError.

Exception Hierarchy
-------------------
FrontEndError (base for all front-end diagnostics)
├── LexicalError - bytes the scanner could not classify
│   └── InvalidCharacterError - an INVALID token reached the parser
├── SyntaxDiagnostic - parser recovery points
│   ├── UnexpectedTokenError - token cannot start an expression
│   └── MissingTokenError - required punctuation not found
├── SemanticError - scope and type rules
│   ├── RedefinitionError - name declared twice in one scope
│   ├── UndeclaredIdentifierError - reference without a visible binding
│   └── TypeMismatchError - initializer, return or operand types differ
└── CompilationError - aggregate report

Diagnostic Format
-----------------
    [line:column] message

Example:
    [1:21] use of undeclared identifier 'y'
"""

from typing import Optional

from mylang.errors import MyLangError, SourceLocation


# =============================================================================
# Base Front-End Diagnostic
# =============================================================================

class FrontEndError(MyLangError):
    """
    Base class for all front-end diagnostics.

    Attributes:
        message: The diagnostic description
        location: Where in the source the problem is
        hint: A suggestion for fixing it (not part of str())
        kind: Short category name used by drivers and tests
    """

    kind = "error"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format as '[line:column] message'."""
        if self.location is not None:
            return f"{self.location.position} {self.message}"
        return self.message

    @property
    def line(self) -> int:
        return self.location.line if self.location else 0

    @property
    def column(self) -> int:
        return self.location.column if self.location else 0


class CompilationError(FrontEndError):
    """
    Aggregate error raised by the convenience APIs.

    The message is an already formatted report from DiagnosticCollector,
    so it is passed through without a position prefix.
    """

    kind = "compilation"

    def __init__(self, message: str, diagnostics: Optional[list[FrontEndError]] = None):
        self.diagnostics = list(diagnostics or [])
        super().__init__(message)

    def _format_message(self) -> str:
        return self.message


# =============================================================================
# Lexical Diagnostics
# =============================================================================

class LexicalError(FrontEndError):
    """Problem with the raw characters of the source."""
    kind = "lexical"


class InvalidCharacterError(LexicalError):
    """
    An invalid token influenced parsing.

    The scanner never fails; it wraps an unrecognized character in an
    INVALID token. This diagnostic is raised by the parser when it meets
    one where an expression was expected.
    """

    def __init__(self, char: str, location: Optional[SourceLocation] = None):
        self.char = char
        super().__init__(f"invalid character '{char}'", location=location)


# =============================================================================
# Syntax Diagnostics
# =============================================================================

class SyntaxDiagnostic(FrontEndError):
    """
    Syntax error the parser recovered from.

    Examples:
        - Missing semicolon
        - Unbalanced parentheses or braces
        - A token that cannot begin an expression
    """
    kind = "syntax"


class UnexpectedTokenError(SyntaxDiagnostic):
    """Token that does not fit the grammar at this point."""

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
    ):
        self.found = found
        self.expected = expected

        message = f"unexpected token '{found}'"
        if expected:
            message = f"{message}, expected {expected}"

        super().__init__(message, location=location)


class MissingTokenError(SyntaxDiagnostic):
    """Required punctuation is absent; the parser continued without it."""

    def __init__(self, expected: str, location: Optional[SourceLocation] = None):
        self.expected = expected
        super().__init__(f"expected {expected}", location=location)


# =============================================================================
# Semantic Diagnostics
# =============================================================================

class SemanticError(FrontEndError):
    """
    Semantic error in a syntactically valid program.

    Examples:
        - Using an undeclared variable
        - Declaring a variable twice in the same block
        - Initializer, return value or operand of the wrong type
    """
    kind = "semantic"


class RedefinitionError(SemanticError):
    """
    Name declared twice in the same scope.

    The first binding is kept; the second declaration is ignored.
    """

    kind = "redefinition"

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        what: str = "variable",
        original_location: Optional[SourceLocation] = None,
    ):
        self.identifier = identifier
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{identifier}' was first declared at {original_location.position}"

        super().__init__(
            f"redefinition of {what} '{identifier}'",
            location=location,
            hint=hint,
        )


class UndeclaredIdentifierError(SemanticError):
    """
    Reference to an identifier with no visible binding.

    When visible names resemble the missing one, they are offered as a
    hint to help catch typos.
    """

    kind = "undeclared"

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        similar_identifiers: Optional[list[str]] = None,
    ):
        self.identifier = identifier
        self.similar_identifiers = similar_identifiers or []

        hint = None
        if self.similar_identifiers:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_identifiers[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"use of undeclared identifier '{identifier}'",
            location=location,
            hint=hint,
        )


class TypeMismatchError(SemanticError):
    """
    Two types that must be equal are not.

    Raised for initializers against declared types, return values
    against the function's return type, and the two operands of a
    binary expression.
    """

    kind = "type-mismatch"

    def __init__(
        self,
        message: str,
        expected_type: Optional[str] = None,
        actual_type: Optional[str] = None,
        location: Optional[SourceLocation] = None,
    ):
        self.expected_type = expected_type
        self.actual_type = actual_type

        hint = None
        if expected_type and actual_type:
            hint = f"expected '{expected_type}', got '{actual_type}'"

        super().__init__(message, location=location, hint=hint)


# =============================================================================
# Diagnostic Collection
# =============================================================================

class DiagnosticCollector:
    """
    Collects diagnostics for batch reporting.

    Every front-end stage writes into a collector instead of raising, so
    one run reports every problem it can find.

    Example:
        collector = DiagnosticCollector()
        SemanticAnalyzer(collector).analyze(program)

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self):
        self.errors: list[FrontEndError] = []

    def add(self, error: FrontEndError) -> None:
        """Add a diagnostic to the collection."""
        self.errors.append(error)

    def extend(self, errors: list[FrontEndError]) -> None:
        """Add several diagnostics, preserving their order."""
        self.errors.extend(errors)

    def has_errors(self) -> bool:
        """Return True if any diagnostics have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected diagnostics."""
        return len(self.errors)

    def sorted(self) -> list[FrontEndError]:
        """Return diagnostics in source order (stable for equal positions)."""
        return sorted(
            self.errors,
            key=lambda e: e.location.sort_key() if e.location else (0, 0),
        )

    def report(self) -> str:
        """Format all diagnostics, one per line, in source order."""
        return "\n".join(str(error) for error in self.sorted())

    def summary(self) -> str:
        """One-line count, e.g. '2 errors'."""
        count = len(self.errors)
        word = "error" if count == 1 else "errors"
        return f"{count} {word}"

    def clear(self) -> None:
        """Clear all collected diagnostics."""
        self.errors.clear()

    def raise_if_errors(self) -> None:
        """Raise a CompilationError if any diagnostics were collected."""
        if self.has_errors():
            raise CompilationError(
                f"{self.report()}\n{self.summary()}",
                diagnostics=self.sorted(),
            )
