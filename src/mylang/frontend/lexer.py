"""
mylang Lexer (Scanner)
======================

This module converts source text into a stream of tokens for the parser.

Token Categories
----------------
- Keywords: int, float, string, void, return, if, while
- Identifiers: letter or underscore, then letters, digits, underscores
- Numbers: decimal integers, optionally with one fractional part (3.14)
- Strings: "double quoted", on one line
- Punctuation: ( ) { } ; + - * / =

The reserved words 'if' and 'while' are recognized here even though the
parser does not accept the statements they introduce.

Error Policy
------------
The scanner never fails. A character it cannot classify becomes an
INVALID token whose lexeme is that one character; the parser decides
whether it matters. The final token is always EOF.

Comments
--------
- Single-line: // comment (can be disabled)

Example Usage
-------------
>>> from mylang.frontend.lexer import Lexer
>>> for token in Lexer('int main() { return 42; }').tokenize():
...     print(token)
Token(INT, 'int', 1:1)
Token(IDENTIFIER, 'main', 1:5)
Token(LPAREN, '(', 1:9)
Token(RPAREN, ')', 1:10)
Token(LBRACE, '{', 1:12)
Token(RETURN, 'return', 1:14)
Token(NUMBER, '42', 1:21)
Token(SEMICOLON, ';', 1:23)
Token(RBRACE, '}', 1:25)
Token(EOF, '', 1:26)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Union

from mylang.errors import SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the language.

    Keywords are distinguished from identifiers to simplify parsing.
    STRING is a string literal; STRING_KW is the 'string' type keyword.
    """

    # === Punctuation ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMICOLON = auto()      # ;
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /
    EQUAL = auto()          # =

    # === Identifiers and Literals ===
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()

    # === Keywords ===
    INT = auto()            # int
    FLOAT = auto()          # float
    STRING_KW = auto()      # string
    VOID = auto()           # void
    RETURN = auto()         # return
    IF = auto()             # if
    WHILE = auto()          # while

    # === Structural ===
    EOF = auto()
    INVALID = auto()


# =============================================================================
# Keyword and Punctuation Tables
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "int": TokenType.INT,
    "float": TokenType.FLOAT,
    "string": TokenType.STRING_KW,
    "void": TokenType.VOID,
    "return": TokenType.RETURN,
    "if": TokenType.IF,
    "while": TokenType.WHILE,
}

PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ";": TokenType.SEMICOLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "=": TokenType.EQUAL,
}

TYPE_KEYWORDS = frozenset({
    TokenType.INT,
    TokenType.FLOAT,
    TokenType.STRING_KW,
    TokenType.VOID,
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from the source.

    Attributes:
        type: The TokenType classification
        lexeme: The exact source text of the token ('' for EOF)
        line: Line of the first character (1-indexed)
        column: Column of the first character (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    lexeme: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_type_keyword(self) -> bool:
        """Return True if this token names a type."""
        return self.type in TYPE_KEYWORDS


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes mylang source code in a single forward pass.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source text being tokenized
        filename: Name of the source file (for locations)
        line_comments: Skip // comments instead of reporting them as tokens
        float_literals: Accept one fractional part in number literals
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    # C-locale isspace()
    WHITESPACE = " \t\n\v\f\r"

    def __init__(
        self,
        source: Union[str, bytes],
        filename: str = "<input>",
        line_comments: bool = True,
        float_literals: bool = True,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: Source text, or raw bytes (decoded as UTF-8; undecodable
                bytes are kept as surrogate escapes and become INVALID tokens)
            filename: Name of the source file
            line_comments: Recognize // comments
            float_literals: Recognize 1.5 as a single NUMBER token
        """
        if isinstance(source, bytes):
            source = source.decode("utf-8", errors="surrogateescape")

        self.source = source
        self.filename = filename
        self.line_comments = line_comments
        self.float_literals = float_literals

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, always ending with an EOF token
        """
        count = 0
        while True:
            self._skip_whitespace_and_comments()

            if self._at_end():
                break

            yield self._scan_token()
            count += 1

        logger.debug("%s: scanned %d tokens", self.filename, count)
        yield Token(TokenType.EOF, "", self._line, self._column, self.filename)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """
        Consume and return the current character, advancing position.

        A newline moves to column 1 of the next line; every other
        character moves one column right.
        """
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and (if enabled) // comments."""
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            if self.line_comments and char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _make_token(self, token_type: TokenType, start: int, line: int, column: int) -> Token:
        """Create a token covering source[start:current position]."""
        return Token(
            type=token_type,
            lexeme=self.source[start:self._pos],
            line=line,
            column=column,
            filename=self.filename,
        )

    def _scan_token(self) -> Token:
        """Scan the next token; the current character is not whitespace."""
        start = self._pos
        line = self._line
        column = self._column

        char = self._peek()

        # Identifiers and keywords
        if char in self.IDENT_START:
            while self._peek() and self._peek() in self.IDENT_CHARS:
                self._advance()
            lexeme = self.source[start:self._pos]
            token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
            return self._make_token(token_type, start, line, column)

        # Numbers
        if char in string.digits:
            return self._scan_number(start, line, column)

        # String literal
        if char == '"':
            return self._scan_string(start, line, column)

        # Punctuation, or anything else as a one-character INVALID token
        self._advance()
        token_type = PUNCTUATION.get(char, TokenType.INVALID)
        return self._make_token(token_type, start, line, column)

    def _scan_number(self, start: int, line: int, column: int) -> Token:
        """
        Scan a numeric literal.

        Handles:
        - Integer: 123
        - Fractional: 1.25 (only with float_literals; a digit must follow
          the point, otherwise the point is left for the next token)
        """
        while self._peek() and self._peek() in string.digits:
            self._advance()

        if (
            self.float_literals
            and self._peek() == "."
            and self._peek(1)
            and self._peek(1) in string.digits
        ):
            self._advance()  # consume .
            while self._peek() and self._peek() in string.digits:
                self._advance()

        return self._make_token(TokenType.NUMBER, start, line, column)

    def _scan_string(self, start: int, line: int, column: int) -> Token:
        """
        Scan a double-quoted string literal.

        The lexeme keeps both quotes and any backslash escapes verbatim.
        If the string is not closed before the end of the line, only the
        opening quote is consumed and returned as an INVALID token.
        """
        offset = 1
        while True:
            char = self._peek(offset)
            if char == "" or char == "\n":
                # Unterminated: give back everything after the quote
                self._advance()
                return self._make_token(TokenType.INVALID, start, line, column)
            if char == "\\" and self._peek(offset + 1) not in ("", "\n"):
                offset += 2
                continue
            offset += 1
            if char == '"':
                break

        for _ in range(offset):
            self._advance()
        return self._make_token(TokenType.STRING, start, line, column)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    source: Union[str, bytes],
    filename: str = "<input>",
    line_comments: bool = True,
    float_literals: bool = True,
) -> list[Token]:
    """
    Tokenize source code into a list ending with EOF.

    Args:
        source: Source text or bytes
        filename: Source filename for token locations
        line_comments: Recognize // comments
        float_literals: Recognize fractional number literals

    Returns:
        The complete token list
    """
    lexer = Lexer(source, filename, line_comments=line_comments, float_literals=float_literals)
    return list(lexer.tokenize())
