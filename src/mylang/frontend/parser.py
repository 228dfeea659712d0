"""
mylang Recursive Descent Parser
===============================

This module turns the token stream from the lexer into an AST rooted at
a Program node.

Grammar (EBNF)
--------------
program         ::= function_decl*
function_decl   ::= type IDENTIFIER '(' ')' block
block           ::= '{' statement* '}'
statement       ::= var_decl | return_stmt | block | expr_stmt
var_decl        ::= type IDENTIFIER ('=' expression)? ';'
return_stmt     ::= 'return' expression? ';'
expr_stmt       ::= expression ';'
expression      ::= additive
additive        ::= multiplicative (('+' | '-') multiplicative)*
multiplicative  ::= primary (('*' | '/') primary)*
primary         ::= NUMBER | STRING | IDENTIFIER | '(' expression ')'
type            ::= 'int' | 'float' | 'string' | 'void'

Both binary levels are left-associative: a - b - c is (a - b) - c.

Error Recovery
--------------
The parser never raises. Missing punctuation is noted and skipped; a
token that cannot start an expression becomes an empty fallback Literal
so the tree keeps its shape. Each recovery point records at most one
diagnostic per token position into the parser's DiagnosticCollector.

Example Usage
-------------
>>> from mylang.frontend.lexer import tokenize
>>> from mylang.frontend.parser import Parser
>>> program = Parser(tokenize('int main() { return 42; }')).parse()
>>> program.declarations[0].name
'main'
"""

import logging
from typing import Optional

from mylang.errors import SourceLocation
from mylang.frontend.lexer import Token, TokenType, tokenize
from mylang.frontend.types import TypeTag, classify_literal, type_from_token
from mylang.frontend.ast import (
    Program,
    FunctionDecl,
    BlockStmt,
    Statement,
    VarDecl,
    ReturnStmt,
    ExprStmt,
    Expression,
    BinaryExpr,
    BinaryOperator,
    Identifier,
    Literal,
)
from mylang.frontend.errors import (
    DiagnosticCollector,
    FrontEndError,
    InvalidCharacterError,
    MissingTokenError,
    UnexpectedTokenError,
)

logger = logging.getLogger(__name__)


# Tokens the error fallback leaves in place for an enclosing rule to match
_BOUNDARY_TOKENS = (
    TokenType.SEMICOLON,
    TokenType.RPAREN,
    TokenType.RBRACE,
    TokenType.EOF,
)


class Parser:
    """
    Recursive descent parser for mylang.

    The parser is a function of the token list plus an advancing cursor;
    it holds no other state besides its diagnostics.

    Attributes:
        tokens: List of tokens to parse (must end with EOF)
        filename: Source filename for locations
        collector: Where syntax diagnostics are recorded, or None to
            parse silently
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        collector: Optional[DiagnosticCollector] = None,
    ):
        if not tokens or tokens[-1].type != TokenType.EOF:
            tokens = list(tokens) + [Token(TokenType.EOF, "", 1, 1, filename)]

        self.tokens = tokens
        self.filename = filename
        self.collector = collector

        # Current position in token stream
        self._pos = 0

        # Position of the last reported diagnostic, to avoid cascades
        self._last_error_pos = -1

    def parse(self) -> Program:
        """
        Parse the token stream into an AST.

        Returns:
            Program containing every function declaration found
        """
        functions = []

        while not self._at_end():
            functions.append(self._parse_function())

        logger.debug("%s: parsed %d function(s)", self.filename, len(functions))

        return Program(
            location=SourceLocation(self.filename, 1, 1),
            declarations=tuple(functions),
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        """Look at the current token."""
        return self.tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token; EOF is never consumed."""
        token = self.tokens[self._pos]
        if token.type != TokenType.EOF:
            self._pos += 1
        return token

    def _check(self, *types: TokenType) -> bool:
        """Check if current token is one of the given types."""
        return self._peek().type in types

    def _match(self, *types: TokenType) -> Optional[Token]:
        """
        Consume current token if it matches one of the types.

        Returns:
            The consumed token, or None if no match
        """
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType, description: str) -> Optional[Token]:
        """
        Consume a required token, noting a diagnostic if it is missing.

        Nothing is consumed when the token is missing.

        Args:
            token_type: The expected token type
            description: How to name the token in the diagnostic

        Returns:
            The consumed token, or None if it was missing
        """
        token = self._match(token_type)
        if token is None:
            self._error(MissingTokenError(description, self._peek().location))
        return token

    def _error(self, error: FrontEndError) -> None:
        """Record a diagnostic unless one was already recorded here."""
        if self.collector is None or self._pos == self._last_error_pos:
            return
        self._last_error_pos = self._pos
        self.collector.add(error)

    # =========================================================================
    # Declarations
    # =========================================================================

    def _parse_type(self) -> TypeTag:
        """
        Parse a type keyword.

        A missing type is reported and treated as int, without consuming.
        """
        token = self._peek()
        type_tag = type_from_token(token.type)
        if type_tag is None:
            self._error(UnexpectedTokenError(
                token.lexeme or token.type.name,
                expected="type specifier",
                location=token.location,
            ))
            return TypeTag.INT
        self._advance()
        return type_tag

    def _parse_name(self) -> tuple[str, SourceLocation]:
        """Parse a declared name, returning ('', here) if it is missing."""
        token = self._match(TokenType.IDENTIFIER)
        if token is not None:
            return token.lexeme, token.location

        location = self._peek().location
        self._error(MissingTokenError("identifier", location))
        return "", location

    def _parse_function(self) -> FunctionDecl:
        """
        Parse a function declaration.

        Always consumes at least one token, so the top-level loop makes
        progress on arbitrary input.
        """
        start = self._pos

        return_type = self._parse_type()
        name, location = self._parse_name()
        self._expect(TokenType.LPAREN, "'('")
        self._expect(TokenType.RPAREN, "')'")

        if self._pos == start and not self._check(TokenType.LBRACE):
            # Nothing here fits a function header: drop the token
            self._advance()

        body = self._parse_block()

        return FunctionDecl(
            location=location,
            name=name,
            return_type=return_type,
            body=body,
        )

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_block(self) -> BlockStmt:
        """Parse a block statement { ... }."""
        location = self._peek().location
        self._expect(TokenType.LBRACE, "'{'")

        statements = []
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            start = self._pos
            statements.append(self._parse_statement())
            if self._pos == start:
                # Statement consumed nothing (e.g. a stray ')'): skip it
                self._advance()

        self._expect(TokenType.RBRACE, "'}'")

        return BlockStmt(location=location, statements=tuple(statements))

    def _parse_statement(self) -> Statement:
        """Parse one statement."""
        if self._peek().is_type_keyword():
            return self._parse_var_decl()
        if self._check(TokenType.RETURN):
            return self._parse_return()
        if self._check(TokenType.LBRACE):
            return self._parse_block()
        return self._parse_expression_statement()

    def _parse_var_decl(self) -> VarDecl:
        """Parse 'type name (= expr)? ;'."""
        var_type = self._parse_type()
        name, location = self._parse_name()

        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self._parse_expression()

        self._expect(TokenType.SEMICOLON, "';'")

        return VarDecl(
            location=location,
            name=name,
            var_type=var_type,
            initializer=initializer,
        )

    def _parse_return(self) -> ReturnStmt:
        """Parse 'return expr? ;'."""
        keyword = self._advance()

        value = None
        if not self._check(TokenType.SEMICOLON, TokenType.RBRACE):
            value = self._parse_expression()

        self._expect(TokenType.SEMICOLON, "';'")

        return ReturnStmt(location=keyword.location, value=value)

    def _parse_expression_statement(self) -> ExprStmt:
        """Parse 'expr ;'."""
        location = self._peek().location
        expression = self._parse_expression()
        self._expect(TokenType.SEMICOLON, "';'")
        return ExprStmt(location=location, expression=expression)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> Expression:
        return self._parse_additive()

    def _parse_additive(self) -> Expression:
        """Parse additive expression (+ -)."""
        return self._parse_binary(
            self._parse_multiplicative,
            TokenType.PLUS,
            TokenType.MINUS,
        )

    def _parse_multiplicative(self) -> Expression:
        """Parse multiplicative expression (* /)."""
        return self._parse_binary(
            self._parse_primary,
            TokenType.STAR,
            TokenType.SLASH,
        )

    def _parse_binary(self, operand, *operators: TokenType) -> Expression:
        """
        Parse one left-associative binary precedence level.

        Args:
            operand: Parser for the next-higher precedence level
            operators: Token types accepted at this level

        Returns:
            The operand alone, or a left-leaning chain of BinaryExpr
        """
        left = operand()

        while self._check(*operators):
            op_token = self._advance()
            right = operand()
            left = BinaryExpr(
                location=op_token.location,
                operator=BinaryOperator.from_token_type(op_token.type),
                left=left,
                right=right,
            )

        return left

    def _parse_primary(self) -> Expression:
        """Parse primary expression (literals, identifiers, parenthesized)."""
        token = self._peek()

        if token.type in (TokenType.NUMBER, TokenType.STRING):
            self._advance()
            return Literal(
                location=token.location,
                text=token.lexeme,
                literal_type=classify_literal(token.lexeme),
            )

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return Identifier(location=token.location, name=token.lexeme)

        if token.type == TokenType.LPAREN:
            self._advance()
            expr = self._parse_expression()
            self._expect(TokenType.RPAREN, "')'")
            return expr

        return self._fallback_literal(token)

    def _fallback_literal(self, token: Token) -> Literal:
        """
        Recover from a token that cannot start an expression.

        Returns an empty Literal at the token's position. The token is
        consumed unless an enclosing rule may still match it.
        """
        if token.type == TokenType.INVALID:
            self._error(InvalidCharacterError(token.lexeme, token.location))
        elif token.type == TokenType.EOF:
            self._error(UnexpectedTokenError(
                "end of file", expected="expression", location=token.location
            ))
        else:
            self._error(UnexpectedTokenError(
                token.lexeme, expected="expression", location=token.location
            ))

        if token.type not in _BOUNDARY_TOKENS:
            self._advance()

        return Literal(location=token.location, text="", literal_type=TypeTag.INT)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source,
    filename: str = "<input>",
    collector: Optional[DiagnosticCollector] = None,
) -> Program:
    """
    Parse source code into an AST.

    Combines lexing and parsing with default scanner settings.

    Args:
        source: Source text or bytes
        filename: Source filename for locations
        collector: Optional sink for syntax diagnostics

    Returns:
        The root Program node
    """
    return Parser(tokenize(source, filename), filename, collector).parse()
