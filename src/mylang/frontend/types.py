"""
mylang Type System
==================

The language has exactly four primitive types and no subtype relation.
Two types are compatible if and only if they are equal; there are no
implicit conversions.

| Type   | Keyword  | Literal form           |
|--------|----------|------------------------|
| INT    | int      | 42                     |
| FLOAT  | float    | 3.14                   |
| STRING | string   | "hello"                |
| VOID   | void     | (none, return type only)|

Literal Classification
----------------------
Literal types are determined structurally from the literal's text by
classify_literal(). The parser uses it to tag Literal nodes and the
semantic analyzer uses it again when typing expressions, so both agree
by construction.
"""

from enum import Enum, auto
from typing import Optional

from mylang.frontend.lexer import TokenType


class TypeTag(Enum):
    """The closed set of primitive types."""
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    VOID = auto()

    def __str__(self) -> str:
        """Return the source keyword for this type."""
        return self.name.lower()


# Type keyword token -> type tag
_KEYWORD_TYPES: dict[TokenType, TypeTag] = {
    TokenType.INT: TypeTag.INT,
    TokenType.FLOAT: TypeTag.FLOAT,
    TokenType.STRING_KW: TypeTag.STRING,
    TokenType.VOID: TypeTag.VOID,
}


def type_from_token(token_type: TokenType) -> Optional[TypeTag]:
    """Return the type named by a type keyword token, or None."""
    return _KEYWORD_TYPES.get(token_type)


def types_compatible(expected: TypeTag, actual: TypeTag) -> bool:
    """Equality is the only compatibility predicate."""
    return expected == actual


def classify_literal(text: str) -> TypeTag:
    """
    Determine a literal's type from its text.

    Rules:
        - empty text or only decimal digits -> INT
        - digits '.' digits -> FLOAT
        - anything else (quoted strings included) -> STRING

    Empty text is what the parser produces for its fallback literal; it
    counts as INT so that a syntax error does not also surface as a type
    mismatch.

    Args:
        text: The literal's textual value

    Returns:
        The literal's TypeTag
    """
    if all(c in "0123456789" for c in text):
        return TypeTag.INT

    whole, dot, fraction = text.partition(".")
    if (
        dot
        and whole
        and fraction
        and all(c in "0123456789" for c in whole)
        and all(c in "0123456789" for c in fraction)
    ):
        return TypeTag.FLOAT

    return TypeTag.STRING
