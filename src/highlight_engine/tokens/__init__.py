"""Token, span and line data model."""

from .models import (
    Line,
    LatexTokenType,
    PlainTokenType,
    Span,
    SymbolTokenType,
    Token,
    TokenType,
    join_tokens,
    lines_equal,
)

__all__ = [
    "Line",
    "LatexTokenType",
    "PlainTokenType",
    "Span",
    "SymbolTokenType",
    "Token",
    "TokenType",
    "join_tokens",
    "lines_equal",
]
