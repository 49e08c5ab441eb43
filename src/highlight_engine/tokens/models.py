"""Dataclasses and type tags shared by every pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple, TypeAlias


class PlainTokenType(str, Enum):
    """Tags produced by the plain (no highlighting) tokenizer."""

    NORMAL = "normal"


class SymbolTokenType(str, Enum):
    """Tags produced by the symbol-splitting tokenizer."""

    NORMAL = "normal"
    SYMBOL = "symbol"


class LatexTokenType(str, Enum):
    """Tags produced by the LaTeX tokenizer."""

    NORMAL = "nrm"
    COMMAND = "cmd"
    VERBATIM = "vrb"
    COMMENT = "cmt"
    SYMBOL = "sbl"
    MATH = "mth"


TokenType: TypeAlias = Enum


@dataclass(frozen=True, slots=True)
class Token:
    """Labeled text fragment; ``content`` may contain newlines."""

    content: str
    type: TokenType

    @property
    def key(self) -> tuple[TokenType, str]:
        return (self.type, self.content)


@dataclass(frozen=True, slots=True)
class Span:
    """Token fragment confined to a single line."""

    content: str
    type: TokenType

    def __post_init__(self) -> None:
        if "\n" in self.content:
            raise ValueError("span content cannot contain a newline")

    @property
    def key(self) -> tuple[TokenType, str]:
        return (self.type, self.content)


Line: TypeAlias = Tuple[Span, ...]


def join_tokens(tokens: Sequence[Token]) -> str:
    """Concatenate token contents back into the source text."""

    return "".join(token.content for token in tokens)


def lines_equal(left: Sequence[Span] | None, right: Sequence[Span]) -> bool:
    """Compare two lines by span count and per-span ``(type, content)``."""

    if left is None or len(left) != len(right):
        return False
    return all(a.key == b.key for a, b in zip(left, right))


__all__ = [
    "PlainTokenType",
    "SymbolTokenType",
    "LatexTokenType",
    "TokenType",
    "Token",
    "Span",
    "Line",
    "join_tokens",
    "lines_equal",
]
