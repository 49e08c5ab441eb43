"""Tokenizer protocol, scanning helpers and the plain tokenizer."""

from __future__ import annotations

import re
import sys
from enum import Enum
from typing import Callable, List, Pattern, Protocol, runtime_checkable

from highlight_engine.tokens import PlainTokenType, Token, TokenType

# Sentinel index for "marker not found"; larger than any real position.
NOT_FOUND = sys.maxsize


@runtime_checkable
class Tokenizer(Protocol):
    """Total, lossless conversion of text into typed tokens."""

    name: str
    token_types: type[Enum]

    def tokenize(self, text: str) -> List[Token]:
        ...


def find(text: str, needle: str, start: int) -> int:
    index = text.find(needle, start)
    return NOT_FOUND if index == -1 else index


def char_class(chars: str) -> Pattern[str]:
    """Compile ``chars`` into a pattern matching any one of them."""

    return re.compile("[" + re.escape(chars) + "]")


def find_first_of(text: str, members: Pattern[str], start: int) -> int:
    match = members.search(text, start)
    return NOT_FOUND if match is None else match.start()


class MarkerCursor:
    """Remembers the next position of one marker across scanner passes.

    A cached position stays valid while the scan index has not moved past
    it, so each marker is searched for at most once per occurrence.
    """

    __slots__ = ("_locate", "_at")

    def __init__(self, locate: Callable[[int], int]) -> None:
        self._locate = locate
        self._at = -1

    def next_from(self, index: int) -> int:
        if self._at < index:
            self._at = self._locate(index)
        return self._at


def is_ascii_letter(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z"


class TokenSink:
    """Collects tokens, dropping empty fragments."""

    __slots__ = ("tokens",)

    def __init__(self) -> None:
        self.tokens: List[Token] = []

    def emit(self, content: str, token_type: TokenType) -> None:
        if content:
            self.tokens.append(Token(content, token_type))


class PlainTokenizer:
    """Fallback tokenizer: a single NORMAL token covering all text."""

    name = "plain"
    token_types = PlainTokenType

    def tokenize(self, text: str) -> List[Token]:
        return [Token(text, PlainTokenType.NORMAL)]


__all__ = [
    "NOT_FOUND",
    "Tokenizer",
    "TokenSink",
    "PlainTokenizer",
    "MarkerCursor",
    "char_class",
    "find",
    "find_first_of",
    "is_ascii_letter",
]
