"""Delimiter match-rule configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from highlight_engine.tokens import Span, TokenType


@dataclass(frozen=True, slots=True)
class SpanDescriptor:
    """A ``(type, literal)`` pair a rendered span is compared against."""

    type: TokenType
    literal: str

    def matches(self, span: Span) -> bool:
        return span.type == self.type and span.content == self.literal


def _normalize(descriptors: Iterable[SpanDescriptor | tuple]) -> tuple[SpanDescriptor, ...]:
    normalized = tuple(
        item if isinstance(item, SpanDescriptor) else SpanDescriptor(*item)
        for item in descriptors
    )
    return tuple(dict.fromkeys(normalized))


@dataclass(frozen=True, slots=True)
class MatchRule:
    """Nestable delimiter pair: any open descriptor against any close one."""

    open_set: tuple[SpanDescriptor, ...]
    close_set: tuple[SpanDescriptor, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "open_set", _normalize(self.open_set))
        object.__setattr__(self, "close_set", _normalize(self.close_set))
        if not self.open_set:
            raise ValueError("MatchRule requires at least one open descriptor")
        if not self.close_set:
            raise ValueError("MatchRule requires at least one close descriptor")

    def opens(self, span: Span) -> bool:
        return any(descriptor.matches(span) for descriptor in self.open_set)

    def closes(self, span: Span) -> bool:
        return any(descriptor.matches(span) for descriptor in self.close_set)

    @classmethod
    def pair(cls, token_type: TokenType, open_literal: str, close_literal: str) -> "MatchRule":
        return cls(
            open_set=(SpanDescriptor(token_type, open_literal),),
            close_set=(SpanDescriptor(token_type, close_literal),),
        )


__all__ = ["SpanDescriptor", "MatchRule"]
