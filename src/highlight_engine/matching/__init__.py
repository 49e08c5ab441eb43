"""Delimiter match rules and the caret matcher."""

from .matcher import Boundary, MatchPair, Matcher, SpanIndex, SpanRef, match_lines
from .rules import MatchRule, SpanDescriptor

__all__ = [
    "Boundary",
    "MatchPair",
    "MatchRule",
    "Matcher",
    "SpanDescriptor",
    "SpanIndex",
    "SpanRef",
    "match_lines",
]
