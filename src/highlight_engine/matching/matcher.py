"""Nesting-aware delimiter matching around a caret."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from highlight_engine.tokens import Line, Span

from .rules import MatchRule


@dataclass(frozen=True, slots=True)
class SpanRef:
    """A rendered span with its line, column index and text offset."""

    line: int
    column: int
    offset: int
    span: Span

    @property
    def end(self) -> int:
        return self.offset + len(self.span.content)


@dataclass(frozen=True, slots=True)
class Boundary:
    """Indices of the spans immediately before and after the caret."""

    before: Optional[int] = None
    after: Optional[int] = None


@dataclass(frozen=True, slots=True)
class MatchPair:
    rule: int
    open_index: int
    close_index: int


class SpanIndex:
    """Flat, offset-addressable view of rendered lines.

    Offsets count every line separator as one unit; empty spans are skipped.
    """

    def __init__(self, lines: Iterable[Sequence[Span]]) -> None:
        refs: List[SpanRef] = []
        offset = 0
        for row, line in enumerate(lines):
            if row:
                offset += 1
            for column, item in enumerate(line):
                if not item.content:
                    continue
                refs.append(SpanRef(row, column, offset, item))
                offset += len(item.content)
        self.refs: tuple[SpanRef, ...] = tuple(refs)
        self.spans: tuple[Span, ...] = tuple(ref.span for ref in refs)
        self._starts = [ref.offset for ref in refs]
        self.length = offset

    def __len__(self) -> int:
        return len(self.refs)

    def span_at(self, unit: int) -> Optional[int]:
        """Index of the span covering text unit ``unit``, if any."""

        if unit < 0:
            return None
        position = bisect_right(self._starts, unit) - 1
        if position < 0:
            return None
        if unit < self.refs[position].end:
            return position
        return None

    def boundary(self, caret: int) -> Boundary:
        return Boundary(before=self.span_at(caret - 1), after=self.span_at(caret))


class Matcher:
    """Finds the partner of a delimiter adjacent to the caret."""

    def __init__(self, rules: Sequence[MatchRule]) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[MatchRule, ...]:
        return self._rules

    def match(self, spans: Sequence[Span], boundary: Boundary) -> List[MatchPair]:
        pairs: List[MatchPair] = []
        for rule_index, rule in enumerate(self._rules):
            for index in (boundary.before, boundary.after):
                if index is None or not 0 <= index < len(spans):
                    continue
                pair = self._match_one(spans, index, rule, rule_index)
                if pair is not None and pair not in pairs:
                    pairs.append(pair)
        return pairs

    def highlighted(self, spans: Sequence[Span], boundary: Boundary) -> frozenset[int]:
        indices: set[int] = set()
        for pair in self.match(spans, boundary):
            indices.update((pair.open_index, pair.close_index))
        return frozenset(indices)

    @staticmethod
    def _match_one(
        spans: Sequence[Span], index: int, rule: MatchRule, rule_index: int
    ) -> Optional[MatchPair]:
        start = spans[index]
        if rule.opens(start):
            partner = _walk(spans, index, rule.opens, rule.closes, step=1)
            if partner is not None:
                return MatchPair(rule_index, index, partner)
        elif rule.closes(start):
            partner = _walk(spans, index, rule.closes, rule.opens, step=-1)
            if partner is not None:
                return MatchPair(rule_index, partner, index)
        return None


def _walk(
    spans: Sequence[Span],
    index: int,
    deepen: Callable[[Span], bool],
    settle: Callable[[Span], bool],
    *,
    step: int,
) -> Optional[int]:
    depth = 1
    position = index + step
    while 0 <= position < len(spans):
        current = spans[position]
        if deepen(current):
            depth += 1
        elif settle(current):
            depth -= 1
            if depth == 0:
                return position
        position += step
    return None


def match_lines(
    lines: Sequence[Line], caret: int, rules: Sequence[MatchRule]
) -> frozenset[int]:
    """One-shot helper: highlighted span indices for ``caret`` over ``lines``."""

    index = SpanIndex(lines)
    return Matcher(rules).highlighted(index.spans, index.boundary(caret))


__all__ = [
    "Boundary",
    "MatchPair",
    "Matcher",
    "SpanIndex",
    "SpanRef",
    "match_lines",
]
