from __future__ import annotations

from typing import Callable, Optional, Sequence, get_type_hints

import highlight_engine.matching.matcher as matcher_module
from highlight_engine.layout import segment
from highlight_engine.matching import (
    Boundary,
    Matcher,
    MatchRule,
    SpanDescriptor,
    SpanIndex,
    match_lines,
)
from highlight_engine.tokenizers import LatexTokenizer, SymbolTokenizer
from highlight_engine.tokens import LatexTokenType, Span, SymbolTokenType

SYMBOL = SymbolTokenType.SYMBOL
BRACES = MatchRule.pair(SYMBOL, "{", "}")
PARENS = MatchRule.pair(SYMBOL, "(", ")")
BRACKETS = MatchRule.pair(SYMBOL, "[", "]")


def index_for(text: str) -> SpanIndex:
    return SpanIndex(segment(SymbolTokenizer().tokenize(text)))


def contents(index: SpanIndex, found: frozenset[int]) -> list[tuple[int, str]]:
    return sorted((index.refs[i].offset, index.spans[i].content) for i in found)


def test_nested_pair_skips_inner_delimiters() -> None:
    index = index_for("{ { } }")

    found = Matcher([BRACES]).highlighted(index.spans, index.boundary(1))

    assert contents(index, found) == [(0, "{"), (6, "}")]


def test_unclosed_open_has_no_match() -> None:
    index = index_for("{ (")

    assert Matcher([BRACES]).highlighted(index.spans, index.boundary(1)) == frozenset()


def test_backward_walk_from_closing_delimiter() -> None:
    index = index_for("(a(b)c)")

    found = Matcher([PARENS]).highlighted(index.spans, index.boundary(7))

    assert contents(index, found) == [(0, "("), (6, ")")]


def test_both_sides_highlight_unrelated_pairs() -> None:
    index = index_for("(a)[b]")

    pairs = Matcher([BRACES, PARENS, BRACKETS]).match(index.spans, index.boundary(3))

    assert [(p.rule, p.open_index, p.close_index) for p in pairs] == [
        (1, 0, 2),
        (2, 3, 5),
    ]


def test_caret_between_matching_pair_reports_it_once() -> None:
    index = index_for("{}")

    pairs = Matcher([BRACES]).match(index.spans, index.boundary(1))

    assert len(pairs) == 1


def test_document_edges_have_no_boundary_span() -> None:
    index = index_for("{}")

    assert index.boundary(0).before is None
    assert index.boundary(2).after is None
    assert index_for("").boundary(0) == Boundary(None, None)


def test_match_crosses_lines() -> None:
    index = index_for("{\n  x\n}")

    found = Matcher([BRACES]).highlighted(index.spans, index.boundary(1))

    refs = sorted((index.refs[i] for i in found), key=lambda ref: ref.offset)
    assert [(ref.line, ref.column) for ref in refs] == [(0, 0), (2, 0)]


def test_newline_is_not_a_boundary_span() -> None:
    index = index_for("a\nb")

    assert index.boundary(2) == Boundary(before=None, after=1)


def test_types_must_match_descriptors() -> None:
    spans = [Span("{", SymbolTokenType.NORMAL), Span("}", SYMBOL)]

    assert Matcher([BRACES]).highlighted(spans, Boundary(after=0)) == frozenset()


def test_rule_with_several_descriptors() -> None:
    rule = MatchRule(
        open_set=(
            SpanDescriptor(LatexTokenType.SYMBOL, "("),
            (LatexTokenType.SYMBOL, "["),
        ),
        close_set=(
            SpanDescriptor(LatexTokenType.SYMBOL, ")"),
            SpanDescriptor(LatexTokenType.SYMBOL, "]"),
        ),
    )
    lines = segment(LatexTokenizer().tokenize("[a, b)"))

    found = match_lines(lines, 0, [rule])

    assert len(found) == 2


def test_latex_braces_skip_math_interior() -> None:
    rule = MatchRule.pair(LatexTokenType.SYMBOL, "{", "}")
    lines = segment(LatexTokenizer().tokenize("\\frac{$}$}{b}"))
    index = SpanIndex(lines)

    found = Matcher([rule]).highlighted(index.spans, index.boundary(6))

    assert contents(index, found) == [(5, "{"), (9, "}")]


def test_walk_is_fully_annotated() -> None:
    hints = get_type_hints(matcher_module._walk)

    assert hints["spans"] == Sequence[Span]
    assert hints["deepen"] == hints["settle"] == Callable[[Span], bool]
    assert hints["return"] == Optional[int]
