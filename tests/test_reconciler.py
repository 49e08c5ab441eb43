from __future__ import annotations

import pytest

from highlight_engine.layout import segment
from highlight_engine.render import LineArena, SurfaceError, diff_window, reconcile
from highlight_engine.tokenizers import LatexTokenizer, SymbolTokenizer
from highlight_engine.tokens import Line, Span, SymbolTokenType


def lines_of(text: str) -> list[Line]:
    return segment(SymbolTokenizer().tokenize(text))


def keys(lines: list[Line]) -> list[tuple]:
    return [tuple(span.key for span in line) for line in lines]


def rendered(text: str) -> LineArena:
    arena = LineArena()
    reconcile(arena, lines_of(text))
    arena.stats.reset()
    return arena


def test_initial_render_creates_every_line() -> None:
    arena = LineArena()
    new = lines_of("a(b)\nc\n")

    result = reconcile(arena, new)

    assert result.created == 3
    assert result.reused == 0
    assert arena.snapshot() == keys(new)


def test_identical_lines_are_a_noop() -> None:
    arena = rendered("one\ntwo {x}\nthree")
    before = arena.lines()

    result = reconcile(arena, lines_of("one\ntwo {x}\nthree"))

    assert result.unchanged
    assert arena.stats.structural_changes == 0
    assert arena.stats.spans_appended == 0
    assert arena.lines() == before


def test_middle_edit_reuses_slot_and_keeps_neighbours() -> None:
    arena = rendered("a\nb\nc")
    before = arena.lines()

    result = reconcile(arena, lines_of("a\nB!\nc"))

    assert (result.reused, result.created, result.removed) == (1, 0, 0)
    assert arena.lines() == before
    assert arena.stats.cleared == 1
    assert arena.text() == "a\nB!\nc"


def test_inserted_line_lands_between_anchors() -> None:
    arena = rendered("a\nc")
    first, last = arena.lines()

    result = reconcile(arena, lines_of("a\nb\nc"))

    handles = arena.lines()
    assert (result.reused, result.created, result.removed) == (0, 1, 0)
    assert handles[0] == first and handles[2] == last
    assert arena.text() == "a\nb\nc"


def test_removed_line_is_deleted() -> None:
    arena = rendered("a\nb\nc")
    first, _, last = arena.lines()

    result = reconcile(arena, lines_of("a\nc"))

    assert (result.reused, result.created, result.removed) == (0, 0, 1)
    assert arena.lines() == (first, last)


def test_shrinking_to_empty_text() -> None:
    arena = rendered("a\nb")

    result = reconcile(arena, lines_of(""))

    assert len(arena) == 1
    assert arena.snapshot() == [()]
    assert result.removed == 1


def test_appending_duplicate_lines() -> None:
    old = lines_of("x\nx")
    new = lines_of("x\nx\nx")

    assert diff_window(old, new) == (2, 2, 1)

    arena = rendered("x\nx")
    before = arena.lines()
    reconcile(arena, new)
    assert arena.lines()[:2] == before
    assert arena.text() == "x\nx\nx"


@pytest.mark.parametrize(
    ("old_text", "new_text"),
    [
        ("", "a"),
        ("a", ""),
        ("a\nb\nc\nd", "a\nd"),
        ("a\nd", "a\nb\nc\nd"),
        ("a\nb\nc", "c\nb\na"),
        ("same\nsame\nsame", "same"),
        ("{\n}\n", "{\n  x\n}\n"),
        ("x\ny", "p\nq\nr\ns"),
        ("1\n2\n3\n4\n5", "1\n9\n5"),
    ],
)
def test_rendered_content_matches_new_lines(old_text: str, new_text: str) -> None:
    arena = rendered(old_text)
    new = lines_of(new_text)

    reconcile(arena, new)

    assert arena.snapshot() == keys(new)
    assert arena.text() == new_text


def test_type_change_counts_as_difference() -> None:
    arena = LineArena()
    reconcile(arena, [(Span("(", SymbolTokenType.SYMBOL),)])
    handle = arena.lines()[0]

    result = reconcile(arena, [(Span("(", SymbolTokenType.NORMAL),)])

    assert result.reused == 1
    assert arena.lines() == (handle,)
    assert arena.snapshot() == [((SymbolTokenType.NORMAL, "("),)]


def test_raw_slots_are_rebuilt() -> None:
    arena = LineArena()
    arena.adopt_raw("\\alpha\nplain")
    new = segment(LatexTokenizer().tokenize("\\alpha\nplain"))

    result = reconcile(arena, new)

    assert result.reused == 2
    assert result.created == 0
    assert arena.snapshot() == keys(new)


def test_arena_rejects_unknown_handles() -> None:
    arena = LineArena()

    with pytest.raises(SurfaceError):
        arena.clear_line(42)
