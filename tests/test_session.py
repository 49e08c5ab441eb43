from __future__ import annotations

import pytest

from highlight_engine.profiles import LATEX_PROFILE, PLAIN_PROFILE, SYMBOLS_PROFILE
from highlight_engine.render import LineArena, SurfaceError
from highlight_engine.session import (
    CaretRangeError,
    HighlightSession,
    offset_for_position,
    position_for_offset,
)
from highlight_engine.tokens import LatexTokenType, TokenType


def test_set_text_renders_into_surface() -> None:
    arena = LineArena()
    session = HighlightSession(LATEX_PROFILE, surface=arena)

    delta = session.set_text("\\section{A}\n% note")

    assert delta.version == 1
    assert delta.line_count == 2
    assert delta.caret == len(session.text)
    assert arena.text() == session.text
    assert arena.snapshot()[1] == ((LatexTokenType.COMMENT, "% note"),)


def test_typing_reuses_untouched_lines() -> None:
    session = HighlightSession.from_text("first\nsecond\nthird", SYMBOLS_PROFILE)
    arena = session.surface
    before = arena.lines()

    session.move_caret(len("first\nsecond"))
    delta = session.insert_at_caret("!")

    assert session.text == "first\nsecond!\nthird"
    assert session.caret == len("first\nsecond!")
    assert delta.reconcile.reused == 1
    assert arena.lines() == before


def test_insert_newline_adds_a_slot() -> None:
    session = HighlightSession.from_text("ab", PLAIN_PROFILE)
    session.move_caret(1)

    delta = session.insert_at_caret("\n")

    assert delta.line_count == 2
    assert session.surface.text() == "a\nb"
    assert session.caret_position == (1, 0)


def test_move_caret_reports_matches() -> None:
    session = HighlightSession.from_text("f(a(b))", SYMBOLS_PROFILE)

    result = session.move_caret(2)

    assert [(ref.offset, ref.span.content) for ref in result.refs] == [
        (1, "("),
        (6, ")"),
    ]
    assert result


def test_plain_profile_never_highlights() -> None:
    session = HighlightSession.from_text("{}", PLAIN_PROFILE)

    assert not session.move_caret(1)


def test_render_delta_carries_highlights() -> None:
    session = HighlightSession(SYMBOLS_PROFILE)

    delta = session.set_text("[x]", caret=3)

    assert len(delta.highlights.pairs) == 1


def test_caret_out_of_range() -> None:
    session = HighlightSession.from_text("abc", PLAIN_PROFILE)

    with pytest.raises(CaretRangeError) as excinfo:
        session.move_caret(4)
    assert excinfo.value.caret == 4

    with pytest.raises(CaretRangeError):
        session.set_text("x", caret=-1)
    assert session.text == "abc"


def test_position_round_trip() -> None:
    text = "ab\n\ncde"

    assert offset_for_position(text, (2, 1)) == 5
    assert position_for_offset(text, 5) == (2, 1)
    assert position_for_offset(text, 3) == (1, 0)
    assert position_for_offset(text, len(text)) == (2, 3)


def test_position_validation() -> None:
    with pytest.raises(CaretRangeError):
        offset_for_position("ab", (0, 3))
    with pytest.raises(CaretRangeError):
        offset_for_position("ab", (1, 0))


class FailingArena(LineArena):
    def __init__(self) -> None:
        super().__init__()
        self.fail_appends = False

    def append_span(self, line: int, type: TokenType, content: str) -> None:
        if self.fail_appends:
            raise SurfaceError("slot went away", line=line)
        super().append_span(line, type, content)


def test_failed_render_keeps_last_good_state() -> None:
    arena = FailingArena()
    session = HighlightSession.from_text("a\n(b)", SYMBOLS_PROFILE, surface=arena)
    arena.fail_appends = True

    with pytest.raises(SurfaceError):
        session.set_text("a\n[c]")

    assert session.surface_stale
    assert session.text == "a\n(b)"
    assert session.version == 1
    assert arena.text() != session.text
    assert len(session.move_caret(3).pairs) == 1

    arena.fail_appends = False
    session.repair()

    assert not session.surface_stale
    assert arena.text() == "a\n(b)"
    assert arena.as_lines() == list(session.lines)


def test_next_render_heals_stale_surface() -> None:
    arena = FailingArena()
    session = HighlightSession.from_text("x\ny", PLAIN_PROFILE, surface=arena)
    arena.fail_appends = True
    with pytest.raises(SurfaceError):
        session.set_text("x\nz")
    arena.fail_appends = False

    session.set_text("x\nw")

    assert not session.surface_stale
    assert arena.text() == "x\nw"
