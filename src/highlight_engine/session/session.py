"""Session facade running the highlight pipeline over text and a caret."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from highlight_engine.layout import segment
from highlight_engine.matching import Matcher, MatchPair, SpanIndex, SpanRef
from highlight_engine.profiles import LanguageProfile
from highlight_engine.render import LineArena, LineSurface, ReconcileResult, reconcile
from highlight_engine.runtime import telemetry
from highlight_engine.tokens import Line

from .positions import Position, ensure_offset, position_for_offset


@dataclass(frozen=True, slots=True)
class HighlightResult:
    caret: int
    pairs: tuple[tuple[SpanRef, SpanRef], ...] = ()

    @property
    def refs(self) -> tuple[SpanRef, ...]:
        seen = {ref for pair in self.pairs for ref in pair}
        return tuple(sorted(seen, key=lambda ref: ref.offset))

    def __bool__(self) -> bool:
        return bool(self.pairs)


@dataclass(frozen=True, slots=True)
class RenderDelta:
    version: int
    caret: int
    line_count: int
    token_count: int
    reconcile: ReconcileResult
    highlights: HighlightResult


class HighlightSession:
    """Owns one line surface and keeps it in sync with the session text.

    Every text change re-tokenizes the whole text, segments it and reconciles
    the surface; every caret move reruns the matcher over the rendered spans.

    If the surface fails partway through a render, the session keeps its last
    good text, lines and caret and flags the surface as stale. The next
    successful render, or ``repair()``, rewrites the surface to match.
    """

    def __init__(
        self,
        profile: LanguageProfile,
        *,
        surface: Optional[LineSurface] = None,
        name: str = "default",
        logger_name: str | None = None,
    ) -> None:
        self.profile = profile
        self.surface: LineSurface = surface if surface is not None else LineArena()
        self.name = name
        self._logger_name = logger_name
        self._matcher = Matcher(profile.match_rules)
        self._text = ""
        self._caret = 0
        self._version = 0
        self._lines: List[Line] = []
        self._index = SpanIndex(())
        self._surface_stale = False

    @classmethod
    def from_text(
        cls, text: str, profile: LanguageProfile, **kwargs: object
    ) -> "HighlightSession":
        session = cls(profile, **kwargs)  # type: ignore[arg-type]
        session.set_text(text, caret=0)
        return session

    @property
    def text(self) -> str:
        return self._text

    @property
    def caret(self) -> int:
        return self._caret

    @property
    def caret_position(self) -> Position:
        return position_for_offset(self._text, self._caret)

    @property
    def version(self) -> int:
        return self._version

    @property
    def lines(self) -> Sequence[Line]:
        return tuple(self._lines)

    @property
    def span_index(self) -> SpanIndex:
        return self._index

    @property
    def surface_stale(self) -> bool:
        return self._surface_stale

    def set_text(self, text: str, *, caret: Optional[int] = None) -> RenderDelta:
        """Render ``text``; ``caret`` defaults to the end of the new text."""

        new_caret = len(text) if caret is None else ensure_offset(text, caret)
        with telemetry.span(
            f"session::{self.name}::render",
            logger_name=self._logger_name,
            component="session",
            metadata={"profile": self.profile.name, "length": len(text)},
        ) as handle:
            tokens = self.profile.tokenizer.tokenize(text)
            lines = segment(tokens)
            try:
                result = reconcile(self.surface, lines, logger_name=self._logger_name)
            except Exception:
                self._surface_stale = True
                raise
            handle.add_metadata("tokens", len(tokens))
            handle.add_metadata("lines", len(lines))

        self._text = text
        self._lines = lines
        self._index = SpanIndex(lines)
        self._surface_stale = False
        self._caret = new_caret
        self._version += 1
        return RenderDelta(
            version=self._version,
            caret=new_caret,
            line_count=len(lines),
            token_count=len(tokens),
            reconcile=result,
            highlights=self.highlights(),
        )

    def repair(self) -> ReconcileResult:
        """Re-render the current lines onto the surface after a failed render."""

        result = reconcile(self.surface, self._lines, logger_name=self._logger_name)
        self._surface_stale = False
        return result

    def insert_at_caret(self, text: str) -> RenderDelta:
        """Insert ``text`` at the caret and leave the caret after it."""

        caret = self._caret
        updated = self._text[:caret] + text + self._text[caret:]
        return self.set_text(updated, caret=caret + len(text))

    def move_caret(self, offset: int) -> HighlightResult:
        self._caret = ensure_offset(self._text, offset)
        return self.highlights()

    def highlights(self) -> HighlightResult:
        boundary = self._index.boundary(self._caret)
        pairs: List[MatchPair] = self._matcher.match(self._index.spans, boundary)
        refs = self._index.refs
        return HighlightResult(
            caret=self._caret,
            pairs=tuple((refs[p.open_index], refs[p.close_index]) for p in pairs),
        )


__all__ = ["HighlightResult", "HighlightSession", "RenderDelta"]
