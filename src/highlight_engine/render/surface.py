"""Renderable-line surface protocol and the in-memory line arena."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Protocol, Sequence, Tuple

from highlight_engine.tokens import Line, Span, TokenType

LineHandle = Hashable


class LineSurface(Protocol):
    """Host-side collection of rendered line slots.

    ``read_spans`` returns ``None`` for a slot whose span metadata is missing,
    e.g. one that was never produced by a reconciliation.
    """

    def lines(self) -> Sequence[LineHandle]:
        ...

    def read_spans(self, line: LineHandle) -> Optional[Sequence[Span]]:
        ...

    def create_line(self) -> LineHandle:
        ...

    def clear_line(self, line: LineHandle) -> None:
        ...

    def append_span(self, line: LineHandle, type: TokenType, content: str) -> None:
        ...

    def insert_line_before(
        self, line: LineHandle, ref: Optional[LineHandle]
    ) -> None:
        """Insert ``line`` before ``ref``; ``ref=None`` appends."""
        ...

    def remove_line(self, line: LineHandle) -> None:
        ...


class SurfaceError(RuntimeError):
    """Raised when a surface operation references an unknown or misplaced slot."""

    def __init__(self, message: str, *, line: LineHandle | None = None) -> None:
        super().__init__(message)
        self.line = line


@dataclass(slots=True)
class ArenaStats:
    created: int = 0
    cleared: int = 0
    inserted: int = 0
    removed: int = 0
    spans_appended: int = 0

    @property
    def structural_changes(self) -> int:
        return self.created + self.cleared + self.inserted + self.removed

    def reset(self) -> None:
        self.created = self.cleared = self.inserted = self.removed = 0
        self.spans_appended = 0


@dataclass(slots=True)
class _Slot:
    spans: Optional[List[Span]] = field(default_factory=list)
    raw_text: str = ""


class LineArena:
    """Indexed arena of line slots addressed by integer handles."""

    def __init__(self) -> None:
        self._slots: Dict[int, _Slot] = {}
        self._order: List[int] = []
        self._next_handle = 0
        self.stats = ArenaStats()

    def __len__(self) -> int:
        return len(self._order)

    def lines(self) -> Sequence[int]:
        return tuple(self._order)

    def read_spans(self, line: int) -> Optional[Tuple[Span, ...]]:
        slot = self._slots.get(line)
        if slot is None or slot.spans is None:
            return None
        return tuple(slot.spans)

    def create_line(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._slots[handle] = _Slot()
        self.stats.created += 1
        return handle

    def clear_line(self, line: int) -> None:
        slot = self._require(line)
        slot.spans = []
        slot.raw_text = ""
        self.stats.cleared += 1

    def append_span(self, line: int, type: TokenType, content: str) -> None:
        slot = self._require(line)
        if slot.spans is None:
            slot.spans = []
        slot.spans.append(Span(content, type))
        self.stats.spans_appended += 1

    def insert_line_before(self, line: int, ref: Optional[int]) -> None:
        self._require(line)
        if line in self._order:
            raise SurfaceError("Line is already attached", line=line)
        if ref is None:
            self._order.append(line)
        else:
            try:
                position = self._order.index(ref)
            except ValueError as exc:
                raise SurfaceError("Reference line is not attached", line=ref) from exc
            self._order.insert(position, line)
        self.stats.inserted += 1

    def remove_line(self, line: int) -> None:
        self._require(line)
        if line in self._order:
            self._order.remove(line)
        del self._slots[line]
        self.stats.removed += 1

    def adopt_raw(self, text: str) -> None:
        """Replace the arena content with unformatted slots, one per text line."""

        self._slots.clear()
        self._order.clear()
        for raw_line in text.split("\n"):
            handle = self._next_handle
            self._next_handle += 1
            self._slots[handle] = _Slot(spans=None, raw_text=raw_line)
            self._order.append(handle)

    def snapshot(self) -> List[Tuple[Tuple[TokenType, str], ...]]:
        """Per-line ``(type, content)`` pairs; raw slots appear empty."""

        result = []
        for handle in self._order:
            spans = self._slots[handle].spans or []
            result.append(tuple(span.key for span in spans))
        return result

    def as_lines(self) -> List[Line]:
        return [tuple(self._slots[handle].spans or ()) for handle in self._order]

    def text(self) -> str:
        parts = []
        for handle in self._order:
            slot = self._slots[handle]
            if slot.spans is None:
                parts.append(slot.raw_text)
            else:
                parts.append("".join(span.content for span in slot.spans))
        return "\n".join(parts)

    def _require(self, line: int) -> _Slot:
        slot = self._slots.get(line)
        if slot is None:
            raise SurfaceError("Unknown line handle", line=line)
        return slot


__all__ = [
    "ArenaStats",
    "LineArena",
    "LineHandle",
    "LineSurface",
    "SurfaceError",
]
