"""Convert a rendered line structure into a new one with maximal slot reuse.

The diff is a two-cursor scan: a forward cursor anchors the unchanged prefix,
a backward cursor anchors the unchanged suffix, and only the window between
them is rewritten. Slots inside the window are cleared and refilled in place
while both sequences have lines there; surplus new lines get fresh slots and
surplus old slots are removed. Moved or reordered lines are not detected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from highlight_engine.runtime.telemetry import record_stats, span
from highlight_engine.tokens import Line, Span, lines_equal

from .surface import LineHandle, LineSurface


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Summary of the edit script applied by ``reconcile``."""

    first_changed: int
    last_changed_new: int
    last_changed_old: int
    reused: int = 0
    created: int = 0
    removed: int = 0

    @property
    def unchanged(self) -> bool:
        return not (self.reused or self.created or self.removed)


def diff_window(
    old: Sequence[Optional[Sequence[Span]]], new: Sequence[Line]
) -> Tuple[int, int, int]:
    """Return ``(first, last_new, last_old)`` bounding the changed window.

    ``None`` entries in ``old`` never compare equal to a new line.
    """

    first = 0
    limit = min(len(old), len(new))
    while first < limit and lines_equal(old[first], new[first]):
        first += 1

    last_old = len(old) - 1
    last_new = len(new) - 1
    while (
        last_old >= first
        and last_new >= first
        and lines_equal(old[last_old], new[last_new])
    ):
        last_old -= 1
        last_new -= 1

    return first, last_new, last_old


def reconcile(
    surface: LineSurface,
    new_lines: Sequence[Line],
    *,
    logger_name: str | None = None,
) -> ReconcileResult:
    """Rewrite ``surface`` in place so that it renders ``new_lines``."""

    with span(
        "render::reconcile",
        logger_name=logger_name,
        component="render",
        metadata={"new_lines": len(new_lines)},
    ) as handle:
        handles = list(surface.lines())
        old_lines = [surface.read_spans(line) for line in handles]
        first, last_new, last_old = diff_window(old_lines, new_lines)

        insertion_point: Optional[LineHandle] = (
            handles[first] if first < len(handles) else None
        )
        reused = created = 0
        for index in range(first, last_new + 1):
            if index <= last_old:
                line = handles[index]
                surface.clear_line(line)
                _populate(surface, line, new_lines[index])
                insertion_point = handles[index + 1] if index + 1 < len(handles) else None
                reused += 1
            else:
                line = surface.create_line()
                _populate(surface, line, new_lines[index])
                surface.insert_line_before(line, insertion_point)
                created += 1

        stale = handles[max(first, last_new + 1) : last_old + 1]
        for line in stale:
            surface.remove_line(line)

        result = ReconcileResult(
            first_changed=first,
            last_changed_new=last_new,
            last_changed_old=last_old,
            reused=reused,
            created=created,
            removed=len(stale),
        )
        handle.add_metadata("reused", reused)
        handle.add_metadata("created", created)
        handle.add_metadata("removed", len(stale))

    record_stats("render.reconcile", result, logger_name=logger_name)
    return result


def _populate(surface: LineSurface, line: LineHandle, spans: Line) -> None:
    for item in spans:
        surface.append_span(line, item.type, item.content)


__all__ = ["ReconcileResult", "diff_window", "reconcile"]
