"""Host-agnostic controller that wires session updates into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from highlight_engine.session import (
    HighlightResult,
    HighlightSession,
    Position,
    RenderDelta,
    offset_for_position,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the controller to update host widgets."""

    render_highlights: Callable[[HighlightResult], None] = _noop
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualHighlightController:
    """Translates editor widget events into session calls."""

    def __init__(self, session: HighlightSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks

    def handle_text_changed(self, text: str, cursor: Position) -> RenderDelta:
        """Re-render after an edit; ``cursor`` is the widget's (row, col)."""

        offset = offset_for_position(text, cursor)
        self._log_state("edit ->", length=len(text), cursor=cursor)
        delta = self.session.set_text(text, caret=offset)
        self._log_state(
            "render <-",
            reused=delta.reconcile.reused,
            created=delta.reconcile.created,
            removed=delta.reconcile.removed,
        )
        self.hooks.render_highlights(delta.highlights)
        self.hooks.update_status(self._status_line())
        return delta

    def handle_cursor_moved(self, cursor: Position) -> HighlightResult:
        offset = offset_for_position(self.session.text, cursor)
        result = self.session.move_caret(offset)
        self._log_state("caret ->", cursor=cursor, matches=len(result.pairs))
        self.hooks.render_highlights(result)
        self.hooks.update_status(self._status_line())
        return result

    def _status_line(self) -> str:
        row, col = self.session.caret_position
        return (
            f"{self.session.profile.name} | Ln {row + 1}, Col {col + 1}"
            f" | {len(self.session.lines)} lines"
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "session": self.session.name,
            "profile": self.session.profile.name,
            "version": self.session.version,
            "caret": self.session.caret,
        }


__all__ = ["TextualHighlightController", "TextualUIHooks"]
