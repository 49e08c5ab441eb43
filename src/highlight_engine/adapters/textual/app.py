"""Executable Textual app that previews the highlight pipeline live."""

from __future__ import annotations

import argparse
import os
from typing import Dict, List, Optional, Sequence, Set, Tuple

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, VerticalScroll
    from textual.widget import Widget
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use highlight_engine.adapters.textual.app"
    ) from exc

from highlight_engine.profiles import (
    DEFAULT_PROFILES,
    ProfileRegistry,
    load_default_profiles,
)
from highlight_engine.runtime import telemetry
from highlight_engine.session import HighlightResult, HighlightSession
from highlight_engine.tokens import Span, TokenType

from .controller import TextualHighlightController, TextualUIHooks

STYLE_BY_TAG: Dict[str, str] = {
    "cmd": "bold #61afef",
    "vrb": "#d19a66",
    "cmt": "italic #7f848e",
    "sbl": "#c678dd",
    "mth": "#98c379",
    "symbol": "#c678dd",
}
MATCH_STYLE = "reverse"
PROFILE_NAMES = tuple(profile.name for profile in DEFAULT_PROFILES)

SAMPLE_TEXT = (
    "% Demo document\n"
    "\\section{Intro}\n"
    "Inline math $a_{i} + b^{2}$ and \\verb|raw $ text|.\n"
    "\\begin{verbatim}\n"
    "  untouched {braces}\n"
    "\\end{verbatim}\n"
)


class TextualLineSurface:
    """Line surface whose slots are ``Static`` widgets inside a container."""

    def __init__(self, container: Widget) -> None:
        self._container = container
        self._order: List[Static] = []
        self._spans: Dict[Static, List[Span]] = {}
        self._marked: Set[Tuple[int, int]] = set()
        self._marked_lines: Set[Static] = set()

    def lines(self) -> Sequence[Static]:
        return tuple(self._order)

    def read_spans(self, line: Static) -> Optional[Sequence[Span]]:
        spans = self._spans.get(line)
        return None if spans is None else tuple(spans)

    def create_line(self) -> Static:
        line = Static("", classes="line")
        self._spans[line] = []
        return line

    def clear_line(self, line: Static) -> None:
        self._spans[line] = []
        line.update("")

    def append_span(self, line: Static, type: TokenType, content: str) -> None:
        self._spans.setdefault(line, []).append(Span(content, type))
        self._refresh(line)

    def insert_line_before(self, line: Static, ref: Optional[Static]) -> None:
        if ref is None:
            self._order.append(line)
            self._container.mount(line)
        else:
            self._order.insert(self._order.index(ref), line)
            self._container.mount(line, before=ref)

    def remove_line(self, line: Static) -> None:
        self._order.remove(line)
        self._spans.pop(line, None)
        line.remove()

    def mark(self, result: HighlightResult) -> None:
        """Restyle the lines touched by the previous and new match sets."""

        stale = self._marked_lines
        self._marked = {(ref.line, ref.column) for ref in result.refs}
        self._marked_lines = {
            self._order[row] for row, _ in self._marked if 0 <= row < len(self._order)
        }
        for line in stale | self._marked_lines:
            if line in self._spans:
                self._refresh(line, row=self._order.index(line))

    def _refresh(self, line: Static, *, row: int | None = None) -> None:
        text = Text()
        for column, item in enumerate(self._spans.get(line, ())):
            style = STYLE_BY_TAG.get(str(item.type.value), "")
            if row is not None and (row, column) in self._marked:
                style = f"{style} {MATCH_STYLE}".strip()
            text.append(item.content, style=style)
        line.update(text)


class HighlightEngineApp(App[None]):
    """Editor on the left, reconciled line preview on the right."""

    CSS = """
	#panes {
		height: 1fr;
	}

	#editor {
		width: 1fr;
	}

	#preview {
		width: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	.line {
		height: 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, profile_name: str = "latex", text: str = SAMPLE_TEXT) -> None:
        super().__init__()
        self._profile_name = profile_name
        self._initial_text = text
        self._logger = telemetry.get_logger("highlight_engine.app")
        self.surface: TextualLineSurface | None = None
        self.controller: TextualHighlightController | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            yield TextArea(self._initial_text, id="editor")
            yield VerticalScroll(id="preview")
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        registry = ProfileRegistry()
        load_default_profiles(registry)
        profile = registry.get(self._profile_name)
        self.surface = TextualLineSurface(self.query_one("#preview", VerticalScroll))
        session = HighlightSession(profile, surface=self.surface, name="app")
        hooks = TextualUIHooks(
            render_highlights=self.surface.mark,
            update_status=self._update_status,
            log=self._logger.debug,
        )
        self.controller = TextualHighlightController(session, hooks)
        editor = self.query_one("#editor", TextArea)
        self.controller.handle_text_changed(editor.text, editor.cursor_location)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.controller:
            area = event.text_area
            self.controller.handle_text_changed(area.text, area.cursor_location)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if not self.controller:
            return
        area = event.text_area
        # Selection events can arrive before the matching Changed event.
        if area.text != self.controller.session.text:
            return
        self.controller.handle_cursor_moved(area.cursor_location)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the highlight engine demo.")
    parser.add_argument(
        "--profile",
        choices=PROFILE_NAMES,
        default=os.environ.get("HIGHLIGHT_ENGINE_PROFILE", "latex"),
        help="Language profile to highlight with (default: latex)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset to activate before starting",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Optional file whose contents seed the editor",
    )
    args = parser.parse_args(argv)
    # argparse does not check defaults against choices.
    if args.profile not in PROFILE_NAMES:
        parser.error(
            f"unknown profile {args.profile!r} (choose from {', '.join(PROFILE_NAMES)})"
        )
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    text = SAMPLE_TEXT
    if args.file:
        with open(args.file, encoding="utf-8") as handle:
            text = handle.read()
    app = HighlightEngineApp(profile_name=args.profile, text=text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
