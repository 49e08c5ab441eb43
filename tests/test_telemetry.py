from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Tuple

import pytest

from highlight_engine.layout import segment
from highlight_engine.render import LineArena, reconcile
from highlight_engine.runtime import telemetry
from highlight_engine.tokenizers import PlainTokenizer

LogLine = Tuple[str, str, Dict[str, Any]]


def capture_log(monkeypatch: pytest.MonkeyPatch) -> List[LogLine]:
    lines: List[LogLine] = []
    monkeypatch.setattr(
        telemetry,
        "_log",
        lambda log, level, message, payload: lines.append((level, message, payload)),
    )
    return lines


def test_reconcile_records_result_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    events: List[Tuple[str, Dict[str, Any]]] = []
    monkeypatch.setattr(
        telemetry, "record_event", lambda name, **kwargs: events.append((name, kwargs["data"]))
    )

    result = reconcile(LineArena(), segment(PlainTokenizer().tokenize("a\nb")))

    assert events == [("render.reconcile", asdict(result))]
    assert events[0][1]["created"] == 2


def test_record_stats_requires_dataclass_instance() -> None:
    with pytest.raises(TypeError):
        telemetry.record_stats("render.reconcile", {"created": 1})


def test_span_logs_metadata_when_closed(monkeypatch: pytest.MonkeyPatch) -> None:
    lines = capture_log(monkeypatch)

    with telemetry.span(
        "session::render", component="session", metadata={"length": 3}
    ) as handle:
        handle.add_metadata("lines", 1)

    assert lines[-1] == (
        "debug",
        "span::done",
        {"span": "session::render", "length": "3", "lines": "1", "component": "session"},
    )


def test_span_logs_failure_and_reraises(monkeypatch: pytest.MonkeyPatch) -> None:
    lines = capture_log(monkeypatch)

    with pytest.raises(RuntimeError):
        with telemetry.span("render::reconcile"):
            raise RuntimeError("surface gone")

    assert lines[-1][:2] == ("error", "span::fail")
    assert lines[-1][2]["reason"] == "surface gone"


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
    assert "performance" in telemetry.PRESETS
