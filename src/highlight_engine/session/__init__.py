"""Session facade and caret position helpers."""

from .positions import (
    CaretRangeError,
    Position,
    ensure_offset,
    offset_for_position,
    position_for_offset,
)
from .session import HighlightResult, HighlightSession, RenderDelta

__all__ = [
    "CaretRangeError",
    "Position",
    "ensure_offset",
    "offset_for_position",
    "position_for_offset",
    "HighlightResult",
    "HighlightSession",
    "RenderDelta",
]
