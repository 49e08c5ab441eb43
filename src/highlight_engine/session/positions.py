"""Conversions between flat caret offsets and (row, column) positions."""

from __future__ import annotations

from typing import Tuple

Position = Tuple[int, int]  # (row, column)


class CaretRangeError(RuntimeError):
    """Raised when a caret offset or position falls outside the text."""

    def __init__(self, message: str, *, caret: int | Position | None = None) -> None:
        super().__init__(message)
        self.caret = caret


def ensure_offset(text: str, offset: int) -> int:
    if offset < 0 or offset > len(text):
        raise CaretRangeError("Caret offset out of range", caret=offset)
    return offset


def offset_for_position(text: str, position: Position) -> int:
    lines = text.split("\n")
    row, col = position
    if row < 0 or row >= len(lines):
        raise CaretRangeError("Row out of range", caret=position)
    if col < 0 or col > len(lines[row]):
        raise CaretRangeError("Column out of range", caret=position)
    offset = 0
    for i in range(row):
        offset += len(lines[i]) + 1  # newline
    return offset + col


def position_for_offset(text: str, offset: int) -> Position:
    ensure_offset(text, offset)
    running = 0
    lines = text.split("\n")
    for row, line in enumerate(lines):
        if offset <= running + len(line):
            return (row, offset - running)
        running += len(line) + 1
    return (len(lines) - 1, len(lines[-1]))


__all__ = [
    "CaretRangeError",
    "Position",
    "ensure_offset",
    "offset_for_position",
    "position_for_offset",
]
