"""Split a token stream into lines of line-local spans."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from highlight_engine.tokens import Line, Span, Token


def segment(tokens: Iterable[Token]) -> List[Line]:
    """Return one line per ``\\n`` in the token text, plus one.

    Tokens containing newlines are cut into one fragment per line, each
    keeping the token's type. Empty fragments are dropped, so a line may be
    an empty tuple.
    """

    lines: List[Line] = []
    current: List[Span] = []
    for token in tokens:
        pieces = token.content.split("\n")
        for position, piece in enumerate(pieces):
            if position:
                lines.append(tuple(current))
                current = []
            if piece:
                current.append(Span(piece, token.type))
    lines.append(tuple(current))
    return lines


def render_text(lines: Sequence[Sequence[Span]]) -> str:
    """Reassemble the source text from segmented lines."""

    return "\n".join("".join(span.content for span in line) for line in lines)


__all__ = ["segment", "render_text"]
