"""Multi-mode LaTeX tokenizer.

The scanner tracks two flags, one per math delimiter style (``$`` and
``$$``). On every pass it looks up the next math delimiter, comment marker,
escape character and (outside math) symbol character, emits the text before
the earliest one as NORMAL or MATH, then dispatches on that marker. Marker
positions are cached between passes, so a scan is linear in the input.

Math delimiters follow TeX: outside math, ``$$`` opens display math and
``$`` opens inline math; a ``$`` inside inline math closes it, and only
``$$`` closes display math (a lone ``$`` there is part of the formula).

Unterminated constructs never raise: a comment, verbatim region or escape
that runs off the end of the input simply consumes the remainder.
"""

from __future__ import annotations

from typing import List

from highlight_engine.tokens import LatexTokenType, Token

from .base import (
    NOT_FOUND,
    MarkerCursor,
    TokenSink,
    char_class,
    find,
    find_first_of,
    is_ascii_letter,
)

MATH_DELIMITER = "$"
DISPLAY_MATH_DELIMITER = MATH_DELIMITER * 2
COMMENT_MARKER = "%"
ESCAPE = "\\"
INLINE_VERBATIM = "\\verb"
BEGIN_VERBATIM = "\\begin{verbatim}"
END_VERBATIM = "\\end{verbatim}"
SYMBOL_CHARS = "{}[]+-/*()|=_~"

LATEX_SYMBOL_CLASS = char_class(SYMBOL_CHARS)


class LatexTokenizer:
    """Classifies LaTeX source into command, comment, math and verbatim runs."""

    name = "latex"
    token_types = LatexTokenType

    def tokenize(self, text: str) -> List[Token]:
        sink = TokenSink()
        length = len(text)
        index = 0
        single_math = False
        double_math = False

        math_marker = MarkerCursor(lambda start: find(text, MATH_DELIMITER, start))
        comment_marker = MarkerCursor(lambda start: find(text, COMMENT_MARKER, start))
        command_marker = MarkerCursor(lambda start: find(text, ESCAPE, start))
        symbol_marker = MarkerCursor(
            lambda start: find_first_of(text, LATEX_SYMBOL_CLASS, start)
        )

        while index < length:
            in_math = single_math or double_math
            math_at = math_marker.next_from(index)
            comment_at = comment_marker.next_from(index)
            command_at = command_marker.next_from(index)
            symbol_at = NOT_FOUND if in_math else symbol_marker.next_from(index)
            first = min(math_at, comment_at, command_at, symbol_at)
            run_type = LatexTokenType.MATH if in_math else LatexTokenType.NORMAL

            if first == NOT_FOUND:
                sink.emit(text[index:], run_type)
                break
            sink.emit(text[index:first], run_type)
            index = first

            if first == math_at:
                if double_math:
                    # Inside display math only a doubled delimiter closes it.
                    width = 1
                    if text.startswith(DISPLAY_MATH_DELIMITER, index):
                        width = 2
                        double_math = False
                elif single_math:
                    # "$a$$b$" reads as two inline regions.
                    width = 1
                    single_math = False
                elif text.startswith(DISPLAY_MATH_DELIMITER, index):
                    width = 2
                    double_math = True
                else:
                    width = 1
                    single_math = True
                sink.emit(text[index : index + width], LatexTokenType.MATH)
                index += width

            elif first == comment_at:
                end = find(text, "\n", index)
                if end == NOT_FOUND:
                    sink.emit(text[index:], LatexTokenType.COMMENT)
                    break
                sink.emit(text[index:end], LatexTokenType.COMMENT)
                index = end

            elif first == symbol_at:
                sink.emit(text[index], LatexTokenType.SYMBOL)
                index += 1

            else:
                index = self._scan_command(text, index, sink)

        return sink.tokens

    def _scan_command(self, text: str, index: int, sink: TokenSink) -> int:
        """Consume the command starting at ``index`` and return the resume index."""

        if text.startswith(INLINE_VERBATIM, index):
            return self._scan_inline_verbatim(text, index, sink)
        if text.startswith(BEGIN_VERBATIM, index):
            return self._scan_verbatim_block(text, index, sink)
        return self._scan_control_sequence(text, index, sink)

    @staticmethod
    def _scan_inline_verbatim(text: str, index: int, sink: TokenSink) -> int:
        sink.emit(INLINE_VERBATIM, LatexTokenType.COMMAND)
        start = index + len(INLINE_VERBATIM)
        if start >= len(text):
            return len(text)

        delimiter = text[start]
        if delimiter == "\n":
            return start

        closing = find(text, delimiter, start + 1)
        newline = find(text, "\n", start + 1)
        end = min(closing, newline)
        if end == NOT_FOUND:
            sink.emit(text[start:], LatexTokenType.VERBATIM)
            return len(text)
        if end == closing:
            sink.emit(text[start : end + 1], LatexTokenType.VERBATIM)
            return end + 1
        # Cut short by the line end; the newline is scanned on the next pass.
        sink.emit(text[start:end], LatexTokenType.VERBATIM)
        return end

    @staticmethod
    def _scan_verbatim_block(text: str, index: int, sink: TokenSink) -> int:
        sink.emit("\\begin", LatexTokenType.COMMAND)
        sink.emit("{", LatexTokenType.SYMBOL)
        sink.emit("verbatim", LatexTokenType.NORMAL)
        sink.emit("}", LatexTokenType.SYMBOL)

        start = index + len(BEGIN_VERBATIM)
        end = find(text, END_VERBATIM, start)
        if end == NOT_FOUND:
            sink.emit(text[start:], LatexTokenType.VERBATIM)
            return len(text)
        sink.emit(text[start:end], LatexTokenType.VERBATIM)
        return end

    @staticmethod
    def _scan_control_sequence(text: str, index: int, sink: TokenSink) -> int:
        end = index + 1
        while end < len(text) and is_ascii_letter(text[end]):
            end += 1
        if end == index + 1 and end < len(text):
            # Control symbol such as \\ or \{.
            end += 1
        sink.emit(text[index:end], LatexTokenType.COMMAND)
        return end


__all__ = [
    "LatexTokenizer",
    "BEGIN_VERBATIM",
    "END_VERBATIM",
    "INLINE_VERBATIM",
    "SYMBOL_CHARS",
]
