"""Tokenizer that splits punctuation out of plain text."""

from __future__ import annotations

from typing import List

from highlight_engine.tokens import SymbolTokenType, Token

from .base import NOT_FOUND, TokenSink, char_class, find_first_of

# Ranges $-/, :-? and {-~ plus the listed singletons. '#', '@' and '\' are
# deliberately absent.
SYMBOL_CHARS = "$%&'()*+,-./" ":;<=>?" "{|}~" "!\"^_`[]"

SYMBOL_CLASS = char_class(SYMBOL_CHARS)


class SymbolTokenizer:
    """Emits each symbol character as SYMBOL and the runs between as NORMAL."""

    name = "symbols"
    token_types = SymbolTokenType

    def tokenize(self, text: str) -> List[Token]:
        sink = TokenSink()
        index = 0
        while index < len(text):
            symbol_at = find_first_of(text, SYMBOL_CLASS, index)
            if symbol_at == NOT_FOUND:
                sink.emit(text[index:], SymbolTokenType.NORMAL)
                break
            sink.emit(text[index:symbol_at], SymbolTokenType.NORMAL)
            sink.emit(text[symbol_at], SymbolTokenType.SYMBOL)
            index = symbol_at + 1
        return sink.tokens


__all__ = ["SymbolTokenizer", "SYMBOL_CHARS", "SYMBOL_CLASS"]
