"""Interchangeable tokenizers: plain, symbol-splitting and LaTeX."""

from .base import NOT_FOUND, PlainTokenizer, Tokenizer
from .latex import LatexTokenizer
from .symbols import SymbolTokenizer

__all__ = [
    "NOT_FOUND",
    "Tokenizer",
    "PlainTokenizer",
    "SymbolTokenizer",
    "LatexTokenizer",
]
