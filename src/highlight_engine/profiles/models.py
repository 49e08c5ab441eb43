"""Per-language configuration consumed by sessions and the matcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from highlight_engine.matching import MatchRule
from highlight_engine.tokenizers import Tokenizer


@dataclass(frozen=True, slots=True)
class LanguageProfile:
    """Immutable bundle of tokenizer, match rules and editing tables.

    ``autocomplete_pairs`` and ``overwrite_chars`` are static data for the
    editing layer; the highlighting pipeline only carries them.
    """

    name: str
    tokenizer: Tokenizer
    match_rules: tuple[MatchRule, ...] = ()
    autocomplete_pairs: Mapping[str, str] = field(default_factory=dict)
    overwrite_chars: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("profile name cannot be empty")
        if not callable(getattr(self.tokenizer, "tokenize", None)):
            raise TypeError("tokenizer must provide a callable tokenize()")
        object.__setattr__(self, "match_rules", tuple(self.match_rules))
        object.__setattr__(
            self, "autocomplete_pairs", MappingProxyType(dict(self.autocomplete_pairs))
        )
        object.__setattr__(self, "overwrite_chars", tuple(self.overwrite_chars))

    def closing_for(self, opener: str) -> str | None:
        return self.autocomplete_pairs.get(opener)

    def overwrites(self, char: str) -> bool:
        return char in self.overwrite_chars


__all__ = ["LanguageProfile"]
