"""Built-in language profiles."""

from __future__ import annotations

from typing import Sequence

from highlight_engine.matching import MatchRule
from highlight_engine.tokenizers import LatexTokenizer, PlainTokenizer, SymbolTokenizer
from highlight_engine.tokens import LatexTokenType, SymbolTokenType

from .models import LanguageProfile
from .registry import ProfileRegistry

BRACKET_PAIRS = (("{", "}"), ("(", ")"), ("[", "]"))

PLAIN_PROFILE = LanguageProfile(
    name="plain",
    tokenizer=PlainTokenizer(),
    description="No highlighting",
)

SYMBOLS_PROFILE = LanguageProfile(
    name="symbols",
    tokenizer=SymbolTokenizer(),
    match_rules=tuple(
        MatchRule.pair(SymbolTokenType.SYMBOL, opener, closer)
        for opener, closer in BRACKET_PAIRS
    ),
    autocomplete_pairs=dict(BRACKET_PAIRS),
    overwrite_chars=tuple(closer for _, closer in BRACKET_PAIRS),
    description="Punctuation highlighting with bracket matching",
)

LATEX_PROFILE = LanguageProfile(
    name="latex",
    tokenizer=LatexTokenizer(),
    match_rules=tuple(
        MatchRule.pair(LatexTokenType.SYMBOL, opener, closer)
        for opener, closer in BRACKET_PAIRS
    ),
    description="LaTeX commands, comments, math and verbatim regions",
)

DEFAULT_PROFILES: tuple[LanguageProfile, ...] = (
    PLAIN_PROFILE,
    SYMBOLS_PROFILE,
    LATEX_PROFILE,
)


def load_default_profiles(
    registry: ProfileRegistry,
    *,
    replace: bool = False,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> None:
    """Register the built-in profiles, optionally filtered by name."""

    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    for profile in DEFAULT_PROFILES:
        if include_set is not None and profile.name not in include_set:
            continue
        if profile.name in exclude_set:
            continue
        registry.register(profile, replace=replace)


__all__ = [
    "DEFAULT_PROFILES",
    "LATEX_PROFILE",
    "PLAIN_PROFILE",
    "SYMBOLS_PROFILE",
    "load_default_profiles",
]
