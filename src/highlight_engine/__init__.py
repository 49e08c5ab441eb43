"""UI-agnostic syntax highlighting pipeline with incremental line reconciliation."""

__all__ = [
    "adapters",
    "layout",
    "matching",
    "profiles",
    "render",
    "runtime",
    "session",
    "tokenizers",
    "tokens",
]

__version__ = "0.1.0"
