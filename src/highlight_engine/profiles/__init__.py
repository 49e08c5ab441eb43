"""Language profiles and their registry."""

from .models import LanguageProfile
from .registry import ProfileConflictError, ProfileRegistry, RegistryStats
from .defaults import (
    DEFAULT_PROFILES,
    LATEX_PROFILE,
    PLAIN_PROFILE,
    SYMBOLS_PROFILE,
    load_default_profiles,
)

__all__ = [
    "LanguageProfile",
    "ProfileRegistry",
    "ProfileConflictError",
    "RegistryStats",
    "DEFAULT_PROFILES",
    "LATEX_PROFILE",
    "PLAIN_PROFILE",
    "SYMBOLS_PROFILE",
    "load_default_profiles",
]
