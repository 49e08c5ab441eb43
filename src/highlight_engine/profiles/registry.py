"""Registry of named language profiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from highlight_engine.runtime.telemetry import span

from .models import LanguageProfile


@dataclass(slots=True)
class RegistryStats:
    profile_count: int
    names: tuple[str, ...]


class ProfileConflictError(RuntimeError):
    """Raised when a profile name is registered twice without ``replace``."""

    def __init__(self, profile: LanguageProfile, existing: LanguageProfile) -> None:
        super().__init__(f"Profile '{profile.name}' is already registered")
        self.profile = profile
        self.existing = existing


class ProfileRegistry:
    """Owns the language profiles available to sessions."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._profiles: Dict[str, LanguageProfile] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __iter__(self) -> Iterator[LanguageProfile]:
        return iter(self._profiles.values())

    def register(
        self, profile: LanguageProfile, *, replace: bool = False
    ) -> LanguageProfile:
        with span(
            "profiles::register",
            logger_name=self._logger_name,
            component="profiles",
            metadata={"profile": profile.name},
        ) as handle:
            existing = self._profiles.get(profile.name)
            if existing is not None and not replace:
                handle.add_metadata("conflict", profile.name)
                raise ProfileConflictError(profile, existing)
            self._profiles[profile.name] = profile
            self._revision += 1
            return profile

    def unregister(self, name: str) -> Optional[LanguageProfile]:
        removed = self._profiles.pop(name, None)
        if removed is not None:
            self._revision += 1
        return removed

    def get(self, name: str) -> LanguageProfile:
        try:
            return self._profiles[name]
        except KeyError as exc:
            raise KeyError(f"Profile '{name}' is not registered") from exc

    def names(self) -> tuple[str, ...]:
        return tuple(self._profiles)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            profile_count=len(self._profiles),
            names=tuple(sorted(self._profiles)),
        )


__all__ = ["ProfileRegistry", "ProfileConflictError", "RegistryStats"]
