"""Runtime services shared by every pipeline stage."""

from . import telemetry

__all__ = ["telemetry"]
