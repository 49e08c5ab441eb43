"""Line surfaces and the incremental reconciler."""

from .reconciler import ReconcileResult, diff_window, reconcile
from .surface import ArenaStats, LineArena, LineHandle, LineSurface, SurfaceError

__all__ = [
    "ArenaStats",
    "LineArena",
    "LineHandle",
    "LineSurface",
    "SurfaceError",
    "ReconcileResult",
    "diff_window",
    "reconcile",
]
