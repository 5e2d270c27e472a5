"""Runtime services shared by trackers and adapters."""

from . import telemetry

__all__ = ["telemetry"]
