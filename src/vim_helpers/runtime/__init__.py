"""Runtime services shared by every helper."""

from . import telemetry

__all__ = ["telemetry"]
