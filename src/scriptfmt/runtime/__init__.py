"""Runtime services shared by the formatter (telemetry, logging)."""

from . import telemetry

__all__ = ["telemetry"]
