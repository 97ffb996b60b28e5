"""Statistics API routes."""

from . import charts, overview

__all__ = ["charts", "overview"]
