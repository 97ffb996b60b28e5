"""Journey API routes."""

from . import crud

__all__ = ["crud"]
