"""Paginated review feed: list state machine, row layout and avatar cache."""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
