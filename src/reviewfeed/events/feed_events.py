"""Events published by the review list controller."""

from __future__ import annotations

from dataclasses import dataclass

from .bus import Event


@dataclass(kw_only=True)
class PageLoadedEvent(Event):
    offset: int
    item_count: int
    total_count: int


@dataclass(kw_only=True)
class PageFailedEvent(Event):
    offset: int
    error: Exception


@dataclass(kw_only=True)
class RowExpandedEvent(Event):
    row_id: str
