"""Row models and the immutable list snapshot handed to subscribers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Optional

from ... import config
from .review import ReviewRecord
from .text import BODY_STYLE, CREATED_STYLE, StyledText


def _new_row_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class RowModel:
    """Renderable review row.

    ``id`` is an opaque token that stays stable across snapshots.  Rows carry
    no reference back to the controller; the presentation layer routes an
    expand action on ``id`` to :meth:`PaginationController.expand_row`.
    """

    text: StyledText
    created: StyledText
    first_name: str
    last_name: str
    rating: int
    avatar_url: Optional[str] = None
    max_lines: int = config.COLLAPSED_MAX_LINES
    id: str = field(default_factory=_new_row_id)

    @classmethod
    def from_record(
        cls,
        record: ReviewRecord,
        max_lines: int = config.COLLAPSED_MAX_LINES,
    ) -> "RowModel":
        return cls(
            text=StyledText(record.text, BODY_STYLE),
            created=StyledText(record.created, CREATED_STYLE),
            first_name=record.first_name,
            last_name=record.last_name,
            rating=record.rating,
            avatar_url=record.avatar_url,
            max_lines=max_lines,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_expanded(self) -> bool:
        return self.max_lines == config.UNLIMITED_LINES

    def expanded(self) -> "RowModel":
        """Return a copy of this row with the line cap removed."""
        return replace(self, max_lines=config.UNLIMITED_LINES)


@dataclass(frozen=True)
class SummaryRow:
    """Synthetic trailing row shown once every page has been loaded."""

    total_count: int

    @property
    def text(self) -> str:
        return config.SUMMARY_TEMPLATE.format(count=self.total_count)


@dataclass(frozen=True)
class ListState:
    """Immutable snapshot of the review list.

    ``total_count`` is only meaningful after the first successful page.
    """

    rows: tuple[RowModel, ...] = ()
    is_loading: bool = False
    has_more: bool = True
    next_offset: int = 0
    page_size: int = config.DEFAULT_PAGE_SIZE
    total_count: int = 0

    @property
    def is_exhausted(self) -> bool:
        """``True`` once pagination finished with at least one successful page."""
        return not self.has_more and self.total_count > 0

    def index_of(self, row_id: str) -> int:
        """Return the index of the row with *row_id*, or ``-1``."""
        for index, row in enumerate(self.rows):
            if row.id == row_id:
                return index
        return -1
