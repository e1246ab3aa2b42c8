"""Index-based view of a list snapshot for table-style presenters."""

from __future__ import annotations

import threading
from typing import Union

from ...domain.models.rows import ListState, RowModel, SummaryRow
from ..layout.row_layout import LayoutResult, RowLayoutEngine
from ..layout.summary_layout import SummaryLayout, SummaryLayoutResult

CatalogRow = Union[RowModel, SummaryRow]


class RowCatalog:
    """Map row indices onto review rows and the trailing summary row.

    The summary row is appended only once pagination has finished with at
    least one successful page.  Connect :meth:`update` to
    ``PaginationController.state_changed`` to keep the catalog current.
    """

    def __init__(
        self,
        state: ListState | None = None,
        row_layout: RowLayoutEngine | None = None,
        summary_layout: SummaryLayout | None = None,
    ) -> None:
        self._state = state or ListState()
        self._row_layout = row_layout or RowLayoutEngine()
        self._summary_layout = summary_layout or SummaryLayout()
        self._lock = threading.Lock()

    def update(self, state: ListState) -> None:
        with self._lock:
            self._state = state

    @property
    def state(self) -> ListState:
        with self._lock:
            return self._state

    @property
    def count(self) -> int:
        state = self.state
        return len(state.rows) + (1 if state.is_exhausted else 0)

    def is_summary(self, index: int) -> bool:
        state = self.state
        return state.is_exhausted and index == len(state.rows)

    def row_at(self, index: int) -> CatalogRow:
        state = self.state
        if 0 <= index < len(state.rows):
            return state.rows[index]
        if state.is_exhausted and index == len(state.rows):
            return SummaryRow(total_count=state.total_count)
        raise IndexError(f"Row index {index} out of range (count {self.count})")

    def height_at(self, index: int, max_width: float) -> float:
        row = self.row_at(index)
        if isinstance(row, SummaryRow):
            return self._summary_layout.height(row, max_width)
        return self._row_layout.height(row, max_width)

    def layout_at(self, index: int, max_width: float) -> Union[LayoutResult, SummaryLayoutResult]:
        row = self.row_at(index)
        if isinstance(row, SummaryRow):
            return self._summary_layout.layout(row, max_width)
        return self._row_layout.layout(row, max_width)
