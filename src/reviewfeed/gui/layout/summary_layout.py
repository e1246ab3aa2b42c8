"""Fixed layout for the trailing "total reviews" row."""

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QRectF

from ... import config
from ...domain.models.rows import SummaryRow
from ...domain.models.text import SUMMARY_STYLE, StyledText
from .text_metrics import TextMetrics


@dataclass(frozen=True)
class SummaryLayoutResult:
    label: QRectF
    total_height: float


class SummaryLayout:
    """A single centred line of text, padded, never shorter than the minimum."""

    def __init__(self, metrics: TextMetrics | None = None) -> None:
        self._metrics = metrics or TextMetrics()

    def height(self, row: SummaryRow, max_width: float) -> float:
        return self.layout(row, max_width).total_height

    def layout(self, row: SummaryRow, max_width: float) -> SummaryLayoutResult:
        available = max(0.0, max_width - 2 * config.SUMMARY_HORIZONTAL_PADDING)
        text_size = self._metrics.measure(StyledText(row.text, SUMMARY_STYLE), available)
        height = max(config.SUMMARY_MIN_HEIGHT, text_size.height() + config.SUMMARY_VERTICAL_PADDING)
        label = QRectF(
            (max_width - text_size.width()) / 2.0,
            (height - text_size.height()) / 2.0,
            text_size.width(),
            text_size.height(),
        )
        return SummaryLayoutResult(label=label, total_height=height)
