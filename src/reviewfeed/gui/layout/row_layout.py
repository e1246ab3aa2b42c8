"""Frame and height calculation for review rows.

The layout is a top-to-bottom flow: the avatar sits in the top-left inset and
every other element stacks in the column to its right::

    +--------+-------------------------------+
    | avatar | name                          |
    |        | ★★★★★                         |
    |        | body text (capped to N lines) |
    |        | Show full review...           |
    |        | created                       |
    +--------+-------------------------------+

:meth:`RowLayoutEngine.layout` is a pure function of ``(row, max_width)``;
:meth:`RowLayoutEngine.height` is derived from it so both always agree on
whether the expand control is present.
"""

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QRectF

from ... import config
from ...domain.models.rows import RowModel
from ...domain.models.text import NAME_STYLE, SHOW_MORE_STYLE, StyledText
from .rating import RatingRendererConfig
from .text_metrics import TextMetrics

SHOW_MORE_TEXT = StyledText(config.SHOW_MORE_TEXT, SHOW_MORE_STYLE)


@dataclass(frozen=True)
class RowInsets:
    top: float = config.ROW_INSET_TOP
    left: float = config.ROW_INSET_LEFT
    bottom: float = config.ROW_INSET_BOTTOM
    right: float = config.ROW_INSET_RIGHT


@dataclass(frozen=True)
class LayoutResult:
    """Frames of every row element plus the total row height.

    ``expand_control`` is an empty rect when the control is not shown, and
    ``body`` is an empty rect when the review has no text.
    """

    avatar: QRectF
    name: QRectF
    rating: QRectF
    body: QRectF
    expand_control: QRectF
    created: QRectF
    total_height: float

    @property
    def shows_expand_control(self) -> bool:
        return not self.expand_control.isEmpty()


class RowLayoutEngine:
    """Compute :class:`LayoutResult` objects for review rows.

    The engine keeps no per-row state and may be shared between threads.
    """

    def __init__(
        self,
        metrics: TextMetrics | None = None,
        rating_config: RatingRendererConfig | None = None,
        insets: RowInsets | None = None,
    ) -> None:
        self._metrics = metrics or TextMetrics()
        self._rating_config = rating_config or RatingRendererConfig.default()
        self._insets = insets or RowInsets()

    def height(self, row: RowModel, max_width: float) -> float:
        """Return the row height for *max_width*."""
        return self.layout(row, max_width).total_height

    def layout(self, row: RowModel, max_width: float) -> LayoutResult:
        insets = self._insets
        metrics = self._metrics
        content_width = max_width - insets.left - insets.right
        current_y = insets.top

        # 1. Avatar in the top-left corner
        avatar = QRectF(insets.left, current_y, config.AVATAR_SIZE, config.AVATAR_SIZE)

        # Everything else lives in the column right of the avatar
        content_x = avatar.right() + config.AVATAR_TO_NAME_SPACING
        column_width = max(0.0, content_width - (config.AVATAR_SIZE + config.AVATAR_TO_NAME_SPACING))

        # 2. Name, top-aligned with the avatar
        name = QRectF(content_x, current_y, column_width, metrics.line_height(NAME_STYLE))
        current_y = name.bottom() + config.NAME_TO_RATING_SPACING

        # 3. Rating strip; sized for the full star range whatever the rating
        rating_size = self._rating_config.image_size()
        rating = QRectF(content_x, current_y, rating_size.width(), rating_size.height())
        current_y = rating.bottom() + config.RATING_TO_TEXT_SPACING

        # 4. Body text.  Empty text gets no frame and no trailing spacing.
        body = QRectF()
        show_more = False
        if not row.text.is_empty():
            shown = metrics.measure(row.text, column_width, row.max_lines)
            full = metrics.measure(row.text, column_width)
            show_more = row.max_lines != config.UNLIMITED_LINES and full.height() > shown.height()
            body = QRectF(content_x, current_y, shown.width(), shown.height())
            current_y = body.bottom() + config.TEXT_TO_CREATED_SPACING

        # 5. Expand control, absent entirely when the text already fits
        expand_control = QRectF()
        if show_more:
            control_size = metrics.measure(SHOW_MORE_TEXT)
            expand_control = QRectF(content_x, current_y, control_size.width(), control_size.height())
            current_y = expand_control.bottom() + config.SHOW_MORE_TO_CREATED_SPACING

        # 6. Creation timestamp
        created_size = metrics.measure(row.created, column_width)
        created = QRectF(content_x, current_y, created_size.width(), created_size.height())
        current_y = created.bottom() + insets.bottom

        return LayoutResult(
            avatar=avatar,
            name=name,
            rating=rating,
            body=body,
            expand_control=expand_control,
            created=created,
            total_height=current_y,
        )
