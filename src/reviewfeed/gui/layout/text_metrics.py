"""Styled text measurement backed by Qt's text layout engine."""

from __future__ import annotations

import math
from functools import lru_cache

from PySide6.QtCore import QPointF, QSizeF
from PySide6.QtGui import QFont, QFontMetricsF, QTextLayout, QTextOption

from ...domain.models.text import (
    BODY_STYLE,
    CREATED_STYLE,
    NAME_STYLE,
    SHOW_MORE_STYLE,
    SUMMARY_STYLE,
    StyledText,
    TextStyle,
)

# Width used when the caller does not constrain the text horizontally.
UNBOUNDED_WIDTH: float = float(2 ** 24)

# ``QTextLayout`` only breaks on the Unicode line separator.
_LINE_SEPARATOR = "\u2028"


def _make_font(family: str, point_size: float, bold: bool) -> QFont:
    font = QFont(family)
    font.setPointSizeF(point_size)
    font.setBold(bold)
    return font


@lru_cache(maxsize=4096)
def _measure(
    text: str,
    family: str,
    point_size: float,
    bold: bool,
    max_width: float,
    max_lines: int,
) -> tuple[float, float]:
    """Lay *text* out line by line and return the ceiled ``(width, height)``."""

    layout = QTextLayout(text.replace("\n", _LINE_SEPARATOR), _make_font(family, point_size, bold))
    option = QTextOption()
    option.setWrapMode(QTextOption.WrapMode.WrapAtWordBoundaryOrAnywhere)
    layout.setTextOption(option)

    width = 0.0
    height = 0.0
    lines = 0
    layout.beginLayout()
    while max_lines <= 0 or lines < max_lines:
        line = layout.createLine()
        if not line.isValid():
            break
        line.setLineWidth(max_width)
        line.setPosition(QPointF(0.0, height))
        height += line.height()
        width = max(width, line.naturalTextWidth())
        lines += 1
    layout.endLayout()
    return float(math.ceil(min(width, max_width))), float(math.ceil(height))


@lru_cache(maxsize=64)
def _line_height(family: str, point_size: float, bold: bool) -> float:
    return float(math.ceil(QFontMetricsF(_make_font(family, point_size, bold)).height()))


class TextMetrics:
    """Measure styled text for a maximum width and optional line cap.

    Results depend only on the text, its style, the width and the line cap,
    so an instance may be shared between threads.  A ``QGuiApplication``
    must exist before the first measurement because Qt resolves fonts
    through it.
    """

    def measure(
        self,
        styled: StyledText,
        max_width: float | None = None,
        max_lines: int = 0,
    ) -> QSizeF:
        """Return the rendered size of *styled*.

        ``max_width`` of ``None`` leaves the text unconstrained horizontally;
        ``max_lines`` of ``0`` does not cap the number of lines.
        """
        width = UNBOUNDED_WIDTH if max_width is None else float(max_width)
        if styled.is_empty() or width <= 0:
            return QSizeF(0.0, 0.0)
        style = styled.style
        w, h = _measure(
            styled.text,
            style.family,
            float(style.point_size),
            style.bold,
            width,
            max(0, int(max_lines)),
        )
        return QSizeF(w, h)

    def line_height(self, style: TextStyle) -> float:
        """Height of a single line of text in *style*."""
        return _line_height(style.family, float(style.point_size), style.bold)


__all__ = [
    "BODY_STYLE",
    "CREATED_STYLE",
    "NAME_STYLE",
    "SHOW_MORE_STYLE",
    "SUMMARY_STYLE",
    "StyledText",
    "TextMetrics",
    "TextStyle",
    "UNBOUNDED_WIDTH",
]
