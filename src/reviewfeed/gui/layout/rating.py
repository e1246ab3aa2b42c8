"""Star rating glyph sizing and rendering."""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass

from PySide6.QtCore import QPointF, QSizeF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPainterPath

from ... import config


@dataclass(frozen=True)
class RatingRendererConfig:
    """Fixed glyph metrics for the rating strip."""

    star_size: QSizeF
    spacing: float
    rating_range: tuple[int, int]
    filled_color: str = config.STAR_FILLED_COLOR
    empty_color: str = config.STAR_EMPTY_COLOR

    @classmethod
    def default(cls) -> "RatingRendererConfig":
        return cls(
            star_size=QSizeF(config.STAR_SIZE, config.STAR_SIZE),
            spacing=config.STAR_SPACING,
            rating_range=config.RATING_RANGE,
        )

    @property
    def star_count(self) -> int:
        return self.rating_range[1]

    def image_size(self) -> QSizeF:
        """Size of the rendered strip; independent of the rating value."""
        count = self.star_count
        width = (self.star_size.width() + self.spacing) * count - self.spacing
        return QSizeF(max(0.0, width), self.star_size.height())

    def clamp(self, rating: int) -> int:
        low, high = self.rating_range
        return max(low, min(high, int(rating)))


class RatingRenderer:
    """Paint rating strips, caching one image per clamped rating."""

    def __init__(self, renderer_config: RatingRendererConfig | None = None) -> None:
        self._config = renderer_config or RatingRendererConfig.default()
        self._images: dict[int, QImage] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> RatingRendererConfig:
        return self._config

    def glyphs(self, rating: int) -> tuple[bool, ...]:
        """Return filled (``True``) / empty (``False``) flags for every star."""
        filled = self._config.clamp(rating)
        return tuple(index < filled for index in range(self._config.star_count))

    def render(self, rating: int) -> QImage:
        key = self._config.clamp(rating)
        with self._lock:
            cached = self._images.get(key)
        if cached is not None:
            return cached
        image = self._paint(self.glyphs(key))
        with self._lock:
            return self._images.setdefault(key, image)

    def _paint(self, glyphs: tuple[bool, ...]) -> QImage:
        size = self._config.image_size()
        image = QImage(
            math.ceil(size.width()),
            math.ceil(size.height()),
            QImage.Format.Format_ARGB32_Premultiplied,
        )
        image.fill(Qt.GlobalColor.transparent)

        star_w = self._config.star_size.width()
        star_h = self._config.star_size.height()
        filled = QColor(self._config.filled_color)
        empty = QColor(self._config.empty_color)

        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setPen(Qt.PenStyle.NoPen)
            for index, is_filled in enumerate(glyphs):
                origin_x = index * (star_w + self._config.spacing)
                painter.setBrush(filled if is_filled else empty)
                painter.drawPath(_star_path(origin_x, star_w, star_h))
        finally:
            painter.end()
        return image


def _star_path(origin_x: float, width: float, height: float) -> QPainterPath:
    """Five-pointed star inscribed in the ``width`` x ``height`` box at *origin_x*."""

    center = QPointF(origin_x + width / 2.0, height / 2.0)
    outer = min(width, height) / 2.0
    inner = outer * 0.5
    path = QPainterPath()
    for point in range(10):
        radius = outer if point % 2 == 0 else inner
        angle = math.radians(-90.0 + point * 36.0)
        vertex = QPointF(center.x() + radius * math.cos(angle), center.y() + radius * math.sin(angle))
        if point == 0:
            path.moveTo(vertex)
        else:
            path.lineTo(vertex)
    path.closeSubpath()
    return path
