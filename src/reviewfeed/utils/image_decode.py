"""Decode raw image bytes into Qt images with a Pillow fallback."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError
from PIL.ImageQt import ImageQt
from PySide6.QtGui import QImage

_LOGGER = logging.getLogger(__name__)


def qimage_from_bytes(data: bytes) -> Optional[QImage]:
    """Return a :class:`QImage` decoded from *data*, or ``None``.

    Qt's own image plugins are tried first; Pillow handles anything they
    cannot read (and applies EXIF orientation while doing so).
    """

    if not data:
        return None
    image = QImage()
    if image.loadFromData(data):
        return image
    try:
        with Image.open(BytesIO(data)) as img:
            img = ImageOps.exif_transpose(img)
            qt_image = ImageQt(img.convert("RGBA"))
    except (UnidentifiedImageError, OSError, ValueError):
        _LOGGER.debug("Pillow could not decode %d bytes", len(data))
        return None
    # Detach from the Pillow-owned buffer.
    return qt_image.copy()
