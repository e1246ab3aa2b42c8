"""Resolve avatar images for rows, falling back to a placeholder."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Callable, Optional

from PySide6.QtGui import QImage

from ...infrastructure.services.image_cache import ImageCache, ImageLoader

LOGGER = logging.getLogger(__name__)


class AvatarResolver:
    """Hand out avatars immediately and deliver downloaded ones later.

    A failed download only affects the row that asked for it: the callback
    receives the placeholder and the next request for the URL tries again.
    """

    def __init__(self, cache: ImageCache, source: ImageLoader, placeholder: QImage) -> None:
        self._cache = cache
        self._source = source
        self._placeholder = placeholder

    @property
    def placeholder(self) -> QImage:
        return self._placeholder

    def avatar(
        self,
        url: Optional[str],
        on_ready: Callable[[QImage], None] | None = None,
    ) -> QImage:
        """Return the image to show now for *url*.

        When the avatar is not cached yet the placeholder is returned and
        *on_ready* is called with the final image once the download settles.
        """
        if not url:
            return self._placeholder

        # Cached images come back as an already completed future.
        future = self._cache.fetch(url, self._source)
        if future.done() and future.exception() is None:
            return future.result()
        if on_ready is not None:
            future.add_done_callback(lambda done: on_ready(self._result_or_placeholder(done)))
        return self._placeholder

    def _result_or_placeholder(self, future: Future) -> QImage:
        error = future.exception()
        if error is not None:
            LOGGER.debug("Using placeholder avatar: %s", error)
            return self._placeholder
        return future.result()
