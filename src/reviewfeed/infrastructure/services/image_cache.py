"""Process-wide avatar image cache with per-key fetch de-duplication."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, ClassVar, Optional

from PySide6.QtGui import QImage

from ...errors import AvatarLoadError
from ...utils.image_decode import qimage_from_bytes

LOGGER = logging.getLogger(__name__)

ImageLoader = Callable[[str], bytes]


@dataclass(frozen=True)
class CacheStats:
    """Immutable snapshot of cache statistics."""

    hits: int = 0
    misses: int = 0

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate as a float in [0.0, 1.0]; 0.0 when no requests."""
        if self.total == 0:
            return 0.0
        return self.hits / self.total


class ImageCache:
    """Key → decoded image cache shared by every row that shows an avatar.

    At most one load runs per key: concurrent :meth:`fetch` calls for a key
    that is already loading receive the same :class:`Future`.  A successful
    load is stored and served to every later caller; a failed load resolves
    its future with :class:`AvatarLoadError` and leaves nothing behind, so the
    next :meth:`fetch` retries from scratch.

    Parameters
    ----------
    executor:
        Runs loaders and decoding.  A private ``ThreadPoolExecutor`` is
        created (and owned) when omitted.
    max_entries:
        Least-recently-used bound on decoded images.  ``0`` (the default)
        keeps every image for the lifetime of the cache.
    """

    _shared: ClassVar[Optional["ImageCache"]] = None
    _shared_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, executor: Executor | None = None, max_entries: int = 0) -> None:
        self._images: OrderedDict[str, QImage] = OrderedDict()
        self._pending: dict[str, Future] = {}
        self._max_entries = max(0, max_entries)
        self._lock = threading.Lock()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=4, thread_name_prefix="avatar"
        )
        self._hits = 0
        self._misses = 0

    # ------------------------------------------------------------------
    # Process-wide instance
    # ------------------------------------------------------------------

    @classmethod
    def shared(cls) -> "ImageCache":
        """Return the process-wide cache, creating it on first use.

        The shared instance lives until the interpreter exits; it is never
        torn down or replaced.
        """
        with cls._shared_lock:
            if cls._shared is None:
                cls._shared = cls()
            return cls._shared

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, key: str) -> QImage | None:
        """Return the cached image for *key*, or ``None`` on a miss."""
        with self._lock:
            image = self._images.get(key)
            if image is None:
                self._misses += 1
                return None
            self._images.move_to_end(key)
            self._hits += 1
            return image

    def fetch(self, key: str, loader: ImageLoader) -> Future:
        """Return a future resolving to the image for *key*.

        *loader* is called with *key* on the executor and must return the
        encoded image bytes.  It is not called when the image is cached or a
        load for *key* is already in flight.
        """
        with self._lock:
            image = self._images.get(key)
            if image is not None:
                self._images.move_to_end(key)
                self._hits += 1
                done: Future = Future()
                done.set_result(image)
                return done
            pending = self._pending.get(key)
            if pending is not None:
                return pending
            self._misses += 1
            future: Future = Future()
            self._pending[key] = future

        try:
            self._executor.submit(self._load, key, loader, future)
        except RuntimeError as exc:
            # Executor already shut down.
            with self._lock:
                self._pending.pop(key, None)
            future.set_exception(AvatarLoadError(f"Cannot schedule load for {key}: {exc}"))
        return future

    def is_pending(self, key: str) -> bool:
        with self._lock:
            return key in self._pending

    def invalidate(self, key: str) -> None:
        """Drop the cached image for *key*; in-flight loads are unaffected."""
        with self._lock:
            self._images.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._images.clear()

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._images)

    @property
    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses)

    def shutdown(self) -> None:
        """Shut down the executor if this cache created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load(self, key: str, loader: ImageLoader, future: Future) -> None:
        try:
            data = loader(key)
            image = qimage_from_bytes(data)
            if image is None or image.isNull():
                raise AvatarLoadError(f"Undecodable image data for {key}")
        except Exception as exc:
            error = exc if isinstance(exc, AvatarLoadError) else AvatarLoadError(f"{key}: {exc}")
            LOGGER.warning("Avatar load failed for %s: %s", key, exc)
            with self._lock:
                self._pending.pop(key, None)
            future.set_exception(error)
            return

        with self._lock:
            self._images[key] = image
            self._images.move_to_end(key)
            if self._max_entries and len(self._images) > self._max_entries:
                self._images.popitem(last=False)  # evict least recently used
            self._pending.pop(key, None)
        future.set_result(image)


__all__ = ["CacheStats", "ImageCache", "ImageLoader"]
