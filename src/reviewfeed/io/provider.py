"""Review page providers."""

from __future__ import annotations

import logging
import random
import time
from pathlib import Path
from typing import Protocol

from .. import config
from ..errors import FetchTransportError

LOGGER = logging.getLogger(__name__)


class ReviewsProvider(Protocol):
    """Source of raw page payloads.

    ``fetch_page`` blocks until bytes are available; the controller runs it
    on a background executor.  Implementations raise
    :class:`FetchTransportError` when no payload can be produced and own any
    timeout policy.
    """

    def fetch_page(self, offset: int) -> bytes: ...


class FixtureReviewsProvider:
    """Serve a JSON fixture from disk with a simulated network delay.

    The same payload is returned for every offset.
    """

    def __init__(
        self,
        path: Path,
        latency: tuple[float, float] = config.FIXTURE_LATENCY_SEC,
    ) -> None:
        self._path = Path(path)
        low, high = latency
        self._latency = (max(0.0, low), max(0.0, low, high))

    @property
    def path(self) -> Path:
        return self._path

    def fetch_page(self, offset: int) -> bytes:
        delay = random.uniform(*self._latency)
        if delay > 0:
            time.sleep(delay)

        if not self._path.is_file():
            raise FetchTransportError(f"Fixture not found: {self._path}")
        try:
            data = self._path.read_bytes()
        except OSError as exc:
            raise FetchTransportError(f"Cannot read fixture {self._path}: {exc}") from exc
        LOGGER.debug("Served %d bytes for offset %d from %s", len(data), offset, self._path)
        return data


__all__ = ["FixtureReviewsProvider", "ReviewsProvider"]
