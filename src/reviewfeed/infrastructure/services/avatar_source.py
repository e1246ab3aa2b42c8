"""HTTP source for avatar image bytes."""

from __future__ import annotations

import logging

import httpx

from ...errors import AvatarLoadError

LOGGER = logging.getLogger(__name__)


class HttpAvatarSource:
    """Download avatar bytes for a URL.

    Usable directly as an :class:`ImageCache` loader.  Calls are blocking and
    run on the cache's executor.
    """

    def __init__(self, client: httpx.Client | None = None, timeout: float = 10.0) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout), follow_redirects=True)

    def __call__(self, url: str) -> bytes:
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise AvatarLoadError(f"Failed to download {url}: {exc}") from exc
        LOGGER.debug("Downloaded %d bytes from %s", len(response.content), url)
        return response.content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
