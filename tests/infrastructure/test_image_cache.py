"""Tests for the avatar ImageCache."""

import threading

import pytest

from reviewfeed.errors import AvatarLoadError
from reviewfeed.infrastructure.services.image_cache import CacheStats, ImageCache


class CountingLoader:
    def __init__(self, payload: bytes, fail_first: int = 0):
        self.payload = payload
        self.fail_first = fail_first
        self.calls: list[str] = []

    def __call__(self, key: str) -> bytes:
        self.calls.append(key)
        if len(self.calls) <= self.fail_first:
            raise AvatarLoadError("offline")
        return self.payload


class TestFetch:
    def test_success_is_cached(self, qapp, inline_executor, png_bytes):
        cache = ImageCache(executor=inline_executor)
        loader = CountingLoader(png_bytes)

        image = cache.fetch("a", loader).result()

        assert image.width() == 4
        assert cache.get("a") is image
        assert cache.fetch("a", loader).result() is image
        assert loader.calls == ["a"]
        assert inline_executor.submitted == 1

    def test_pending_key_shares_future(self, qapp, deferred_executor, png_bytes):
        cache = ImageCache(executor=deferred_executor)
        loader = CountingLoader(png_bytes)

        first = cache.fetch("a", loader)
        second = cache.fetch("a", loader)

        assert first is second
        assert cache.is_pending("a")
        assert len(deferred_executor.queue) == 1

        deferred_executor.run_next()

        assert first.result().width() == 4
        assert not cache.is_pending("a")
        assert loader.calls == ["a"]

    def test_failure_does_not_poison_key(self, qapp, inline_executor, png_bytes):
        cache = ImageCache(executor=inline_executor)
        loader = CountingLoader(png_bytes, fail_first=1)

        failed = cache.fetch("a", loader)
        with pytest.raises(AvatarLoadError):
            failed.result()
        assert cache.get("a") is None
        assert not cache.is_pending("a")

        assert cache.fetch("a", loader).result().width() == 4
        assert loader.calls == ["a", "a"]

    def test_undecodable_bytes_fail(self, qapp, inline_executor):
        cache = ImageCache(executor=inline_executor)

        future = cache.fetch("a", CountingLoader(b"not an image"))

        with pytest.raises(AvatarLoadError):
            future.result()
        assert cache.size == 0

    def test_unexpected_loader_error_is_wrapped(self, qapp, inline_executor):
        cache = ImageCache(executor=inline_executor)

        def _loader(key):
            raise KeyError(key)

        with pytest.raises(AvatarLoadError):
            cache.fetch("a", _loader).result()

    def test_shut_down_executor_fails_future(self, qapp, png_bytes):
        cache = ImageCache()
        cache.shutdown()

        future = cache.fetch("a", CountingLoader(png_bytes))

        with pytest.raises(AvatarLoadError):
            future.result()
        assert not cache.is_pending("a")

    def test_concurrent_fetches_load_once(self, qapp, png_bytes):
        release = threading.Event()
        calls = []

        def _loader(key):
            calls.append(key)
            release.wait(5)
            return png_bytes

        cache = ImageCache()
        barrier = threading.Barrier(6)
        futures = []

        def _caller():
            barrier.wait()
            futures.append(cache.fetch("a", _loader))

        threads = [threading.Thread(target=_caller) for _ in range(6)]
        try:
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join(5)
            release.set()
            images = {id(future.result(5)) for future in futures}
            assert len(images) == 1
            assert calls == ["a"]
        finally:
            cache.shutdown()


class TestBounds:
    def test_unbounded_by_default(self, qapp, inline_executor, png_bytes):
        cache = ImageCache(executor=inline_executor)
        loader = CountingLoader(png_bytes)
        for key in "abcdef":
            cache.fetch(key, loader)
        assert cache.size == 6

    def test_lru_eviction(self, qapp, inline_executor, png_bytes):
        cache = ImageCache(executor=inline_executor, max_entries=2)
        loader = CountingLoader(png_bytes)

        cache.fetch("a", loader)
        cache.fetch("b", loader)
        cache.get("a")
        cache.fetch("c", loader)

        assert cache.size == 2
        assert cache.get("b") is None
        assert cache.get("a") is not None
        assert cache.get("c") is not None

    def test_invalidate_and_clear(self, qapp, inline_executor, png_bytes):
        cache = ImageCache(executor=inline_executor)
        loader = CountingLoader(png_bytes)
        cache.fetch("a", loader)
        cache.fetch("b", loader)

        cache.invalidate("a")
        assert cache.get("a") is None
        assert cache.size == 1

        cache.clear()
        assert cache.size == 0


class TestStats:
    def test_hits_and_misses(self, qapp, inline_executor, png_bytes):
        cache = ImageCache(executor=inline_executor)
        loader = CountingLoader(png_bytes)

        cache.get("a")
        cache.fetch("a", loader)
        cache.get("a")
        cache.fetch("a", loader)

        assert cache.stats == CacheStats(hits=2, misses=2)
        assert cache.stats.hit_rate == 0.5

    def test_empty_hit_rate(self):
        assert CacheStats().hit_rate == 0.0
        assert CacheStats().total == 0


def test_shared_instance_is_reused():
    assert ImageCache.shared() is ImageCache.shared()
