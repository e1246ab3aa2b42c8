"""Review list pagination (pure Python, no Qt dependency).

Owns the :class:`ListState` of the review screen and is its only writer.
Pages are fetched through a :class:`ReviewsProvider` on a background
executor; every completed snapshot is published through
:attr:`PaginationController.state_changed`.

Loading rules:

* at most one page fetch is in flight; :meth:`request_page` is a no-op while
  one is running or once every page has been loaded;
* a successful page appends new rows and advances ``next_offset`` by the page
  size;
* a failed page (transport or decode) changes nothing but ``is_loading``; the
  next :meth:`request_page` retries the same offset.  Retries are only ever
  caller-initiated (pull-to-refresh or the scroll trigger).
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import replace
from functools import partial
from typing import Callable, Optional

from ... import config
from ...domain.models.review import ReviewPage
from ...domain.models.rows import ListState, RowModel
from ...errors import FetchTransportError, ReviewFeedError
from ...errors.handler import ErrorHandler, ErrorSeverity
from ...events.bus import EventBus
from ...events.feed_events import PageFailedEvent, PageLoadedEvent, RowExpandedEvent
from ...io.decoder import decode_page
from ...io.provider import ReviewsProvider
from .signal import Signal

LOGGER = logging.getLogger(__name__)

Dispatcher = Callable[[Callable[[], None]], None]


def should_load_next_page(
    viewport_height: float,
    content_height: float,
    target_offset_y: float,
    screens: float = config.PREFETCH_SCREENS,
) -> bool:
    """Return ``True`` when fewer than *screens* viewports of content remain.

    *target_offset_y* is the offset the current scroll gesture will come to
    rest at, so the next page is requested before the user reaches the end.
    """
    trigger_distance = viewport_height * screens
    remaining_distance = content_height - viewport_height - target_offset_y
    return remaining_distance <= trigger_distance


def _call_now(callback: Callable[[], None]) -> None:
    callback()


class PaginationController:
    """Loading state machine for the review list.

    Parameters
    ----------
    provider:
        Source of raw page payloads.
    page_size:
        Offset increment per successful page.
    executor:
        Runs ``provider.fetch_page``.  A private single-worker executor is
        created (and owned) when omitted.
    dispatcher:
        Called with each fetch completion; use it to hop onto the thread that
        owns the UI.  By default completions run on the executor thread.
        State mutation is serialised by a lock either way.
    """

    def __init__(
        self,
        provider: ReviewsProvider,
        page_size: int = config.DEFAULT_PAGE_SIZE,
        executor: Executor | None = None,
        dispatcher: Dispatcher | None = None,
        decoder: Callable[[bytes], ReviewPage] = decode_page,
        event_bus: EventBus | None = None,
        error_handler: ErrorHandler | None = None,
        collapsed_max_lines: int = config.COLLAPSED_MAX_LINES,
        prefetch_screens: float = config.PREFETCH_SCREENS,
    ) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._provider = provider
        self._decode = decoder
        self._dispatch = dispatcher or _call_now
        self._event_bus = event_bus
        self._error_handler = error_handler or ErrorHandler(LOGGER, event_bus)
        self._collapsed_max_lines = collapsed_max_lines
        self._prefetch_screens = prefetch_screens
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="reviews"
        )

        self._lock = threading.RLock()
        # Serialises notifications so snapshots reach subscribers in order.
        # Subscribers run outside _lock and may read state from any thread.
        self._notify_lock = threading.RLock()
        self._state = ListState(page_size=page_size)
        self._in_flight = False

        # Emits (ListState)
        self.state_changed = Signal()

    # -- properties --------------------------------------------------------

    @property
    def state(self) -> ListState:
        with self._lock:
            return self._state

    @property
    def is_fetching(self) -> bool:
        with self._lock:
            return self._in_flight

    # -- public API --------------------------------------------------------

    def request_page(self) -> bool:
        """Start loading the next page.

        Returns ``True`` when a fetch was started and ``False`` when the call
        was ignored because a fetch is already running or nothing is left.
        """
        with self._notify_lock:
            with self._lock:
                if self._in_flight or not self._state.has_more:
                    return False
                # Claim the gate before any asynchronous work is scheduled.
                self._in_flight = True
                offset = self._state.next_offset
                snapshot = None
                if not self._state.rows:
                    self._state = replace(self._state, is_loading=True)
                    snapshot = self._state
            if snapshot is not None:
                self._emit(snapshot)

        LOGGER.debug("Requesting reviews at offset %d", offset)
        try:
            future = self._executor.submit(self._provider.fetch_page, offset)
        except RuntimeError as exc:
            self._apply_failure(offset, FetchTransportError(f"Fetch could not be scheduled: {exc}"))
            return False
        future.add_done_callback(partial(self._on_fetch_done, offset))
        return True

    def on_scroll_will_end(
        self,
        viewport_height: float,
        content_height: float,
        target_offset_y: float,
    ) -> bool:
        """Request the next page if the projected offset is near the end."""
        if should_load_next_page(
            viewport_height, content_height, target_offset_y, self._prefetch_screens
        ):
            return self.request_page()
        return False

    def expand_row(self, row_id: str) -> bool:
        """Lift the line cap of the row identified by *row_id*.

        Returns ``True`` when a new snapshot was published.  Unknown ids and
        rows that are already expanded leave the state untouched.
        """
        with self._notify_lock:
            with self._lock:
                index = self._state.index_of(row_id)
                if index < 0:
                    return False
                row = self._state.rows[index]
                if row.is_expanded:
                    return False
                rows = list(self._state.rows)
                rows[index] = row.expanded()
                self._state = replace(self._state, rows=tuple(rows))
                snapshot = self._state
            self._emit(snapshot)
        self._publish(RowExpandedEvent(row_id=row_id))
        return True

    def shutdown(self) -> None:
        """Shut down the executor if this controller created it.

        A fetch that is still running completes normally and its page is
        merged; with no subscribers left the resulting emission is a no-op.
        """
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    # -- internal ----------------------------------------------------------

    def _on_fetch_done(self, offset: int, future: Future) -> None:
        try:
            page: Optional[ReviewPage] = self._decode(future.result())
            error: Optional[ReviewFeedError] = None
        except ReviewFeedError as exc:
            page, error = None, exc
        except Exception as exc:
            page, error = None, FetchTransportError(f"Provider failed: {exc}")

        if page is not None:
            self._dispatch(partial(self._apply_page, page))
        else:
            self._dispatch(partial(self._apply_failure, offset, error))

    def _apply_page(self, page: ReviewPage) -> None:
        with self._notify_lock:
            with self._lock:
                state = self._state
                new_rows = tuple(
                    RowModel.from_record(record, max_lines=self._collapsed_max_lines)
                    for record in page.items
                )
                offset = state.next_offset
                next_offset = offset + state.page_size
                self._state = replace(
                    state,
                    rows=state.rows + new_rows,
                    next_offset=next_offset,
                    total_count=page.count,
                    has_more=next_offset < page.count,
                    is_loading=False,
                )
                self._in_flight = False
                LOGGER.info(
                    "Loaded %d reviews at offset %d (%d of %d)",
                    len(new_rows),
                    offset,
                    len(self._state.rows),
                    page.count,
                )
                snapshot = self._state
            self._emit(snapshot)
        self._publish(PageLoadedEvent(offset=offset, item_count=len(new_rows), total_count=page.count))

    def _apply_failure(self, offset: int, error: ReviewFeedError) -> None:
        with self._notify_lock:
            with self._lock:
                self._state = replace(self._state, is_loading=False)
                self._in_flight = False
                snapshot = self._state
            self._emit(snapshot)
        self._error_handler.handle(error, ErrorSeverity.WARNING, {"offset": offset})
        self._publish(PageFailedEvent(offset=offset, error=error))

    def _emit(self, snapshot: ListState) -> None:
        self.state_changed.emit(snapshot)

    def _publish(self, event) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)
