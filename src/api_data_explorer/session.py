"""Explorer session: the UI-facing state machine around the fetch controller.

Inbound events (source select, search typing, page select, refresh) each
build a fresh Query and issue a fetch. Fetches are numbered; only the most
recently issued one may write its outcome into the view state, so a slow
response for an abandoned tab or page never overwrites newer data.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from .config import settings
from .controller import DataFetchController
from .debounce import Debouncer
from .models import FetchFailure, Query, Source, ViewState
from .observability.logging import bind_fetch_context, clear_fetch_context, get_fetch_logger

logger = get_fetch_logger(__name__)

Listener = Callable[[ViewState], Any]


class ExplorerSession:
    """Holds the visible `{items, total, loading, error, page}` state for one explorer view."""

    def __init__(
        self,
        controller: DataFetchController,
        *,
        source: Source | None = None,
        page_size: int | None = None,
        debounce_seconds: float | None = None,
    ):
        self._controller = controller
        self._state = ViewState(
            source=source or settings.explorer.default_source,
            page_size=page_size or settings.explorer.page_size,
        )
        self._settled_search = ""
        self._seq = 0
        self._inflight: set[asyncio.Task[ViewState]] = set()
        self._listeners: list[Listener] = []
        if debounce_seconds is None:
            debounce_seconds = settings.explorer.debounce_seconds
        self._debouncer: Debouncer[str] = Debouncer(debounce_seconds, self._on_search_settled)

    # --- Read side ---

    @property
    def state(self) -> ViewState:
        return self._state.model_copy(deep=True)

    @property
    def settled_search_text(self) -> str:
        return self._settled_search

    @property
    def latest_seq(self) -> int:
        return self._seq

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a state snapshot on every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Inbound events ---

    def start(self) -> asyncio.Task[ViewState]:
        """Load the first page of the current source."""
        return self._issue()

    def select_source(self, source: Source) -> asyncio.Task[ViewState]:
        self._debouncer.cancel()
        self._settled_search = ""
        self._update(source=source, page=1, search_text="")
        return self._issue()

    def set_search_text(self, text: str) -> None:
        """Record typed text; the fetch waits until typing pauses."""
        self._update(search_text=text)
        self._debouncer.push(text)

    def clear_search(self) -> None:
        self.set_search_text("")

    def select_page(self, page: int) -> asyncio.Task[ViewState]:
        if page < 1:
            raise ValueError("page must be >= 1")
        self._update(page=page)
        return self._issue()

    def next_page(self) -> asyncio.Task[ViewState] | None:
        if not self._state.has_next_page:
            return None
        return self.select_page(self._state.page + 1)

    def prev_page(self) -> asyncio.Task[ViewState] | None:
        if not self._state.has_prev_page:
            return None
        return self.select_page(self._state.page - 1)

    def refresh(self) -> asyncio.Task[ViewState]:
        """Manual retry: drop the search, go back to page 1 and fetch again."""
        self._debouncer.cancel()
        self._settled_search = ""
        self._update(page=1, search_text="")
        return self._issue()

    async def wait_until_idle(self) -> ViewState:
        """Wait for a pending search and every in-flight fetch to finish."""
        while self._debouncer.pending or self._inflight:
            await self._debouncer.wait()
            if self._inflight:
                await asyncio.wait(set(self._inflight))
        return self.state

    # --- Internals ---

    def _on_search_settled(self, text: str) -> None:
        if text == self._settled_search:
            return
        self._settled_search = text
        self._update(page=1)
        self._issue()

    def _issue(self) -> asyncio.Task[ViewState]:
        self._seq += 1
        query = Query(
            source=self._state.source,
            page=self._state.page,
            page_size=self._state.page_size,
            search_text=self._settled_search,
        )
        self._update(loading=True, error=None)
        task = asyncio.get_running_loop().create_task(self._run(self._seq, query))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _run(self, seq: int, query: Query) -> ViewState:
        bind_fetch_context(seq, query.source.value)
        try:
            logger.info("fetch_issued", page=query.page, page_size=query.page_size, search=query.search_text)
            outcome = await self._controller.fetch(query)

            if seq != self._seq:
                logger.debug("fetch_discarded", latest_seq=self._seq)
                return self.state

            if isinstance(outcome, FetchFailure):
                logger.warning("fetch_failed", kind=outcome.kind.value, error=outcome.message)
                self._update(items=[], total=0, loading=False, error=outcome.message)
            else:
                logger.info("fetch_applied", items=len(outcome.items), total=outcome.total)
                self._update(items=list(outcome.items), total=outcome.total, loading=False, error=None)
            return self.state
        finally:
            clear_fetch_context()

    def _update(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                # State is already applied; keep notifying the rest
                logger.exception("listener_failed", listener=getattr(listener, "__qualname__", repr(listener)))
