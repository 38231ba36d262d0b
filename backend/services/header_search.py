"""Header search widget: debounced live preview of the top results.

States:
    IDLE        dropdown hidden, no timer pending
    DEBOUNCING  a keystroke arrived, timer pending
    RENDERED    dropdown shown (results or the no-results line)

Every keystroke restarts the timer. Empty input, Escape, blur and clicks
outside the search box return to IDLE. Enter skips the timer and hands
back the URL of the full search page.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable
from urllib.parse import quote

from backend.models.content import ContentIndex, ScoredResult
from backend.services import search_service
from backend.services.debounce import Debouncer
from backend.services.render_service import render_dropdown

logger = logging.getLogger(__name__)


class WidgetState:
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    RENDERED = "rendered"


@dataclass(frozen=True)
class WidgetUpdate:
    state: str
    html: str
    active: bool

    def as_dict(self) -> dict:
        return {"state": self.state, "html": self.html, "active": self.active}


# Characters encodeURIComponent leaves alone
URI_COMPONENT_SAFE = "!~*'()"


def search_page_url(base_url: str, query: str) -> str:
    return f"{base_url}search/?q={quote(query, safe=URI_COMPONENT_SAFE)}"


class HeaderSearchWidget:
    def __init__(
        self,
        index_provider: Callable[[], ContentIndex | None],
        on_render: Callable[[WidgetUpdate], Awaitable[None]] | None = None,
        delay: float = 0.3,
        limit: int = 5,
        base_url: str = "/",
        search_fn: Callable[[str, ContentIndex | None], list[ScoredResult]] = search_service.search,
    ):
        self.index_provider = index_provider
        self.on_render = on_render
        self.limit = limit
        self.base_url = base_url
        self.search_fn = search_fn

        self.state = WidgetState.IDLE
        self.query = ""
        self.results: list[ScoredResult] = []
        self.html = ""
        self._debouncer = Debouncer(delay, self._run_search)

    @property
    def active(self) -> bool:
        return self.state == WidgetState.RENDERED

    def snapshot(self) -> WidgetUpdate:
        return WidgetUpdate(state=self.state, html=self.html, active=self.active)

    # ── Events ───────────────────────────────────────────────────────────

    def input(self, value: str) -> WidgetUpdate:
        """A keystroke changed the input to value."""
        self.query = value
        if not value.strip():
            return self._reset()

        self._debouncer.call(value)
        self.state = WidgetState.DEBOUNCING
        return self.snapshot()

    def enter(self, value: str) -> str | None:
        """Enter pressed: URL of the search results page, or None if empty."""
        self._debouncer.cancel()
        self.state = WidgetState.IDLE
        query = value.strip()
        if not query:
            return None
        return search_page_url(self.base_url, query)

    def escape(self) -> WidgetUpdate:
        return self._reset()

    def click_outside(self) -> WidgetUpdate:
        return self._reset()

    def blur(self) -> WidgetUpdate:
        return self._reset()

    def close(self) -> None:
        """Drop any pending or running search (the page went away)."""
        self._debouncer.close()

    async def wait(self) -> None:
        await self._debouncer.wait()

    # ── Internals ────────────────────────────────────────────────────────

    def _reset(self) -> WidgetUpdate:
        self._debouncer.cancel()
        self.state = WidgetState.IDLE
        self.results = []
        self.html = ""
        return self.snapshot()

    async def _run_search(self, value: str) -> None:
        index = self.index_provider()
        if index is None:
            logger.warning("Header search skipped: content index not loaded")
            self.state = WidgetState.IDLE
            self.results = []
            self.html = ""
        else:
            self.results = self.search_fn(value, index)[: self.limit]
            self.html = render_dropdown(self.results, self.base_url)
            self.state = WidgetState.RENDERED

        if self.on_render is not None:
            await self.on_render(self.snapshot())
