"""Tests for the debouncer and the header search widget state machine."""

import asyncio

import pytest

from backend.services.debounce import Debouncer
from backend.services.header_search import HeaderSearchWidget, WidgetState, search_page_url
from backend.services.search_service import search

BASE = "/bros-unblocked/"


# ── Debouncer ────────────────────────────────────────────────────────────────


class TestDebouncer:
    @pytest.mark.asyncio
    async def test_last_call_wins(self):
        loop = asyncio.get_running_loop()
        fired = []
        debouncer = Debouncer(0.05, lambda value: fired.append((value, loop.time())))

        start = loop.time()
        debouncer.call("b")
        await asyncio.sleep(0.01)
        debouncer.call("br")
        await asyncio.sleep(0.01)
        last = loop.time()
        debouncer.call("bro")
        assert debouncer.pending

        await asyncio.sleep(0.12)
        assert [value for value, _ in fired] == ["bro"]
        assert fired[0][1] - last >= 0.045
        assert fired[0][1] - start >= 0.065
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_cancel(self):
        fired = []
        debouncer = Debouncer(0.02, fired.append)
        debouncer.call("x")
        debouncer.cancel()
        await asyncio.sleep(0.05)
        assert fired == []

    @pytest.mark.asyncio
    async def test_coroutine_callback(self):
        fired = []

        async def callback(value):
            fired.append(value)

        debouncer = Debouncer(0.01, callback)
        debouncer.call("async")
        await asyncio.sleep(0.03)
        await debouncer.wait()
        assert fired == ["async"]

    @pytest.mark.asyncio
    async def test_separate_pauses_fire_separately(self):
        fired = []
        debouncer = Debouncer(0.01, fired.append)
        debouncer.call("one")
        await asyncio.sleep(0.04)
        debouncer.call("two")
        await asyncio.sleep(0.04)
        assert fired == ["one", "two"]


# ── Widget ───────────────────────────────────────────────────────────────────


@pytest.fixture
def make_widget(content_index):
    widgets = []

    def factory(**kwargs):
        kwargs.setdefault("index_provider", lambda: content_index)
        kwargs.setdefault("delay", 0.02)
        kwargs.setdefault("base_url", BASE)
        widget = HeaderSearchWidget(**kwargs)
        widgets.append(widget)
        return widget

    yield factory
    for widget in widgets:
        widget.close()


async def _settle(widget, delay=0.06):
    await asyncio.sleep(delay)
    await widget.wait()


class TestHeaderSearchWidget:
    @pytest.mark.asyncio
    async def test_keystrokes_search_once_with_last_value(self, make_widget):
        queries = []

        def counting_search(query, index):
            queries.append(query)
            return search(query, index)

        widget = make_widget(search_fn=counting_search)
        widget.input("k")
        await asyncio.sleep(0.005)
        widget.input("ka")
        await asyncio.sleep(0.005)
        update = widget.input("kar")
        assert update.state == WidgetState.DEBOUNCING
        assert queries == []

        await _settle(widget)
        assert queries == ["kar"]
        assert widget.state == WidgetState.RENDERED
        assert widget.active
        assert "Kart Racer" in widget.html

    @pytest.mark.asyncio
    async def test_preview_limited_to_five(self, make_widget):
        widget = make_widget()
        widget.input("a")
        await _settle(widget)
        assert len(widget.results) == 5
        assert widget.html.count('class="search-result ') == 5

    @pytest.mark.asyncio
    async def test_no_results_still_rendered(self, make_widget):
        widget = make_widget()
        widget.input("zzzz")
        await _settle(widget)
        assert widget.state == WidgetState.RENDERED
        assert "No results found" in widget.html

    @pytest.mark.asyncio
    async def test_on_render_receives_update(self, make_widget):
        updates = []

        async def on_render(update):
            updates.append(update)

        widget = make_widget(on_render=on_render)
        widget.input("bros")
        await _settle(widget)
        assert len(updates) == 1
        assert updates[0].as_dict()["state"] == "rendered"
        assert updates[0].active

    @pytest.mark.asyncio
    async def test_empty_input_goes_idle(self, make_widget):
        widget = make_widget()
        widget.input("bros")
        await _settle(widget)
        update = widget.input("   ")
        assert update.state == WidgetState.IDLE
        assert update.html == ""
        assert not update.active

    @pytest.mark.asyncio
    async def test_empty_input_cancels_pending_search(self, make_widget):
        queries = []
        widget = make_widget(search_fn=lambda q, i: queries.append(q) or [])
        widget.input("bros")
        widget.input("")
        await _settle(widget)
        assert queries == []
        assert widget.state == WidgetState.IDLE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("event", ["escape", "click_outside", "blur"])
    async def test_dismiss_events(self, make_widget, event):
        widget = make_widget()
        widget.input("bros")
        await _settle(widget)
        assert widget.active

        update = getattr(widget, event)()
        assert update.state == WidgetState.IDLE
        assert update.html == ""

    @pytest.mark.asyncio
    async def test_escape_while_debouncing_cancels(self, make_widget):
        queries = []
        widget = make_widget(search_fn=lambda q, i: queries.append(q) or [])
        widget.input("bros")
        widget.escape()
        await _settle(widget)
        assert queries == []

    @pytest.mark.asyncio
    async def test_enter_bypasses_debounce(self, make_widget):
        queries = []
        widget = make_widget(search_fn=lambda q, i: queries.append(q) or [])
        widget.input("mario kart")
        url = widget.enter("  mario kart ")
        assert url == "/bros-unblocked/search/?q=mario%20kart"
        await _settle(widget)
        assert queries == []
        assert widget.state == WidgetState.IDLE

    def test_enter_with_empty_value(self, make_widget):
        widget = make_widget()
        assert widget.enter("   ") is None

    @pytest.mark.asyncio
    async def test_unloaded_index_stays_idle(self, make_widget):
        widget = make_widget(index_provider=lambda: None)
        widget.input("bros")
        await _settle(widget)
        assert widget.state == WidgetState.IDLE
        assert widget.html == ""

    @pytest.mark.asyncio
    async def test_unloaded_index_reports_idle(self, make_widget):
        updates = []

        async def on_render(update):
            updates.append(update)

        widget = make_widget(index_provider=lambda: None, on_render=on_render)
        widget.input("bros")
        await _settle(widget)
        assert [u.state for u in updates] == [WidgetState.IDLE]
        assert updates[0].active is False

    def test_search_page_url_encoding(self):
        assert search_page_url(BASE, "a&b/c") == "/bros-unblocked/search/?q=a%26b%2Fc"
        assert search_page_url(BASE, "it's (fun)!") == "/bros-unblocked/search/?q=it's%20(fun)!"
