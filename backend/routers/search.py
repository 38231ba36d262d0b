"""Search routes: JSON API, the HTML results page and the header widget socket."""

import logging

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from backend.config import settings
from backend.models.content import ContentIndex, ScoredResult
from backend.models.search import PreviewResponse, SearchResponse, SearchResult, WidgetEvent
from backend.services.content_service import get_content, load_content
from backend.services.header_search import HeaderSearchWidget, WidgetUpdate
from backend.services.pagination import paginate
from backend.services.render_service import LOAD_ERROR_MESSAGE, render_search_page
from backend.services.search_service import (
    format_result,
    preview,
    result_link,
    result_summary,
    search as search_content,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])

# Where the site links to the search page (form action, Enter redirect)
SEARCH_PAGE_PATH = f"{settings.base_url}search/"


async def _require_content() -> ContentIndex:
    result = await load_content()
    if not result.ok:
        raise HTTPException(status_code=503, detail=LOAD_ERROR_MESSAGE)
    return result.index


def _to_search_result(r: ScoredResult) -> SearchResult:
    record = r.record
    return SearchResult(
        type=r.type,
        title=record.label,
        label=format_result(r),
        slug=record.slug,
        url=result_link(r, settings.base_url),
        summary=result_summary(r),
        score=r.score,
        image=getattr(record, "image", None),
        category=getattr(record, "category", None),
    )


# ── JSON API ─────────────────────────────────────────────────────────────────

@router.get("/api/search", response_model=SearchResponse)
async def search(q: str = "", page: int = 1):
    """Ranked search across games, pages and categories.

    - q: search query (case-insensitive substring match)
    - page: 1-indexed page number, clamped to the available range
    """
    index = await _require_content()
    view = paginate(search_content(q, index), page, settings.results_per_page)

    return {
        "query": q,
        "results": [_to_search_result(r) for r in view.items],
        "total": view.total,
        "page": view.page,
        "total_pages": view.total_pages,
        "controls": view.controls,
    }


@router.get("/api/search/preview", response_model=PreviewResponse)
async def search_preview(q: str = ""):
    """Top results for the header dropdown."""
    index = await _require_content()
    results = preview(q, index, settings.preview_limit)
    return {"query": q, "results": [_to_search_result(r) for r in results]}


# ── HTML page ────────────────────────────────────────────────────────────────

@router.get("/search/", response_class=HTMLResponse)
async def search_page(q: str | None = None, page: int = 1):
    """Server-rendered search results page seeded from the q parameter."""
    result = await load_content()
    if not result.ok:
        return HTMLResponse(
            content=render_search_page(q, settings.base_url, error=LOAD_ERROR_MESSAGE),
            status_code=503,
        )

    view = None
    if q:
        view = paginate(search_content(q, result.index), page, settings.results_per_page)
    return HTMLResponse(content=render_search_page(q, settings.base_url, view=view))


if SEARCH_PAGE_PATH != "/search/":
    router.add_api_route(
        SEARCH_PAGE_PATH,
        search_page,
        response_class=HTMLResponse,
        include_in_schema=False,
    )


# ── Header widget ────────────────────────────────────────────────────────────

@router.websocket("/ws/search")
async def header_search_socket(websocket: WebSocket):
    """Drive one header search widget per connection.

    Client messages: {"event": "input"|"enter"|"escape"|"click_outside"|"blur",
    "value": str}. Server messages: widget updates {"state", "html", "active"}
    or {"redirect": url} after Enter, and {"error": ...} for frames that are
    not a valid event.
    """
    await websocket.accept()

    loaded = await load_content()
    if not loaded.ok:
        logger.error("Failed to initialize search - content not loaded")

    async def send_update(update: WidgetUpdate) -> None:
        await websocket.send_json(update.as_dict())

    widget = HeaderSearchWidget(
        index_provider=get_content,
        on_render=send_update,
        delay=settings.debounce_seconds,
        limit=settings.preview_limit,
        base_url=settings.base_url,
    )

    try:
        while True:
            frame = await websocket.receive_text()
            try:
                message = WidgetEvent.model_validate_json(frame)
            except ValidationError as e:
                await websocket.send_json({"error": f"Invalid message: {e.error_count()} error(s)"})
                continue
            event = message.event
            value = message.value or ""

            if event == "input":
                await send_update(widget.input(value))
            elif event == "enter":
                url = widget.enter(value)
                if url:
                    await websocket.send_json({"redirect": url})
            elif event == "escape":
                await send_update(widget.escape())
            elif event == "click_outside":
                await send_update(widget.click_outside())
            elif event == "blur":
                await send_update(widget.blur())
            else:
                await websocket.send_json({"error": f"Unknown event: {event}"})
    except WebSocketDisconnect:
        pass
    finally:
        widget.close()
