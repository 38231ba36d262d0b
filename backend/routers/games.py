"""Game listing routes over the content index."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from backend.config import settings
from backend.models.content import ContentIndex, GameRecord
from backend.services.content_service import load_content
from backend.services.pagination import paginate
from backend.services.render_service import (
    LOAD_ERROR_MESSAGE,
    render_error,
    render_game_cards,
    render_pagination,
)
from backend.services.text_utils import slugify

router = APIRouter(prefix="/api/games", tags=["games"])


async def _require_content() -> ContentIndex:
    result = await load_content()
    if not result.ok:
        raise HTTPException(status_code=503, detail=LOAD_ERROR_MESSAGE)
    return result.index


def filter_games(
    games: tuple[GameRecord, ...],
    category: str | None = None,
    tag: str | None = None,
) -> list[GameRecord]:
    """Games in a category (matched by name or slug) and/or carrying an exact tag."""
    selected = list(games)
    if category:
        wanted = slugify(category)
        selected = [g for g in selected if g.category and slugify(g.category) == wanted]
    if tag:
        selected = [g for g in selected if tag in g.tags]
    return selected


@router.get("")
async def list_games(page: int = 1, category: str | None = None, tag: str | None = None):
    """List games a page at a time, optionally filtered by category or tag."""
    index = await _require_content()
    games = filter_games(index.games, category, tag)
    view = paginate(games, page, settings.results_per_page, full_window=True)
    return {
        "games": [g.model_dump() for g in view.items],
        "total": view.total,
        "page": view.page,
        "total_pages": view.total_pages,
        "controls": [c.model_dump() for c in view.controls],
    }


@router.get("/fragment", response_class=HTMLResponse)
async def list_games_fragment(page: int = 1, category: str | None = None, tag: str | None = None):
    """Game cards and pagination controls as HTML for the all-games page."""
    result = await load_content()
    if not result.ok:
        return HTMLResponse(content=render_error(LOAD_ERROR_MESSAGE), status_code=503)

    games = filter_games(result.index.games, category, tag)
    view = paginate(games, page, settings.results_per_page, full_window=True)
    params = {"category": category, "tag": tag}
    return HTMLResponse(
        content=(
            f'<div id="allGamesContainer">{render_game_cards(view.items, settings.base_url)}</div>'
            f'<nav id="gamesPagination">{render_pagination(view, extra_params=params)}</nav>'
        )
    )


@router.get("/{slug}")
async def get_game(slug: str):
    """Get one game by slug."""
    index = await _require_content()
    for game in index.games:
        if game.slug == slug:
            return game.model_dump()
    raise HTTPException(status_code=404, detail="Game not found")
