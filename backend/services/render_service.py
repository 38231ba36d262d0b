"""HTML rendering for search results, pagination and the header dropdown.

Everything here consumes already-computed data (ranked results, PageView)
and returns markup. Each render produces the complete contents of its
container so callers replace rather than patch what is displayed.
"""

from urllib.parse import urlencode

from backend.models.content import GameRecord, ScoredResult
from backend.services.pagination import PageView
from backend.services.search_service import format_result, result_link, result_summary
from backend.services.text_utils import esc, truncate

LOAD_ERROR_MESSAGE = "Failed to load search content. Please try again later."


# ── Search results ───────────────────────────────────────────────────────────

def render_result_cards(results: list[ScoredResult], base_url: str) -> str:
    """Result cards for one page of search results."""
    return "".join(
        f"""
    <div class="search-result-card search-result-{esc(r.type)}">
      <a href="{esc(result_link(r, base_url))}">
        <h3>{esc(format_result(r))}</h3>
        <p>{esc(result_summary(r))}</p>
      </a>
    </div>"""
        for r in results
    )


def render_empty_results() -> str:
    return """
    <div class="no-results">
      <p class="no-results-icon">😢</p>
      <p>No results found. Try a different search term!</p>
    </div>"""


def render_search_prompt() -> str:
    return """
    <div class="no-results">
      <p class="no-results-icon">🔍</p>
      <p>Enter a search term to find games, pages, and categories!</p>
    </div>"""


def render_error(message: str) -> str:
    return f'<div class="error-message">{esc(message)}</div>'


def render_pagination(view: PageView, query: str | None = None, extra_params: dict | None = None) -> str:
    """Pagination controls for view, or '' when there is only one page.

    Links carry ``data-page`` for script-driven re-rendering and an href
    with the query string so they also work as plain navigation.
    """
    if view.total_pages <= 1:
        return ""

    parts = []
    for control in view.controls:
        if control.kind == "current":
            parts.append(f'<span class="current">{control.label}</span>')
        elif control.kind == "ellipsis":
            parts.append("<span>...</span>")
        else:
            href = _page_href(control.page, query, extra_params)
            parts.append(
                f'<a href="{esc(href)}" data-page="{control.page}" '
                f'class="pagination-btn">{esc(control.label)}</a>'
            )
    return "".join(parts)


def _page_href(page: int, query: str | None, extra_params: dict | None) -> str:
    params = {}
    if query:
        params["q"] = query
    if extra_params:
        params.update({k: v for k, v in extra_params.items() if v})
    params["page"] = page
    return "?" + urlencode(params)


def render_results_section(view: PageView, query: str, base_url: str) -> tuple[str, str]:
    """(results_html, pagination_html) for one page of search results.

    An empty result list renders the empty state and clears pagination.
    """
    if view.is_empty:
        return render_empty_results(), ""
    return render_result_cards(view.items, base_url), render_pagination(view, query)


# ── Header dropdown ──────────────────────────────────────────────────────────

def render_dropdown(results: list[ScoredResult], base_url: str) -> str:
    """Live preview links for the header search, or the no-results line."""
    if not results:
        return '<div class="no-results">No results found 😢</div>'

    return "".join(
        f"""
    <a href="{esc(result_link(r, base_url))}" class="search-result search-result-{esc(r.type)}">
      {esc(format_result(r))}
    </a>"""
        for r in results
    )


# ── Games listing ────────────────────────────────────────────────────────────

def render_game_cards(games: list[GameRecord], base_url: str) -> str:
    """Game cards for the all-games listing."""
    return "".join(
        f"""
    <div class="game-card">
      <a href="{esc(base_url)}games/{esc(g.slug)}/">
        <img src="{esc(g.image)}" alt="{esc(g.title)}">
        <h3>{esc(g.title)}</h3>
        <p class="game-desc">{esc(truncate(g.description, 100))}</p>
        <span class="category-badge">{esc(g.category)}</span>
      </a>
    </div>"""
        for g in games
    )


# ── Full page ────────────────────────────────────────────────────────────────

def render_search_page(
    query: str | None,
    base_url: str,
    view: PageView | None = None,
    error: str | None = None,
) -> str:
    """Render the standalone search results page."""
    if error:
        results_html, pagination_html = render_error(error), ""
    elif not query:
        results_html, pagination_html = render_search_prompt(), ""
    else:
        results_html, pagination_html = render_results_section(view, query, base_url)

    title = f'Search: "{query}" | Bros Unblocked' if query else "Search | Bros Unblocked"

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{esc(title)}</title>
    <style>
        .search-result-card {{ margin-bottom: 16px; }}
        .no-results {{ text-align: center; padding: 40px; color: #666; }}
        .no-results-icon {{ font-size: 48px; margin-bottom: 16px; }}
        .error-message {{ padding: 16px; background: #fee; border: 2px solid #fcc; border-radius: 8px; color: #c33; margin: 20px 0; text-align: center; font-weight: 600; }}
        #pagination .current {{ font-weight: 700; }}
    </style>
</head>
<body>
    <form action="{esc(base_url)}search/" method="get" class="search-page-form">
        <input type="search" id="searchPageInput" name="q" value="{esc(query or '')}" placeholder="Search games...">
    </form>
    <div id="searchResults">{results_html}
    </div>
    <nav id="pagination">{pagination_html}</nav>
</body>
</html>"""
