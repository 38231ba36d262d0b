"""Content search: fixed per-field weights over case-insensitive substrings.

Weights per record type:
    game      title(10), description(5), any tag(3)
    page      title(10), content(5)
    category  name(10), description(5)

Results are ranked by descending score. Ties keep index order (games, then
pages, then categories) because ``sorted`` is stable.
"""

from backend.models.content import (
    CategoryRecord,
    ContentIndex,
    GameRecord,
    PageRecord,
    Record,
    ScoredResult,
)
from backend.services.text_utils import markdown_to_text

TITLE_WEIGHT = 10
DESCRIPTION_WEIGHT = 5
CONTENT_WEIGHT = 5
TAG_WEIGHT = 3

RESULT_EMOJIS = {
    "game": "🎮",
    "page": "📄",
    "category": "🏷️",
}


def search(query: str, index: ContentIndex | None) -> list[ScoredResult]:
    """Score every record in the index against query and rank the matches."""
    if not query or not query.strip() or index is None:
        return []

    needle = query.lower()
    results = []
    for record in index.records():
        score = score_record(needle, record)
        if score > 0:
            results.append(ScoredResult(record=record, score=score))

    return sorted(results, key=lambda r: r.score, reverse=True)


def preview(query: str, index: ContentIndex | None, limit: int = 5) -> list[ScoredResult]:
    """Top results for the header dropdown."""
    return search(query, index)[:limit]


def score_record(needle: str, record: Record) -> int:
    """Sum the weights of every field containing needle (already lowercased)."""
    if isinstance(record, GameRecord):
        return (
            _field_weight(needle, record.title, TITLE_WEIGHT)
            + _field_weight(needle, record.description, DESCRIPTION_WEIGHT)
            + (TAG_WEIGHT if any(needle in tag.lower() for tag in record.tags) else 0)
        )
    if isinstance(record, PageRecord):
        return (
            _field_weight(needle, record.title, TITLE_WEIGHT)
            + _field_weight(needle, record.content, CONTENT_WEIGHT)
        )
    if isinstance(record, CategoryRecord):
        return (
            _field_weight(needle, record.name, TITLE_WEIGHT)
            + _field_weight(needle, record.description, DESCRIPTION_WEIGHT)
        )
    raise TypeError(f"Unknown record type: {type(record).__name__}")


def _field_weight(needle: str, value: str | None, weight: int) -> int:
    if value and needle in value.lower():
        return weight
    return 0


# ── Presentation helpers ─────────────────────────────────────────────────────

def format_result(result: ScoredResult) -> str:
    """Label with a type emoji, e.g. '🎮 Bros Adventure'."""
    emoji = RESULT_EMOJIS.get(result.type, "📌")
    title = result.record.label or "Untitled"
    return f"{emoji} {title}"


def result_link(result: ScoredResult, base_url: str) -> str:
    """Site URL for a result."""
    record = result.record
    if isinstance(record, GameRecord):
        return f"{base_url}games/{record.slug}/"
    if isinstance(record, PageRecord):
        return f"{base_url}{record.slug}/"
    if isinstance(record, CategoryRecord):
        return f"{base_url}category/{record.slug}/"
    raise TypeError(f"Unknown record type: {type(record).__name__}")


def result_summary(result: ScoredResult) -> str:
    """Short text shown under a result card's title."""
    record = result.record
    if isinstance(record, PageRecord):
        if record.content:
            text = markdown_to_text(record.content)
            if text:
                return text
    elif record.description:
        return record.description
    return "No description available"
