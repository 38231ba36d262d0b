"""Content index loading and the process-wide load-once cache.

The index is produced by the static site build and is read-only here. It is
loaded from a local path or fetched over HTTP, validated, and cached for the
lifetime of the process. Every caller gets a ``LoadResult`` and decides for
itself how to surface a failure.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from backend.config import settings
from backend.models.content import CategoryRecord, ContentIndex, GameRecord, PageRecord

logger = logging.getLogger(__name__)

REQUIRED_LISTS = ("games", "pages", "categories")

_RECORD_MODELS = {
    "games": GameRecord,
    "pages": PageRecord,
    "categories": CategoryRecord,
}


class ContentUnavailable(Exception):
    """The content index could not be fetched, parsed or validated."""


class SkippableRecordError(ValueError):
    """A single record is malformed and should be left out of the index."""


@dataclass(frozen=True)
class LoadResult:
    index: ContentIndex | None = None
    error: ContentUnavailable | None = None

    @property
    def ok(self) -> bool:
        return self.index is not None


# Global cache reference
_content: ContentIndex | None = None


# ── Parsing ──────────────────────────────────────────────────────────────────

def parse_record(list_name: str, raw: Any):
    """Validate one raw record from the named list.

    Raises SkippableRecordError if the record has no label or slug or is not
    an object at all.
    """
    if not isinstance(raw, dict):
        raise SkippableRecordError(f"{list_name}: expected an object, got {type(raw).__name__}")

    model = _RECORD_MODELS[list_name]
    # The list a record sits in decides its type
    data = {k: v for k, v in raw.items() if k != "type"}
    try:
        return model.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise SkippableRecordError(f"{list_name}: invalid fields ({fields})") from e


def build_index(document: Any) -> ContentIndex:
    """Build a ContentIndex from a decoded JSON document.

    Raises ContentUnavailable when the document is not an object or any of
    the three top-level lists is missing. Malformed records are skipped.
    """
    if not isinstance(document, dict):
        raise ContentUnavailable("Invalid content structure: expected a JSON object")

    missing = [name for name in REQUIRED_LISTS if not isinstance(document.get(name), list)]
    if missing:
        raise ContentUnavailable(f"Invalid content structure: missing {', '.join(missing)}")

    parsed: dict[str, list] = {}
    for name in REQUIRED_LISTS:
        records = []
        for position, raw in enumerate(document[name]):
            try:
                records.append(parse_record(name, raw))
            except SkippableRecordError as e:
                logger.warning("Skipping record %d: %s", position, e)
        parsed[name] = records

    return ContentIndex(
        games=tuple(parsed["games"]),
        pages=tuple(parsed["pages"]),
        categories=tuple(parsed["categories"]),
    )


# ── Loading ──────────────────────────────────────────────────────────────────

async def fetch_document(
    source: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Read and decode the raw index document from a URL or a file path."""
    if source.startswith(("http://", "https://")):
        params = {"v": settings.build_version} if settings.build_version else None
        try:
            async with httpx.AsyncClient(
                timeout=settings.fetch_timeout, transport=transport
            ) as client:
                resp = await client.get(source, params=params)
        except httpx.HTTPError as e:
            raise ContentUnavailable(f"Failed to fetch {source}: {e}") from e

        if resp.status_code < 200 or resp.status_code >= 300:
            raise ContentUnavailable(f"HTTP error! status: {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise ContentUnavailable(f"Malformed JSON from {source}: {e}") from e

    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ContentUnavailable(f"Cannot read {path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ContentUnavailable(f"Malformed JSON in {path}: {e}") from e


async def load_content(
    source: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> LoadResult:
    """Load the content index once and cache it.

    Returns the cached index on every later call. A failed load leaves the
    cache empty so the next call tries again.
    """
    global _content

    if _content is not None:
        return LoadResult(index=_content)

    source = source or settings.content_source
    try:
        document = await fetch_document(source, transport=transport)
        index = build_index(document)
    except ContentUnavailable as e:
        logger.error("Failed to load content from %s: %s", source, e)
        _content = None
        return LoadResult(error=e)

    _content = index
    logger.info(
        "Loaded content index: %d games, %d pages, %d categories",
        len(index.games), len(index.pages), len(index.categories),
    )
    return LoadResult(index=index)


def get_content() -> ContentIndex | None:
    """Get the cached content index, or None if it has not loaded."""
    return _content


def reset_content() -> None:
    """Drop the cached index so the next load_content() reads it again."""
    global _content
    _content = None
