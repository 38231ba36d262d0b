"""Pydantic models for search."""

from typing import Literal

from pydantic import BaseModel


class PaginationControl(BaseModel):
    kind: Literal["previous", "page", "current", "ellipsis", "next"]
    page: int | None = None
    label: str


class SearchResult(BaseModel):
    type: str
    title: str
    label: str
    slug: str
    url: str
    summary: str
    score: int
    image: str | None = None
    category: str | None = None


class SearchResponse(BaseModel):
    query: str
    results: list[SearchResult]
    total: int
    page: int
    total_pages: int
    controls: list[PaginationControl]


class PreviewResponse(BaseModel):
    query: str
    results: list[SearchResult]


class WidgetEvent(BaseModel):
    """One message from the header search widget socket."""

    event: str
    value: str | None = None
