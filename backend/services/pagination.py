"""Page windows and pagination controls for ranked result lists.

Pages are 1-indexed. Requests outside ``[1, total_pages]`` are clamped
instead of producing an empty slice.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from backend.models.search import PaginationControl

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class PageView(Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total: int
    total_pages: int
    start: int
    end: int
    controls: list[PaginationControl] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def total_pages_for(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages for count items, never less than 1."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(page, 1), total_pages)


def paginate(
    results: Sequence[T],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    full_window: bool = False,
) -> PageView[T]:
    """Slice page ``page`` out of results and compute its controls.

    ``full_window`` lists every page number instead of the windowed set with
    ellipses (used by the games listing).
    """
    total = len(results)
    total_pages = total_pages_for(total, page_size)
    page = clamp_page(page, total_pages)

    start = (page - 1) * page_size
    end = min(start + page_size, total)

    if full_window:
        controls = full_page_controls(page, total_pages)
    else:
        controls = pagination_controls(page, total_pages)

    return PageView(
        items=list(results[start:end]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        start=start,
        end=end,
        controls=controls,
    )


def pagination_controls(current_page: int, total_pages: int) -> list[PaginationControl]:
    """Previous/Next plus the first, last and current +/- 2 pages.

    A single ellipsis stands at current-3 and current+3 when those pages are
    not otherwise shown. Other gaps get no marker.
    """
    controls = []
    if current_page > 1:
        controls.append(
            PaginationControl(kind="previous", page=current_page - 1, label="← Previous")
        )

    for i in range(1, total_pages + 1):
        if i == 1 or i == total_pages or current_page - 2 <= i <= current_page + 2:
            controls.append(_page_control(i, current_page))
        elif i == current_page - 3 or i == current_page + 3:
            controls.append(PaginationControl(kind="ellipsis", label="..."))

    if current_page < total_pages:
        controls.append(
            PaginationControl(kind="next", page=current_page + 1, label="Next →")
        )
    return controls


def full_page_controls(current_page: int, total_pages: int) -> list[PaginationControl]:
    """Previous/Next plus every page number."""
    controls = []
    if current_page > 1:
        controls.append(
            PaginationControl(kind="previous", page=current_page - 1, label="← Previous")
        )
    controls.extend(_page_control(i, current_page) for i in range(1, total_pages + 1))
    if current_page < total_pages:
        controls.append(
            PaginationControl(kind="next", page=current_page + 1, label="Next →")
        )
    return controls


def _page_control(i: int, current_page: int) -> PaginationControl:
    if i == current_page:
        return PaginationControl(kind="current", page=i, label=str(i))
    return PaginationControl(kind="page", page=i, label=str(i))
