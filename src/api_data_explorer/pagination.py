"""In-memory pagination and pager helpers."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_WINDOW = 5


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def total_pages(total: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return math.ceil(total / page_size)


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice one page out of an already filtered sequence.

    Args:
        items: Full (filtered) collection.
        page: 1-based page number.
        page_size: Items per page.

    Returns:
        Page whose total is the length of the whole sequence.
    """
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    start = (page - 1) * page_size
    return Page(items=list(items[start : start + page_size]), total=len(items), page=page, page_size=page_size)


def page_window(current: int, pages: int, width: int = DEFAULT_WINDOW) -> list[int]:
    """Page numbers for the pager buttons, keeping `current` near the centre."""
    if pages <= 0:
        return []
    count = min(width, pages)
    half = width // 2
    if pages <= width or current <= half + 1:
        first = 1
    elif current >= pages - half:
        first = pages - width + 1
    else:
        first = current - half
    return list(range(first, first + count))


def showing_range(page: int, page_size: int, total: int) -> tuple[int, int]:
    """1-based (first, last) item indexes shown on `page`; (0, 0) when empty."""
    if total <= 0:
        return 0, 0
    first = (page - 1) * page_size + 1
    return first, min(page * page_size, total)
