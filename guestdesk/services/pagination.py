from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int
    # 1-based, inclusive; both 0 for an empty collection
    start_index: int
    end_index: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def meta(self) -> dict:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
            "hasNext": self.has_next,
            "hasPrevious": self.has_previous,
        }


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Slice an already-filtered in-memory collection.

    Pages are 1-based and out-of-range requests clamp to the nearest valid
    page; an empty collection still has one (empty) page.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    page = min(max(page, 1), total_pages)

    offset = (page - 1) * page_size
    chunk = list(items[offset:offset + page_size])

    if chunk:
        start_index = offset + 1
        end_index = offset + len(chunk)
    else:
        start_index = end_index = 0

    return Page(
        items=chunk,
        page=page,
        page_size=page_size,
        total_items=total,
        total_pages=total_pages,
        start_index=start_index,
        end_index=end_index,
    )
