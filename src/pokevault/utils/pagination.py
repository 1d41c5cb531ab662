"""Pagination utilities."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class OffsetPage(Generic[T]):
    """One ``[offset, offset + limit)`` window of a larger result set."""

    items: list[T]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        """Check if there's a page after this one."""
        return self.offset + self.limit < self.total

    @property
    def has_prev(self) -> bool:
        """Check if there's a page before this one."""
        return self.offset > 0

    @property
    def page(self) -> int:
        """1-indexed page number, for display."""
        return self.offset // self.limit + 1 if self.limit > 0 else 1

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 1
        return max(1, (self.total + self.limit - 1) // self.limit)


def paginate_offset(items: list[T], limit: int, offset: int = 0) -> OffsetPage[T]:
    """Slice a fully filtered, sorted list into one page.

    Args:
        items: Every matching item, already in display order
        limit: Maximum items on the page
        offset: Number of items to skip

    Returns:
        OffsetPage with the page items and the pre-slice total
    """
    limit = max(limit, 0)
    offset = max(offset, 0)
    return OffsetPage(
        items=items[offset:offset + limit],
        total=len(items),
        limit=limit,
        offset=offset,
    )


def page_offset(page: int, per_page: int) -> int:
    """Offset of a 1-indexed page number."""
    return (max(page, 1) - 1) * per_page
