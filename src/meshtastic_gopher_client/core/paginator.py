"""Fixed-size pagination for listings and document lines."""

from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass(frozen=True)
class Page:
    """One page of items plus its position."""

    items: tuple
    page_number: int
    page_count: int

    @property
    def is_last(self) -> bool:
        return self.page_number >= self.page_count


def page_count(total: int, page_size: int) -> int:
    """Number of pages for ``total`` items; never less than one."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return max(1, -(-total // page_size))


def paginate(items: Sequence[Any], page_size: int, page: int) -> Page:
    """
    Return the requested page of ``items``.

    Out-of-range page numbers are clamped to the first or last page. An
    empty sequence has a single empty page.

    Args:
        items: Ordered items to split.
        page_size: Items per page, at least 1.
        page: 1-based page number.

    Returns:
        The Page with its clamped number and the total page count.
    """
    count = page_count(len(items), page_size)
    number = min(max(page, 1), count)
    start = (number - 1) * page_size
    return Page(
        items=tuple(items[start:start + page_size]),
        page_number=number,
        page_count=count,
    )


@dataclass(frozen=True)
class PaginationState:
    """Immutable page cursor over a sequence of items."""

    items: tuple = field(default_factory=tuple)
    page_size: int = 25
    page: int = 1

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "page", self.current().page_number)

    def current(self) -> Page:
        """The page under the cursor."""
        return paginate(self.items, self.page_size, self.page)

    def total_pages(self) -> int:
        return page_count(len(self.items), self.page_size)

    def has_next(self) -> bool:
        return self.page < self.total_pages()

    def has_previous(self) -> bool:
        return self.page > 1

    def go_to(self, page: int) -> "PaginationState":
        """Return a cursor at ``page`` (clamped)."""
        return PaginationState(items=self.items, page_size=self.page_size, page=page)

    def next(self) -> "PaginationState":
        return self.go_to(self.page + 1)

    def previous(self) -> "PaginationState":
        return self.go_to(self.page - 1)
