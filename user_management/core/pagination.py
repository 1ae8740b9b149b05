"""Pagination Policy — clamps page/limit inputs and computes page counts.

Invariants:
    - page >= 1 (anything lower, or missing, becomes 1)
    - 1 <= limit <= MAX_PAGE_SIZE (<= 0 or missing becomes DEFAULT_PAGE_SIZE, above the cap is clamped)
    - offset = (page - 1) * limit
    - total_pages = ceil(total / limit) via integer arithmetic; 0 when total is 0

Design Decisions:
    - Clamp instead of reject: out-of-range query values never produce a 400
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence


DEFAULT_PAGE_SIZE: int = 10
MAX_PAGE_SIZE: int = 100


@dataclass(frozen=True)
class PageRequest:
    """Normalized page coordinates."""
    page: int
    limit: int
    offset: int


@dataclass(frozen=True)
class PaginatedResult:
    """One page of items plus the totals needed to navigate."""
    items: Sequence[Any] = field(default_factory=tuple)
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    total: int = 0
    total_pages: int = 0

    def to_response(self, project: Callable[[Any], Any] | None = None) -> dict:
        data = [project(item) for item in self.items] if project else list(self.items)
        return {
            "data": data,
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
        }


def normalize_page(page: int | None, limit: int | None) -> PageRequest:
    """Clamp raw page/limit into a valid PageRequest."""
    page = 1 if page is None or page < 1 else page
    if limit is None or limit <= 0:
        limit = DEFAULT_PAGE_SIZE
    elif limit > MAX_PAGE_SIZE:
        limit = MAX_PAGE_SIZE
    return PageRequest(page=page, limit=limit, offset=(page - 1) * limit)


def count_pages(total: int, limit: int) -> int:
    """Ceiling division of total by limit."""
    if total <= 0:
        return 0
    return (total + limit - 1) // limit


def paginate(
    items: Sequence[Any], page: int, limit: int, total: int,
) -> PaginatedResult:
    """Wrap a fetched page with its navigation totals."""
    return PaginatedResult(
        items=tuple(items),
        page=page,
        limit=limit,
        total=total,
        total_pages=count_pages(total, limit),
    )
