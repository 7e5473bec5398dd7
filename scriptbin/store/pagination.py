"""Offset pagination over an already sorted sequence."""
from __future__ import annotations

from dataclasses import dataclass, field
from math import ceil
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def pages(self) -> int:
        return ceil(self.total / self.limit) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.pages


def clamp(page: int, limit: int, *, max_limit: int = MAX_PAGE_SIZE) -> tuple[int, int]:
    return max(page, 1), min(max(limit, 1), max_limit)


def paginate(items: Sequence[T], page: int, limit: int, *, max_limit: int = MAX_PAGE_SIZE) -> Page[T]:
    """Slice ``items`` at offset ``(page - 1) * limit``; ``total`` ignores the window."""
    page, limit = clamp(page, limit, max_limit=max_limit)
    offset = (page - 1) * limit
    return Page(items=list(items[offset:offset + limit]), total=len(items), page=page, limit=limit)


def parse_int(value: str | None, default: int) -> int:
    """Parse a query-string integer, falling back to ``default`` on junk."""
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
