"""
Result containers for paged and windowed queries.
"""

from dataclasses import dataclass, field
from math import ceil
from typing import Generic, List, Optional, TypeVar

from catalog.errors import PagingValidationError
from catalog.pagination.positions import ScrollPosition

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page number and page size."""

    page: int
    size: int

    @classmethod
    def of(cls, page: int, size: int, max_size: Optional[int] = None) -> "PageRequest":
        if page < 0:
            raise PagingValidationError("Page index must not be less than zero")
        if size < 1:
            raise PagingValidationError("Page size must not be less than one")
        if max_size is not None and size > max_size:
            raise PagingValidationError(f"Page size must not exceed {max_size}")
        return cls(page=page, size=size)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """One offset page plus the total number of matching rows."""

    items: List[T]
    page: int
    size: int
    total: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0


@dataclass
class Window(Generic[T]):
    """
    A keyset window.

    ``positions[i]`` is the scroll position that resumes right after
    ``items[i]``; both lists always have the same length.
    """

    items: List[T]
    positions: List[ScrollPosition] = field(default_factory=list)
    has_next: bool = False

    def __post_init__(self) -> None:
        if len(self.items) != len(self.positions):
            raise ValueError("Every window item needs a scroll position")

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return not self.items

    @property
    def end_position(self) -> Optional[ScrollPosition]:
        return self.positions[-1] if self.positions else None
