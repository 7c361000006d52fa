"""
Module: ledger_kernel.paging.types
Responsibility: Request and response value types of the paging engine.
Architecture position: Kernel > Paging.  Pure; imports nothing from db/,
    models/ or selectors/.

Invariants enforced:
    - Page.items never holds more than the requested size.
    - PageInfo.start_cursor / end_cursor are None iff the page is empty.
    - Every type is frozen and built per request; nothing is cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar

ModelT = TypeVar("ModelT")
QueryT = TypeVar("QueryT")


class Order(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    def reversed(self) -> Order:
        return Order.DESC if self is Order.ASC else Order.ASC


@dataclass(frozen=True, slots=True)
class Sort:
    """Single sort key requested by a client."""

    field: str
    order: Order = Order.ASC


@dataclass(frozen=True, slots=True)
class Pagination:
    """
    Cursor window requested by a client.

    after and before are opaque cursors from a previous page.  size=None
    means the configured default page size.
    """

    after: Optional[str] = None
    before: Optional[str] = None
    size: Optional[int] = None


@dataclass(frozen=True, slots=True)
class PageLimits:
    """Default and maximum page size."""

    default_size: int = 20
    max_size: int = 100

    def __post_init__(self) -> None:
        if self.default_size < 1:
            raise ValueError(f"default_size must be >= 1, got {self.default_size}")
        if self.max_size < self.default_size:
            raise ValueError(
                f"max_size ({self.max_size}) must be >= default_size "
                f"({self.default_size})"
            )


@dataclass(frozen=True, slots=True)
class PageInfo:
    has_previous: bool = False
    has_next: bool = False
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PageItem(Generic[ModelT]):
    cursor: str
    item: ModelT


@dataclass(frozen=True, slots=True)
class Page(Generic[ModelT]):
    """One page of results plus navigation metadata."""

    info: PageInfo = field(default_factory=PageInfo)
    items: tuple[PageItem[ModelT], ...] = ()

    def models(self) -> list[ModelT]:
        return [page_item.item for page_item in self.items]

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FindAllInput(Generic[QueryT]):
    """Arguments of find_all.  sort=None orders by primary key."""

    query: Optional[QueryT] = None
    size: Optional[int] = None
    sort: Optional[Sort] = None


@dataclass(frozen=True, slots=True)
class FindPageInput(Generic[QueryT]):
    """Arguments of find_page.  A sort is mandatory for keyset paging."""

    sort: Sort
    query: Optional[QueryT] = None
    pagination: Pagination = field(default_factory=Pagination)
