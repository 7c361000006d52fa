"""Cursor pagination primitives: request/response types, cursor codec, seek bounds."""

from ledger_kernel.paging.contracts import (
    AuthorizationOracle,
    ExternalFilter,
    PredicateBuilder,
    SortableFieldResolver,
)
from ledger_kernel.paging.cursor import decode_cursor, encode_cursor
from ledger_kernel.paging.seek import (
    anchor_bound,
    build_seek_bounds,
    effective_order,
    order_clauses,
    seek_bound,
)
from ledger_kernel.paging.types import (
    FindAllInput,
    FindPageInput,
    Order,
    Page,
    PageInfo,
    PageItem,
    PageLimits,
    Pagination,
    Sort,
)

__all__ = [
    "Order",
    "Sort",
    "Pagination",
    "PageLimits",
    "PageInfo",
    "PageItem",
    "Page",
    "FindAllInput",
    "FindPageInput",
    "encode_cursor",
    "decode_cursor",
    "seek_bound",
    "anchor_bound",
    "build_seek_bounds",
    "effective_order",
    "order_clauses",
    "PredicateBuilder",
    "SortableFieldResolver",
    "AuthorizationOracle",
    "ExternalFilter",
]
