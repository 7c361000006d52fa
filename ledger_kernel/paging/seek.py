"""
Module: ledger_kernel.paging.seek
Responsibility: Keyset ("seek") predicates and ORDER BY clauses for cursor
    pagination.
Architecture position: Kernel > Paging.  Builds SQLAlchemy expressions only;
    never executes them.

Invariants enforced:
    - The primary key is always the final sort key, in the same direction as
      the sort column, so rows with equal sort values have one stable order.
    - A bound excludes the anchor row itself.
    - With no sort column the bound and the order use the primary key alone.

A bound for an anchor with sort value v and primary key k is::

    (col OP v) OR (col = v AND pk OP k)

where OP is ">" when rows after the anchor come later in ascending order and
"<" otherwise.
"""

from __future__ import annotations

import operator
from typing import Any, Optional

from sqlalchemy import ColumnElement, and_, or_

from ledger_kernel.paging.types import Order


def effective_order(order: Order, reversed_: bool) -> Order:
    """Order the store is actually queried in."""
    return order.reversed() if reversed_ else order


def order_clauses(
    sort_column: Optional[Any],
    pk_column: Any,
    order: Order,
) -> list[ColumnElement[Any]]:
    """ORDER BY (sort_column, pk) in one direction."""
    columns = [pk_column] if sort_column is None else [sort_column, pk_column]
    if order is Order.ASC:
        return [column.asc() for column in columns]
    return [column.desc() for column in columns]


def seek_bound(
    sort_column: Optional[Any],
    pk_column: Any,
    anchor_value: Any,
    anchor_pk: Any,
    greater: bool,
) -> ColumnElement[bool]:
    """
    Rows strictly beyond an anchor.

    Args:
        sort_column: Active sort column, or None when only the key orders.
        pk_column: Primary key column (tie-break).
        anchor_value: The anchor row's value on sort_column.
        anchor_pk: The anchor row's primary key.
        greater: True for rows that sort after the anchor ascending.
    """
    op = operator.gt if greater else operator.lt
    if sort_column is None:
        return op(pk_column, anchor_pk)
    return or_(
        op(sort_column, anchor_value),
        and_(sort_column == anchor_value, op(pk_column, anchor_pk)),
    )


def anchor_bound(
    sort_column: Optional[Any],
    pk_column: Any,
    anchor: Any,
    order: Order,
    after: bool,
) -> ColumnElement[bool]:
    """
    Bound for one cursor side, in terms of the requested order.

    ``after`` keeps rows that come after the anchor in the requested order:
    ">" for ASC, "<" for DESC.  ``before`` is the opposite.  The result does
    not depend on whether the fetch itself runs reversed.
    """
    greater = (order is Order.ASC) == after
    anchor_value = None if sort_column is None else getattr(anchor, sort_column.key)
    return seek_bound(sort_column, pk_column, anchor_value, anchor.id, greater)


def build_seek_bounds(
    sort_column: Optional[Any],
    pk_column: Any,
    order: Order,
    after_anchor: Optional[Any],
    before_anchor: Optional[Any],
) -> list[ColumnElement[bool]]:
    """
    Bounds for the anchors that are present.  Both together form a window.
    """
    bounds: list[ColumnElement[bool]] = []
    if after_anchor is not None:
        bounds.append(anchor_bound(sort_column, pk_column, after_anchor, order, True))
    if before_anchor is not None:
        bounds.append(anchor_bound(sort_column, pk_column, before_anchor, order, False))
    return bounds
