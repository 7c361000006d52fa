"""
Module: ledger_kernel.selectors.read_selector
Responsibility: The filtered cursor-pagination engine shared by every entity
    selector: batch fetch, post-filter pipeline, overfetch loop, seek
    pagination and page assembly.
Architecture position: Kernel > Selectors.  May import from db/, models/,
    domain/ and paging/.

Invariants enforced:
    - find_all / find_page never return more rows than requested.
    - Page items are ordered by (sort column, primary key) in the requested
      order.  The primary key is always the final tie-break.
    - A row is counted toward a page only after it passes is_visible and
      every external filter.  Both are re-applied on every fetch; nothing is
      cached between rows or between requests.
    - A malformed cursor raises InvalidCursorError.  A well-formed cursor
      whose row is gone or no longer visible is treated as absent.

Failure modes:
    - InvalidCursorError on an undecodable cursor.
    - InvalidPageSizeError when size is < 1 or above PageLimits.max_size.
    - sqlalchemy.exc.* and errors raised by visibility or filter hooks
      propagate unchanged and abort the whole request.

Non-goals:
    - No iteration cap or deadline on the overfetch loop.  A filter that
      rejects nearly every row makes one request scan the whole table.
    - No consistency across separate requests beyond what the caller's
      transaction isolation provides.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar, Generic, Optional, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, select
from sqlalchemy.orm import Session

from ledger_kernel.domain.queries import ExternalQuery, all_of
from ledger_kernel.exceptions import InvalidPageSizeError
from ledger_kernel.logging_config import LogContext, get_logger
from ledger_kernel.models.user import User
from ledger_kernel.paging.cursor import decode_cursor, encode_cursor
from ledger_kernel.paging.seek import build_seek_bounds, effective_order, order_clauses
from ledger_kernel.paging.types import (
    FindAllInput,
    FindPageInput,
    Order,
    Page,
    PageInfo,
    PageItem,
    PageLimits,
)
from ledger_kernel.selectors.base import BaseSelector, ModelType

logger = get_logger("selectors.read")

QueryType = TypeVar("QueryType")

# The requesting principal; None is an anonymous caller
Operator = Optional[User]


class ReadSelector(BaseSelector[ModelType], Generic[ModelType, QueryType]):
    """
    Generic list/page reader over one ORM model.

    Contract:
        Subclasses set ``model``, ``entity_type`` and ``sortable_fields`` and
        implement build_predicate.  They override is_visible and
        filter_by_external_query where the entity has row-level rules or
        supports external queries.  The defaults are "always visible" and
        "pass through".

    Guarantees:
        - Every store call goes through self.session, one at a time.
        - Returned ORM instances belong to the caller's session.
    """

    model: ClassVar[type]
    entity_type: ClassVar[str]

    # Client sort-key name -> mapped attribute name on ``model``
    sortable_fields: ClassVar[dict[str, str]] = {}

    def __init__(self, session: Session, page_limits: PageLimits | None = None):
        super().__init__(session)
        self.page_limits = page_limits or PageLimits()

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @abstractmethod
    def build_predicate(
        self, query: Optional[QueryType]
    ) -> tuple[ColumnElement[bool], list[ExternalQuery]]:
        """Store predicate plus the queries that must run after fetch."""

    def sortable_field(self, field: str) -> Optional[Any]:
        """Mapped column for a sort-key name; None when the name is unknown."""
        attr = self.sortable_fields.get(field)
        if attr is None:
            return None
        return getattr(self.model, attr)

    def primary_field(self) -> Any:
        return self.model.id

    def is_visible(self, operator: Operator, model: ModelType) -> bool:
        return True

    def filter_by_external_query(
        self, models: Sequence[ModelType], query: ExternalQuery
    ) -> list[ModelType]:
        return list(models)

    def filter_by_external_queries(
        self, models: Sequence[ModelType], queries: Sequence[ExternalQuery]
    ) -> list[ModelType]:
        """Apply each query in order; stop once nothing is left."""
        result = list(models)
        for query in queries:
            if not result:
                break
            result = self.filter_by_external_query(result, query)
        return result

    # ------------------------------------------------------------------
    # Engine
    # ------------------------------------------------------------------

    def resolve_size(self, size: Optional[int]) -> int:
        """
        Effective page size.

        Raises:
            InvalidPageSizeError: size < 1 or size > page_limits.max_size.
        """
        if size is None:
            return self.page_limits.default_size
        if size < 1 or size > self.page_limits.max_size:
            raise InvalidPageSizeError(size, self.page_limits.max_size)
        return size

    def fetch_batch(
        self,
        predicate: ColumnElement[bool],
        order_by: Sequence[ColumnElement[Any]],
        offset: int,
        limit: int,
    ) -> list[ModelType]:
        stmt = (
            select(self.model)
            .where(predicate)
            .order_by(*order_by)
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars().all())

    def do_find_all(
        self,
        operator: Operator,
        predicate: ColumnElement[bool],
        external_queries: Sequence[ExternalQuery],
        order_by: Sequence[ColumnElement[Any]],
        size: int,
        batch_size: Optional[int] = None,
    ) -> list[ModelType]:
        """
        Overfetch loop: collect at least ``size`` rows that pass every filter,
        or every such row when fewer exist.

        Fetches consecutive batches of ``batch_size`` rows (``size`` when not
        given) by increasing offset until enough rows survive or the store
        is exhausted.  The result may be longer than ``size``; the caller
        trims it.
        """
        batch_size = batch_size or size
        collected: list[ModelType] = []
        batch = 0

        while True:
            offset = batch * batch_size
            rows = self.fetch_batch(predicate, order_by, offset, batch_size)
            if not rows:
                break
            batch += 1

            visible = [row for row in rows if self.is_visible(operator, row)]
            kept = self.filter_by_external_queries(visible, external_queries)
            collected.extend(kept)

            logger.debug(
                "overfetch_batch",
                extra={
                    "batch": batch,
                    "offset": offset,
                    "fetched": len(rows),
                    "visible": len(visible),
                    "kept": len(kept),
                },
            )

            if len(collected) >= size:
                break

        logger.debug(
            "overfetch_completed",
            extra={"batches": batch, "collected": len(collected), "size": size},
        )
        return collected

    def find_by_id(self, operator: Operator, id: UUID) -> Optional[ModelType]:
        """The row with this primary key, or None if absent or not visible."""
        model = self.session.get(self.model, id)
        if model is None or not self.is_visible(operator, model):
            return None
        return model

    def find_all(
        self,
        operator: Operator,
        args: FindAllInput[QueryType] | None = None,
        batch_size: Optional[int] = None,
    ) -> list[ModelType]:
        """
        Up to ``size`` matching rows.

        Rows are ordered by the requested sort with the primary key as
        tie-break, or by primary key alone when no sort (or an unknown sort
        field) is given.
        """
        args = args or FindAllInput()
        size = self.resolve_size(args.size)
        predicate, external_queries = self.build_predicate(args.query)

        sort_column = None
        order = Order.ASC
        if args.sort is not None:
            sort_column = self.sortable_field(args.sort.field)
            order = args.sort.order

        with LogContext.bind(entity_type=self.entity_type, operator_id=_operator_id(operator)):
            models = self.do_find_all(
                operator,
                predicate,
                external_queries,
                order_clauses(sort_column, self.primary_field(), order),
                size,
                batch_size=batch_size,
            )
        return models[:size]

    def find_page(
        self,
        operator: Operator,
        args: FindPageInput[QueryType],
        batch_size: Optional[int] = None,
    ) -> Page[ModelType]:
        """
        One page of matching rows, positioned by the after/before cursors.

        With only ``before`` resolved, the store is read backward from the
        anchor and the page is flipped back into the requested order.  With
        both resolved, the page is the window between them.

        Raises:
            InvalidCursorError: either cursor is malformed.
            InvalidPageSizeError: size out of range.
        """
        pagination = args.pagination
        size = self.resolve_size(pagination.size)
        predicate, external_queries = self.build_predicate(args.query)

        # Decode both cursors before touching the store
        after_id = decode_cursor(pagination.after) if pagination.after is not None else None
        before_id = decode_cursor(pagination.before) if pagination.before is not None else None

        with LogContext.bind(entity_type=self.entity_type, operator_id=_operator_id(operator)):
            logger.info(
                "find_page_started",
                extra={
                    "size": size,
                    "sort_field": args.sort.field,
                    "sort_order": args.sort.order.value,
                    "has_after": after_id is not None,
                    "has_before": before_id is not None,
                },
            )

            after_anchor = self._resolve_anchor(operator, after_id, "after")
            before_anchor = self._resolve_anchor(operator, before_id, "before")
            reversed_ = before_anchor is not None and after_anchor is None

            sort_column = self.sortable_field(args.sort.field)
            pk_column = self.primary_field()
            bounds = build_seek_bounds(
                sort_column, pk_column, args.sort.order, after_anchor, before_anchor
            )
            fetch_order = effective_order(args.sort.order, reversed_)

            models = self.do_find_all(
                operator,
                all_of([predicate, *bounds]),
                external_queries,
                order_clauses(sort_column, pk_column, fetch_order),
                size + 1,
                batch_size=batch_size,
            )

            has_next = len(models) > size
            models = models[:size]
            if reversed_:
                models.reverse()

            # Presence heuristic: reports True whenever a cursor was honoured
            # on the side behind the page, even if the anchor was the first
            # matching row.  Clients depend on this, so it is not verified
            # with an extra query.
            has_previous = (reversed_ and before_anchor is not None) or (
                not reversed_ and after_anchor is not None
            )

            page = _assemble_page(models, has_previous=has_previous, has_next=has_next)

            logger.info(
                "find_page_completed",
                extra={
                    "count": len(page.items),
                    "has_next": has_next,
                    "has_previous": has_previous,
                    "reversed": reversed_,
                },
            )
        return page

    def _resolve_anchor(
        self, operator: Operator, id: Optional[UUID], side: str
    ) -> Optional[ModelType]:
        if id is None:
            return None
        anchor = self.find_by_id(operator, id)
        if anchor is None:
            logger.warning(
                "cursor_anchor_missing",
                extra={"side": side, "anchor_id": str(id)},
            )
        return anchor


def _operator_id(operator: Operator) -> Optional[str]:
    return str(operator.id) if operator is not None else None


def _assemble_page(
    models: Sequence[Any], *, has_previous: bool, has_next: bool
) -> Page[Any]:
    items = tuple(PageItem(cursor=encode_cursor(model.id), item=model) for model in models)
    return Page(
        info=PageInfo(
            has_previous=has_previous,
            has_next=has_next,
            start_cursor=items[0].cursor if items else None,
            end_cursor=items[-1].cursor if items else None,
        ),
        items=items,
    )
