"""
Module: ledger_kernel.paging.contracts
Responsibility: The four capabilities an entity supplies to the paging
    engine, declared as structural protocols.
Architecture position: Kernel > Paging.  Pure declarations.

Every ReadSelector subclass satisfies all four; the protocols exist so that
a capability can also be supplied (or faked in a test) on its own.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Optional, Protocol, TypeVar, runtime_checkable

from sqlalchemy import ColumnElement

from ledger_kernel.domain.queries import ExternalQuery

ModelT = TypeVar("ModelT")
QueryT = TypeVar("QueryT", contravariant=True)


@runtime_checkable
class PredicateBuilder(Protocol[QueryT]):
    """Query -> (store predicate, external queries).  No I/O."""

    def build_predicate(
        self, query: Optional[QueryT]
    ) -> tuple[ColumnElement[bool], list[ExternalQuery]]: ...


@runtime_checkable
class SortableFieldResolver(Protocol):
    """Sort-key name -> comparable column, or None for unknown names."""

    def sortable_field(self, field: str) -> Optional[Any]: ...


@runtime_checkable
class AuthorizationOracle(Protocol):
    """Row-level visibility for an operator.  May read the store."""

    def is_visible(self, operator: Any, model: Any) -> bool: ...


@runtime_checkable
class ExternalFilter(Protocol):
    """Post-fetch filter.  Never adds rows."""

    def filter_by_external_query(
        self, models: Sequence[Any], query: ExternalQuery
    ) -> list[Any]: ...
