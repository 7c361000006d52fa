"""
Queries -- Immutable query value objects shared by every read selector.

Responsibility:
    Declares the building blocks that entity queries are composed from
    (text, id, comparable and access-list filters) and the two external query
    variants that cannot be pushed into the store: full-text containment and
    user containment.

Architecture position:
    Kernel > Domain -- pure, zero I/O.  The only outward import is SQLAlchemy
    expression construction (no Session, no execution).

Invariants enforced:
    - All query objects are frozen; a selector never mutates a query.
    - Building a store clause never touches the database.
    - Full-text matching is case-insensitive substring containment on the
      trimmed value.  An empty value matches everything.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union
from uuid import UUID

from sqlalchemy import ColumnElement, and_, true

# Logical field names used by FullTextQuery.fields and ContainingUserQuery.fields
FIELD_NAME = "name"
FIELD_DESCRIPTION = "description"
FIELD_TAG = "tag"
FIELD_ADMINS = "admins"
FIELD_MEMBERS = "members"

TEXT_FIELDS = frozenset({FIELD_NAME, FIELD_DESCRIPTION, FIELD_TAG})


def normalize_keyword(value: str) -> str:
    """Trimmed, lowercased form used for containment checks."""
    return value.strip().lower()


def text_contains(haystack: str | None, keyword: str) -> bool:
    """
    Case-insensitive containment of an already-normalized keyword.

    A None haystack never matches a non-empty keyword.
    """
    if not keyword:
        return True
    if haystack is None:
        return False
    return keyword in haystack.lower()


@dataclass(frozen=True, slots=True)
class TextQuery:
    """
    Filter on a text column.

    Exact (full_text=False) filters become store predicates.  Full-text
    filters are containment checks and are always evaluated after fetch.
    """

    value: str
    full_text: bool = False

    @classmethod
    def exact(cls, value: str) -> TextQuery:
        return cls(value=value, full_text=False)

    @classmethod
    def contains(cls, value: str) -> TextQuery:
        return cls(value=value, full_text=True)


@dataclass(frozen=True, slots=True)
class ComparableQuery:
    """
    Range filter on an ordered column.

    Every bound that is set is ANDed.  With no bound set the query matches
    everything.
    """

    eq: Any = None
    gt: Any = None
    lt: Any = None
    gte: Any = None
    lte: Any = None

    def clauses(self, column: Any) -> list[ColumnElement[bool]]:
        result: list[ColumnElement[bool]] = []
        if self.eq is not None:
            result.append(column == self.eq)
        if self.gt is not None:
            result.append(column > self.gt)
        if self.lt is not None:
            result.append(column < self.lt)
        if self.gte is not None:
            result.append(column >= self.gte)
        if self.lte is not None:
            result.append(column <= self.lte)
        return result


class AccessItemType(str, Enum):
    """Kind of principal on an access list."""

    USER = "user"
    GROUP = "group"


@dataclass(frozen=True, slots=True)
class AccessItem:
    """A user or group on a journal's admins/members list."""

    id: UUID
    typ: AccessItemType = AccessItemType.USER

    @classmethod
    def user(cls, id: UUID) -> AccessItem:
        return cls(id=id, typ=AccessItemType.USER)

    @classmethod
    def group(cls, id: UUID) -> AccessItem:
        return cls(id=id, typ=AccessItemType.GROUP)


@dataclass(frozen=True, slots=True)
class FullTextQuery:
    """
    Substring search over logical text fields.

    fields=None (or empty) means every text field the entity supports.
    Field names the entity does not know are treated as matching, so a
    client naming a field that only another entity has does not empty the
    result.
    """

    value: str
    fields: frozenset[str] | None = None

    @property
    def keyword(self) -> str:
        return normalize_keyword(self.value)

    def requested_fields(self, known: frozenset[str]) -> frozenset[str]:
        """Fields to search; an empty or missing set means all known fields."""
        return self.fields if self.fields else known


@dataclass(frozen=True, slots=True)
class ContainingUserQuery:
    """
    Keep rows whose admins or members contain the given user.

    fields restricts the check to FIELD_ADMINS or FIELD_MEMBERS; None checks
    both.
    """

    id: UUID
    fields: frozenset[str] | None = None

    def wants(self, field: str) -> bool:
        return not self.fields or field in self.fields


ExternalQuery = Union[FullTextQuery, ContainingUserQuery]

# A single id or a set of ids
IdQuery = Union[UUID, frozenset[UUID], set[UUID], list[UUID], tuple[UUID, ...]]


def id_clause(column: Any, value: IdQuery) -> ColumnElement[bool]:
    """Equality for a single id, IN for a collection of ids."""
    if isinstance(value, UUID):
        return column == value
    return column.in_(list(value))


def all_of(clauses: Iterable[ColumnElement[bool]]) -> ColumnElement[bool]:
    """AND of the clauses; TRUE when there are none."""
    return and_(true(), *clauses)


def matches_full_text(
    query: FullTextQuery,
    known_fields: frozenset[str],
    values_of: Callable[[str], Iterable[str | None]],
) -> bool:
    """
    True when any requested field contains the keyword.

    values_of(field) yields the row's values for a known field; it is only
    called for fields that are searched, so a related-table lookup (tags)
    runs only when the cheaper fields did not already match.
    """
    keyword = query.keyword
    if not keyword:
        return True
    fields = query.requested_fields(known_fields)
    if fields - known_fields:
        return True
    # Tags last: they need an extra read
    for field in sorted(fields, key=lambda name: (name == FIELD_TAG, name)):
        if any(text_contains(value, keyword) for value in values_of(field)):
            return True
    return False
