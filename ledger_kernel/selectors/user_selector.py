"""
Module: ledger_kernel.selectors.user_selector
Responsibility: List/page reads of users.
Architecture position: Kernel > Selectors.

Users are visible to every operator, anonymous included; the only external
query users support is full-text search on their name.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import ColumnElement

from ledger_kernel.domain.queries import (
    FIELD_NAME,
    ExternalQuery,
    FullTextQuery,
    IdQuery,
    TextQuery,
    all_of,
    id_clause,
    matches_full_text,
)
from ledger_kernel.models.user import AuthId, User, UserRole
from ledger_kernel.selectors.read_selector import ReadSelector


@dataclass(frozen=True)
class UserQuery:
    id: Optional[IdQuery] = None
    name: Optional[TextQuery] = None
    role: Optional[UserRole] = None
    auth_id_providers: Optional[frozenset[str]] = None


class UserSelector(ReadSelector[User, UserQuery]):
    """Reads users."""

    model = User
    entity_type = "user"
    sortable_fields = {"name": "name", "role": "role"}

    text_fields = frozenset({FIELD_NAME})

    def build_predicate(
        self, query: Optional[UserQuery]
    ) -> tuple[ColumnElement[bool], list[ExternalQuery]]:
        clauses: list[ColumnElement[bool]] = []
        external: list[ExternalQuery] = []
        if query is None:
            return all_of(clauses), external

        if query.id is not None:
            clauses.append(id_clause(User.id, query.id))

        if query.name is not None:
            if query.name.full_text:
                external.append(FullTextQuery(query.name.value, frozenset({FIELD_NAME})))
            else:
                clauses.append(User.name == query.name.value.strip())

        if query.role is not None:
            clauses.append(User.role == int(query.role))

        if query.auth_id_providers:
            clauses.append(
                User.auth_ids.any(AuthId.provider.in_(sorted(query.auth_id_providers)))
            )

        return all_of(clauses), external

    def filter_by_external_query(
        self, models: Sequence[User], query: ExternalQuery
    ) -> list[User]:
        if not isinstance(query, FullTextQuery):
            return list(models)
        return [
            model
            for model in models
            if matches_full_text(query, self.text_fields, lambda _field: [model.name])
        ]
