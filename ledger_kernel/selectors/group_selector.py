"""
Module: ledger_kernel.selectors.group_selector
Responsibility: List/page reads of groups.
Architecture position: Kernel > Selectors.

Visibility:
    - Anonymous operators see no groups.
    - ADMIN and OWNER operators see every group.
    - Other operators see the groups they belong to, as admin or member.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy import ColumnElement, or_

from ledger_kernel.domain.queries import (
    FIELD_DESCRIPTION,
    FIELD_NAME,
    ContainingUserQuery,
    ExternalQuery,
    FullTextQuery,
    IdQuery,
    TextQuery,
    all_of,
    id_clause,
    matches_full_text,
)
from ledger_kernel.models.group import Group, GroupUser
from ledger_kernel.selectors.membership import (
    group_access_lists,
    group_contains_user,
    holds_user,
)
from ledger_kernel.selectors.read_selector import Operator, ReadSelector


@dataclass(frozen=True)
class GroupQuery:
    id: Optional[IdQuery] = None
    name: Optional[TextQuery] = None
    # Containment search on the description
    description: Optional[str] = None
    admins: frozenset[UUID] = frozenset()
    members: frozenset[UUID] = frozenset()
    containing_user: Optional[ContainingUserQuery] = None


class GroupSelector(ReadSelector[Group, GroupQuery]):
    """Reads groups."""

    model = Group
    entity_type = "group"
    sortable_fields = {"name": "name"}

    text_fields = frozenset({FIELD_NAME, FIELD_DESCRIPTION})

    def build_predicate(
        self, query: Optional[GroupQuery]
    ) -> tuple[ColumnElement[bool], list[ExternalQuery]]:
        clauses: list[ColumnElement[bool]] = []
        external: list[ExternalQuery] = []
        if query is None:
            return all_of(clauses), external

        if query.id is not None:
            clauses.append(id_clause(Group.id, query.id))

        if query.name is not None:
            if query.name.full_text:
                external.append(FullTextQuery(query.name.value, frozenset({FIELD_NAME})))
            else:
                clauses.append(Group.name == query.name.value.strip())

        if query.description:
            external.append(
                FullTextQuery(query.description, frozenset({FIELD_DESCRIPTION}))
            )

        # admins OR members, like the access lists themselves
        access: list[ColumnElement[bool]] = []
        if query.admins:
            access.append(
                Group.users.any(
                    GroupUser.user_id.in_(list(query.admins)) & GroupUser.is_admin.is_(True)
                )
            )
        if query.members:
            access.append(
                Group.users.any(
                    GroupUser.user_id.in_(list(query.members)) & GroupUser.is_admin.is_(False)
                )
            )
        if access:
            clauses.append(or_(*access))

        if query.containing_user is not None:
            external.append(query.containing_user)

        return all_of(clauses), external

    def is_visible(self, operator: Operator, model: Group) -> bool:
        if operator is None:
            return False
        if operator.is_privileged:
            return True
        return group_contains_user(self.session, model.id, operator.id)

    def filter_by_external_query(
        self, models: Sequence[Group], query: ExternalQuery
    ) -> list[Group]:
        if isinstance(query, FullTextQuery):
            return [
                model
                for model in models
                if matches_full_text(query, self.text_fields, _text_values(model))
            ]
        return [
            model
            for model in models
            if holds_user(group_access_lists(self.session, model.id, query.id), query)
        ]


def _text_values(model: Group):
    def values_of(field: str) -> list[Optional[str]]:
        if field == FIELD_NAME:
            return [model.name]
        return [model.description]

    return values_of
