"""
Module: ledger_kernel.selectors.journal_selector
Responsibility: List/page reads of journals, and the journal visibility rule
    that account and record reads inherit.
Architecture position: Kernel > Selectors.

Visibility:
    - Anonymous operators see no journals.
    - ADMIN and OWNER operators see every journal.
    - Other operators see a journal when they are on its access list
      directly or through one of its groups.

Archived journals are left out of list reads unless include_archived is set.
find_by_id still returns them.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import ColumnElement, or_, select

from ledger_kernel.domain.queries import (
    FIELD_DESCRIPTION,
    FIELD_NAME,
    FIELD_TAG,
    AccessItem,
    AccessItemType,
    ContainingUserQuery,
    ExternalQuery,
    FullTextQuery,
    IdQuery,
    TextQuery,
    all_of,
    id_clause,
    matches_full_text,
)
from ledger_kernel.models.journal import Journal, JournalGroup, JournalTag, JournalUser
from ledger_kernel.selectors.membership import (
    holds_user,
    journal_access_lists,
    journal_contains_user,
)
from ledger_kernel.selectors.read_selector import Operator, ReadSelector


@dataclass(frozen=True)
class JournalQuery:
    full_text: Optional[FullTextQuery] = None
    containing_user: Optional[ContainingUserQuery] = None
    id: Optional[IdQuery] = None
    name: Optional[TextQuery] = None
    # Containment search on the description
    description: Optional[str] = None
    unit: Optional[str] = None
    tag: Optional[TextQuery] = None
    admins: frozenset[AccessItem] = frozenset()
    members: frozenset[AccessItem] = frozenset()
    include_archived: bool = False


def access_list_clause(
    items: frozenset[AccessItem], is_admin: bool
) -> Optional[ColumnElement[bool]]:
    """EXISTS over journal_users / journal_groups for one access list."""
    user_ids = [item.id for item in items if item.typ == AccessItemType.USER]
    group_ids = [item.id for item in items if item.typ == AccessItemType.GROUP]
    clauses: list[ColumnElement[bool]] = []
    if user_ids:
        clauses.append(
            Journal.users.any(
                JournalUser.user_id.in_(user_ids) & JournalUser.is_admin.is_(is_admin)
            )
        )
    if group_ids:
        clauses.append(
            Journal.groups.any(
                JournalGroup.group_id.in_(group_ids) & JournalGroup.is_admin.is_(is_admin)
            )
        )
    if not clauses:
        return None
    return or_(*clauses)


class JournalSelector(ReadSelector[Journal, JournalQuery]):
    """Reads journals."""

    model = Journal
    entity_type = "journal"
    sortable_fields = {"name": "name", "unit": "unit", "is_archived": "is_archived"}

    text_fields = frozenset({FIELD_NAME, FIELD_DESCRIPTION, FIELD_TAG})

    def build_predicate(
        self, query: Optional[JournalQuery]
    ) -> tuple[ColumnElement[bool], list[ExternalQuery]]:
        query = query or JournalQuery()
        clauses: list[ColumnElement[bool]] = []
        external: list[ExternalQuery] = []

        if not query.include_archived:
            clauses.append(Journal.is_archived.is_(False))

        if query.id is not None:
            clauses.append(id_clause(Journal.id, query.id))

        if query.name is not None:
            if query.name.full_text:
                external.append(FullTextQuery(query.name.value, frozenset({FIELD_NAME})))
            else:
                clauses.append(Journal.name == query.name.value.strip())

        if query.description:
            external.append(
                FullTextQuery(query.description, frozenset({FIELD_DESCRIPTION}))
            )

        if query.unit is not None and query.unit.strip():
            clauses.append(Journal.unit == query.unit.strip())

        if query.tag is not None:
            if query.tag.full_text:
                external.append(FullTextQuery(query.tag.value, frozenset({FIELD_TAG})))
            else:
                clauses.append(Journal.tags.any(JournalTag.tag == query.tag.value.strip()))

        access = [
            clause
            for clause in (
                access_list_clause(query.admins, True),
                access_list_clause(query.members, False),
            )
            if clause is not None
        ]
        if access:
            clauses.append(or_(*access))

        if query.full_text is not None:
            external.append(query.full_text)
        if query.containing_user is not None:
            external.append(query.containing_user)

        return all_of(clauses), external

    def is_visible(self, operator: Operator, model: Journal) -> bool:
        if operator is None:
            return False
        if operator.is_privileged:
            return True
        return journal_contains_user(self.session, model.id, operator.id)

    def filter_by_external_query(
        self, models: Sequence[Journal], query: ExternalQuery
    ) -> list[Journal]:
        if isinstance(query, FullTextQuery):
            return [
                model
                for model in models
                if matches_full_text(query, self.text_fields, self._text_values(model))
            ]
        return [
            model
            for model in models
            if holds_user(journal_access_lists(self.session, model.id, query.id), query)
        ]

    def _text_values(self, model: Journal):
        def values_of(field: str) -> list[Optional[str]]:
            if field == FIELD_NAME:
                return [model.name]
            if field == FIELD_DESCRIPTION:
                return [model.description]
            return list(
                self.session.execute(
                    select(JournalTag.tag).where(JournalTag.journal_id == model.id)
                ).scalars()
            )

        return values_of
