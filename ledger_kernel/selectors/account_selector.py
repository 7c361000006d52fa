"""
Module: ledger_kernel.selectors.account_selector
Responsibility: List/page reads of accounts.
Architecture position: Kernel > Selectors.

An account is visible iff its journal is visible to the operator.  The
journal is read from the store for every row checked.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import ColumnElement, select

from ledger_kernel.domain.queries import (
    FIELD_DESCRIPTION,
    FIELD_NAME,
    FIELD_TAG,
    ExternalQuery,
    FullTextQuery,
    IdQuery,
    TextQuery,
    all_of,
    id_clause,
    matches_full_text,
)
from ledger_kernel.models.account import Account, AccountStrategy, AccountTag, AccountType
from ledger_kernel.models.journal import Journal
from ledger_kernel.selectors.journal_selector import JournalSelector
from ledger_kernel.selectors.read_selector import Operator, ReadSelector


@dataclass(frozen=True)
class AccountQuery:
    full_text: Optional[FullTextQuery] = None
    id: Optional[IdQuery] = None
    journal: Optional[IdQuery] = None
    name: Optional[TextQuery] = None
    description: Optional[str] = None
    typ: Optional[AccountType] = None
    strategy: Optional[AccountStrategy] = None
    unit: Optional[str] = None
    tag: Optional[TextQuery] = None
    include_archived: bool = False


def parent_journal_visible(session, operator: Operator, journal_id) -> bool:
    """Visibility of the journal owning an account or record."""
    if operator is None:
        return False
    journal = session.execute(
        select(Journal).where(Journal.id == journal_id)
    ).scalar_one_or_none()
    if journal is None:
        return False
    return JournalSelector(session).is_visible(operator, journal)


class AccountSelector(ReadSelector[Account, AccountQuery]):
    """Reads accounts."""

    model = Account
    entity_type = "account"
    sortable_fields = {
        "name": "name",
        "unit": "unit",
        "typ": "typ",
        "strategy": "strategy",
        "is_archived": "is_archived",
    }

    text_fields = frozenset({FIELD_NAME, FIELD_DESCRIPTION, FIELD_TAG})

    def build_predicate(
        self, query: Optional[AccountQuery]
    ) -> tuple[ColumnElement[bool], list[ExternalQuery]]:
        query = query or AccountQuery()
        clauses: list[ColumnElement[bool]] = []
        external: list[ExternalQuery] = []

        if not query.include_archived:
            clauses.append(Account.is_archived.is_(False))

        if query.id is not None:
            clauses.append(id_clause(Account.id, query.id))

        if query.journal is not None:
            clauses.append(id_clause(Account.journal_id, query.journal))

        if query.name is not None:
            if query.name.full_text:
                external.append(FullTextQuery(query.name.value, frozenset({FIELD_NAME})))
            else:
                clauses.append(Account.name == query.name.value.strip())

        if query.description:
            external.append(
                FullTextQuery(query.description, frozenset({FIELD_DESCRIPTION}))
            )

        if query.typ is not None:
            clauses.append(Account.typ == AccountType(query.typ).value)

        if query.strategy is not None:
            clauses.append(Account.strategy == AccountStrategy(query.strategy).value)

        if query.unit is not None and query.unit.strip():
            clauses.append(Account.unit == query.unit.strip())

        if query.tag is not None:
            if query.tag.full_text:
                external.append(FullTextQuery(query.tag.value, frozenset({FIELD_TAG})))
            else:
                clauses.append(Account.tags.any(AccountTag.tag == query.tag.value.strip()))

        if query.full_text is not None:
            external.append(query.full_text)

        return all_of(clauses), external

    def is_visible(self, operator: Operator, model: Account) -> bool:
        return parent_journal_visible(self.session, operator, model.journal_id)

    def filter_by_external_query(
        self, models: Sequence[Account], query: ExternalQuery
    ) -> list[Account]:
        if not isinstance(query, FullTextQuery):
            return list(models)

        result = []
        for model in models:

            def values_of(field: str, model: Account = model) -> list[Optional[str]]:
                if field == FIELD_NAME:
                    return [model.name]
                if field == FIELD_DESCRIPTION:
                    return [model.description]
                return list(
                    self.session.execute(
                        select(AccountTag.tag).where(AccountTag.account_id == model.id)
                    ).scalars()
                )

            if matches_full_text(query, self.text_fields, values_of):
                result.append(model)
        return result
