"""
Module: ledger_kernel.selectors.record_selector
Responsibility: List/page reads of records.
Architecture position: Kernel > Selectors.

A record is visible iff its journal is visible to the operator.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import ColumnElement, select

from ledger_kernel.domain.queries import (
    FIELD_DESCRIPTION,
    FIELD_NAME,
    FIELD_TAG,
    ComparableQuery,
    ExternalQuery,
    FullTextQuery,
    IdQuery,
    TextQuery,
    all_of,
    id_clause,
    matches_full_text,
)
from ledger_kernel.models.record import Record, RecordItem, RecordTag, RecordType
from ledger_kernel.selectors.account_selector import parent_journal_visible
from ledger_kernel.selectors.read_selector import Operator, ReadSelector


@dataclass(frozen=True)
class RecordQuery:
    full_text: Optional[FullTextQuery] = None
    id: Optional[IdQuery] = None
    journal: Optional[IdQuery] = None
    name: Optional[TextQuery] = None
    description: Optional[str] = None
    typ: Optional[RecordType] = None
    date: Optional[ComparableQuery] = None
    tag: Optional[TextQuery] = None
    # Records with an item posted to any of these accounts
    account: Optional[IdQuery] = None


class RecordSelector(ReadSelector[Record, RecordQuery]):
    """Reads records."""

    model = Record
    entity_type = "record"
    sortable_fields = {"name": "name", "date": "date", "typ": "typ"}

    text_fields = frozenset({FIELD_NAME, FIELD_DESCRIPTION, FIELD_TAG})

    def build_predicate(
        self, query: Optional[RecordQuery]
    ) -> tuple[ColumnElement[bool], list[ExternalQuery]]:
        clauses: list[ColumnElement[bool]] = []
        external: list[ExternalQuery] = []
        if query is None:
            return all_of(clauses), external

        if query.id is not None:
            clauses.append(id_clause(Record.id, query.id))

        if query.journal is not None:
            clauses.append(id_clause(Record.journal_id, query.journal))

        if query.name is not None:
            if query.name.full_text:
                external.append(FullTextQuery(query.name.value, frozenset({FIELD_NAME})))
            else:
                clauses.append(Record.name == query.name.value.strip())

        if query.description:
            external.append(
                FullTextQuery(query.description, frozenset({FIELD_DESCRIPTION}))
            )

        if query.typ is not None:
            clauses.append(Record.typ == RecordType(query.typ).value)

        if query.date is not None:
            clauses.extend(query.date.clauses(Record.date))

        if query.tag is not None:
            if query.tag.full_text:
                external.append(FullTextQuery(query.tag.value, frozenset({FIELD_TAG})))
            else:
                clauses.append(Record.tags.any(RecordTag.tag == query.tag.value.strip()))

        if query.account is not None:
            clauses.append(Record.items.any(id_clause(RecordItem.account_id, query.account)))

        if query.full_text is not None:
            external.append(query.full_text)

        return all_of(clauses), external

    def is_visible(self, operator: Operator, model: Record) -> bool:
        return parent_journal_visible(self.session, operator, model.journal_id)

    def filter_by_external_query(
        self, models: Sequence[Record], query: ExternalQuery
    ) -> list[Record]:
        if not isinstance(query, FullTextQuery):
            return list(models)
        return [
            model
            for model in models
            if matches_full_text(query, self.text_fields, self._text_values(model))
        ]

    def _text_values(self, model: Record):
        def values_of(field: str) -> list[Optional[str]]:
            if field == FIELD_NAME:
                return [model.name]
            if field == FIELD_DESCRIPTION:
                return [model.description]
            return list(
                self.session.execute(
                    select(RecordTag.tag).where(RecordTag.record_id == model.id)
                ).scalars()
            )

        return values_of
