"""Pure query value objects for the ledger read side."""

from ledger_kernel.domain.queries import (
    FIELD_ADMINS,
    FIELD_DESCRIPTION,
    FIELD_MEMBERS,
    FIELD_NAME,
    FIELD_TAG,
    TEXT_FIELDS,
    AccessItem,
    AccessItemType,
    ComparableQuery,
    ContainingUserQuery,
    ExternalQuery,
    FullTextQuery,
    IdQuery,
    TextQuery,
    all_of,
    id_clause,
    matches_full_text,
    normalize_keyword,
    text_contains,
)

__all__ = [
    "FIELD_NAME",
    "FIELD_DESCRIPTION",
    "FIELD_TAG",
    "FIELD_ADMINS",
    "FIELD_MEMBERS",
    "TEXT_FIELDS",
    "TextQuery",
    "ComparableQuery",
    "AccessItem",
    "AccessItemType",
    "FullTextQuery",
    "ContainingUserQuery",
    "ExternalQuery",
    "IdQuery",
    "id_clause",
    "matches_full_text",
    "all_of",
    "normalize_keyword",
    "text_contains",
]
