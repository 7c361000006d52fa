"""Tests for the pure query value objects (ledger_kernel/domain/queries.py)."""

from datetime import date
from string import ascii_letters
from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st
from sqlalchemy.dialects import sqlite

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
    FullTextQuery,
    TextQuery,
    all_of,
    id_clause,
    matches_full_text,
    normalize_keyword,
    text_contains,
)
from ledger_kernel.models import Record, User
from ledger_kernel.selectors.membership import holds_user


def _sql(clause) -> str:
    return str(clause.compile(dialect=sqlite.dialect()))


class TestTextContains:
    def test_case_insensitive(self):
        assert text_contains("Household Books", "books")

    def test_empty_keyword_matches_none(self):
        assert text_contains(None, "")

    def test_none_haystack_never_matches(self):
        assert not text_contains(None, "x")

    def test_normalize_keyword(self):
        assert normalize_keyword("  MiXeD ") == "mixed"

    @given(st.text(alphabet=ascii_letters + " "), st.text(alphabet=ascii_letters + " "))
    def test_substring_always_found(self, prefix, needle):
        keyword = normalize_keyword(needle)
        assert text_contains(prefix + keyword, keyword)


class TestTextQuery:
    def test_constructors(self):
        assert TextQuery.exact("a") == TextQuery("a", full_text=False)
        assert TextQuery.contains("a") == TextQuery("a", full_text=True)

    def test_frozen(self):
        query = TextQuery.exact("a")
        with pytest.raises(AttributeError):
            query.value = "b"


class TestMatchesFullText:
    def _values(self, **fields):
        calls = []

        def values_of(field):
            calls.append(field)
            return fields.get(field, [])

        return values_of, calls

    def test_matches_any_field(self):
        values_of, _ = self._values(name=["Cash"], description=["Pocket money"])
        assert matches_full_text(FullTextQuery("POCKET"), TEXT_FIELDS, values_of)

    def test_no_field_matches(self):
        values_of, _ = self._values(name=["Cash"], description=["Wallet"], tag=["liquid"])
        assert not matches_full_text(FullTextQuery("bank"), TEXT_FIELDS, values_of)

    def test_empty_keyword_matches_without_lookup(self):
        values_of, calls = self._values(name=["Cash"])
        assert matches_full_text(FullTextQuery("  "), TEXT_FIELDS, values_of)
        assert calls == []

    def test_restricted_fields(self):
        values_of, calls = self._values(name=["Cash"], description=["cash box"])
        query = FullTextQuery("box", frozenset({FIELD_NAME}))
        assert not matches_full_text(query, TEXT_FIELDS, values_of)
        assert calls == [FIELD_NAME]

    def test_unknown_field_matches_everything(self):
        values_of, calls = self._values(name=["Cash"])
        query = FullTextQuery("zzz", frozenset({FIELD_NAME, "unit"}))
        assert matches_full_text(query, TEXT_FIELDS, values_of)
        assert calls == []

    def test_empty_field_set_means_all_known(self):
        values_of, _ = self._values(tag=["Holiday"])
        assert matches_full_text(FullTextQuery("holi", frozenset()), TEXT_FIELDS, values_of)

    def test_tag_looked_up_last_and_only_when_needed(self):
        values_of, calls = self._values(name=["Trip"], tag=["trip"])
        assert matches_full_text(FullTextQuery("trip"), TEXT_FIELDS, values_of)
        assert FIELD_TAG not in calls

        values_of, calls = self._values(name=["Trip"], tag=["holiday"])
        assert matches_full_text(FullTextQuery("holiday"), TEXT_FIELDS, values_of)
        assert calls[-1] == FIELD_TAG
        assert set(calls) == {FIELD_NAME, FIELD_DESCRIPTION, FIELD_TAG}

    def test_none_values_skipped(self):
        values_of, _ = self._values(name=["Cash"], description=[None])
        assert not matches_full_text(FullTextQuery("x"), TEXT_FIELDS, values_of)


class TestComparableQuery:
    def test_no_bounds_no_clauses(self):
        assert ComparableQuery().clauses(Record.date) == []

    def test_bounds_anded(self):
        query = ComparableQuery(gte=date(2024, 1, 1), lt=date(2024, 2, 1))
        assert [_sql(c) for c in query.clauses(Record.date)] == [
            "records.date < ?",
            "records.date >= ?",
        ]

    def test_eq(self):
        assert [_sql(c) for c in ComparableQuery(eq=date(2024, 1, 1)).clauses(Record.date)] == [
            "records.date = ?"
        ]

    @given(st.lists(st.sampled_from(["eq", "gt", "lt", "gte", "lte"]), unique=True))
    def test_one_clause_per_bound(self, bounds):
        query = ComparableQuery(**{bound: date(2024, 1, 1) for bound in bounds})
        assert len(query.clauses(Record.date)) == len(bounds)


class TestAccessItems:
    def test_constructors(self):
        uid = uuid4()
        assert AccessItem.user(uid).typ is AccessItemType.USER
        assert AccessItem.group(uid).typ is AccessItemType.GROUP
        assert AccessItem(uid) == AccessItem.user(uid)

    def test_containing_user_wants(self):
        uid = uuid4()
        assert ContainingUserQuery(uid).wants(FIELD_ADMINS)
        restricted = ContainingUserQuery(uid, frozenset({FIELD_ADMINS}))
        assert restricted.wants(FIELD_ADMINS)
        assert not restricted.wants("members")

    def test_holds_user_checks_only_wanted_lists(self):
        uid = uuid4()
        admins_only = ContainingUserQuery(uid, frozenset({FIELD_ADMINS}))
        assert not holds_user(set(), ContainingUserQuery(uid))
        assert holds_user({FIELD_MEMBERS}, ContainingUserQuery(uid, frozenset()))
        assert not holds_user({FIELD_MEMBERS}, admins_only)
        assert holds_user({FIELD_ADMINS, FIELD_MEMBERS}, admins_only)


class TestClauses:
    def test_single_id_is_equality(self):
        assert _sql(id_clause(User.id, uuid4())) == "users.id = ?"

    def test_id_collection_is_in(self):
        sql = _sql(id_clause(User.id, frozenset({uuid4(), uuid4()})))
        assert sql.startswith("users.id IN")

    def test_all_of_keeps_every_clause(self):
        sql = _sql(all_of([User.name == "a", User.role == 1]))
        assert "users.name = ?" in sql
        assert "users.role = ?" in sql
