"""Tests for keyset predicates and ordering (ledger_kernel/paging/seek.py)."""

from types import SimpleNamespace
from uuid import uuid4

from sqlalchemy.dialects import sqlite

from ledger_kernel.models import User
from ledger_kernel.paging.seek import (
    anchor_bound,
    build_seek_bounds,
    effective_order,
    order_clauses,
    seek_bound,
)
from ledger_kernel.paging.types import Order


def _sql(clause) -> str:
    return str(clause.compile(dialect=sqlite.dialect()))


def _params(clause) -> list:
    return list(clause.compile(dialect=sqlite.dialect()).params.values())


def _anchor(name: str = "User 2"):
    return SimpleNamespace(id=uuid4(), name=name)


class TestOrder:
    def test_reversed(self):
        assert Order.ASC.reversed() is Order.DESC
        assert Order.DESC.reversed() is Order.ASC

    def test_effective_order(self):
        assert effective_order(Order.ASC, False) is Order.ASC
        assert effective_order(Order.ASC, True) is Order.DESC
        assert effective_order(Order.DESC, True) is Order.ASC


class TestOrderClauses:
    def test_sort_column_then_pk(self):
        clauses = order_clauses(User.name, User.id, Order.ASC)
        assert [str(c) for c in clauses] == ["users.name ASC", "users.id ASC"]

    def test_pk_follows_sort_direction(self):
        clauses = order_clauses(User.name, User.id, Order.DESC)
        assert [str(c) for c in clauses] == ["users.name DESC", "users.id DESC"]

    def test_pk_only_without_sort_column(self):
        clauses = order_clauses(None, User.id, Order.DESC)
        assert [str(c) for c in clauses] == ["users.id DESC"]


class TestSeekBound:
    def test_greater_bound_shape(self):
        anchor = _anchor()
        sql = _sql(seek_bound(User.name, User.id, anchor.name, anchor.id, greater=True))
        assert sql == "users.name > ? OR users.name = ? AND users.id > ?"

    def test_lesser_bound_shape(self):
        anchor = _anchor()
        sql = _sql(seek_bound(User.name, User.id, anchor.name, anchor.id, greater=False))
        assert sql == "users.name < ? OR users.name = ? AND users.id < ?"

    def test_bound_binds_anchor_values(self):
        anchor = _anchor("User 7")
        params = _params(seek_bound(User.name, User.id, anchor.name, anchor.id, greater=True))
        assert params.count("User 7") == 2
        assert anchor.id in params

    def test_pk_only_bound(self):
        anchor = _anchor()
        sql = _sql(seek_bound(None, User.id, None, anchor.id, greater=False))
        assert sql == "users.id < ?"


class TestAnchorBound:
    def test_after_ascending_uses_greater(self):
        assert " > " in _sql(anchor_bound(User.name, User.id, _anchor(), Order.ASC, after=True))

    def test_after_descending_uses_lesser(self):
        assert " < " in _sql(anchor_bound(User.name, User.id, _anchor(), Order.DESC, after=True))

    def test_before_is_opposite_of_after(self):
        assert " < " in _sql(anchor_bound(User.name, User.id, _anchor(), Order.ASC, after=False))
        assert " > " in _sql(anchor_bound(User.name, User.id, _anchor(), Order.DESC, after=False))

    def test_reads_anchor_value_from_sort_attribute(self):
        anchor = _anchor("User 9")
        assert "User 9" in _params(anchor_bound(User.name, User.id, anchor, Order.ASC, after=True))


class TestBuildSeekBounds:
    def test_no_anchors_no_bounds(self):
        assert build_seek_bounds(User.name, User.id, Order.ASC, None, None) == []

    def test_one_bound_per_anchor(self):
        assert len(build_seek_bounds(User.name, User.id, Order.ASC, _anchor(), None)) == 1
        assert len(build_seek_bounds(User.name, User.id, Order.ASC, None, _anchor())) == 1

    def test_both_anchors_form_a_window(self):
        bounds = build_seek_bounds(
            User.name, User.id, Order.ASC, _anchor("User 1"), _anchor("User 4")
        )
        assert len(bounds) == 2
        assert " > " in _sql(bounds[0])
        assert " < " in _sql(bounds[1])
