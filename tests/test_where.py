"""Unit tests for shareable WHERE clauses."""
from __future__ import annotations

from bindql.builder.cond import Cond
from bindql.builder.delete import DeleteBuilder
from bindql.builder.select import SelectBuilder
from bindql.builder.update import UpdateBuilder
from bindql.builder.where import WhereClause, copy_where_clause
from bindql.flavor import MYSQL, POSTGRESQL


def _tenant_clause() -> WhereClause:
    cond = Cond()
    wc = WhereClause()
    wc.add_where_expr(cond.args, cond.equal("a", 1), cond.equal("b", 2))
    return wc


def test_shared_clause_numbers_across_registries():
    wc = _tenant_clause()
    sb = POSTGRESQL.new_select_builder()
    sb.select("*").from_("t")
    sb.where_clause = wc
    sb.where(sb.greater_than("c", 3))

    sql, values = sb.build()
    assert sql == "SELECT * FROM t WHERE a = $1 AND b = $2 AND c > $3"
    assert values == [1, 2, 3]


def test_same_clause_on_several_builders():
    wc = _tenant_clause()

    ub = UpdateBuilder(MYSQL)
    ub.update("t").set(ub.assign("x", 9))
    ub.where_clause = wc

    db = DeleteBuilder(MYSQL)
    db.delete_from("t")
    db.where_clause = wc

    assert tuple(ub.build()) == ("UPDATE t SET x = ? WHERE a = ? AND b = ?", [9, 1, 2])
    assert tuple(db.build()) == ("DELETE FROM t WHERE a = ? AND b = ?", [1, 2])


def test_add_where_clause_appends_copies():
    sb = SelectBuilder()
    sb.select("id").from_("t").where(sb.equal("id", 5))
    sb.add_where_clause(_tenant_clause())
    sql, values = sb.build()
    assert sql == "SELECT id FROM t WHERE id = ? AND a = ? AND b = ?"
    assert values == [5, 1, 2]


def test_empty_clause():
    sb = SelectBuilder()
    sb.select("id").from_("t").where()
    assert sb.build().sql == "SELECT id FROM t"

    sb.where_clause = WhereClause()
    assert sb.build().sql == "SELECT id FROM t"
    assert WhereClause().build().sql == ""
    assert not WhereClause()


def test_copy_is_independent():
    original = _tenant_clause()
    copied = copy_where_clause(original)
    cond = Cond()
    copied.add_where_expr(cond.args, cond.is_null("c"))
    copied.add_where_expr(original._clauses[0].args, "d = 1")

    assert str(original) == "WHERE a = ? AND b = ?"
    assert str(copied) == "WHERE a = ? AND b = ? AND c IS NULL AND d = 1"
    assert str(original.copy()) == str(original)


def test_clause_flavor():
    wc = _tenant_clause()
    assert wc.set_flavor(POSTGRESQL) is None
    assert wc.build().sql == "WHERE a = $1 AND b = $2"
