"""Unit tests for DeleteBuilder."""
from __future__ import annotations

from bindql.builder.delete import DeleteBuilder, delete_from
from bindql.flavor import MYSQL, POSTGRESQL


def test_delete_with_conditions():
    db = DeleteBuilder()
    db.delete_from("demo.user")
    db.where(
        db.greater_than("id", 1234),
        db.like("name", "%Du"),
        db.or_(db.is_null("id_card"), db.in_("status", 1, 2, 5)),
        "modified_at > created_at + " + db.var(86400),
    )

    sql, values = db.build()
    assert sql == (
        "DELETE FROM demo.user WHERE id > ? AND name LIKE ? "
        "AND (id_card IS NULL OR status IN (?, ?, ?)) AND modified_at > created_at + ?"
    )
    assert values == [1234, "%Du", 1, 2, 5, 86400]


def test_delete_everything():
    assert delete_from("t").build().sql == "DELETE FROM t"


def test_order_and_limit():
    db = POSTGRESQL.new_delete_builder()
    db.delete_from("t").where(db.equal("a", 1)).order_by("id").asc().limit(5)
    assert tuple(db.build()) == ("DELETE FROM t WHERE a = $1 ORDER BY id ASC LIMIT $2", [1, 5])


def test_returning():
    db = POSTGRESQL.new_delete_builder()
    db.delete_from("t").where(db.equal("a", 1)).returning("id")
    assert db.build().sql == "DELETE FROM t WHERE a = $1 RETURNING id"
    assert db.build_with_flavor(MYSQL).sql == "DELETE FROM t WHERE a = ?"
