"""Unit tests for UnionBuilder."""
from __future__ import annotations

from bindql.builder.select import SelectBuilder
from bindql.builder.union import union, union_all
from bindql.flavor import POSTGRESQL, SQLSERVER


def _users():
    sb = SelectBuilder()
    sb.select("id", "name", "created_at").from_("demo.user")
    sb.where(sb.greater_than("id", 1234))
    return sb


def _profiles():
    sb = SelectBuilder()
    sb.select("id", "avatar", "created_at").from_("demo.user_profile")
    sb.where(sb.in_("status", 1, 2, 5))
    return sb


def test_union_with_order():
    ub = union(_users(), _profiles()).order_by("created_at").desc()
    sql, values = ub.build()
    assert sql == (
        "(SELECT id, name, created_at FROM demo.user WHERE id > ? "
        "UNION SELECT id, avatar, created_at FROM demo.user_profile WHERE status IN (?, ?, ?)) "
        "ORDER BY created_at DESC"
    )
    assert values == [1234, 1, 2, 5]


def test_union_all_paging_numbers_after_branches():
    ub = POSTGRESQL.union_all(_users(), _profiles()).limit(10).offset(5)
    sql, values = ub.build()
    assert sql == (
        "(SELECT id, name, created_at FROM demo.user WHERE id > $1 "
        "UNION ALL SELECT id, avatar, created_at FROM demo.user_profile "
        "WHERE status IN ($2, $3, $4)) LIMIT $5 OFFSET $6"
    )
    assert values == [1234, 1, 2, 5, 10, 5]


def test_single_branch_is_not_wrapped():
    sql, values = union_all(_users()).build()
    assert sql == "SELECT id, name, created_at FROM demo.user WHERE id > ?"
    assert values == [1234]


def test_union_paging_sqlserver():
    ub = union(_users(), _profiles()).order_by("id").asc().limit(3)
    sql, _ = ub.build_with_flavor(SQLSERVER)
    assert sql.endswith(") ORDER BY id ASC OFFSET 0 ROWS FETCH NEXT @p5 ROWS ONLY")
