"""Unit tests for ad-hoc format builders."""
from __future__ import annotations

from bindql.args import Named
from bindql.builder.base import build, build_named
from bindql.builder.select import SelectBuilder
from bindql.flavor import POSTGRESQL


def test_build_with_sub_query():
    sb = SelectBuilder()
    sb.select("id").from_("user").where(sb.in_("status", 1, 2))

    b = build("EXPLAIN $? LIMIT $?", sb, 10)
    sql, values = b.build()
    assert sql == "EXPLAIN SELECT id FROM user WHERE status IN (?, ?) LIMIT ?"
    assert values == [1, 2, 10]


def test_build_flavor():
    b = build("$? AND $?", 1, 2)
    assert b.build_with_flavor(POSTGRESQL).sql == "$1 AND $2"
    b.set_flavor(POSTGRESQL)
    assert str(b) == "$1 AND $2"


def test_build_with_named_value():
    b = build("a = $? AND b = $?", Named("x", 1), 2)
    sql, values = b.build()
    assert sql == "a = @x AND b = ?"
    assert values == [2, Named("x", 1)]


def test_build_named():
    b = build_named(
        "SELECT * FROM t WHERE id = ${id} AND cost > $1 AND name = ${name}",
        {"id": 1, "name": "x"},
    )
    sql, values = b.build()
    assert sql == "SELECT * FROM t WHERE id = ? AND cost > $1 AND name = ?"
    assert values == [1, "x"]


def test_build_named_reuses_value():
    b = build_named("${id} ${id} $$", {"id": 5})
    sql, values = b.build_with_flavor(POSTGRESQL)
    assert sql == "$1 $2 $"
    assert values == [5, 5]
