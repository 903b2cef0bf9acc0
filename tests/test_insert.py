"""Unit tests for InsertBuilder."""
from __future__ import annotations

from bindql.args import Raw
from bindql.builder.insert import InsertBuilder, insert_ignore_into, insert_into, replace_into
from bindql.flavor import CQL, DORIS, MYSQL, ORACLE, POSTGRESQL, SQLITE, SQLSERVER


def test_insert_multiple_rows():
    ib = insert_into("demo.user")
    ib.cols("id", "name", "status", "created_at")
    ib.values(1, "Huan Du", 1, Raw("UNIX_TIMESTAMP(NOW())"))
    ib.values(2, "Charmy Liu", 1, 1234567890)

    sql, values = ib.build()
    assert sql == (
        "INSERT INTO demo.user (id, name, status, created_at) "
        "VALUES (?, ?, ?, UNIX_TIMESTAMP(NOW())), (?, ?, ?, ?)"
    )
    assert values == [1, "Huan Du", 1, 2, "Charmy Liu", 1, 1234567890]
    assert ib.num_value() == 2


def test_insert_postgresql_ordinals():
    ib = POSTGRESQL.new_insert_builder()
    ib.insert_into("t").cols("a", "b").values(1, 2).values(3, 4)
    assert ib.build().sql == "INSERT INTO t (a, b) VALUES ($1, $2), ($3, $4)"


def test_insert_ignore_per_flavor():
    def sql_for(flavor):
        ib = flavor.new_insert_builder()
        ib.insert_ignore_into("t").cols("a").values(1)
        return ib.build().sql

    assert sql_for(MYSQL) == "INSERT IGNORE INTO t (a) VALUES (?)"
    assert sql_for(DORIS) == "INSERT IGNORE INTO t (a) VALUES (?)"
    assert sql_for(SQLITE) == "INSERT OR IGNORE INTO t (a) VALUES (?)"
    assert sql_for(POSTGRESQL) == "INSERT INTO t (a) VALUES ($1) ON CONFLICT DO NOTHING"
    assert sql_for(SQLSERVER) == "INSERT INTO t (a) VALUES (@p1)"
    assert sql_for(CQL) == "INSERT INTO t (a) VALUES (?)"


def test_replace_into():
    ib = replace_into("t").cols("a").values(1)
    assert ib.build().sql == "REPLACE INTO t (a) VALUES (?)"
    assert insert_ignore_into("t").values(1).build().sql == "INSERT IGNORE INTO t VALUES (?)"


def test_oracle_multi_row_insert_all():
    ib = ORACLE.new_insert_builder()
    ib.insert_into("t").cols("a", "b").values(1, 2).values(3, 4)
    sql, values = ib.build()
    assert sql == (
        "INSERT ALL INTO t (a, b) VALUES (:1, :2) INTO t (a, b) VALUES (:3, :4) "
        "SELECT 1 from DUAL"
    )
    assert values == [1, 2, 3, 4]


def test_oracle_single_row_is_plain_insert():
    ib = ORACLE.new_insert_builder()
    ib.insert_into("t").cols("a").values(1)
    assert ib.build().sql == "INSERT INTO t (a) VALUES (:1)"


def test_insert_select():
    ib = POSTGRESQL.new_insert_builder()
    ib.insert_into("archive").cols("id", "name")
    sb = ib.select("id", "name")
    sb.from_("user").where(sb.less_than("created_at", 100))

    sql, values = ib.build()
    assert sql == "INSERT INTO archive (id, name) SELECT id, name FROM user WHERE created_at < $1"
    assert values == [100]


def test_returning_only_where_supported():
    ib = InsertBuilder(POSTGRESQL)
    ib.insert_into("t").cols("a").values(1).returning("id")
    assert ib.build().sql == "INSERT INTO t (a) VALUES ($1) RETURNING id"
    assert ib.build_with_flavor(MYSQL).sql == "INSERT INTO t (a) VALUES (?)"


def test_table_and_columns_are_escaped():
    ib = insert_into("t$1").cols("$a").values(1)
    assert ib.build().sql == "INSERT INTO t$1 ($a) VALUES (?)"
