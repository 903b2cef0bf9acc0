"""Integration tests: build → execute against a real SQLite in-memory DB.

Statements are executed twice where it matters: once with bound parameters,
once as interpolated literal SQL, and both must give the same rows.
"""
from __future__ import annotations

import sqlite3
from datetime import datetime

import pytest
from pydantic import BaseModel

from bindql import SQLITE, Raw, Struct, cte_table, db_field, union_all, with_
from tests.fixtures import load_ddl

USERS = [
    (1, "Alice", 1),
    (2, "Bob", 2),
    (3, "Carol", 1),
    (4, "Dave", 3),
]


class User(BaseModel):
    id: int = db_field(tags=("pk",))
    name: str = db_field(quote=True)
    status: int = db_field(0, omit_empty=True)


@pytest.fixture()
def db() -> sqlite3.Connection:
    conn = sqlite3.connect(":memory:")
    conn.executescript(load_ddl("sqlite"))

    ib = SQLITE.new_insert_builder()
    ib.insert_into("users").cols("id", "name", "status")
    for row in USERS:
        ib.values(*row)
    conn.execute(*ib.build())

    ib = SQLITE.new_insert_builder()
    ib.insert_into("orders").cols("id", "user_id", "total")
    ib.values(1, 1, 10.5).values(2, 1, 99.0).values(3, 3, 250.0)
    conn.execute(*ib.build())
    return conn


def _names(conn: sqlite3.Connection, sql: str, values=()) -> list[str]:
    return [r[0] for r in conn.execute(sql, values).fetchall()]


def test_select_bound_and_interpolated_agree(db):
    sb = SQLITE.new_select_builder()
    sb.select("name").from_("users")
    sb.where(sb.in_("status", 1, 2), sb.not_equal("name", "Bob")).order_by("id")

    sql, values = sb.build()
    assert _names(db, sql, values) == ["Alice", "Carol"]
    assert _names(db, sb.build().interpolate()) == ["Alice", "Carol"]


def test_paging(db):
    sb = SQLITE.new_select_builder()
    sb.select("name").from_("users").order_by("id").limit(2).offset(1)
    assert _names(db, *sb.build()) == ["Bob", "Carol"]


def test_sub_query_in(db):
    orders = SQLITE.new_select_builder()
    orders.select("user_id").from_("orders").where(orders.greater_than("total", 50))

    sb = SQLITE.new_select_builder()
    sb.select("name").from_("users").where(sb.in_("id", orders)).order_by("id")
    assert _names(db, *sb.build()) == ["Alice", "Carol"]


def test_join_group_by(db):
    sb = SQLITE.new_select_builder()
    sb.select("u.name", "SUM(o.total)").from_("users u")
    sb.join("orders o", "o.user_id = u.id")
    sb.group_by("u.name").having(sb.greater_than("SUM(o.total)", 100)).order_by("u.name")
    rows = db.execute(*sb.build()).fetchall()
    assert rows == [("Alice", 109.5), ("Carol", 250.0)]


def test_update_and_delete(db):
    ub = SQLITE.new_update_builder()
    ub.update("users").set(ub.incr("status"), ub.assign("name", "Robert"))
    ub.where(ub.equal("id", 2))
    db.execute(*ub.build())
    assert db.execute("SELECT name, status FROM users WHERE id = 2").fetchone() == ("Robert", 3)

    dbld = SQLITE.new_delete_builder()
    dbld.delete_from("users").where(dbld.equal("status", 3))
    db.execute(*dbld.build())
    assert _names(db, "SELECT name FROM users ORDER BY id") == ["Alice", "Carol"]


def test_insert_ignore_skips_duplicates(db):
    ib = SQLITE.new_insert_builder()
    ib.insert_ignore_into("users").cols("id", "name").values(1, "Duplicate")
    db.execute(*ib.build())
    assert _names(db, "SELECT name FROM users WHERE id = 1") == ["Alice"]


def test_interpolated_literals_round_trip(db):
    ib = SQLITE.new_insert_builder()
    ib.insert_into("users").cols("id", "name", "active", "avatar", "created_at")
    ib.values(9, "Eve", False, b"\x00\xff", datetime(2024, 1, 2, 3, 4, 5, 678000))
    db.execute(ib.build().interpolate())

    row = db.execute(
        "SELECT name, active, avatar, created_at FROM users WHERE id = 9"
    ).fetchone()
    assert row == ("Eve", 0, b"\x00\xff", "2024-01-02 03:04:05.678")


def test_raw_expression(db):
    ub = SQLITE.new_update_builder()
    ub.update("users").set(ub.assign("created_at", Raw("datetime('now')")))
    ub.where(ub.equal("id", 1))
    db.execute(*ub.build())
    assert db.execute("SELECT created_at IS NOT NULL FROM users WHERE id = 1").fetchone() == (1,)


def test_union_all(db):
    a = SQLITE.new_select_builder()
    a.select("name").from_("users").where(a.equal("id", 1))
    b = SQLITE.new_select_builder()
    b.select("name").from_("users").where(b.equal("id", 4))
    ub = union_all(a, b)
    ub.set_flavor(SQLITE)
    sql, values = ub.build()
    # SQLite only accepts a parenthesized compound SELECT as a sub-query.
    assert _names(db, f"SELECT name FROM {sql} AS u ORDER BY name", values) == ["Alice", "Dave"]


def test_cte(db):
    big = SQLITE.new_select_builder()
    big.select("user_id", "total").from_("orders").where(big.greater_than("total", 20))

    sb = with_(cte_table("big_orders").as_(big)).select("users.name")
    sb.join("users", "users.id = big_orders.user_id").order_by("users.id")
    sb.set_flavor(SQLITE)
    assert _names(db, *sb.build()) == ["Alice", "Carol"]


def test_struct_insert_and_select(db):
    s = Struct(User, SQLITE)
    db.execute(*s.insert_into("users", User(id=7, name="Frank", status=5)).build())

    sb = s.select_from("users")
    sb.where(sb.equal("id", 7))
    row = db.execute(*sb.build()).fetchone()
    assert User(**dict(zip(["id", "name", "status"], row))) == User(id=7, name="Frank", status=5)


@pytest.mark.skipif(sqlite3.sqlite_version_info < (3, 35, 0), reason="RETURNING needs SQLite 3.35")
def test_returning(db):
    ib = SQLITE.new_insert_builder()
    ib.insert_into("users").cols("id", "name").values(8, "Gina").returning("id")
    assert db.execute(*ib.build()).fetchone() == (8,)
