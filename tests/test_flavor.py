"""Unit tests for Flavor records and FlavorRegistry."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from bindql import (
    BUILTIN_FLAVORS,
    MYSQL,
    ORACLE,
    POSTGRESQL,
    SQLSERVER,
    DeleteBuilder,
    Flavor,
    FlavorRegistry,
    InsertBuilder,
    SelectBuilder,
    UnionBuilder,
    UpdateBuilder,
)
from bindql.builder.createtable import CreateTableBuilder
from bindql.builder.cte import CTEBuilder, CTETableBuilder
from bindql.errors import FlavorNotFoundError


def test_builtin_flavors_are_registered():
    assert len(BUILTIN_FLAVORS) == 10
    assert FlavorRegistry.registered_names() == [
        "CQL",
        "ClickHouse",
        "Doris",
        "Informix",
        "MySQL",
        "Oracle",
        "PostgreSQL",
        "Presto",
        "SQLServer",
        "SQLite",
    ]


def test_registry_lookup_is_case_insensitive():
    assert FlavorRegistry.get("postgresql") is POSTGRESQL
    assert FlavorRegistry.get("MYSQL") is MYSQL


def test_unknown_flavor_raises():
    with pytest.raises(FlavorNotFoundError, match="Unsupported flavor") as exc_info:
        FlavorRegistry.get("dbase")
    assert exc_info.value.name == "dbase"
    assert "MySQL" in exc_info.value.registered


def test_register_custom_flavor(isolated_registry):
    mariadb = isolated_registry.register(
        Flavor(name="MariaDB", identifier_quote="`", binary_literal="mysql_binary")
    )
    assert isolated_registry.get("mariadb") is mariadb
    assert mariadb.interpolate("SELECT ?", [b"a"]) == "SELECT _binary'a'"


def test_flavor_is_frozen():
    with pytest.raises(ValidationError):
        MYSQL.name = "Other"


def test_flavor_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        Flavor(name="X", dialect="mysql")


def test_flavor_rejects_unknown_placeholder():
    with pytest.raises(ValidationError):
        Flavor(name="X", placeholder="%s")


def test_placeholder_for():
    assert MYSQL.placeholder_for(3) == "?"
    assert POSTGRESQL.placeholder_for(3) == "$3"
    assert SQLSERVER.placeholder_for(3) == "@p3"
    assert ORACLE.placeholder_for(3) == ":3"
    assert not MYSQL.is_ordinal
    assert ORACLE.is_ordinal


def test_quote_identifier():
    assert MYSQL.quote("user") == "`user`"
    assert POSTGRESQL.quote("user") == '"user"'
    assert POSTGRESQL.quote('a"b') == '"a""b"'


def test_str_is_name():
    assert str(SQLSERVER) == "SQLServer"


def test_builder_factories_carry_flavor():
    assert isinstance(POSTGRESQL.new_select_builder(), SelectBuilder)
    assert isinstance(POSTGRESQL.new_insert_builder(), InsertBuilder)
    assert isinstance(POSTGRESQL.new_update_builder(), UpdateBuilder)
    assert isinstance(POSTGRESQL.new_delete_builder(), DeleteBuilder)
    assert isinstance(POSTGRESQL.new_cte_builder(), CTEBuilder)
    assert isinstance(POSTGRESQL.new_cte_table_builder(), CTETableBuilder)
    assert isinstance(POSTGRESQL.new_create_table_builder(), CreateTableBuilder)
    assert POSTGRESQL.new_select_builder().flavor is POSTGRESQL


def test_flavor_union_factory():
    sb1 = _select_id("a")
    sb2 = _select_id("b")
    ub = POSTGRESQL.union(sb1, sb2)
    assert isinstance(ub, UnionBuilder)
    assert ub.build().sql == "(SELECT id FROM a UNION SELECT id FROM b)"


def _select_id(table: str) -> SelectBuilder:
    sb = SelectBuilder()
    sb.select("id").from_(table)
    return sb
