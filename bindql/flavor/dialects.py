"""Built-in flavors.

Each constant is a frozen :class:`~bindql.flavor.base.Flavor`.  They are
registered with :class:`~bindql.flavor.registry.FlavorRegistry` in
``bindql/__init__.py``.
"""
from __future__ import annotations

from bindql.flavor.base import Flavor

#: Placeholder ``?``, backslash escapes, ``_binary'...'`` blobs.
MYSQL = Flavor(
    name="MySQL",
    identifier_quote="`",
    binary_literal="mysql_binary",
    timestamp_literal="plain",
    paging="limit_offset",
    insert_ignore="keyword",
)

#: Placeholder ``$N``, ``E'...'`` strings, ``bytea`` blobs, dollar quoting.
POSTGRESQL = Flavor(
    name="PostgreSQL",
    placeholder="$",
    string_prefix="E",
    binary_literal="bytea",
    timestamp_literal="zone_name",
    paging="limit_offset_independent",
    insert_ignore="on_conflict",
    supports_returning=True,
)

SQLITE = Flavor(
    name="SQLite",
    binary_literal="x_hex",
    timestamp_literal="millis",
    paging="limit_offset",
    insert_ignore="or_ignore",
    supports_returning=True,
)

#: Placeholder ``@pN``, ``N'...'`` unicode strings.
SQLSERVER = Flavor(
    name="SQLServer",
    placeholder="@p",
    string_prefix="N",
    binary_literal="0x",
    timestamp_literal="iso_offset",
    paging="offset_fetch",
    insert_ignore="unsupported",
)

#: Cassandra Query Language; single quotes are doubled, not backslashed.
CQL = Flavor(
    name="CQL",
    identifier_quote="'",
    quote_escape="double",
    binary_literal="0x",
    timestamp_literal="compact_offset",
    paging="limit_only",
    insert_ignore="unsupported",
)

CLICKHOUSE = Flavor(
    name="ClickHouse",
    identifier_quote="`",
    binary_literal="unhex",
    timestamp_literal="plain",
    paging="limit_offset",
    insert_ignore="unsupported",
)

PRESTO = Flavor(
    name="Presto",
    binary_literal="from_hex",
    timestamp_literal="millis",
    paging="offset_limit",
    insert_ignore="unsupported",
)

#: Placeholder ``:N``; booleans are ``1`` / ``0``.
ORACLE = Flavor(
    name="Oracle",
    placeholder=":",
    true_literal="1",
    false_literal="0",
    binary_literal="hextoraw",
    timestamp_literal="to_timestamp",
    paging="rownum",
    insert_ignore="unsupported",
)

INFORMIX = Flavor(
    name="Informix",
    binary_literal="x_hex",
    timestamp_literal="plain",
    paging="skip_first",
    insert_ignore="unsupported",
)

#: MySQL-compatible; LIMIT / OFFSET cannot be bound and are inlined.
DORIS = Flavor(
    name="Doris",
    identifier_quote="`",
    binary_literal="x_hex",
    timestamp_literal="plain",
    paging="limit_offset_literal",
    insert_ignore="keyword",
)

BUILTIN_FLAVORS: tuple[Flavor, ...] = (
    MYSQL,
    POSTGRESQL,
    SQLITE,
    SQLSERVER,
    CQL,
    CLICKHOUSE,
    PRESTO,
    ORACLE,
    INFORMIX,
    DORIS,
)
