"""bindQL flavor table: per-dialect placeholder and literal rules."""
from bindql.flavor.base import Flavor
from bindql.flavor.dialects import (
    BUILTIN_FLAVORS,
    CLICKHOUSE,
    CQL,
    DORIS,
    INFORMIX,
    MYSQL,
    ORACLE,
    POSTGRESQL,
    PRESTO,
    SQLITE,
    SQLSERVER,
)
from bindql.flavor.registry import FlavorRegistry

__all__ = [
    "Flavor",
    "FlavorRegistry",
    "BUILTIN_FLAVORS",
    "MYSQL",
    "POSTGRESQL",
    "SQLITE",
    "SQLSERVER",
    "CQL",
    "CLICKHOUSE",
    "PRESTO",
    "ORACLE",
    "INFORMIX",
    "DORIS",
]
