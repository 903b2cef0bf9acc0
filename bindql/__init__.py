"""bindQL - SQL statement assembly with dialect-aware value binding.

Public API
----------
Builders
    ``select``, ``insert_into``, ``update``, ``delete_from``, ``union``,
    ``with_``, ``create_table`` and the builder classes behind them.  Each
    one registers its values in an :class:`~bindql.args.Args` registry and
    compiles to ``(sql, values)`` for a flavor.

``Args``
    The argument registry and placeholder compiler (``$?``, ``$N``,
    ``${name}``, ``$$``).

``interpolate``
    Render compiled SQL and its values as self-contained literal SQL.

Flavors
-------
Ten built-in flavors (``MYSQL``, ``POSTGRESQL``, ``SQLITE``, ``SQLSERVER``,
``CQL``, ``CLICKHOUSE``, ``PRESTO``, ``ORACLE``, ``INFORMIX``, ``DORIS``) are
registered with :class:`~bindql.flavor.registry.FlavorRegistry` on import.
Further flavors can be registered::

    from bindql import Flavor, FlavorRegistry

    FlavorRegistry.register(Flavor(name="MariaDB", identifier_quote="`"))

Example::

    import bindql

    sb = bindql.POSTGRESQL.new_select_builder()
    sb.select("id", "name").from_("user").where(sb.in_("status", 1, 2))
    sql, values = sb.build()
    # SELECT id, name FROM user WHERE status IN ($1, $2)   [1, 2]
    sb.build().interpolate()
    # SELECT id, name FROM user WHERE status IN (1, 2)
"""

from __future__ import annotations

from bindql.args import (
    Args,
    BoundValue,
    CompiledQuery,
    Named,
    Raw,
    Scalar,
    SubQuery,
    Tuple,
    ValueList,
    escape,
    escape_all,
    flatten,
    to_bound_value,
    tuple_names,
)
from bindql.builder import (
    Builder,
    Cond,
    CTEBuilder,
    CTETableBuilder,
    CreateTableBuilder,
    DeleteBuilder,
    InsertBuilder,
    SelectBuilder,
    UnionBuilder,
    UpdateBuilder,
    WhereClause,
    build,
    build_named,
    copy_where_clause,
    create_table,
    create_temp_table,
    cte_table,
    delete_from,
    insert_ignore_into,
    insert_into,
    replace_into,
    select,
    union,
    union_all,
    update,
    with_,
    with_recursive,
)
from bindql.config import default_flavor, get_default_flavor, set_default_flavor
from bindql.errors import (
    BindQLError,
    CompilationError,
    FlavorNotFoundError,
    InterpolationError,
    MissingArgumentError,
    OrdinalOverflowError,
    UnsupportedValueKindError,
)
from bindql.flavor import (
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
    Flavor,
    FlavorRegistry,
)
from bindql.interpolate import SQLValuer, encode_value, interpolate
from bindql.struct import Struct, db_field

# ---------------------------------------------------------------------------
# Register built-in flavors with FlavorRegistry
# ---------------------------------------------------------------------------

for _flavor in BUILTIN_FLAVORS:
    FlavorRegistry.register(_flavor)
del _flavor

__all__ = [
    # Binding engine
    "Args",
    "BoundValue",
    "CompiledQuery",
    "Scalar",
    "Raw",
    "ValueList",
    "Named",
    "SubQuery",
    "Tuple",
    "to_bound_value",
    "escape",
    "escape_all",
    "tuple_names",
    "flatten",
    "interpolate",
    "encode_value",
    "SQLValuer",
    # Flavors
    "Flavor",
    "FlavorRegistry",
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
    # Configuration
    "get_default_flavor",
    "set_default_flavor",
    "default_flavor",
    # Builders
    "Builder",
    "Cond",
    "WhereClause",
    "copy_where_clause",
    "SelectBuilder",
    "InsertBuilder",
    "UpdateBuilder",
    "DeleteBuilder",
    "UnionBuilder",
    "CTEBuilder",
    "CTETableBuilder",
    "CreateTableBuilder",
    "build",
    "build_named",
    "select",
    "insert_into",
    "insert_ignore_into",
    "replace_into",
    "update",
    "delete_from",
    "union",
    "union_all",
    "with_",
    "with_recursive",
    "cte_table",
    "create_table",
    "create_temp_table",
    # Struct mapping
    "Struct",
    "db_field",
    # Errors
    "BindQLError",
    "FlavorNotFoundError",
    "CompilationError",
    "InterpolationError",
    "MissingArgumentError",
    "UnsupportedValueKindError",
    "OrdinalOverflowError",
]
