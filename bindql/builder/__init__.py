"""bindQL statement builders."""
from bindql.builder.base import Builder, FormatBuilder, Paging, build, build_named
from bindql.builder.cond import Cond
from bindql.builder.createtable import CreateTableBuilder, create_table, create_temp_table
from bindql.builder.cte import CTEBuilder, CTETableBuilder, cte_table, with_, with_recursive
from bindql.builder.delete import DeleteBuilder, delete_from
from bindql.builder.insert import InsertBuilder, insert_ignore_into, insert_into, replace_into
from bindql.builder.select import (
    FULL_JOIN,
    FULL_OUTER_JOIN,
    INNER_JOIN,
    LEFT_JOIN,
    LEFT_OUTER_JOIN,
    RIGHT_JOIN,
    RIGHT_OUTER_JOIN,
    SelectBuilder,
    select,
)
from bindql.builder.union import UnionBuilder, union, union_all
from bindql.builder.update import UpdateBuilder, update
from bindql.builder.where import WhereClause, copy_where_clause

__all__ = [
    "Builder",
    "FormatBuilder",
    "Paging",
    "build",
    "build_named",
    "Cond",
    "WhereClause",
    "copy_where_clause",
    "SelectBuilder",
    "select",
    "LEFT_JOIN",
    "LEFT_OUTER_JOIN",
    "RIGHT_JOIN",
    "RIGHT_OUTER_JOIN",
    "FULL_JOIN",
    "FULL_OUTER_JOIN",
    "INNER_JOIN",
    "InsertBuilder",
    "insert_into",
    "insert_ignore_into",
    "replace_into",
    "UpdateBuilder",
    "update",
    "DeleteBuilder",
    "delete_from",
    "UnionBuilder",
    "union",
    "union_all",
    "CTEBuilder",
    "CTETableBuilder",
    "with_",
    "with_recursive",
    "cte_table",
    "CreateTableBuilder",
    "create_table",
    "create_temp_table",
]
