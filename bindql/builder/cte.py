"""Common table expressions.

A :class:`CTETableBuilder` describes one named query; a :class:`CTEBuilder`
joins them into a ``WITH`` clause that a SELECT can be built on::

    users = CTETableBuilder().table("users", "id", "name").as_(
        SelectBuilder().select("id", "name").from_("users").where("name IS NOT NULL")
    )
    cte = CTEBuilder().with_(users)
    sb = cte.select("users.id")
    # WITH users (id, name) AS (SELECT ...) SELECT users.id FROM users
"""
from __future__ import annotations

from typing import Any

from bindql.args import CompiledQuery
from bindql.builder.base import Builder
from bindql.builder.select import SelectBuilder
from bindql.flavor.base import Flavor


class CTETableBuilder(Builder):
    """One ``name (cols) AS (query)`` entry of a WITH clause."""

    def __init__(self, flavor: Flavor | None = None) -> None:
        super().__init__(flavor)
        self._name = ""
        self._cols: list[str] = []
        self._builder_var = ""

    def table(self, name: str, *cols: str) -> CTETableBuilder:
        self._name = name
        self._cols = list(cols)
        return self

    def as_(self, builder: Any) -> CTETableBuilder:
        self._builder_var = self.args.add(builder)
        return self

    def table_name(self) -> str:
        return self._name

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        sql = self._name
        if self._cols:
            sql += f" ({', '.join(self._cols)})"
        if self._builder_var:
            sql += f" AS ({self._builder_var})"
        return self.args.compile_with_flavor(sql, flavor, *initial_values)


class CTEBuilder(Builder):
    """A ``WITH`` / ``WITH RECURSIVE`` clause."""

    def __init__(self, flavor: Flavor | None = None) -> None:
        super().__init__(flavor)
        self._recursive = False
        self._tables: list[CTETableBuilder] = []
        self._table_vars: list[str] = []

    def with_(self, *tables: CTETableBuilder) -> CTEBuilder:
        return self._set(False, tables)

    def with_recursive(self, *tables: CTETableBuilder) -> CTEBuilder:
        return self._set(True, tables)

    def _set(self, recursive: bool, tables: tuple[CTETableBuilder, ...]) -> CTEBuilder:
        self._recursive = recursive
        self._tables = list(tables)
        self._table_vars = [self.args.add(t) for t in tables]
        return self

    def select(self, *cols: str) -> SelectBuilder:
        """Return a SELECT built on this CTE."""
        return SelectBuilder(self.args.flavor).with_(self).select(*cols)

    def table_names(self) -> list[str]:
        return [t.table_name() for t in self._tables]

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        sql = ""
        if self._table_vars:
            keyword = "WITH RECURSIVE " if self._recursive else "WITH "
            sql = keyword + ", ".join(self._table_vars)
        return self.args.compile_with_flavor(sql, flavor, *initial_values)


def with_(*tables: CTETableBuilder) -> CTEBuilder:
    return CTEBuilder().with_(*tables)


def with_recursive(*tables: CTETableBuilder) -> CTEBuilder:
    return CTEBuilder().with_recursive(*tables)


def cte_table(name: str, *cols: str) -> CTETableBuilder:
    return CTETableBuilder().table(name, *cols)
