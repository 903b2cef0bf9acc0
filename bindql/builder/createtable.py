"""CREATE TABLE builder."""
from __future__ import annotations

from typing import Any

from bindql.args import CompiledQuery, escape, escape_all
from bindql.builder.base import Builder
from bindql.flavor.base import Flavor


class CreateTableBuilder(Builder):
    """Builds ``CREATE TABLE`` statements.

    Each :meth:`define` call adds one column or constraint definition; its
    parts are joined by spaces.  Table options follow the closing
    parenthesis.

    Example::

        ctb = CreateTableBuilder()
        ctb.create_table("demo.user").if_not_exists()
        ctb.define("id", "BIGINT(20)", "NOT NULL", "PRIMARY KEY")
        ctb.option("DEFAULT CHARACTER SET", "utf8mb4")
        # CREATE TABLE IF NOT EXISTS demo.user (id BIGINT(20) NOT NULL PRIMARY KEY)
        #   DEFAULT CHARACTER SET utf8mb4
    """

    def __init__(self, flavor: Flavor | None = None) -> None:
        super().__init__(flavor)
        self._verb = "CREATE TABLE"
        self._if_not_exists = False
        self._table = ""
        self._defs: list[str] = []
        self._options: list[str] = []

    def create_table(self, table: str) -> CreateTableBuilder:
        self._verb = "CREATE TABLE"
        self._table = escape(table)
        return self

    def create_temp_table(self, table: str) -> CreateTableBuilder:
        self._verb = "CREATE TEMPORARY TABLE"
        self._table = escape(table)
        return self

    def if_not_exists(self) -> CreateTableBuilder:
        self._if_not_exists = True
        return self

    def define(self, *parts: str) -> CreateTableBuilder:
        """Add a column or constraint definition, e.g. ``define("id", "INT")``."""
        self._defs.append(" ".join(escape_all(*parts)))
        return self

    def option(self, *parts: str) -> CreateTableBuilder:
        """Add a table option, e.g. ``option("ENGINE", "=", "InnoDB")``."""
        self._options.append(" ".join(escape_all(*parts)))
        return self

    def num_define(self) -> int:
        return len(self._defs)

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        sql = self._verb
        if self._if_not_exists:
            sql += " IF NOT EXISTS"
        sql += f" {self._table}"

        if self._defs:
            sql += " (" + ", ".join(self._defs) + ")"

        if self._options:
            sql += " " + ", ".join(self._options)

        return self.args.compile_with_flavor(sql, flavor, *initial_values)


def create_table(table: str) -> CreateTableBuilder:
    return CreateTableBuilder().create_table(table)


def create_temp_table(table: str) -> CreateTableBuilder:
    return CreateTableBuilder().create_temp_table(table)
