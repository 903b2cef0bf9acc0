"""INSERT builder."""
from __future__ import annotations

from typing import Any

from bindql.args import CompiledQuery, escape, escape_all
from bindql.builder.base import Builder
from bindql.builder.select import SelectBuilder
from bindql.flavor.base import Flavor


class InsertBuilder(Builder):
    """Builds ``INSERT``, ``INSERT IGNORE`` and ``REPLACE`` statements.

    Example::

        ib = MYSQL.new_insert_builder()
        ib.insert_into("demo.user").cols("id", "name").values(1, "Huan Du")
        sql, values = ib.build()
        # INSERT INTO demo.user (id, name) VALUES (?, ?)
    """

    def __init__(self, flavor: Flavor | None = None) -> None:
        super().__init__(flavor)
        self._verb = "INSERT"
        self._ignore = False
        self._table = ""
        self._cols: list[str] = []
        self._rows: list[list[str]] = []
        self._select_var = ""
        self._returning: list[str] = []

    def insert_into(self, table: str) -> InsertBuilder:
        self._verb, self._ignore = "INSERT", False
        self._table = escape(table)
        return self

    def insert_ignore_into(self, table: str) -> InsertBuilder:
        """Insert and skip rows that violate a unique constraint.

        Spelled ``INSERT IGNORE`` (MySQL, Doris), ``INSERT OR IGNORE``
        (SQLite) or ``ON CONFLICT DO NOTHING`` (PostgreSQL); flavors without
        an equivalent get a plain ``INSERT``.
        """
        self._verb, self._ignore = "INSERT", True
        self._table = escape(table)
        return self

    def replace_into(self, table: str) -> InsertBuilder:
        self._verb, self._ignore = "REPLACE", False
        self._table = escape(table)
        return self

    def cols(self, *cols: str) -> InsertBuilder:
        self._cols = escape_all(*cols)
        return self

    def values(self, *values: Any) -> InsertBuilder:
        """Append one row of values."""
        self._rows.append([self.args.add(v) for v in values])
        return self

    def select(self, *cols: str) -> SelectBuilder:
        """Start an ``INSERT ... SELECT``; returns the nested SELECT builder."""
        sb = SelectBuilder(self.args.flavor)
        sb.select(*cols)
        self._select_var = self.args.add(sb)
        return sb

    def returning(self, *cols: str) -> InsertBuilder:
        """Emit ``RETURNING`` on flavors that support it."""
        self._returning = list(cols)
        return self

    def num_value(self) -> int:
        """Number of value rows added so far."""
        return len(self._rows)

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        cols = f" ({', '.join(self._cols)})" if self._cols else ""

        if flavor.placeholder == ":" and len(self._rows) > 1 and not self._select_var:
            # Oracle has no multi-row VALUES list.
            into = "".join(
                f" INTO {self._table}{cols} VALUES ({', '.join(row)})" for row in self._rows
            )
            sql = f"INSERT ALL{into} SELECT 1 from DUAL"
            return self.args.compile_with_flavor(sql, flavor, *initial_values)

        sql = self._head(flavor) + cols

        if self._select_var:
            sql += f" {self._select_var}"
        elif self._rows:
            sql += " VALUES " + ", ".join(f"({', '.join(row)})" for row in self._rows)

        if self._ignore and flavor.insert_ignore == "on_conflict":
            sql += " ON CONFLICT DO NOTHING"

        if self._returning and flavor.supports_returning:
            sql += " RETURNING " + ", ".join(self._returning)

        return self.args.compile_with_flavor(sql, flavor, *initial_values)

    def _head(self, flavor: Flavor) -> str:
        if self._verb == "REPLACE":
            return f"REPLACE INTO {self._table}"
        if self._ignore and flavor.insert_ignore == "keyword":
            return f"INSERT IGNORE INTO {self._table}"
        if self._ignore and flavor.insert_ignore == "or_ignore":
            return f"INSERT OR IGNORE INTO {self._table}"
        return f"INSERT INTO {self._table}"


def insert_into(table: str) -> InsertBuilder:
    return InsertBuilder().insert_into(table)


def insert_ignore_into(table: str) -> InsertBuilder:
    return InsertBuilder().insert_ignore_into(table)


def replace_into(table: str) -> InsertBuilder:
    return InsertBuilder().replace_into(table)
