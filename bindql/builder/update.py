"""UPDATE builder."""
from __future__ import annotations

from typing import Any

from bindql.args import CompiledQuery, escape, escape_all
from bindql.builder.base import Builder
from bindql.builder.cond import Cond
from bindql.builder.where import WhereMixin
from bindql.errors import CompilationError
from bindql.flavor.base import Flavor


class UpdateBuilder(Builder, Cond, WhereMixin):
    """Builds ``UPDATE`` statements.

    Example::

        ub = UpdateBuilder()
        ub.update("demo.user").set(ub.assign("type", "sys"), ub.incr("credit"))
        ub.where(ub.equal("id", 1234))
        # UPDATE demo.user SET type = ?, credit = credit + 1 WHERE id = ?
    """

    def __init__(self, flavor: Flavor | None = None) -> None:
        super().__init__(flavor)
        self._init_where()
        self._tables: list[str] = []
        self._assignments: list[str] = []
        self._order_by: list[str] = []
        self._order = ""
        self._limit_var = ""
        self._returning: list[str] = []

    def update(self, *tables: str) -> UpdateBuilder:
        self._tables = escape_all(*tables)
        return self

    def set(self, *assignments: str) -> UpdateBuilder:
        """Replace the assignment list."""
        self._assignments = [a for a in assignments if a]
        return self

    def set_more(self, *assignments: str) -> UpdateBuilder:
        """Append to the assignment list."""
        self._assignments.extend(a for a in assignments if a)
        return self

    # ------------------------------------------------------------------
    # Assignment helpers
    # ------------------------------------------------------------------

    def assign(self, field: str, value: Any) -> str:
        """``field = value``"""
        return f"{escape(field)} = {self.args.add(value)}"

    def incr(self, field: str) -> str:
        f = escape(field)
        return f"{f} = {f} + 1"

    def decr(self, field: str) -> str:
        f = escape(field)
        return f"{f} = {f} - 1"

    def add(self, field: str, value: Any) -> str:
        f = escape(field)
        return f"{f} = {f} + {self.args.add(value)}"

    def sub(self, field: str, value: Any) -> str:
        f = escape(field)
        return f"{f} = {f} - {self.args.add(value)}"

    def mul(self, field: str, value: Any) -> str:
        f = escape(field)
        return f"{f} = {f} * {self.args.add(value)}"

    def div(self, field: str, value: Any) -> str:
        f = escape(field)
        return f"{f} = {f} / {self.args.add(value)}"

    # ------------------------------------------------------------------
    # Ordering, limit, returning
    # ------------------------------------------------------------------

    def order_by(self, *cols: str) -> UpdateBuilder:
        self._order_by = list(cols)
        return self

    def asc(self) -> UpdateBuilder:
        self._order = "ASC"
        return self

    def desc(self) -> UpdateBuilder:
        self._order = "DESC"
        return self

    def limit(self, limit: int) -> UpdateBuilder:
        self._limit_var = self.args.add(limit) if limit >= 0 else ""
        return self

    def returning(self, *cols: str) -> UpdateBuilder:
        self._returning = list(cols)
        return self

    def num_assignment(self) -> int:
        return len(self._assignments)

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        """Compile the UPDATE.

        Raises:
            CompilationError: If no assignment was set.
        """
        if not self._assignments:
            raise CompilationError("UPDATE requires at least one assignment.", clause="SET")

        sql = f"UPDATE {', '.join(self._tables)} SET {', '.join(self._assignments)}"
        sql += self._where_sql()

        if self._order_by:
            sql += " ORDER BY " + ", ".join(self._order_by)
            if self._order:
                sql += f" {self._order}"

        if self._limit_var:
            sql += f" LIMIT {self._limit_var}"

        if self._returning and flavor.supports_returning:
            sql += " RETURNING " + ", ".join(self._returning)

        return self.args.compile_with_flavor(sql, flavor, *initial_values)


def update(*tables: str) -> UpdateBuilder:
    return UpdateBuilder().update(*tables)
