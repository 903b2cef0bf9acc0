"""DELETE builder."""
from __future__ import annotations

from typing import Any

from bindql.args import CompiledQuery, escape_all
from bindql.builder.base import Builder
from bindql.builder.cond import Cond
from bindql.builder.where import WhereMixin
from bindql.flavor.base import Flavor


class DeleteBuilder(Builder, Cond, WhereMixin):
    """Builds ``DELETE`` statements.

    Example::

        db = DeleteBuilder()
        db.delete_from("demo.user").where(db.greater_than("id", 1234))
        # DELETE FROM demo.user WHERE id > ?
    """

    def __init__(self, flavor: Flavor | None = None) -> None:
        super().__init__(flavor)
        self._init_where()
        self._tables: list[str] = []
        self._order_by: list[str] = []
        self._order = ""
        self._limit_var = ""
        self._returning: list[str] = []

    def delete_from(self, *tables: str) -> DeleteBuilder:
        self._tables = escape_all(*tables)
        return self

    def order_by(self, *cols: str) -> DeleteBuilder:
        self._order_by = list(cols)
        return self

    def asc(self) -> DeleteBuilder:
        self._order = "ASC"
        return self

    def desc(self) -> DeleteBuilder:
        self._order = "DESC"
        return self

    def limit(self, limit: int) -> DeleteBuilder:
        self._limit_var = self.args.add(limit) if limit >= 0 else ""
        return self

    def returning(self, *cols: str) -> DeleteBuilder:
        self._returning = list(cols)
        return self

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        sql = "DELETE FROM " + ", ".join(self._tables)
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


def delete_from(*tables: str) -> DeleteBuilder:
    return DeleteBuilder().delete_from(*tables)
