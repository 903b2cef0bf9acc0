"""UNION / UNION ALL builder."""
from __future__ import annotations

from typing import Any

from bindql.args import CompiledQuery
from bindql.builder.base import Builder, Paging
from bindql.flavor.base import Flavor

_UNION_DISTINCT = " UNION "
_UNION_ALL = " UNION ALL "


class UnionBuilder(Builder):
    """Combines SELECT builders with ``UNION`` or ``UNION ALL``.

    With more than one branch the combined query is wrapped in parentheses
    so ORDER BY and paging apply to the whole result::

        (SELECT ... UNION SELECT ...) ORDER BY id LIMIT ?
    """

    def __init__(self, flavor: Flavor | None = None) -> None:
        super().__init__(flavor)
        self._opt = _UNION_DISTINCT
        self._builder_vars: list[str] = []
        self._order_by: list[str] = []
        self._order = ""
        self._paging = Paging()

    def union(self, *builders: Any) -> UnionBuilder:
        return self._set(_UNION_DISTINCT, builders)

    def union_all(self, *builders: Any) -> UnionBuilder:
        return self._set(_UNION_ALL, builders)

    def _set(self, opt: str, builders: tuple[Any, ...]) -> UnionBuilder:
        self._opt = opt
        self._builder_vars = [self.args.add(b) for b in builders]
        return self

    def order_by(self, *cols: str) -> UnionBuilder:
        self._order_by = list(cols)
        return self

    def asc(self) -> UnionBuilder:
        self._order = "ASC"
        return self

    def desc(self) -> UnionBuilder:
        self._order = "DESC"
        return self

    def limit(self, limit: int) -> UnionBuilder:
        self._paging.set_limit(self.args, limit)
        return self

    def offset(self, offset: int) -> UnionBuilder:
        self._paging.set_offset(self.args, offset)
        return self

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        sql = self._opt.join(self._builder_vars)
        if len(self._builder_vars) > 1:
            sql = f"({sql})"

        if self._order_by:
            sql += " ORDER BY " + ", ".join(self._order_by)
            if self._order:
                sql += f" {self._order}"

        sql = self._paging.render(sql, flavor, has_order_by=bool(self._order_by))
        return self.args.compile_with_flavor(sql, flavor, *initial_values)


def union(*builders: Any) -> UnionBuilder:
    """``UNION`` of ``builders`` with the default flavor."""
    return UnionBuilder().union(*builders)


def union_all(*builders: Any) -> UnionBuilder:
    """``UNION ALL`` of ``builders`` with the default flavor."""
    return UnionBuilder().union_all(*builders)
