"""Shareable WHERE clauses.

A :class:`WhereClause` stores AND-expressions together with the
:class:`~bindql.args.Args` registry their references point into, so one
clause can collect conditions written against several registries and be
attached to several builders::

    cond = Cond()
    wc = WhereClause()
    wc.add_where_expr(cond.args, cond.equal("tenant_id", 7))

    sb = SelectBuilder().select("*").from_("orders")
    sb.where_clause = wc

A ``WhereClause`` is not safe for concurrent mutation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bindql.args import Args, CompiledQuery
from bindql.config import get_default_flavor
from bindql.flavor.base import Flavor


@dataclass
class _Clause:
    args: Args
    and_exprs: list[str] = field(default_factory=list)


class WhereClause:
    """An ordered list of ``(args, and_exprs)`` clauses."""

    def __init__(self, flavor: Flavor | None = None) -> None:
        self.flavor = flavor
        self._clauses: list[_Clause] = []

    def __bool__(self) -> bool:
        return any(c.and_exprs for c in self._clauses)

    def add_where_expr(self, args: Args, *and_exprs: str) -> WhereClause:
        """Append expressions whose references point into ``args``.

        Expressions from the same registry as the last clause are merged
        into it.
        """
        exprs = [e for e in and_exprs if e]
        if not exprs:
            return self

        if self._clauses and self._clauses[-1].args is args:
            self._clauses[-1].and_exprs.extend(exprs)
        else:
            self._clauses.append(_Clause(args, exprs))
        return self

    def add_where_clause(self, other: WhereClause | None) -> WhereClause:
        """Append copies of every clause in ``other``."""
        if other is not None:
            self._clauses.extend(_Clause(c.args, list(c.and_exprs)) for c in other._clauses)
        return self

    def copy(self) -> WhereClause:
        return copy_where_clause(self)

    def set_flavor(self, flavor: Flavor | None) -> Flavor | None:
        old = self.flavor
        self.flavor = flavor
        return old

    def build(self) -> CompiledQuery:
        return self.build_with_flavor(self.flavor or get_default_flavor())

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        """Compile to ``WHERE expr AND expr ...``.

        Each clause is compiled with the values of the previous ones as its
        initial values, so ordinal placeholders run on across clauses.  An
        empty clause compiles to ``""``.
        """
        values = list(initial_values)
        parts = []

        for c in self._clauses:
            if not c.and_exprs:
                continue
            sql, values = c.args.compile_with_flavor(" AND ".join(c.and_exprs), flavor, *values)
            parts.append(sql)

        if not parts:
            return CompiledQuery(sql="", values=values, flavor=flavor)
        return CompiledQuery(sql="WHERE " + " AND ".join(parts), values=values, flavor=flavor)

    def __str__(self) -> str:
        return self.build().sql


def copy_where_clause(where_clause: WhereClause) -> WhereClause:
    """Return an independent copy of ``where_clause``."""
    return WhereClause(where_clause.flavor).add_where_clause(where_clause)


class _WhereClauseProxy:
    """Sub-query stand-in that builds the owner's current WHERE clause.

    Registered when the owner is created so attaching or replacing
    ``owner.where_clause`` later needs no new registry entry.
    """

    def __init__(self, owner: WhereMixin) -> None:
        self._owner = owner

    def build(self) -> CompiledQuery:
        return self.build_with_flavor(self._owner.args.flavor or get_default_flavor())

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        wc = self._owner.where_clause
        if wc is None:
            return CompiledQuery(sql="", values=list(initial_values), flavor=flavor)
        return wc.build_with_flavor(flavor, *initial_values)


class WhereMixin:
    """``where`` support for SELECT, UPDATE and DELETE builders."""

    args: Args
    where_clause: WhereClause | None

    def _init_where(self) -> None:
        self.where_clause = None
        self._where_var = self.args.add(_WhereClauseProxy(self))

    def where(self, *and_exprs: str) -> Any:
        """Add AND-expressions to the WHERE clause."""
        if not any(and_exprs):
            return self
        if self.where_clause is None:
            self.where_clause = WhereClause()
        self.where_clause.add_where_expr(self.args, *and_exprs)
        return self

    def add_where_clause(self, where_clause: WhereClause) -> Any:
        """Append every clause of ``where_clause`` to this builder's clause."""
        if self.where_clause is None:
            self.where_clause = WhereClause()
        self.where_clause.add_where_clause(where_clause)
        return self

    def _where_sql(self) -> str:
        """Return `` <ref>`` for the WHERE clause, or ``""`` if there is none."""
        if not self.where_clause:
            return ""
        return " " + self._where_var
