"""Condition helpers.

Each helper returns a SQL fragment and registers its values in ``args``.
Field names are ``$``-escaped so they survive compilation unchanged.
:class:`~bindql.builder.select.SelectBuilder`,
:class:`~bindql.builder.update.UpdateBuilder` and
:class:`~bindql.builder.delete.DeleteBuilder` mix :class:`Cond` in, so the
helpers are usually called on the builder itself::

    sb = SelectBuilder().select("id").from_("user")
    sb.where(sb.equal("status", 1), sb.in_("role", "admin", "owner"))
"""
from __future__ import annotations

from typing import Any

from bindql.args import Args, escape


class Cond:
    """Builds condition expressions against an :class:`Args` registry.

    Args:
        args: Registry receiving the values.  A fresh one is created when
            omitted, which is how a standalone ``Cond`` feeds a shared
            :class:`~bindql.builder.where.WhereClause`.
    """

    args: Args

    def __init__(self, args: Args | None = None) -> None:
        self.args = args if args is not None else Args()

    def _binary(self, field: str, op: str, value: Any) -> str:
        return f"{escape(field)} {op} {self.args.add(value)}"

    def _list(self, values: tuple[Any, ...]) -> str:
        return ", ".join(self.args.add(v) for v in values)

    # ------------------------------------------------------------------
    # Comparisons
    # ------------------------------------------------------------------

    def equal(self, field: str, value: Any) -> str:
        """``field = value``"""
        return self._binary(field, "=", value)

    eq = equal

    def not_equal(self, field: str, value: Any) -> str:
        """``field <> value``"""
        return self._binary(field, "<>", value)

    ne = not_equal

    def greater_than(self, field: str, value: Any) -> str:
        """``field > value``"""
        return self._binary(field, ">", value)

    gt = greater_than

    def greater_equal_than(self, field: str, value: Any) -> str:
        """``field >= value``"""
        return self._binary(field, ">=", value)

    gte = greater_equal_than

    def less_than(self, field: str, value: Any) -> str:
        """``field < value``"""
        return self._binary(field, "<", value)

    lt = less_than

    def less_equal_than(self, field: str, value: Any) -> str:
        """``field <= value``"""
        return self._binary(field, "<=", value)

    lte = less_equal_than

    def like(self, field: str, value: Any) -> str:
        return self._binary(field, "LIKE", value)

    def not_like(self, field: str, value: Any) -> str:
        return self._binary(field, "NOT LIKE", value)

    def ilike(self, field: str, value: Any) -> str:
        return self._binary(field, "ILIKE", value)

    def not_ilike(self, field: str, value: Any) -> str:
        return self._binary(field, "NOT ILIKE", value)

    # ------------------------------------------------------------------
    # Sets and ranges
    # ------------------------------------------------------------------

    def in_(self, field: str, *values: Any) -> str:
        """``field IN (values...)``; an empty list is never true (``0 = 1``)."""
        if not values:
            return "0 = 1"
        return f"{escape(field)} IN ({self._list(values)})"

    def not_in(self, field: str, *values: Any) -> str:
        """``field NOT IN (values...)``; an empty list is always true (``0 = 0``)."""
        if not values:
            return "0 = 0"
        return f"{escape(field)} NOT IN ({self._list(values)})"

    def between(self, field: str, lower: Any, upper: Any) -> str:
        return f"{escape(field)} BETWEEN {self.args.add(lower)} AND {self.args.add(upper)}"

    def not_between(self, field: str, lower: Any, upper: Any) -> str:
        return (
            f"{escape(field)} NOT BETWEEN "
            f"{self.args.add(lower)} AND {self.args.add(upper)}"
        )

    def is_null(self, field: str) -> str:
        return f"{escape(field)} IS NULL"

    def is_not_null(self, field: str) -> str:
        return f"{escape(field)} IS NOT NULL"

    # ------------------------------------------------------------------
    # Logic
    # ------------------------------------------------------------------

    def or_(self, *exprs: str) -> str:
        """``(expr1 OR expr2 ...)``"""
        return f"({' OR '.join(exprs)})"

    def and_(self, *exprs: str) -> str:
        """``(expr1 AND expr2 ...)``"""
        return f"({' AND '.join(exprs)})"

    def not_(self, expr: str) -> str:
        return f"NOT {expr}"

    # ------------------------------------------------------------------
    # Sub-queries
    # ------------------------------------------------------------------

    def exists(self, subquery: Any) -> str:
        return f"EXISTS ({self.args.add(subquery)})"

    def not_exists(self, subquery: Any) -> str:
        return f"NOT EXISTS ({self.args.add(subquery)})"

    def any_(self, field: str, op: str, *values: Any) -> str:
        """``field op ANY (values...)``"""
        return f"{escape(field)} {op} ANY ({self._list(values)})"

    def all_(self, field: str, op: str, *values: Any) -> str:
        """``field op ALL (values...)``"""
        return f"{escape(field)} {op} ALL ({self._list(values)})"

    def some(self, field: str, op: str, *values: Any) -> str:
        """``field op SOME (values...)``"""
        return f"{escape(field)} {op} SOME ({self._list(values)})"

    # ------------------------------------------------------------------
    # Full-text match (Doris inverted index)
    # ------------------------------------------------------------------

    def match_all(self, field: str, value: Any) -> str:
        return self._binary(field, "MATCH_ALL", value)

    def match_any(self, field: str, value: Any) -> str:
        return self._binary(field, "MATCH_ANY", value)

    def match_phrase(self, field: str, slop: str, value: Any) -> str:
        """``field MATCH_PHRASE value [slop]``; an empty ``slop`` is omitted."""
        expr = self._binary(field, "MATCH_PHRASE", value)
        if slop:
            expr += f" {slop}"
        return expr

    def match_phrase_prefix(self, field: str, value: Any) -> str:
        return self._binary(field, "MATCH_PHRASE_PREFIX", value)

    def match_regexp(self, field: str, value: Any) -> str:
        return self._binary(field, "MATCH_REGEXP", value)

    def var(self, value: Any) -> str:
        """Register ``value`` and return its reference."""
        return self.args.add(value)
