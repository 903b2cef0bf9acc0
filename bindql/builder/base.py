"""Builder base class, shared paging rules and ad-hoc format builders.

Every statement builder owns an :class:`~bindql.args.Args` registry and
follows the same template:

1. Fluent calls register values with ``self.args.add`` and keep the
   returned ``$N`` references.
2. :meth:`Builder.build_with_flavor` assembles a format string from those
   references and hands it to ``Args.compile_with_flavor``.

Because every builder exposes ``build`` and ``build_with_flavor``, any
builder can be passed where a value is expected; it is then inlined as a
sub-query.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from bindql.args import Args, CompiledQuery, Named
from bindql.config import get_default_flavor
from bindql.flavor.base import Flavor


class Builder(ABC):
    """Abstract base for every statement builder.

    Args:
        flavor: Flavor used by :meth:`build`.  ``None`` resolves the
            process-wide default at build time.
    """

    def __init__(self, flavor: Flavor | None = None) -> None:
        self.args = Args(flavor)

    @property
    def flavor(self) -> Flavor | None:
        return self.args.flavor

    def set_flavor(self, flavor: Flavor | None) -> Flavor | None:
        """Set the flavor used by :meth:`build` and return the old one."""
        old = self.args.flavor
        self.args.flavor = flavor
        return old

    def var(self, value: Any) -> str:
        """Register ``value`` and return its reference for a format string."""
        return self.args.add(value)

    def build(self) -> CompiledQuery:
        """Compile the statement with the builder's flavor."""
        return self.build_with_flavor(self.args.flavor or get_default_flavor())

    @abstractmethod
    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        """Compile the statement for ``flavor``.

        Args:
            flavor: Target flavor.
            *initial_values: Values bound by an enclosing statement; ordinal
                placeholders are numbered after them.
        """

    def __str__(self) -> str:
        return self.build().sql


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------


class Paging:
    """LIMIT / OFFSET state shared by SELECT and UNION builders.

    Limits and offsets are registered as bound values when set.  A negative
    value clears the setting.
    """

    def __init__(self) -> None:
        self.limit = -1
        self.offset = -1
        self.limit_var = ""
        self.offset_var = ""

    def set_limit(self, args: Args, limit: int) -> None:
        if limit < 0:
            self.limit, self.limit_var = -1, ""
            return
        self.limit, self.limit_var = limit, args.add(limit)

    def set_offset(self, args: Args, offset: int) -> None:
        if offset < 0:
            self.offset, self.offset_var = -1, ""
            return
        self.offset, self.offset_var = offset, args.add(offset)

    def render(self, sql: str, flavor: Flavor, has_order_by: bool) -> str:
        """Return ``sql`` with the flavor's paging syntax applied."""
        lim, off = self.limit_var, self.offset_var
        style = flavor.paging

        if style == "limit_offset":
            if lim:
                sql += f" LIMIT {lim}"
                if off:
                    sql += f" OFFSET {off}"
        elif style == "limit_offset_independent":
            if lim:
                sql += f" LIMIT {lim}"
            if off:
                sql += f" OFFSET {off}"
        elif style == "limit_only":
            if lim:
                sql += f" LIMIT {lim}"
        elif style == "offset_limit":
            if off:
                sql += f" OFFSET {off}"
            if lim:
                sql += f" LIMIT {lim}"
        elif style == "offset_fetch":
            if lim or off:
                # OFFSET ... FETCH is only valid after an ORDER BY.
                if not has_order_by:
                    sql += " ORDER BY 1"
                sql += f" OFFSET {off or 0} ROWS"
                if lim:
                    sql += f" FETCH NEXT {lim} ROWS ONLY"
        elif style == "skip_first":
            if lim:
                if off:
                    sql += f" SKIP {off}"
                sql += f" FIRST {lim}"
        elif style == "limit_offset_literal":
            if self.limit >= 0:
                sql += f" LIMIT {self.limit}"
                if self.offset >= 0:
                    sql += f" OFFSET {self.offset}"
        elif style == "rownum":
            if lim or off:
                sql = _rownum_wrap(sql, lim, off)

        return sql


def _rownum_wrap(sql: str, lim: str, off: str) -> str:
    if lim and off:
        cond = f"r BETWEEN {off} + 1 AND {lim} + {off}"
    elif lim:
        cond = f"r BETWEEN 1 AND {lim}"
    else:
        cond = f"r >= {off} + 1"
    return f"SELECT * FROM (SELECT ROWNUM r, t.* FROM ({sql}) t) WHERE {cond}"


# ---------------------------------------------------------------------------
# Ad-hoc builders
# ---------------------------------------------------------------------------


class FormatBuilder(Builder):
    """A builder around a hand-written format string.

    Created by :func:`build` and :func:`build_named`.
    """

    def __init__(
        self,
        fmt: str,
        flavor: Flavor | None = None,
        only_named: bool = False,
    ) -> None:
        super().__init__(flavor)
        self.args.only_named = only_named
        self.format = fmt

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        return self.args.compile_with_flavor(self.format, flavor, *initial_values)


def build(fmt: str, *args: Any) -> FormatBuilder:
    """Return a builder compiling ``fmt`` against ``args``.

    ``fmt`` refers to the arguments with ``$0``, ``$1`` ... or ``$?``::

        build("EXPLAIN $?", select_builder).build()
    """
    builder = FormatBuilder(fmt)
    for a in args:
        builder.args.add(a)
    return builder


def build_named(fmt: str, named: Mapping[str, Any]) -> FormatBuilder:
    """Return a builder compiling ``fmt`` against named values.

    Only ``${name}`` and ``$$`` are directives; any other ``$`` is copied
    through::

        build_named("SELECT * FROM t WHERE id = ${id}", {"id": 1})
    """
    builder = FormatBuilder(fmt, only_named=True)
    for name, value in named.items():
        builder.args.add(Named(name, value))
    return builder
