"""SELECT builder."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bindql.args import CompiledQuery
from bindql.builder.base import Builder, Paging
from bindql.builder.cond import Cond
from bindql.builder.where import WhereMixin
from bindql.errors import CompilationError
from bindql.flavor.base import Flavor

if TYPE_CHECKING:
    from bindql.builder.cte import CTEBuilder

# JOIN options accepted by SelectBuilder.join_with_option.
LEFT_JOIN = "LEFT"
LEFT_OUTER_JOIN = "LEFT OUTER"
RIGHT_JOIN = "RIGHT"
RIGHT_OUTER_JOIN = "RIGHT OUTER"
FULL_JOIN = "FULL"
FULL_OUTER_JOIN = "FULL OUTER"
INNER_JOIN = "INNER"

JOIN_OPTIONS = frozenset(
    {
        LEFT_JOIN,
        LEFT_OUTER_JOIN,
        RIGHT_JOIN,
        RIGHT_OUTER_JOIN,
        FULL_JOIN,
        FULL_OUTER_JOIN,
        INNER_JOIN,
    }
)


class SelectBuilder(Builder, Cond, WhereMixin):
    """Builds ``SELECT`` statements.

    Example::

        sb = POSTGRESQL.new_select_builder()
        sb.select("id", "name").from_("user").where(sb.greater_than("id", 10))
        sql, values = sb.limit(20).build()
        # SELECT id, name FROM user WHERE id > $1 LIMIT $2
    """

    def __init__(self, flavor: Flavor | None = None) -> None:
        super().__init__(flavor)
        self._init_where()
        self._distinct = False
        self._distinct_on: list[str] = []
        self._select_cols: list[str] = []
        self._tables: list[str] = []
        self._joins: list[tuple[str, str, tuple[str, ...]]] = []
        self._group_by: list[str] = []
        self._having: list[str] = []
        self._order_by: list[str] = []
        self._order = ""
        self._paging = Paging()
        self._lock = ""
        self._cte: CTEBuilder | None = None
        self._cte_var = ""

    # ------------------------------------------------------------------
    # Fluent API
    # ------------------------------------------------------------------

    def with_(self, cte: CTEBuilder) -> SelectBuilder:
        """Prefix the statement with a ``WITH`` clause.

        Without an explicit :meth:`from_`, the CTE table names become the
        FROM list.
        """
        self._cte = cte
        self._cte_var = self.args.add(cte)
        return self

    def select(self, *cols: str) -> SelectBuilder:
        self._select_cols = list(cols)
        return self

    def distinct(self) -> SelectBuilder:
        self._distinct = True
        return self

    def distinct_on(self, *cols: str) -> SelectBuilder:
        """``SELECT DISTINCT ON (cols) ...`` (PostgreSQL)."""
        self._distinct_on = list(cols)
        return self

    def from_(self, *tables: str) -> SelectBuilder:
        self._tables = list(tables)
        return self

    def join(self, table: str, *on_exprs: str) -> SelectBuilder:
        """``JOIN table ON expr AND expr ...``"""
        self._joins.append(("", table, on_exprs))
        return self

    def join_with_option(self, option: str, table: str, *on_exprs: str) -> SelectBuilder:
        """``<option> JOIN table ON expr AND expr ...``

        Raises:
            CompilationError: If ``option`` is not one of :data:`JOIN_OPTIONS`.
        """
        if option and option not in JOIN_OPTIONS:
            raise CompilationError(
                f"Unknown JOIN option {option!r}; expected one of {sorted(JOIN_OPTIONS)}.",
                clause="JOIN",
            )
        self._joins.append((option, table, on_exprs))
        return self

    def group_by(self, *cols: str) -> SelectBuilder:
        self._group_by = list(cols)
        return self

    def having(self, *and_exprs: str) -> SelectBuilder:
        self._having.extend(e for e in and_exprs if e)
        return self

    def order_by(self, *cols: str) -> SelectBuilder:
        self._order_by = list(cols)
        return self

    def asc(self) -> SelectBuilder:
        self._order = "ASC"
        return self

    def desc(self) -> SelectBuilder:
        self._order = "DESC"
        return self

    def limit(self, limit: int) -> SelectBuilder:
        """Set LIMIT; a negative value removes it."""
        self._paging.set_limit(self.args, limit)
        return self

    def offset(self, offset: int) -> SelectBuilder:
        """Set OFFSET; a negative value removes it."""
        self._paging.set_offset(self.args, offset)
        return self

    def for_update(self) -> SelectBuilder:
        self._lock = "FOR UPDATE"
        return self

    def for_share(self) -> SelectBuilder:
        self._lock = "FOR SHARE"
        return self

    # ------------------------------------------------------------------
    # Expression helpers
    # ------------------------------------------------------------------

    def as_(self, name: str, alias: str) -> str:
        """``name AS alias``"""
        return f"{name} AS {alias}"

    def builder_as(self, builder: Any, alias: str) -> str:
        """``(<sub-query>) AS alias``"""
        return f"({self.var(builder)}) AS {alias}"

    def table_names(self) -> list[str]:
        if self._tables:
            return list(self._tables)
        if self._cte is not None:
            return self._cte.table_names()
        return []

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build_with_flavor(self, flavor: Flavor, *initial_values: Any) -> CompiledQuery:
        sql = ""
        if self._cte_var:
            sql += self._cte_var + " "

        sql += "SELECT "
        if self._distinct:
            sql += "DISTINCT "
        if self._distinct_on:
            sql += f"DISTINCT ON ({', '.join(self._distinct_on)}) "
        sql += ", ".join(self._select_cols) if self._select_cols else "*"

        tables = self.table_names()
        if tables:
            sql += " FROM " + ", ".join(tables)

        for option, table, on_exprs in self._joins:
            if option:
                sql += f" {option}"
            sql += f" JOIN {table}"
            if on_exprs:
                sql += " ON " + " AND ".join(on_exprs)

        sql += self._where_sql()

        if self._group_by:
            sql += " GROUP BY " + ", ".join(self._group_by)
            if self._having:
                sql += " HAVING " + " AND ".join(self._having)

        if self._order_by:
            sql += " ORDER BY " + ", ".join(self._order_by)
            if self._order:
                sql += f" {self._order}"

        sql = self._paging.render(sql, flavor, has_order_by=bool(self._order_by))

        if self._lock:
            sql += f" {self._lock}"

        return self.args.compile_with_flavor(sql, flavor, *initial_values)


def select(*cols: str) -> SelectBuilder:
    """Start a SELECT with the default flavor."""
    return SelectBuilder().select(*cols)
