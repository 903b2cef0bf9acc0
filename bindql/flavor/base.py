"""The ``Flavor`` record: one immutable description per SQL dialect.

A flavor fixes two independent axes:

1. How the compiler renders the N-th placeholder (``?``, ``$N``, ``@pN`` or
   ``:N``).
2. How the interpolator renders each kind of value as a SQL literal
   (boolean spelling, string prefix and quote escaping, binary literal form,
   timestamp form).

It also carries the handful of syntax switches the statement builders need
(paging, ``INSERT IGNORE`` spelling, ``RETURNING`` support).  Flavors are
pure data: the model is frozen and never mutated after construction.

Built-in flavors live in :mod:`bindql.flavor.dialects`; new ones can be
declared and registered without touching this module::

    from bindql.flavor import Flavor, FlavorRegistry

    MARIADB = FlavorRegistry.register(
        Flavor(name="MariaDB", identifier_quote="`", binary_literal="mysql_binary")
    )
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from bindql.builder.cte import CTEBuilder, CTETableBuilder
    from bindql.builder.createtable import CreateTableBuilder
    from bindql.builder.delete import DeleteBuilder
    from bindql.builder.insert import InsertBuilder
    from bindql.builder.select import SelectBuilder
    from bindql.builder.union import UnionBuilder
    from bindql.builder.update import UpdateBuilder

#: Placeholder syntax written by the compiler.
PlaceholderStyle = Literal["?", "$", "@p", ":"]

#: Escaping applied to a single quote inside a string literal.
QuoteEscape = Literal["backslash", "double"]

#: Binary literal forms.
BinaryLiteral = Literal[
    "mysql_binary",  # _binary'...'
    "bytea",  # E'\\x...'::bytea
    "x_hex",  # X'...'
    "0x",  # 0x...
    "unhex",  # unhex('...')
    "from_hex",  # from_hex('...')
    "hextoraw",  # hextoraw('...')
]

#: Timestamp literal forms.
TimestampLiteral = Literal[
    "plain",  # '2006-01-02 15:04:05.999999'
    "zone_name",  # '2006-01-02 15:04:05.999999 MST'
    "millis",  # '2006-01-02 15:04:05.000'
    "iso_offset",  # '2006-01-02 15:04:05.999999 -07:00'
    "compact_offset",  # '2006-01-02 15:04:05.999999-0700'
    "to_timestamp",  # to_timestamp('...', 'YYYY-MM-DD HH24:MI:SS.FF')
]

#: LIMIT / OFFSET rendering used by SELECT and UNION builders.
PagingStyle = Literal[
    "limit_offset",  # LIMIT ? OFFSET ?, offset ignored without limit
    "limit_offset_independent",  # LIMIT and OFFSET each optional
    "offset_fetch",  # ORDER BY ... OFFSET ? ROWS FETCH NEXT ? ROWS ONLY
    "limit_only",  # LIMIT ?, offset ignored
    "offset_limit",  # OFFSET ? LIMIT ?
    "rownum",  # ROWNUM wrapping
    "skip_first",  # SKIP ? FIRST ?
    "limit_offset_literal",  # LIMIT 10 OFFSET 5 with inline integers
]

#: How ``INSERT IGNORE`` is spelled.
InsertIgnoreStyle = Literal["keyword", "on_conflict", "or_ignore", "unsupported"]


class Flavor(BaseModel):
    """Immutable description of a SQL dialect.

    Attributes:
        name: Canonical flavor name (``'MySQL'``, ``'PostgreSQL'`` ...).
        placeholder: Placeholder syntax written by the compiler.
        identifier_quote: Character used by :meth:`quote`.
        string_prefix: Prefix written before a quoted string (``E``, ``N``).
        quote_escape: How a single quote inside a string is escaped.
        true_literal: Spelling of boolean true.
        false_literal: Spelling of boolean false.
        binary_literal: Binary literal form.
        timestamp_literal: Timestamp literal form.
        paging: LIMIT / OFFSET rendering.
        insert_ignore: ``INSERT IGNORE`` spelling.
        supports_returning: Whether ``RETURNING`` is emitted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    placeholder: PlaceholderStyle = "?"
    identifier_quote: str = Field(default='"', min_length=1, max_length=1)
    string_prefix: str = ""
    quote_escape: QuoteEscape = "backslash"
    true_literal: str = "TRUE"
    false_literal: str = "FALSE"
    binary_literal: BinaryLiteral = "x_hex"
    timestamp_literal: TimestampLiteral = "plain"
    paging: PagingStyle = "limit_offset"
    insert_ignore: InsertIgnoreStyle = "keyword"
    supports_returning: bool = False

    def __str__(self) -> str:
        return self.name

    # ------------------------------------------------------------------
    # Placeholders and identifiers
    # ------------------------------------------------------------------

    @property
    def is_ordinal(self) -> bool:
        """True when placeholders carry an explicit 1-based position."""
        return self.placeholder != "?"

    def placeholder_for(self, position: int) -> str:
        """Return the placeholder for the value at 1-based ``position``.

        Args:
            position: 1-based position of the value in the final value list.

        Returns:
            ``?`` for sequential flavors, ``$N`` / ``@pN`` / ``:N`` otherwise.
        """
        if self.placeholder == "?":
            return "?"
        return f"{self.placeholder}{position}"

    def quote(self, name: str) -> str:
        """Return ``name`` wrapped in the flavor's identifier quote."""
        q = self.identifier_quote
        escaped = name.replace(q, q + q)
        return f"{q}{escaped}{q}"

    # ------------------------------------------------------------------
    # Interpolation
    # ------------------------------------------------------------------

    def interpolate(self, query: str, values: Sequence[Any] | None = None) -> str:
        """Render ``values`` into ``query`` as literals for this flavor.

        See :func:`bindql.interpolate.interpolate`.
        """
        from bindql.interpolate import interpolate

        return interpolate(query, values, self)

    # ------------------------------------------------------------------
    # Builder factories
    # ------------------------------------------------------------------

    def new_select_builder(self) -> SelectBuilder:
        from bindql.builder.select import SelectBuilder

        return SelectBuilder(flavor=self)

    def new_insert_builder(self) -> InsertBuilder:
        from bindql.builder.insert import InsertBuilder

        return InsertBuilder(flavor=self)

    def new_update_builder(self) -> UpdateBuilder:
        from bindql.builder.update import UpdateBuilder

        return UpdateBuilder(flavor=self)

    def new_delete_builder(self) -> DeleteBuilder:
        from bindql.builder.delete import DeleteBuilder

        return DeleteBuilder(flavor=self)

    def new_cte_builder(self) -> CTEBuilder:
        from bindql.builder.cte import CTEBuilder

        return CTEBuilder(flavor=self)

    def new_cte_table_builder(self) -> CTETableBuilder:
        from bindql.builder.cte import CTETableBuilder

        return CTETableBuilder(flavor=self)

    def new_create_table_builder(self) -> CreateTableBuilder:
        from bindql.builder.createtable import CreateTableBuilder

        return CreateTableBuilder(flavor=self)

    def union(self, *builders: Any) -> UnionBuilder:
        from bindql.builder.union import UnionBuilder

        return UnionBuilder(flavor=self).union(*builders)

    def union_all(self, *builders: Any) -> UnionBuilder:
        from bindql.builder.union import UnionBuilder

        return UnionBuilder(flavor=self).union_all(*builders)
