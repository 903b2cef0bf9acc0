"""Bound values, the argument registry and the placeholder compiler.

Builders never write driver placeholders themselves.  Every value goes
through :meth:`Args.add`, which stores it and hands back a ``$N`` reference.
Builders splice those references into a format string, and
:meth:`Args.compile_with_flavor` resolves the format string into the final
``(sql, values)`` pair for one flavor.

Format-string directives
------------------------
``$$``
    A literal ``$``.
``$?``
    The next unconsumed entry.  An internal cursor advances after each use.
``$N``
    The entry at 0-based index ``N``; the cursor moves to ``N + 1``.
``${name}``
    The inner value of the :class:`Named` entry registered as ``name``.
    Unknown names render nothing.
anything else
    Copied through unchanged, including a trailing ``$``.

A reference past the end of the registry writes nothing.  Compilation never
raises; problems with the values themselves surface later, in
:func:`bindql.interpolate.interpolate`.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Union

from bindql.config import get_default_flavor
from bindql.flavor.base import Flavor

logger = logging.getLogger(__name__)

_DIRECTIVE = re.compile(r"\$(?:(\$)|(\?)|(\d+)|\{([^}]*)\})")


# ---------------------------------------------------------------------------
# Bound-value model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Scalar:
    """A plain value bound to one placeholder."""

    value: Any


@dataclass(frozen=True)
class Raw:
    """SQL text inserted verbatim.  Never escaped, never bound."""

    expr: str


@dataclass(frozen=True)
class ValueList:
    """A list of values expanded to comma-joined placeholders.

    An empty list expands to nothing at all.
    """

    values: tuple[Any, ...]

    def __init__(self, values: Iterable[Any]) -> None:
        object.__setattr__(self, "values", tuple(values))


@dataclass(frozen=True)
class Named:
    """A value referenced by name (``@name``) instead of by position.

    Entries sharing a name are one logical slot in an :class:`Args`.
    """

    name: str
    value: Any


@dataclass(frozen=True)
class Tuple:
    """A parenthesized group of values, ``(?, ?)``.

    Elements resolve like top-level values, so tuples nest and an empty
    tuple renders ``()``::

        sb.in_(tuple_names("type", "status"), Tuple("web", 1), Tuple("app", 2))
        # (type, status) IN ((?, ?), (?, ?))
    """

    values: tuple[Any, ...]

    def __init__(self, *values: Any) -> None:
        object.__setattr__(self, "values", values)


@dataclass(frozen=True, eq=False)
class SubQuery:
    """A nested builder whose SQL is inlined at the reference point.

    ``builder`` must expose ``build() -> (sql, values)``.  When it also
    exposes ``build_with_flavor(flavor, *initial_values)``, that is preferred
    so ordinal placeholders keep counting from the outer statement.
    """

    builder: Any


BoundValue = Union[Scalar, Raw, ValueList, Tuple, Named, SubQuery]

_BOUND_TYPES = (Scalar, Raw, ValueList, Tuple, Named, SubQuery)


def to_bound_value(value: Any) -> BoundValue:
    """Wrap ``value`` in the matching bound-value variant.

    Bound values pass through unchanged, objects with a callable ``build``
    become :class:`SubQuery`, and everything else becomes :class:`Scalar`.
    """
    if isinstance(value, _BOUND_TYPES):
        return value
    if callable(getattr(value, "build", None)):
        return SubQuery(value)
    return Scalar(value)


def escape(ident: str) -> str:
    """Replace ``$`` with ``$$`` so ``ident`` survives compilation verbatim."""
    return ident.replace("$", "$$")


def escape_all(*idents: str) -> list[str]:
    """Apply :func:`escape` to every identifier."""
    return [escape(i) for i in idents]


def tuple_names(*names: str) -> str:
    """Return ``(name1, name2, ...)`` for a tuple comparison."""
    return f"({', '.join(escape_all(*names))})"


def flatten(value: Any) -> list[Any]:
    """Recursively expand lists and tuples into one flat list.

    Any other value, strings and bytes included, is a single element::

        sb.in_("status", *flatten([1, [2, 3]]))
    """
    if not isinstance(value, (list, tuple)):
        return [value]
    flat: list[Any] = []
    for v in value:
        flat.extend(flatten(v))
    return flat


# ---------------------------------------------------------------------------
# Compiled output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompiledQuery:
    """Output of a compilation.

    Unpacks like a ``(sql, values)`` pair::

        sql, values = args.compile("SELECT * FROM t WHERE id = $0")

    Attributes:
        sql: SQL text with flavor-specific placeholders.
        values: Positional values in occurrence order, followed by
            :class:`Named` entries in first-occurrence order.
        flavor: The flavor the SQL was compiled for.
    """

    sql: str
    values: list[Any]
    flavor: Flavor

    def __iter__(self) -> Iterator[Any]:
        return iter((self.sql, self.values))

    def __str__(self) -> str:
        return self.sql

    def interpolate(self) -> str:
        """Render :attr:`values` into :attr:`sql` as literals."""
        return self.flavor.interpolate(self.sql, self.values)


# ---------------------------------------------------------------------------
# Argument registry
# ---------------------------------------------------------------------------


class Args:
    """Append-only registry of bound values for one statement.

    Args:
        flavor: Flavor used by :meth:`compile`.  ``None`` defers to the
            process-wide default from :mod:`bindql.config`.
        only_named: When true, ``$?`` and ``$N`` are not directives and are
            copied through; only ``${name}`` and ``$$`` are resolved.
    """

    def __init__(self, flavor: Flavor | None = None, only_named: bool = False) -> None:
        self.flavor = flavor
        self.only_named = only_named
        self._entries: list[BoundValue] = []
        self._named: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[BoundValue, ...]:
        return tuple(self._entries)

    def add(self, value: Any) -> str:
        """Register ``value`` and return its ``$N`` reference.

        A :class:`Named` value whose name is already registered is not
        stored again; the reference of the first registration is returned.
        """
        bound = to_bound_value(value)

        if isinstance(bound, Named):
            index = self._named.get(bound.name)
            if index is not None:
                return f"${index}"
            self._named[bound.name] = len(self._entries)

        self._entries.append(bound)
        return f"${len(self._entries) - 1}"

    def compile(self, fmt: str, *initial_values: Any) -> CompiledQuery:
        """Compile ``fmt`` with :attr:`flavor` (or the default flavor)."""
        flavor = self.flavor or get_default_flavor()
        return self.compile_with_flavor(fmt, flavor, *initial_values)

    def compile_with_flavor(
        self, fmt: str, flavor: Flavor, *initial_values: Any
    ) -> CompiledQuery:
        """Resolve every directive in ``fmt`` for ``flavor``.

        Args:
            fmt: Format string produced by a builder.
            flavor: Target flavor for placeholder syntax.
            *initial_values: Values already bound by an enclosing statement.
                They lead the output and ordinal placeholders are numbered
                after them.

        Returns:
            :class:`CompiledQuery` with the SQL and the value list.
        """
        ctx = _CompileContext(flavor, initial_values)
        cursor = 0
        last = 0

        for m in _DIRECTIVE.finditer(fmt):
            ctx.parts.append(fmt[last : m.start()])
            last = m.end()
            dollar, successive, digits, name = m.groups()

            if dollar:
                ctx.parts.append("$")
            elif self.only_named and name is None:
                ctx.parts.append(m.group(0))
            elif successive:
                if cursor < len(self._entries):
                    ctx.write(self._entries[cursor])
                    cursor += 1
            elif digits:
                index = int(digits)
                if index < len(self._entries):
                    ctx.write(self._entries[index])
                    cursor = index + 1
            else:
                index = self._named.get(name)
                if index is not None:
                    entry = self._entries[index]
                    ctx.write(to_bound_value(entry.value))

        ctx.parts.append(fmt[last:])
        compiled = ctx.result()
        logger.debug(
            "Compiled %d value(s) for %s: %s",
            len(compiled.values),
            flavor.name,
            compiled.sql,
        )
        return compiled


class _CompileContext:
    """Mutable state of one compilation run.

    Positional values and named entries are kept apart until the end so
    ordinal placeholders count positional values only.
    """

    def __init__(self, flavor: Flavor, initial_values: Iterable[Any]) -> None:
        self.flavor = flavor
        self.parts: list[str] = []
        self.values: list[Any] = []
        self.named: dict[str, Named] = {}
        self._absorb(initial_values)

    def _absorb(self, values: Iterable[Any]) -> None:
        for v in values:
            if isinstance(v, Named):
                self.named.setdefault(v.name, v)
            else:
                self.values.append(v)

    def write(self, bound: BoundValue) -> None:
        if isinstance(bound, Scalar):
            self.values.append(bound.value)
            self.parts.append(self.flavor.placeholder_for(len(self.values)))
        elif isinstance(bound, Raw):
            self.parts.append(bound.expr)
        elif isinstance(bound, ValueList):
            self._write_joined(bound.values)
        elif isinstance(bound, Tuple):
            self.parts.append("(")
            self._write_joined(bound.values)
            self.parts.append(")")
        elif isinstance(bound, Named):
            self.named.setdefault(bound.name, bound)
            self.parts.append(f"@{bound.name}")
        elif isinstance(bound, SubQuery):
            self._write_sub_query(bound.builder)

    def _write_joined(self, values: tuple[Any, ...]) -> None:
        for i, v in enumerate(values):
            if i:
                self.parts.append(", ")
            self.write(to_bound_value(v))

    def _write_sub_query(self, builder: Any) -> None:
        build_with_flavor = getattr(builder, "build_with_flavor", None)

        if callable(build_with_flavor):
            sql, values = build_with_flavor(self.flavor, *self.values)
            self.values = []
        else:
            sql, values = builder.build()

        self.parts.append(sql)
        self._absorb(values)

    def result(self) -> CompiledQuery:
        return CompiledQuery(
            sql="".join(self.parts),
            values=self.values + list(self.named.values()),
            flavor=self.flavor,
        )
