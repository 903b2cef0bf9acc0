"""Map pydantic models to statement builders.

Column metadata is declared with :func:`db_field`, which stores it in the
field's ``json_schema_extra`` under the ``"db"`` key::

    class User(BaseModel):
        id: int = db_field(column="id", tags=("pk",))
        name: str = db_field(quote=True)
        status: int = db_field(omit_empty=True)
        password: str = db_field(column="-")   # never mapped

    user_struct = Struct(User, flavor=MYSQL)
    sb = user_struct.select_from("user")
    # SELECT user.id, user.`name`, user.status FROM user

Fields declared with a plain annotation map to a column of the same name.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from bindql.builder.delete import DeleteBuilder
from bindql.builder.insert import InsertBuilder
from bindql.builder.select import SelectBuilder
from bindql.builder.update import UpdateBuilder
from bindql.config import get_default_flavor
from bindql.flavor.base import Flavor

#: Key under ``json_schema_extra`` holding column metadata.
DB_METADATA_KEY = "db"

#: Column name that excludes a field from mapping.
SKIP_COLUMN = "-"

_EMPTY_CHECKED = (str, bytes, bool, int, float, Decimal, list, tuple, dict, set, frozenset)


def db_field(
    default: Any = ...,
    *,
    column: str | None = None,
    tags: tuple[str, ...] | list[str] = (),
    quote: bool = False,
    omit_empty: bool = False,
    **kwargs: Any,
) -> Any:
    """Declare a pydantic field with column metadata.

    Args:
        default: Field default; ``...`` makes the field required.
        column: Column name.  Defaults to the field name; ``"-"`` excludes
            the field.
        tags: Tags selecting the field in the ``*_for_tag`` style calls
            (``columns(tag)``, ``select_from(table, tag)`` ...).
        quote: Quote the column with the flavor's identifier quote.
        omit_empty: Leave the column out of UPDATE when the value is empty.
        **kwargs: Passed through to :func:`pydantic.Field`.
    """
    extra = {
        DB_METADATA_KEY: {
            "column": column,
            "tags": list(tags),
            "quote": quote,
            "omit_empty": omit_empty,
        }
    }
    return Field(default, json_schema_extra=extra, **kwargs)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, _EMPTY_CHECKED):
        return not value
    return False


class Struct:
    """Builds statements from the fields of a pydantic model class.

    Args:
        model_cls: The model class to map.
        flavor: Flavor for the builders and for column quoting.  ``None``
            uses the default flavor.
    """

    def __init__(self, model_cls: type[BaseModel], flavor: Flavor | None = None) -> None:
        self.model_cls = model_cls
        self.flavor = flavor
        self._field_names: dict[str, str] = {}
        self._tagged: dict[str, list[str]] = {}
        self._quoted: set[str] = set()
        self._omit_empty: set[str] = set()
        self._parse()

    def _parse(self) -> None:
        for name, info in self.model_cls.model_fields.items():
            extra = info.json_schema_extra
            meta = extra.get(DB_METADATA_KEY, {}) if isinstance(extra, dict) else {}
            column = meta.get("column") or name

            if column == SKIP_COLUMN:
                continue

            self._field_names[column] = name
            self._tagged.setdefault("", []).append(column)
            for tag in meta.get("tags", ()):
                if tag:
                    self._tagged.setdefault(tag, []).append(column)

            if meta.get("quote"):
                self._quoted.add(column)
            if meta.get("omit_empty"):
                self._omit_empty.add(column)

    def for_flavor(self, flavor: Flavor) -> Struct:
        """Return a copy of this mapping bound to ``flavor``."""
        return Struct(self.model_cls, flavor)

    def columns(self, tag: str = "") -> list[str]:
        """Column names for ``tag`` (all columns for ``""``)."""
        return list(self._tagged.get(tag, []))

    def values(self, value: Any, tag: str = "") -> list[Any]:
        """Field values of ``value`` in :meth:`columns` order.

        Returns an empty list when ``value`` is not an instance of the model.
        """
        if not isinstance(value, self.model_cls):
            return []
        return [getattr(value, self._field_names[c]) for c in self._tagged.get(tag, [])]

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def select_from(self, table: str, tag: str = "") -> SelectBuilder:
        sb = SelectBuilder(self.flavor).from_(table)
        columns = self._tagged.get(tag)

        if columns:
            sb.select(*(f"{table}.{c}" for c in self._quote_all(columns)))
        else:
            sb.select("*")
        return sb

    def update(self, table: str, value: Any, tag: str = "") -> UpdateBuilder:
        """UPDATE ``table`` from the fields of ``value``.

        Columns declared with ``omit_empty`` are skipped when empty.  A value
        of a foreign type produces a builder with no assignments.
        """
        ub = UpdateBuilder(self.flavor).update(table)
        columns = self._tagged.get(tag)

        if not columns or not isinstance(value, self.model_cls):
            return ub

        assignments = []
        for column, quoted in zip(columns, self._quote_all(columns)):
            data = getattr(value, self._field_names[column])
            if column in self._omit_empty and _is_empty(data):
                continue
            assignments.append(ub.assign(quoted, data))

        return ub.set(*assignments)

    def insert_into(self, table: str, *values: Any, tag: str = "") -> InsertBuilder:
        return self._fill(InsertBuilder(self.flavor).insert_into(table), tag, values)

    def insert_ignore_into(self, table: str, *values: Any, tag: str = "") -> InsertBuilder:
        return self._fill(InsertBuilder(self.flavor).insert_ignore_into(table), tag, values)

    def replace_into(self, table: str, *values: Any, tag: str = "") -> InsertBuilder:
        return self._fill(InsertBuilder(self.flavor).replace_into(table), tag, values)

    def delete_from(self, table: str) -> DeleteBuilder:
        return DeleteBuilder(self.flavor).delete_from(table)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fill(self, ib: InsertBuilder, tag: str, values: tuple[Any, ...]) -> InsertBuilder:
        columns = self._tagged.get(tag)
        rows = [v for v in values if isinstance(v, self.model_cls)]

        if not columns or not rows:
            return ib

        ib.cols(*self._quote_all(columns))
        for row in rows:
            ib.values(*(getattr(row, self._field_names[c]) for c in columns))
        return ib

    def _quote_all(self, columns: list[str]) -> list[str]:
        if not self._quoted:
            return list(columns)
        flavor = self.flavor or get_default_flavor()
        return [flavor.quote(c) if c in self._quoted else c for c in columns]
