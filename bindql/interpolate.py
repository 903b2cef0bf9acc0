"""Literal interpolation: render bound values straight into SQL text.

Interpolated SQL is meant for logging, debugging and drivers that cannot
bind parameters.  The scanner walks the compiled SQL once, skipping quoted
regions, and replaces each genuine placeholder with the literal form of its
value in the target flavor.

Three scanners cover the ten built-in flavors:

* ``?`` flavors track ``'``, ``"`` and backtick quotes and consume values in
  order.
* Ordinal flavors (``$N`` for PostgreSQL, ``:N`` for Oracle) track ``'`` and
  ``"`` quotes plus dollar-quoted bodies (``$tag$ ... $tag$``, or
  ``:tag: ... :tag:`` for Oracle) and look values up by 1-based position.
* SQLServer tracks ``'``, ``"`` and ``[bracketed]`` identifiers and looks up
  ``@pN`` / ``@PN`` by position.

Interpolation is all-or-nothing: the first problem raises an
:class:`~bindql.errors.InterpolationError` subclass and no partial text is
returned.
"""
from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable
from uuid import UUID

from bindql.errors import (
    InterpolationError,
    MissingArgumentError,
    OrdinalOverflowError,
    UnsupportedValueKindError,
)

if TYPE_CHECKING:
    from bindql.flavor.base import Flavor

logger = logging.getLogger(__name__)

#: Largest ordinal accepted after a ``$`` / ``:`` / ``@p`` marker.
MAX_ORDINAL = 2**31 - 1

_ZERO_TIME = "'0000-00-00'"

_ESCAPES = {
    "\0": "\\0",
    "\b": "\\b",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\x1a": "\\Z",
    '"': '\\"',
    "\\": "\\\\",
}
_BACKSLASH_QUOTE = str.maketrans({**_ESCAPES, "'": "\\'"})
_DOUBLED_QUOTE = str.maketrans({**_ESCAPES, "'": "''"})

_HEX_BINARY = {
    "bytea": "E'\\\\x{}'::bytea",
    "x_hex": "X'{}'",
    "0x": "0x{}",
    "unhex": "unhex('{}')",
    "from_hex": "from_hex('{}')",
    "hextoraw": "hextoraw('{}')",
}

_TAG = r"(?:[A-Za-z_][A-Za-z0-9_]*)?"
_ORDINAL_PATTERNS = {
    marker: (
        re.compile(re.escape(marker) + r"(\d+)"),
        re.compile(re.escape(marker) + _TAG + re.escape(marker)),
    )
    for marker in ("$", ":")
}
_SQLSERVER_PLACEHOLDER = re.compile(r"@[pP](\d+)")


@runtime_checkable
class SQLValuer(Protocol):
    """A value that converts itself before being rendered.

    ``sql_value()`` returns any value :func:`encode_value` understands.
    Whatever it raises reaches the caller unchanged.
    """

    def sql_value(self) -> Any: ...


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def interpolate(query: str, values: Sequence[Any] | None, flavor: Flavor) -> str:
    """Return ``query`` with every placeholder replaced by a literal.

    Args:
        query: SQL text with placeholders in ``flavor``'s syntax.
        values: Values for the placeholders.
        flavor: Flavor that decides placeholder syntax and literal forms.

    Returns:
        Self-contained SQL text.

    Raises:
        MissingArgumentError: A placeholder has no value.
        UnsupportedValueKindError: A value has no literal form.
        OrdinalOverflowError: An ordinal index does not fit in 32 bits.
    """
    values = list(values or ())

    try:
        if flavor.placeholder == "?":
            result = _interpolate_sequential(query, values, flavor)
        elif flavor.placeholder == "@p":
            result = _interpolate_sqlserver(query, values, flavor)
        else:
            result = _interpolate_ordinal(query, values, flavor)
    except InterpolationError as exc:
        exc.query = query
        logger.warning("Cannot interpolate %s query %r: %s", flavor.name, query, exc)
        raise

    logger.debug("Interpolated %d value(s) for %s", len(values), flavor.name)
    return result


def encode_value(value: Any, flavor: Flavor) -> str:
    """Render a single value as a SQL literal for ``flavor``.

    Raises:
        UnsupportedValueKindError: ``value`` has no literal form.
    """
    if value is None:
        return "NULL"
    if isinstance(value, Enum):
        return encode_value(value.value, flavor)
    if isinstance(value, bool):
        return flavor.true_literal if value else flavor.false_literal
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedValueKindError(value, flavor=flavor.name)
        return repr(float(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise UnsupportedValueKindError(value, flavor=flavor.name)
        return format(value, "f")
    if isinstance(value, str):
        return quote_string(value, flavor)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _encode_bytes(bytes(value), flavor)
    if isinstance(value, datetime):
        return _encode_datetime(value, flavor)
    if isinstance(value, date):
        return _encode_date(value, flavor)
    if isinstance(value, time):
        return f"'{_clock(value)}{_fraction(value.microsecond)}'"
    if isinstance(value, UUID):
        return quote_string(str(value), flavor)
    if isinstance(value, SQLValuer):
        return encode_value(value.sql_value(), flavor)

    raise UnsupportedValueKindError(value, flavor=flavor.name)


def quote_string(s: str, flavor: Flavor) -> str:
    """Quote and escape ``s`` as a string literal for ``flavor``."""
    table = _DOUBLED_QUOTE if flavor.quote_escape == "double" else _BACKSLASH_QUOTE
    return f"{flavor.string_prefix}'{s.translate(table)}'"


# ---------------------------------------------------------------------------
# Scanners
# ---------------------------------------------------------------------------


def _interpolate_sequential(query: str, values: list[Any], flavor: Flavor) -> str:
    parts: list[str] = []
    quote = ""
    escaping = False
    start = 0
    consumed = 0

    for pos, ch in enumerate(query):
        if escaping:
            escaping = False
        elif quote:
            if ch == "\\":
                escaping = True
            elif ch == quote:
                quote = ""
        elif ch in "'\"`":
            quote = ch
        elif ch == "?":
            if consumed >= len(values):
                raise MissingArgumentError(
                    consumed + 1, len(values), flavor=flavor.name
                )
            parts.append(query[start:pos])
            parts.append(encode_value(values[consumed], flavor))
            consumed += 1
            start = pos + 1

    parts.append(query[start:])
    return "".join(parts)


def _interpolate_ordinal(query: str, values: list[Any], flavor: Flavor) -> str:
    marker = flavor.placeholder
    number_re, tag_re = _ORDINAL_PATTERNS[marker]
    parts: list[str] = []
    quote = ""
    escaping = False
    start = 0
    pos = 0

    while pos < len(query):
        ch = query[pos]

        if escaping:
            escaping = False
        elif quote:
            if ch == "\\":
                escaping = True
            elif ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch == marker:
            m = number_re.match(query, pos)
            if m:
                parts.append(query[start:pos])
                value = _ordinal_value(m.group(1), values, flavor)
                parts.append(encode_value(value, flavor))
                pos = start = m.end()
                continue

            m = tag_re.match(query, pos)
            if m:
                # Dollar-quoted body: skip to the matching closing tag.
                end = query.find(m.group(0), m.end())
                pos = len(query) if end < 0 else end + len(m.group(0))
                continue

        pos += 1

    parts.append(query[start:])
    return "".join(parts)


def _interpolate_sqlserver(query: str, values: list[Any], flavor: Flavor) -> str:
    parts: list[str] = []
    quote = ""
    escaping = False
    start = 0
    pos = 0

    while pos < len(query):
        ch = query[pos]

        if escaping:
            escaping = False
        elif quote:
            if ch == "\\" and quote != "]":
                escaping = True
            elif ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch == "[":
            quote = "]"
        elif ch == "@":
            m = _SQLSERVER_PLACEHOLDER.match(query, pos)
            if m:
                parts.append(query[start:pos])
                value = _ordinal_value(m.group(1), values, flavor)
                parts.append(encode_value(value, flavor))
                pos = start = m.end()
                continue

        pos += 1

    parts.append(query[start:])
    return "".join(parts)


def _ordinal_value(digits: str, values: list[Any], flavor: Flavor) -> Any:
    index = int(digits)
    if index > MAX_ORDINAL:
        raise OrdinalOverflowError(digits, flavor=flavor.name)
    if index < 1 or index > len(values):
        raise MissingArgumentError(index, len(values), flavor=flavor.name)
    return values[index - 1]


# ---------------------------------------------------------------------------
# Literal forms
# ---------------------------------------------------------------------------


def _encode_bytes(data: bytes, flavor: Flavor) -> str:
    hex_digits = data.hex().upper()

    if flavor.binary_literal == "mysql_binary":
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            return f"_binary X'{hex_digits}'"
        return "_binary" + quote_string(text, flavor)

    return _HEX_BINARY[flavor.binary_literal].format(hex_digits)


def _encode_datetime(value: datetime, flavor: Flavor) -> str:
    if value.replace(tzinfo=None) == datetime.min:
        return _ZERO_TIME

    base = f"{_calendar(value)} {_clock(value)}"
    style = flavor.timestamp_literal

    if style == "millis":
        return f"'{base}.{value.microsecond // 1000:03d}'"

    base += _fraction(value.microsecond)

    if style == "zone_name":
        offset = value.utcoffset()
        if offset is None:
            return f"'{base}'"
        zone = value.tzname()
        # Unnamed fixed offsets report "UTC+08:00"; render the bare offset.
        if not zone or zone.startswith(("UTC+", "UTC-")):
            zone = _offset(offset, ":")
        return f"'{base} {zone}'"
    if style == "iso_offset":
        offset = value.utcoffset()
        return f"'{base} {_offset(offset, ':')}'" if offset is not None else f"'{base}'"
    if style == "compact_offset":
        offset = value.utcoffset()
        return f"'{base}{_offset(offset, '')}'" if offset is not None else f"'{base}'"
    if style == "to_timestamp":
        return f"to_timestamp('{base}', 'YYYY-MM-DD HH24:MI:SS.FF')"
    return f"'{base}'"


def _encode_date(value: date, flavor: Flavor) -> str:
    if value == date.min:
        return _ZERO_TIME
    if flavor.timestamp_literal == "to_timestamp":
        return f"to_date('{_calendar(value)}', 'YYYY-MM-DD')"
    return f"'{_calendar(value)}'"


def _calendar(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _clock(value: datetime | time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"


def _fraction(microsecond: int) -> str:
    # Trailing zeros are dropped; a whole second has no fraction at all.
    if not microsecond:
        return ""
    return f".{microsecond:06d}".rstrip("0")


def _offset(offset: timedelta, sep: str) -> str:
    total = int(offset.total_seconds()) // 60
    if total == 0:
        return "Z"
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total), 60)
    return f"{sign}{hours:02d}{sep}{minutes:02d}"
