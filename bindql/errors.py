"""Custom exception hierarchy for bindQL.

All public errors inherit from BindQLError so callers can catch the base
class for any bindQL-specific failure.

Compilation of a format string never raises.  Interpolation is strict and
raises one of the :class:`InterpolationError` subclasses on the first problem
it meets.  An exception raised by a value's ``sql_value()`` conversion is not
wrapped; it reaches the caller unchanged.
"""
from __future__ import annotations

from typing import Any


class BindQLError(Exception):
    """Base exception for all bindQL errors."""


class FlavorNotFoundError(BindQLError):
    """Raised when a flavor name is not registered.

    Args:
        name: The requested flavor name.
        registered: Names currently known to the registry.
    """

    def __init__(self, name: str, registered: list[str]) -> None:
        super().__init__(
            f"Unsupported flavor: '{name}'. Registered flavors: {registered}."
        )
        self.name = name
        self.registered = registered


class CompilationError(BindQLError):
    """Raised when a statement builder is used in an invalid way.

    Args:
        message: Human-readable description.
        clause: The clause being assembled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class InterpolationError(BindQLError):
    """Base class for failures while rendering values into literal SQL.

    Args:
        message: Human-readable description.
        flavor: Name of the flavor used for interpolation.
        query: The parameterized query being interpolated.
    """

    def __init__(
        self,
        message: str,
        flavor: str | None = None,
        query: str | None = None,
    ) -> None:
        super().__init__(message)
        self.flavor = flavor
        self.query = query


class MissingArgumentError(InterpolationError):
    """Raised when a placeholder has no corresponding value."""

    def __init__(
        self,
        position: int,
        available: int,
        flavor: str | None = None,
        query: str | None = None,
    ) -> None:
        super().__init__(
            f"Missing argument for placeholder #{position}; "
            f"only {available} value(s) supplied.",
            flavor=flavor,
            query=query,
        )
        self.position = position
        self.available = available


class UnsupportedValueKindError(InterpolationError):
    """Raised when a value has no literal rendering rule in the flavor."""

    def __init__(
        self,
        value: Any,
        flavor: str | None = None,
        query: str | None = None,
    ) -> None:
        super().__init__(
            f"Unsupported argument of type {type(value).__name__!r} "
            f"for flavor {flavor}.",
            flavor=flavor,
            query=query,
        )
        self.value_type = type(value)


class OrdinalOverflowError(InterpolationError):
    """Raised when an ordinal placeholder index exceeds 32-bit range.

    Args:
        digits: The digit string following the placeholder marker.
    """

    def __init__(
        self,
        digits: str,
        flavor: str | None = None,
        query: str | None = None,
    ) -> None:
        super().__init__(
            f'Ordinal placeholder index "{digits}" is out of range.',
            flavor=flavor,
            query=query,
        )
        self.digits = digits
