"""Flavor registry.

``FlavorRegistry`` maps flavor names to :class:`~bindql.flavor.base.Flavor`
records so configuration and callers can refer to a dialect by name.
Lookups are case-insensitive; the canonical spelling is kept for display.

Usage::

    from bindql.flavor.registry import FlavorRegistry

    FlavorRegistry.register(Flavor(name="MariaDB", identifier_quote="`"))
    flavor = FlavorRegistry.get("mariadb")
"""
from __future__ import annotations

from typing import ClassVar

from bindql.errors import FlavorNotFoundError
from bindql.flavor.base import Flavor


class FlavorRegistry:
    """Registry mapping flavor names to :class:`Flavor` records.

    Example::

        FlavorRegistry.register(MYSQL)
        flavor = FlavorRegistry.get("MySQL")
    """

    _flavors: ClassVar[dict[str, Flavor]] = {}

    @classmethod
    def register(cls, flavor: Flavor) -> Flavor:
        """Register ``flavor`` under its name.

        Registering a flavor whose name is already known replaces the
        previous record.

        Args:
            flavor: The flavor to register.

        Returns:
            The registered flavor, so the call can be used in an assignment.
        """
        cls._flavors[flavor.name.lower()] = flavor
        return flavor

    @classmethod
    def get(cls, name: str) -> Flavor:
        """Return the flavor registered for ``name``.

        Args:
            name: Flavor name, case-insensitive.

        Returns:
            The registered :class:`Flavor`.

        Raises:
            FlavorNotFoundError: If no flavor is registered for ``name``.
        """
        flavor = cls._flavors.get(name.lower())
        if flavor is None:
            raise FlavorNotFoundError(name, cls.registered_names())
        return flavor

    @classmethod
    def registered_names(cls) -> list[str]:
        """Return the sorted canonical names of all registered flavors."""
        return sorted(f.name for f in cls._flavors.values())
