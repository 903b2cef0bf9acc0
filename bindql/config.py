"""Process-wide default flavor.

Builders and :class:`~bindql.args.Args` objects created without an explicit
flavor resolve this default when they build.  The initial value comes from
the ``BINDQL_DEFAULT_FLAVOR`` environment variable (``MySQL`` when unset) and
is looked up lazily through :class:`~bindql.flavor.registry.FlavorRegistry`,
so flavors registered after import can be named there too.

The default is a convenience for scripts and tests; library code should pass
a :class:`~bindql.flavor.base.Flavor` explicitly.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

from bindql.flavor.base import Flavor
from bindql.flavor.registry import FlavorRegistry

logger = logging.getLogger(__name__)

#: Environment variable naming the initial default flavor.
DEFAULT_FLAVOR_ENV = "BINDQL_DEFAULT_FLAVOR"

#: Flavor used when the environment variable is unset.
FALLBACK_FLAVOR_NAME = "MySQL"

_default_flavor: Flavor | None = None


def get_default_flavor() -> Flavor:
    """Return the current default flavor.

    Raises:
        FlavorNotFoundError: If ``BINDQL_DEFAULT_FLAVOR`` names an unknown
            flavor.
    """
    global _default_flavor
    if _default_flavor is None:
        name = os.environ.get(DEFAULT_FLAVOR_ENV) or FALLBACK_FLAVOR_NAME
        _default_flavor = FlavorRegistry.get(name)
        logger.debug("Default flavor resolved to %s", _default_flavor.name)
    return _default_flavor


def set_default_flavor(flavor: Flavor | str | None) -> Flavor | None:
    """Replace the default flavor.

    Args:
        flavor: A :class:`Flavor`, a registered flavor name, or ``None`` to
            fall back to the environment on next use.

    Returns:
        The previous default, or ``None`` if it had not been resolved yet.
    """
    global _default_flavor
    previous = _default_flavor
    if isinstance(flavor, str):
        flavor = FlavorRegistry.get(flavor)
    _default_flavor = flavor
    return previous


@contextmanager
def default_flavor(flavor: Flavor | str) -> Iterator[Flavor]:
    """Temporarily switch the default flavor.

    Example::

        with default_flavor(POSTGRESQL):
            sql, values = select("id").from_("user").build()
    """
    previous = set_default_flavor(flavor)
    try:
        yield get_default_flavor()
    finally:
        set_default_flavor(previous)
