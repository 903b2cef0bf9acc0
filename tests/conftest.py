"""Shared pytest fixtures for bindQL tests."""
from __future__ import annotations

import pytest

from bindql.config import DEFAULT_FLAVOR_ENV, set_default_flavor
from bindql.flavor.registry import FlavorRegistry


@pytest.fixture(autouse=True)
def _isolate_default_flavor(monkeypatch: pytest.MonkeyPatch):
    """Every test starts from the built-in default (MySQL, env unset)."""
    monkeypatch.delenv(DEFAULT_FLAVOR_ENV, raising=False)
    previous = set_default_flavor(None)
    yield
    set_default_flavor(previous)


@pytest.fixture()
def isolated_registry(monkeypatch: pytest.MonkeyPatch) -> type[FlavorRegistry]:
    """Registry whose registrations are discarded after the test."""
    monkeypatch.setattr(FlavorRegistry, "_flavors", dict(FlavorRegistry._flavors))
    return FlavorRegistry
