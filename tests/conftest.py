"""Conftest for all pytest configuration - fixtures and global state isolation."""

import pytest

from objserial.plugins.manager import reset_global_plugin_manager
from objserial.registry import default_registry
from objserial.settings import get_global_settings
from objserial.settings import set_global_settings


@pytest.fixture(autouse=True)
def isolate_global_state():
    """
    Restore the default registry, settings and plugin manager after each test.

    Classes subclassing Serializer register themselves in the default registry at import time,
    so the registry is snapshotted and restored instead of cleared.
    """
    saved_strategies = {
        scope: dict(entries) for scope, entries in default_registry._strategies.items()
    }
    saved_types = dict(default_registry._types)
    saved_settings = get_global_settings()

    yield

    default_registry._strategies.clear()
    default_registry._strategies.update(saved_strategies)
    default_registry._types.clear()
    default_registry._types.update(saved_types)
    set_global_settings(saved_settings)
    reset_global_plugin_manager()
