"""Utility functions to manage the project-wide hook configuration."""

import logging
from inspect import isclass
from typing import Any

from pluggy import PluginManager

from .hooks.markers import HOOK_NAMESPACE
from .hooks.specs import SerializationSpec

logger = logging.getLogger(__name__)

_PLUGIN_ENTRY_POINT = "objserial.hooks"  # entry-point to load hooks from for installed plugins
_PLUGIN_MANAGER: PluginManager | None = None


# region API


def register_hooks(*hooks: Any) -> None:
    """Register specified objserial pluggy hooks."""
    hook_manager = _get_global_plugin_manager()
    for hooks_collection in hooks:
        if not hook_manager.is_registered(hooks_collection):
            if isclass(hooks_collection):
                raise TypeError(
                    "objserial expects hooks to be registered as instances. "
                    "Have you forgotten the `()` when registering a hook class?"
                )
            hook_manager.register(hooks_collection)


def unregister_hooks(*hooks: Any) -> None:
    """Unregister previously registered objserial pluggy hooks."""
    hook_manager = _get_global_plugin_manager()
    for hooks_collection in hooks:
        if hook_manager.is_registered(hooks_collection):
            hook_manager.unregister(hooks_collection)


def register_plugins_entry_points(_plugin_manager: PluginManager | None = None) -> int:
    """
    Register objserial plugins from Python package entrypoints.

    Returns:
        The number of plugins loaded.
    """
    _plugin_manager = _plugin_manager if _plugin_manager else _get_global_plugin_manager()
    # Despite the name, this does not use setuptools
    return _plugin_manager.load_setuptools_entrypoints(_PLUGIN_ENTRY_POINT)


def get_hooks() -> Any:
    """Return the hook relay of the global plugin manager."""
    return _get_global_plugin_manager().hook


def reset_global_plugin_manager() -> None:
    """Discard every registered plugin by replacing the global plugin manager."""
    _initialize_plugin_system()


# region Helpers


def _initialize_plugin_system() -> PluginManager:
    """Initializes hooks for the objserial library."""
    manager = _create_plugin_manager()
    global _PLUGIN_MANAGER
    _PLUGIN_MANAGER = manager
    return manager


def _get_global_plugin_manager() -> PluginManager:
    """Returns initialized global plugin manager or raises an exception."""
    plugin_manager = _PLUGIN_MANAGER
    if plugin_manager is None:
        plugin_manager = _initialize_plugin_system()
    return plugin_manager


def _create_plugin_manager() -> PluginManager:
    """Create a new PluginManager instance and register objserial's hook specs."""
    manager = PluginManager(HOOK_NAMESPACE)
    manager.trace.root.setwriter(
        logger.debug if logger.getEffectiveLevel() == logging.DEBUG else None
    )
    manager.enable_tracing()
    manager.add_hookspecs(SerializationSpec)
    return manager
