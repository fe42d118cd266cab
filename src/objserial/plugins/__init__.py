from objserial.plugins.default import LoggingPlugin

from .hooks.markers import hook_impl
from .manager import register_hooks
from .manager import register_plugins_entry_points
from .manager import reset_global_plugin_manager
from .manager import unregister_hooks

__all__ = [
    "hook_impl",
    "LoggingPlugin",
    "register_hooks",
    "register_plugins_entry_points",
    "reset_global_plugin_manager",
    "unregister_hooks",
]
