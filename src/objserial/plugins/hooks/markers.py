"""Hook markers for objserial plugins."""

import pluggy

HOOK_NAMESPACE = "objserial"

hook_spec = pluggy.HookspecMarker(HOOK_NAMESPACE)
"""Marker for objserial hook specifications."""

hook_impl = pluggy.HookimplMarker(HOOK_NAMESPACE)
"""Marker for objserial hook implementations."""
