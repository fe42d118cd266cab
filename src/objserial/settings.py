from __future__ import annotations

import threading
from dataclasses import dataclass

DEFAULT_MARKER = "__CLASS__"

_GLOBAL_OBJSERIAL_SETTINGS: ObjSerialSettings | None = None
_SETTINGS_LOCK = threading.RLock()


@dataclass(frozen=True)
class ObjSerialSettings:
    """Configuration settings for objserial."""

    marker: str | None = DEFAULT_MARKER
    """
    Key used to tag mappings with the type identity of the instance they came from.

    If None, tagging is disabled and serialized output cannot be expanded back into instances.
    """

    sort_keys: bool = True
    """Whether reflected attributes are emitted in sorted order for reproducible output."""


def get_global_settings() -> ObjSerialSettings:
    """
    Get the global objserial settings instance (thread-safe).

    If no global settings have been set, returns a default instance.
    """
    with _SETTINGS_LOCK:
        global _GLOBAL_OBJSERIAL_SETTINGS
        if _GLOBAL_OBJSERIAL_SETTINGS is None:
            _GLOBAL_OBJSERIAL_SETTINGS = ObjSerialSettings()
        return _GLOBAL_OBJSERIAL_SETTINGS


def set_global_settings(settings: ObjSerialSettings) -> None:
    """
    Set the global objserial settings instance (thread-safe).

    Note: Calls that are already in flight keep the marker they started with.

    Args:
        settings (ObjSerialSettings): Settings to set as global.
    """
    with _SETTINGS_LOCK:
        global _GLOBAL_OBJSERIAL_SETTINGS
        _GLOBAL_OBJSERIAL_SETTINGS = settings
