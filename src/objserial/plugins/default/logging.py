"""
Logging plugin for serialization lifecycle events.

Example:
    >>> import logging
    >>> from objserial.plugins import LoggingPlugin, register_hooks
    >>> register_hooks(LoggingPlugin(level=logging.INFO))
"""

import logging
from typing import Any

from objserial._typing import Direction
from objserial.plugins.hooks.markers import hook_impl
from objserial.utils import type_identity

DEFAULT_LOGGER_NAME = "objserial.lifecycle"


class LoggingPlugin:
    """
    Plugin that logs every serialize/deserialize call and its outcome.

    Args:
        level: Level used for the lifecycle messages. Errors are always logged at ERROR.
        logger_name: Name of the logger to write to. Defaults to "objserial.lifecycle".
    """

    def __init__(self, level: int = logging.DEBUG, logger_name: str | None = None):
        self._level = level
        self._logger = logging.getLogger(logger_name or DEFAULT_LOGGER_NAME)

    @hook_impl
    def before_serialize(self, value: Any) -> None:
        self._logger.log(self._level, f"Serializing value of type '{type_identity(value)}'")

    @hook_impl
    def after_serialize(self, value: Any, result: Any) -> None:
        self._logger.log(
            self._level,
            f"Serialized '{type_identity(value)}' into '{type_identity(result)}' node",
        )

    @hook_impl
    def before_deserialize(self, data: Any) -> None:
        self._logger.log(self._level, f"Deserializing '{type_identity(data)}' node")

    @hook_impl
    def after_deserialize(self, data: Any, result: Any) -> None:
        self._logger.log(
            self._level,
            f"Deserialized '{type_identity(data)}' node into '{type_identity(result)}'",
        )

    @hook_impl
    def on_serialization_error(self, value: Any, direction: Direction, error: Exception) -> None:
        action = "serialize" if direction == "collapse" else "deserialize"
        self._logger.error(f"Failed to {action} '{type_identity(value)}': {error}")
