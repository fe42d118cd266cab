"""Default plugins shipped with objserial."""

from objserial.plugins.default.logging import LoggingPlugin

__all__ = [
    "LoggingPlugin",
]
