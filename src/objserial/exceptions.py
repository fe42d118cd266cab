"""
Centralized exception classes for the objserial library.

All objserial-specific exceptions inherit from ObjSerialError for easy catching.
"""


class ObjSerialError(Exception):
    """Base exception for all objserial errors."""


class ReflectionError(ObjSerialError):
    """Raised when a value cannot be reflected into generic nodes."""


class StrategyError(ObjSerialError):
    """Raised when a serialization strategy is registered incorrectly."""


class ReconstructionError(ObjSerialError):
    """Raised when a tagged mapping cannot be turned back into a typed instance."""
