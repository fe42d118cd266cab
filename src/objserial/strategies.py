"""
Ready-made collapse routines for common standard library value types.

None of these are registered by default. Call ``register_common_strategies`` to opt in, either
globally or for a single consuming class.

Example:
    >>> import datetime
    >>> from objserial import serialize
    >>> registry = StrategyRegistry()
    >>> register_common_strategies(registry)
    >>> serialize({"when": datetime.date(2024, 1, 1)}, registry=registry)
    {'when': '2024-01-01'}
"""

from __future__ import annotations

import base64
import datetime
import decimal
import enum
import pathlib
import uuid
from typing import Any

from objserial.registry import GLOBAL_NAMESPACE
from objserial.registry import StrategyRegistry
from objserial.registry import default_registry


def collapse_isoformat(value: datetime.date | datetime.time) -> str:
    """Collapse dates, times and datetimes into ISO-8601 strings."""
    return value.isoformat()


def collapse_timedelta(value: datetime.timedelta) -> float:
    """Collapse a timedelta into its total number of seconds."""
    return value.total_seconds()


def collapse_str(value: Any) -> str:
    """Collapse a value into its string form (decimals, UUIDs, paths)."""
    return str(value)


def collapse_bytes(value: bytes) -> str:
    """Collapse bytes into base64 text."""
    return base64.b64encode(value).decode("ascii")


def collapse_enum(value: enum.Enum) -> Any:
    """Collapse an enum member into its value."""
    return value.value


def collapse_complex(value: complex) -> list[float]:
    """Collapse a complex number into ``[real, imag]``."""
    return [value.real, value.imag]


COMMON_COLLAPSE_STRATEGIES: dict[type, Any] = {
    datetime.datetime: collapse_isoformat,
    datetime.date: collapse_isoformat,
    datetime.time: collapse_isoformat,
    datetime.timedelta: collapse_timedelta,
    decimal.Decimal: collapse_str,
    uuid.UUID: collapse_str,
    pathlib.PurePosixPath: collapse_str,
    pathlib.PureWindowsPath: collapse_str,
    pathlib.PosixPath: collapse_str,
    pathlib.WindowsPath: collapse_str,
    bytes: collapse_bytes,
    complex: collapse_complex,
}
"""Collapse routines keyed by the exact type they apply to."""


def register_common_strategies(
    registry: StrategyRegistry | None = None,
    namespace: Any = None,
    enums: tuple[type[enum.Enum], ...] = (),
) -> None:
    """
    Register collapse routines for common standard library types.

    Strategies match exact types, so enum classes are listed explicitly in ``enums`` rather than
    registered once for ``enum.Enum``.

    Args:
        registry: Registry to register into. Defaults to the process-wide registry.
        namespace: Namespace to register under. If None, registers in the global namespace.
        enums: Enum classes whose members should collapse into their values.
    """
    registry = registry if registry is not None else default_registry
    namespace = namespace if namespace is not None else GLOBAL_NAMESPACE
    for type_, collapse in COMMON_COLLAPSE_STRATEGIES.items():
        registry.register(namespace, type_, collapse=collapse)
    for enum_cls in enums:
        registry.register(namespace, enum_cls, collapse=collapse_enum)
