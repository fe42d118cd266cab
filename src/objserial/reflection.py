"""
Reflection of arbitrary object graphs into generic nodes.

The reflector walks a value and produces a tree made only of dicts, lists and scalars. Every
attribute-keyed instance it meets becomes a dict of its attributes tagged with a marker key
whose value is the instance's type identity, so the tree carries enough information to rebuild
the original types later.

Example:
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Point:
    ...     __type_identity__ = "Point"
    ...     x: int
    ...     y: int
    >>> reflect(Point(10, 10))
    {'__CLASS__': 'Point', 'x': 10, 'y': 10}
    >>> reflect(Point(10, 10), marker=None)
    {'x': 10, 'y': 10}
"""

from __future__ import annotations

import datetime
import decimal
import enum
import logging
import types
import uuid
import weakref
from collections.abc import Mapping
from pathlib import PurePath
from typing import Any

from typing_extensions import Protocol
from typing_extensions import runtime_checkable

from objserial._typing import UNSET
from objserial._typing import Node
from objserial.exceptions import ReflectionError
from objserial.settings import get_global_settings
from objserial.utils import type_identity

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, int, float, bool, type(None))

# Value types without attribute storage, passed through as leaves for strategies to handle
_OPAQUE_TYPES = (
    str,
    int,
    float,
    bytes,
    bytearray,
    complex,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    decimal.Decimal,
    uuid.UUID,
    enum.Enum,
    PurePath,
)

_UNSUPPORTED_TYPES = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    weakref.ref,
)


@runtime_checkable
class Reflectable(Protocol):
    """
    Protocol for instances that describe their own attributes.

    Implementations return the name/value pairs that should be recorded for the instance. A class
    may additionally set ``__type_identity__`` to control the identity string written under the
    marker key.
    """

    def __reflect__(self) -> Mapping[str, Any]: ...


class Reflector:
    """
    Converts values into generic nodes.

    Args:
        marker: Key injected into mappings produced from typed instances. If None, instances
            are converted to untagged mappings.
        sort_keys: Whether instance attributes are emitted sorted by name.
    """

    def __init__(self, marker: str | None, sort_keys: bool = True) -> None:
        self.marker = marker
        self.sort_keys = sort_keys

    def reflect(self, value: Any) -> Node | Any:
        """
        Reflect a value into a generic node.

        Raises:
            ReflectionError: If the value (or anything nested in it) cannot be represented.
        """
        if value is None or type(value) in _SCALAR_TYPES:
            return value

        if type(value) is dict:
            return {key: self.reflect(val) for key, val in value.items()}

        if type(value) in (list, tuple):
            return [self.reflect(val) for val in value]

        if isinstance(value, (set, frozenset)):
            return [self.reflect(val) for val in sorted(value, key=repr)]

        if isinstance(value, _UNSUPPORTED_TYPES):
            raise ReflectionError(
                f"Cannot reflect value of type '{type_identity(value)}': unsupported embedded value"
            )

        if isinstance(value, _OPAQUE_TYPES):
            return value

        if isinstance(value, Reflectable):
            return self._tag(value, dict(value.__reflect__()))

        if isinstance(value, dict):
            return self._tag(value, dict(value))

        if isinstance(value, (list, tuple)):
            logger.debug(f"Reflecting sequence subclass '{type_identity(value)}' without a tag")
            return [self.reflect(val) for val in value]

        attributes = _attributes_of(value)
        if attributes is None:
            raise ReflectionError(
                f"Cannot reflect value of type '{type_identity(value)}': "
                "instance has no attribute storage"
            )
        return self._tag(value, attributes)

    def _tag(self, instance: Any, attributes: dict[str, Any]) -> dict[str, Any]:
        """Build a (possibly tagged) mapping from an instance's attributes."""
        if self.marker is not None and self.marker in attributes:
            raise ReflectionError(
                f"Instance of '{type_identity(instance)}' has an attribute named after the "
                f"marker key '{self.marker}'"
            )

        names = sorted(attributes, key=str) if self.sort_keys else list(attributes)
        node: dict[str, Any] = {}
        if self.marker is not None:
            node[self.marker] = type_identity(instance)
        for name in names:
            node[name] = self.reflect(attributes[name])
        return node


def reflect(value: Any, *, marker: str | None = UNSET, sort_keys: bool | None = None) -> Any:
    """
    Reflect a value into generic nodes using the global settings for anything not given.

    Already generic input is returned as an equal copy, so reflection is idempotent.

    Args:
        value: Value to reflect. None is returned unchanged.
        marker: Marker key override; None disables tagging.
        sort_keys: Attribute ordering override.

    Returns:
        The generic node, or None for empty input.

    Raises:
        ReflectionError: If the value cannot be represented.
    """
    if value is None:
        return None
    settings = get_global_settings()
    reflector = Reflector(
        marker=settings.marker if marker is UNSET else marker,
        sort_keys=settings.sort_keys if sort_keys is None else sort_keys,
    )
    return reflector.reflect(value)


def _attributes_of(instance: Any) -> dict[str, Any] | None:
    """
    Collect an instance's attributes from its ``__dict__`` and ``__slots__``.

    Returns None if the instance stores no attributes at all.
    """
    cls = type(instance)
    has_dict = hasattr(instance, "__dict__")
    slot_names = _slot_names(cls)
    if not has_dict and not slot_names:
        return None

    attributes: dict[str, Any] = dict(vars(instance)) if has_dict else {}
    missing = object()
    for name in slot_names:
        val = getattr(instance, name, missing)
        if val is not missing:
            attributes[name] = val
    return attributes


def _slot_names(cls: type) -> list[str]:
    """Return the attribute names declared via ``__slots__`` anywhere in a class hierarchy."""
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            if name not in names:
                names.append(name)
    return names
