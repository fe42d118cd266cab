"""Shared utility helpers for objserial."""

from __future__ import annotations

import builtins
import importlib
import reprlib
from collections.abc import Iterator
from collections.abc import Mapping
from typing import Any


def build_repr(class_name: str, *leading: str, kwargs: Mapping[str, Any] | None = None) -> str:
    """Build a concise repr string: ``ClassName(leading…, k=v, …)``."""
    parts = list(leading)
    if kwargs:
        parts.extend(f"{k}={reprlib.Repr().repr(v)}" for k, v in kwargs.items())
    return f"{class_name}({', '.join(parts)})"


def type_identity(target: Any) -> str:
    """
    Return the identity string recorded for a type (or for the type of an instance).

    Strings are returned unchanged so callers can pass either form. Classes may override
    their identity with a ``__type_identity__`` class attribute; built-in types use their
    bare name and everything else uses ``module.qualname``.

    Examples:
        >>> type_identity(list)
        'list'
        >>> type_identity([1, 2])
        'list'
        >>> import decimal
        >>> type_identity(decimal.Decimal)
        'decimal.Decimal'
        >>> type_identity("Point")
        'Point'
    """
    if isinstance(target, str):
        return target
    cls = target if isinstance(target, type) else type(target)
    identity = cls.__dict__.get("__type_identity__")
    if isinstance(identity, str):
        return identity
    if cls.__module__ == "builtins" and getattr(builtins, cls.__qualname__, None) is cls:
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def resolve_class_from_path(path: str) -> type[Any] | None:
    """Resolve a dotted import path to a class/type object."""
    return next((obj for obj in _iter_path_targets(path) if isinstance(obj, type)), None)


def resolve_object_from_path(path: str) -> Any:
    """
    Resolve a dotted import path (``pkg.module.attr`` or ``pkg.module:attr``) to any object.

    Raises:
        ImportError: If no module prefix of the path can be imported or the attribute is missing.
    """
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
        obj: Any = importlib.import_module(module_name)
        try:
            for attr in attr_path.split("."):
                obj = getattr(obj, attr)
        except AttributeError as e:
            raise ImportError(f"Could not resolve '{path}': {e}") from e
        return obj

    for obj in _iter_path_targets(path):
        return obj

    raise ImportError(f"Could not resolve '{path}' to an importable object")


def _iter_path_targets(path: str) -> Iterator[Any]:
    """
    Yield the objects a dotted path can name, trying the longest importable module prefix first.

    Each split of the path into ``module.attr.attr`` whose module imports and whose attributes
    exist yields one object.
    """
    parts = path.split(".")

    for i in range(len(parts) - 1, 0, -1):
        try:
            obj: Any = importlib.import_module(".".join(parts[:i]))
        except Exception:
            continue

        try:
            for attr in parts[i:]:
                obj = getattr(obj, attr)
        except AttributeError:
            continue
        yield obj
