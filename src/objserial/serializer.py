"""
Public serialize/deserialize entry points and the ``Serializer`` base class.

``serialize`` reflects a value into generic nodes and collapses them with any registered
strategies; ``deserialize`` reflects its input (a no-op for generic data) and expands tagged
mappings back into instances.

Example:
    >>> class Point(Serializer):
    ...     __type_identity__ = "Point"
    ...
    ...     def __init__(self, x, y):
    ...         self.x = x
    ...         self.y = y
    >>> data = Point(10, 10).serialize()
    >>> data
    {'__CLASS__': 'Point', 'x': 10, 'y': 10}
    >>> point = Point.deserialize(data)
    >>> (type(point).__name__, point.x, point.y)
    ('Point', 10, 10)

Cyclic object graphs are not supported. Break cycles before serializing (for example by removing
back-references) and restore them after deserializing.
"""

from __future__ import annotations

from typing import Any

from objserial._typing import UNSET
from objserial._typing import CollapseFn
from objserial._typing import Direction
from objserial._typing import ExpandFn
from objserial.plugins.manager import get_hooks
from objserial.reflection import Reflector
from objserial.registry import GLOBAL_NAMESPACE
from objserial.registry import Strategy
from objserial.registry import StrategyRegistry
from objserial.registry import default_registry
from objserial.registry import namespace_chain
from objserial.settings import get_global_settings
from objserial.transform import Transformer


def serialize(
    value: Any,
    *,
    marker: str | None = UNSET,
    namespace: Any = None,
    registry: StrategyRegistry | None = None,
) -> Any:
    """
    Serialize a value into generic nodes.

    Args:
        value: Value to serialize. None returns None.
        marker: Marker key for this call only. None disables tagging, omitted uses the global
            settings.
        namespace: Consuming class (or its identity) whose strategies take precedence over the
            global ones.
        registry: Registry to use. Defaults to the process-wide registry.

    Returns:
        Nested dicts, lists and scalars.

    Raises:
        ReflectionError: If the value contains something that cannot be reflected.
        ReconstructionError: If a collapse routine needs an instance that cannot be rebuilt.
    """
    if value is None:
        return None

    hooks = get_hooks()
    hooks.before_serialize(value=value)
    try:
        result = _run(value, "collapse", marker, namespace, registry)
    except Exception as e:
        hooks.on_serialization_error(value=value, direction="collapse", error=e)
        raise
    hooks.after_serialize(value=value, result=result)
    return result


def deserialize(
    data: Any,
    *,
    marker: str | None = UNSET,
    namespace: Any = None,
    registry: StrategyRegistry | None = None,
) -> Any:
    """
    Deserialize generic nodes, rebuilding every tagged mapping into an instance of its type.

    Args:
        data: Generic nodes, typically produced by ``serialize``. None returns None.
        marker: Marker key for this call only. None disables expansion of tagged mappings,
            omitted uses the global settings.
        namespace: Consuming class (or its identity) whose strategies take precedence over the
            global ones.
        registry: Registry to use. Defaults to the process-wide registry.

    Raises:
        ReflectionError: If the data contains something that cannot be reflected.
        ReconstructionError: If a tagged type cannot be resolved or constructed.
    """
    if data is None:
        return None

    hooks = get_hooks()
    hooks.before_deserialize(data=data)
    try:
        result = _run(data, "expand", marker, namespace, registry)
    except Exception as e:
        hooks.on_serialization_error(value=data, direction="expand", error=e)
        raise
    hooks.after_deserialize(data=data, result=result)
    return result


def _run(
    value: Any,
    direction: Direction,
    marker: str | None,
    namespace: Any,
    registry: StrategyRegistry | None,
) -> Any:
    settings = get_global_settings()
    marker = settings.marker if marker is UNSET else marker
    registry = registry if registry is not None else default_registry

    node = Reflector(marker=marker, sort_keys=settings.sort_keys).reflect(value)
    transformer = Transformer(registry, namespace_chain(namespace), marker)
    return transformer.transform(node, direction)


class Serializer:
    """
    Base class giving instances ``serialize``/``deserialize`` methods.

    Subclasses are registered automatically so their tagged mappings can be rebuilt, and can
    register strategies that only apply when serializing through them. Strategies registered on
    ``Serializer`` itself are global.

    Examples:
        >>> import datetime
        >>> class Event(Serializer):
        ...     __type_identity__ = "Event"
        ...
        ...     def __init__(self, when):
        ...         self.when = when
        >>> _ = Event.register_strategy(datetime.datetime, collapse=lambda dt: dt.isoformat())
        >>> Event(datetime.datetime(2024, 1, 1)).serialize()
        {'__CLASS__': 'Event', 'when': '2024-01-01T00:00:00'}
    """

    __type_identity__ = GLOBAL_NAMESPACE

    _registry: StrategyRegistry = default_registry

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry.register_type(cls)

    def serialize(self, value: Any = UNSET, *, marker: str | None = UNSET) -> Any:
        """
        Serialize ``value``, or this instance if no value is given, using this class's strategies.
        """
        target = self if value is UNSET else value
        return serialize(target, marker=marker, namespace=type(self), registry=self._registry)

    @classmethod
    def deserialize(cls, data: Any, *, marker: str | None = UNSET) -> Any:
        """Deserialize ``data`` using this class's strategies."""
        return deserialize(data, marker=marker, namespace=cls, registry=cls._registry)

    @classmethod
    def register_strategy(
        cls,
        type_: Any,
        *,
        collapse: CollapseFn | None = None,
        expand: ExpandFn | None = None,
    ) -> Strategy:
        """
        Register a strategy used when serializing through this class.

        Called on ``Serializer`` itself, the strategy is registered globally.
        """
        return cls._registry.register(cls, type_, collapse=collapse, expand=expand)
