"""
Registry of per-type serialization strategies.

A strategy is a pair of optional routines attached to a type identity: ``collapse`` replaces an
instance with a custom value while serializing, ``expand`` post-processes a reconstructed instance
while deserializing. Strategies are scoped by namespace, either the identity of a consuming class
or the library-wide ``GLOBAL_NAMESPACE``.

Example:
    >>> import datetime
    >>> registry = StrategyRegistry()
    >>> _ = registry.register(
    ...     GLOBAL_NAMESPACE, datetime.datetime, collapse=lambda dt: dt.isoformat()
    ... )
    >>> collapse = registry.resolve(namespace_chain(), "datetime.datetime", "collapse")
    >>> collapse(datetime.datetime(2024, 1, 1))
    '2024-01-01T00:00:00'
"""

from __future__ import annotations

import builtins
import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from objserial._typing import CollapseFn
from objserial._typing import Direction
from objserial._typing import ExpandFn
from objserial.exceptions import ReconstructionError
from objserial.exceptions import StrategyError
from objserial.utils import build_repr
from objserial.utils import resolve_class_from_path
from objserial.utils import type_identity

logger = logging.getLogger(__name__)

GLOBAL_NAMESPACE = "objserial"
"""Namespace consulted after the consuming class's own namespace."""


@dataclass(frozen=True)
class Strategy:
    """
    Collapse and/or expand routines for one type identity.

    Raises:
        StrategyError: If neither routine is given, or a given routine is not callable.
    """

    collapse: CollapseFn | None = None
    """Called with the instance while serializing; its return value replaces the instance."""

    expand: ExpandFn | None = None
    """Called with the reconstructed instance while deserializing; its return value is kept."""

    def __post_init__(self) -> None:
        if self.collapse is None and self.expand is None:
            raise StrategyError(
                "Couldn't register serialization strategy: "
                "at least one of 'collapse' or 'expand' is required"
            )
        for name in ("collapse", "expand"):
            routine = getattr(self, name)
            if routine is not None and not callable(routine):
                raise StrategyError(
                    f"Couldn't register serialization strategy: '{name}' must be callable, "
                    f"got {type(routine).__name__}"
                )

    def routine(self, direction: Direction) -> CollapseFn | ExpandFn | None:
        """Return the routine for a direction, or None if this strategy does not define it."""
        if direction not in ("collapse", "expand"):
            raise ValueError(f"Unknown transform direction: {direction!r}")
        return getattr(self, direction)


class StrategyRegistry:
    """
    Registry of strategies and of the classes that tagged mappings can be rebuilt into.

    All operations are guarded by a re-entrant lock, so registering from several threads while
    other threads serialize is safe.
    """

    def __init__(self) -> None:
        self._strategies: dict[str, dict[str, Strategy]] = {}
        self._types: dict[str, type[Any]] = {}
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        with self._lock:
            count = sum(len(entries) for entries in self._strategies.values())
            return build_repr(
                "StrategyRegistry", kwargs={"strategies": count, "types": len(self._types)}
            )

    # region Strategies

    def register(
        self,
        namespace: Any,
        type_: Any,
        strategy: Strategy | None = None,
        *,
        collapse: CollapseFn | None = None,
        expand: ExpandFn | None = None,
    ) -> Strategy:
        """
        Register a strategy for a type within a namespace.

        A later registration for the same (namespace, type) pair replaces the earlier one. When
        ``type_`` is a class, it is also registered for reconstruction under its identity.

        Args:
            namespace: Consuming class, instance of it, identity string, or ``GLOBAL_NAMESPACE``.
            type_: Type (or type identity string) the strategy applies to.
            strategy: Prebuilt strategy. Mutually exclusive with ``collapse``/``expand``.
            collapse: Serialization routine.
            expand: Deserialization routine.

        Returns:
            The registered strategy.

        Raises:
            StrategyError: If the namespace or type is missing, or no routine is given.
        """
        if namespace is None or namespace == "":
            raise StrategyError("Couldn't register serialization strategy: namespace is required")
        if type_ is None or type_ == "":
            raise StrategyError("Couldn't register serialization strategy: type is required")

        if strategy is None:
            strategy = Strategy(collapse=collapse, expand=expand)
        elif collapse is not None or expand is not None:
            raise StrategyError(
                "Couldn't register serialization strategy: pass either a Strategy or "
                "collapse/expand routines, not both"
            )

        scope = type_identity(namespace)
        identity = type_identity(type_)
        with self._lock:
            self._strategies.setdefault(scope, {})[identity] = strategy
            if isinstance(type_, type):
                self._types[identity] = type_
        logger.debug(f"Registered serialization strategy for '{identity}' in namespace '{scope}'")
        return strategy

    def unregister(self, namespace: Any, type_: Any) -> bool:
        """Remove a strategy. Returns False if nothing was registered for the pair."""
        scope = type_identity(namespace)
        identity = type_identity(type_)
        with self._lock:
            entries = self._strategies.get(scope, {})
            if identity not in entries:
                return False
            del entries[identity]
            if not entries:
                del self._strategies[scope]
        logger.debug(f"Unregistered serialization strategy for '{identity}' in namespace '{scope}'")
        return True

    def lookup(self, namespaces: Iterable[str], type_: Any) -> Strategy | None:
        """
        Find the strategy for a type, searching namespaces in order.

        The first namespace holding an entry for the type wins; entries are never merged across
        namespaces.
        """
        identity = type_identity(type_)
        with self._lock:
            for scope in namespaces:
                strategy = self._strategies.get(scope, {}).get(identity)
                if strategy is not None:
                    return strategy
        return None

    def resolve(
        self, namespaces: Iterable[str], type_: Any, direction: Direction
    ) -> CollapseFn | ExpandFn | None:
        """
        Find the routine for a type and direction, searching namespaces in order.

        Note: the search stops at the first namespace with an entry for the type even if that
        entry lacks a routine for ``direction``. A class-scoped collapse-only strategy therefore
        hides a global expand routine for the same type.
        """
        strategy = self.lookup(namespaces, type_)
        if strategy is None:
            return None
        return strategy.routine(direction)

    def strategies(self) -> dict[tuple[str, str], Strategy]:
        """Return a snapshot of all registered strategies keyed by (namespace, type identity)."""
        with self._lock:
            return {
                (scope, identity): strategy
                for scope, entries in self._strategies.items()
                for identity, strategy in entries.items()
            }

    # region Types

    def register_type(self, cls: type[Any], identity: str | None = None) -> str:
        """
        Make a class available for reconstruction under an identity.

        Args:
            cls: Class to register.
            identity: Identity to register under. Defaults to ``type_identity(cls)``.

        Returns:
            The identity the class was registered under.
        """
        if not isinstance(cls, type):
            raise TypeError(f"Expected a class, got {type(cls).__name__}")
        identity = identity or type_identity(cls)
        with self._lock:
            self._types[identity] = cls
        logger.debug(f"Registered type '{identity}'")
        return identity

    def resolve_type(self, identity: str) -> type[Any]:
        """
        Resolve a type identity to a class.

        Registered classes are checked first, then built-ins, then the identity is imported as a
        dotted path. Classes found by import are cached.

        Raises:
            ReconstructionError: If the identity cannot be resolved to a class.
        """
        with self._lock:
            cls = self._types.get(identity)
        if cls is not None:
            return cls

        builtin = getattr(builtins, identity, None)
        cls = builtin if isinstance(builtin, type) else resolve_class_from_path(identity)
        if cls is None:
            raise ReconstructionError(f"Could not resolve type '{identity}'")

        with self._lock:
            self._types.setdefault(identity, cls)
        return cls

    def clear(self) -> None:
        """Remove every registered strategy and type."""
        with self._lock:
            self._strategies.clear()
            self._types.clear()


default_registry = StrategyRegistry()
"""Process-wide registry used when no registry is passed explicitly."""


def namespace_chain(namespace: Any = None) -> tuple[str, ...]:
    """
    Build the namespace search order for a consuming class (or none).

    Examples:
        >>> namespace_chain()
        ('objserial',)
        >>> namespace_chain("Point")
        ('Point', 'objserial')
    """
    if namespace is None:
        return (GLOBAL_NAMESPACE,)
    scope = type_identity(namespace)
    if scope == GLOBAL_NAMESPACE:
        return (GLOBAL_NAMESPACE,)
    return (scope, GLOBAL_NAMESPACE)


def register_strategy(
    namespace: Any,
    type_: Any,
    *,
    collapse: CollapseFn | None = None,
    expand: ExpandFn | None = None,
    registry: StrategyRegistry | None = None,
) -> Strategy:
    """
    Register a strategy in the given registry (the default registry if omitted).

    See ``StrategyRegistry.register`` for details.
    """
    registry = registry if registry is not None else default_registry
    return registry.register(namespace, type_, collapse=collapse, expand=expand)
