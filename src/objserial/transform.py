"""Recursive transformation of generic nodes in either direction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from objserial._typing import Direction
from objserial.construction import construct
from objserial.exceptions import ReconstructionError
from objserial.registry import StrategyRegistry
from objserial.utils import type_identity

logger = logging.getLogger(__name__)


class Transformer:
    """
    Walks a generic node tree and applies strategies to tagged mappings and typed leaves.

    Lists and dicts are rebuilt element by element, the input tree is never mutated. After a
    dict's values have been transformed, a dict carrying the marker key is handed to the
    strategy registry: when collapsing, a registered collapse routine replaces it (otherwise it
    is kept as is); when expanding, it is rebuilt into an instance of the tagged type and a
    registered expand routine, if any, is applied to that instance.

    Collapse routines receive an instance rebuilt from the tagged mapping, or the tagged mapping
    itself if its type cannot be resolved.

    Args:
        registry: Registry to resolve strategies and types from.
        namespaces: Namespaces to search, in order of precedence.
        marker: Marker key identifying tagged mappings. If None, no mapping is treated as tagged.
    """

    def __init__(
        self, registry: StrategyRegistry, namespaces: Sequence[str], marker: str | None
    ) -> None:
        self.registry = registry
        self.namespaces = tuple(namespaces)
        self.marker = marker

    def transform(self, node: Any, direction: Direction) -> Any:
        """
        Transform a node tree.

        Raises:
            ValueError: If ``direction`` is not "collapse" or "expand".
            ReconstructionError: If a tagged mapping cannot be rebuilt into its type.
        """
        if direction not in ("collapse", "expand"):
            raise ValueError(f"Unknown transform direction: {direction!r}")
        return self._walk(node, direction)

    def _walk(self, node: Any, direction: Direction) -> Any:
        if type(node) is list:
            return [self._walk(item, direction) for item in node]

        if type(node) is dict:
            data: dict[Any, Any] = {}
            for key, value in node.items():
                # the tag is not a domain attribute
                is_tag = self.marker is not None and key == self.marker
                data[key] = value if is_tag else self._walk(value, direction)
            if self.marker is not None and self.marker in data:
                return self._typify(data, direction)
            return data

        return self._leaf(node, direction)

    def _typify(self, data: dict[str, Any], direction: Direction) -> Any:
        identity = data[self.marker]  # type: ignore[index]
        if not isinstance(identity, str):
            if direction == "expand":
                raise ReconstructionError(
                    f"Marker key '{self.marker}' must hold a type identity string, "
                    f"got {type(identity).__name__}"
                )
            return data

        attributes = {key: value for key, value in data.items() if key != self.marker}
        routine = self.registry.resolve(self.namespaces, identity, direction)

        if direction == "collapse":
            if routine is None:
                return data
            logger.debug(f"Collapsing '{identity}' with registered strategy")
            try:
                cls = self.registry.resolve_type(identity)
            except ReconstructionError:
                logger.debug(f"Type '{identity}' is not resolvable, collapsing the tagged mapping")
                return routine(data)
            return routine(construct(cls, attributes))

        instance = construct(self.registry.resolve_type(identity), attributes)
        if routine is None:
            return instance
        logger.debug(f"Expanding '{identity}' with registered strategy")
        return routine(instance)

    def _leaf(self, value: Any, direction: Direction) -> Any:
        # type_identity reads a str argument as an identity, not as a value
        identity = type_identity(type(value))
        routine = self.registry.resolve(self.namespaces, identity, direction)
        if routine is None:
            return value
        logger.debug(f"Applying {direction} strategy to '{identity}' leaf")
        return routine(value)
