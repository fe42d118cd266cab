"""Construction of typed instances from reflected attribute mappings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from objserial.exceptions import ReconstructionError
from objserial.utils import type_identity

logger = logging.getLogger(__name__)


def construct(cls: type[Any], attributes: Mapping[str, Any]) -> Any:
    """
    Build an instance of ``cls`` directly from attribute values.

    The class's ``__init__`` is not called. Classes that need custom rebuilding can define a
    ``__construct__(cls, attributes)`` classmethod, which is used instead. ``dict`` subclasses
    are filled with their items, everything else has each attribute set on a bare instance
    (bypassing ``__setattr__`` so frozen dataclasses and slotted classes work too).

    Args:
        cls: Class to instantiate.
        attributes: Attribute names mapped to their (already expanded) values.

    Returns:
        The new instance.

    Raises:
        ReconstructionError: If the instance cannot be created or an attribute cannot be set.
    """
    identity = type_identity(cls)
    hook = getattr(cls, "__construct__", None)
    try:
        if hook is not None:
            return hook(dict(attributes))

        instance = cls.__new__(cls)
        if isinstance(instance, dict):
            instance.update(attributes)
            return instance

        for name, value in attributes.items():
            object.__setattr__(instance, name, value)
        return instance
    except ReconstructionError:
        raise
    except Exception as e:
        logger.debug(f"Failed to construct '{identity}'", exc_info=True)
        raise ReconstructionError(f"Could not construct an instance of '{identity}': {e}") from e
