from typing import Any, Callable, Union

from typing_extensions import Literal

Direction = Literal["collapse", "expand"]
"""Direction of a transform: collapse while serializing, expand while deserializing."""

Node = Union[dict[str, Any], list[Any], str, int, float, bool, None]
"""Generic node produced by reflection: a mapping, a sequence or a scalar."""

CollapseFn = Callable[[Any], Any]
"""Routine replacing an instance with a custom generic value during serialization."""

ExpandFn = Callable[[Any], Any]
"""Routine post-processing a reconstructed instance during deserialization."""


class _Unset:
    """Sentinel type for arguments that fall back to the global settings when omitted."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()
"""Marker for an omitted argument, distinct from an explicit None."""
