"""Hook specifications for objserial serialization lifecycle events."""

from typing import Any

from objserial._typing import Direction
from objserial.plugins.hooks.markers import hook_spec


class SerializationSpec:
    """Hook specifications for the serialize and deserialize entry points."""

    @hook_spec
    def before_serialize(self, value: Any) -> None:
        """
        Called before a value is serialized.

        Args:
            value: The value about to be serialized.
        """

    @hook_spec
    def after_serialize(self, value: Any, result: Any) -> None:
        """
        Called after a value has been serialized successfully.

        Args:
            value: The value that was serialized.
            result: The generic node produced.
        """

    @hook_spec
    def before_deserialize(self, data: Any) -> None:
        """
        Called before data is deserialized.

        Args:
            data: The generic node about to be deserialized.
        """

    @hook_spec
    def after_deserialize(self, data: Any, result: Any) -> None:
        """
        Called after data has been deserialized successfully.

        Args:
            data: The generic node that was deserialized.
            result: The reconstructed value.
        """

    @hook_spec
    def on_serialization_error(self, value: Any, direction: Direction, error: Exception) -> None:
        """
        Called when serialization or deserialization fails, before the error propagates.

        Args:
            value: The value (or data) being transformed.
            direction: "collapse" for serialization, "expand" for deserialization.
            error: The exception that was raised.
        """
