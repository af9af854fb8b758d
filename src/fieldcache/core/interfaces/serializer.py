"""Serializer interface."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Contract for stores that keep field values as bytes.

    Used by out-of-process stores (Redis); the in-memory store keeps
    resolved values as they are.
    """

    def serialize(self, value: Any) -> bytes:
        """Encode a resolved field value.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        ...

    def deserialize(self, data: bytes) -> Any:
        """Decode a stored field value.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        ...
