"""JSON serializer implementation."""

import importlib
import json
from datetime import date, datetime
from typing import Any


class SerializationError(Exception):
    """Raised when serialization or deserialization fails."""

    pass


class JsonSerializer:
    """JSON serializer for field values kept out of process.

    Dates and datetimes survive a round trip. Other objects are stored as
    their ``__dict__`` tagged with the importable path of their class, and
    are rebuilt as instances of that class without calling ``__init__``.
    GraphQL libraries resolving fields through ``getattr`` (Strawberry)
    therefore read a cached object exactly like a fresh one.

    Classes defined inside a function cannot be imported back and are
    rejected on write.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the JSON serializer.

        Args:
            encoding: Character encoding to use.
        """
        self._encoding = encoding

    def serialize(self, value: Any) -> bytes:
        """Serialize value to bytes.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        try:
            json_str = json.dumps(value, default=self._default_encoder)
            return json_str.encode(self._encoding)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        """Deserialize bytes to value.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        try:
            json_str = data.decode(self._encoding)
            return json.loads(json_str, object_hook=self._object_hook)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SerializationError(f"Failed to deserialize data: {e}") from e

    def _default_encoder(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return {"__datetime__": obj.isoformat()}
        if isinstance(obj, date):
            return {"__date__": obj.isoformat()}
        if hasattr(obj, "__dict__"):
            cls = type(obj)
            if "<locals>" in cls.__qualname__:
                raise TypeError(f"Local class {cls.__qualname__} cannot be restored")
            return {
                "__object__": f"{cls.__module__}:{cls.__qualname__}",
                "data": obj.__dict__,
            }
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    def _object_hook(self, obj: dict[str, Any]) -> Any:
        if len(obj) == 1:
            if "__datetime__" in obj:
                return datetime.fromisoformat(obj["__datetime__"])
            if "__date__" in obj:
                return date.fromisoformat(obj["__date__"])
        if len(obj) == 2 and "__object__" in obj and "data" in obj:
            return self._restore(obj["__object__"], obj["data"])
        return obj

    def _restore(self, path: str, data: dict[str, Any]) -> Any:
        module_name, _, qualname = path.partition(":")
        try:
            target: Any = importlib.import_module(module_name)
            for part in qualname.split("."):
                target = getattr(target, part)
        except (ImportError, AttributeError) as e:
            raise SerializationError(f"Cannot restore object of type {path}") from e

        instance = target.__new__(target)
        instance.__dict__.update(data)
        return instance
