"""Log event contract — properties, the property factory and add-if-absent.

hostlog does not own a log event type.  A structlog ``event_dict`` already is
one: a mutable mapping from property name to value that every processor may
edit before the renderer runs.  ``LogEvent`` is a thin view over such a
mapping that adds the one mutation the enrichers rely on::

    event = LogEvent(event_dict)
    event.add_if_absent(Property("HostBitness", "64-bit"))

The view never copies: edits land in the wrapped mapping.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Protocol

from hostlog.errors import InvalidArgumentError

# Scalars a property may carry as-is; mappings and sequences are "structured".
_SCALAR_TYPES = (str, int, float, bool, datetime)


@dataclass(frozen=True)
class Property:
    """A named value attached to a log event."""

    name: str
    value: Any

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgumentError(f"property name must be a non-empty string, got {self.name!r}")


class PropertyFactory(Protocol):
    def create(self, name: str, value: Any) -> Property: ...


class DefaultPropertyFactory:
    """Build properties from scalar or structured values.

    Structured values are copied so that later mutation by the caller cannot
    change a property that an enricher has already cached.  ``LogEvent``
    copies them again on insertion, so each event gets its own instance.
    """

    def create(self, name: str, value: Any) -> Property:
        return Property(name, _freeze(value))


def _freeze(value: Any) -> Any:
    if value is None or isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, Mapping):
        return {str(k): _freeze(v) for k, v in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [_freeze(v) for v in value]
    raise InvalidArgumentError(f"unsupported property value type: {type(value).__name__}")


def _detach(value: Any) -> Any:
    """Copy dicts and lists so an event never shares them with a cached property."""
    if isinstance(value, dict):
        return {k: _detach(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_detach(v) for v in value]
    return value


class LogEvent:
    """Mutable view over one event's property mapping.

    Args:
        properties: The mapping to wrap — usually a structlog ``event_dict``.
                    Defaults to a fresh empty dict.
    """

    def __init__(self, properties: MutableMapping[str, Any] | None = None) -> None:
        self._properties: MutableMapping[str, Any] = properties if properties is not None else {}

    @property
    def properties(self) -> Mapping[str, Any]:
        """Read-only view of the current properties, in insertion order."""
        return MappingProxyType(self._properties)

    def add_if_absent(self, prop: Property) -> bool:
        """Add *prop* unless a property with the same name exists.

        Returns True if the property was added.
        """
        if prop.name in self._properties:
            return False
        self._properties[prop.name] = _detach(prop.value)
        return True

    def add_or_update(self, prop: Property) -> None:
        self._properties[prop.name] = _detach(prop.value)

    def remove(self, name: str) -> None:
        self._properties.pop(name, None)

    def get(self, name: str, default: Any = None) -> Any:
        return self._properties.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"LogEvent({dict(self._properties)!r})"
