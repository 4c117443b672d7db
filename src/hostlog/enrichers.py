"""Enrichers — add host properties to log events, computing each value once.

``CachedEnricher`` turns a zero-argument computer into an enricher:

  * on the first ``enrich`` call it computes the value and stores the
    resulting ``Property`` in a single slot;
  * on every call it adds that property to the event *only if absent*, so a
    value supplied by the call site always wins.

The slot is written without a lock.  Two threads racing on the first event
may both compute, but the computers are deterministic so both store an
equal property and every reader sees the correct value.

The four host enrichers compose a ``CachedEnricher`` with one computer from
``hostlog.computers``:

  HostPathEnricher         HostPath         "/opt/host/bin/host"
  HostVersionEnricher      HostVersion      16.0
  HostVersionNameEnricher  HostVersionName  "Host 2016 64-bit"
  HostBitnessEnricher      HostBitness      "64-bit"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from hostlog import computers
from hostlog.errors import InvalidArgumentError, UnavailableError
from hostlog.events import LogEvent, Property, PropertyFactory
from hostlog.host import HostEnvironment, ProcessHost


@runtime_checkable
class Enricher(Protocol):
    def enrich(self, event: LogEvent, factory: PropertyFactory) -> None: ...


class CachedEnricher:
    """Enricher that memoizes one computed property.

    Args:
        name:    Property name added to events.
        compute: Zero-argument callable returning the value.  May raise
                 ``UnavailableError``; the property is then skipped for
                 that event and nothing is cached.
    """

    def __init__(self, name: str, compute: Callable[[], Any]) -> None:
        if not name:
            raise InvalidArgumentError("enricher property name must be non-empty")
        if not callable(compute):
            raise InvalidArgumentError(f"compute must be callable, got {compute!r}")
        self.name = name
        self._compute = compute
        self._cached: Property | None = None

    @property
    def cached_property(self) -> Property | None:
        """The memoized property, or None before the first successful compute."""
        return self._cached

    def enrich(self, event: LogEvent, factory: PropertyFactory) -> None:
        prop = self._cached
        if prop is None:
            try:
                value = self._compute()
            except UnavailableError:
                return
            prop = self._cached = factory.create(self.name, value)
        event.add_if_absent(prop)

    def reset(self) -> None:
        """Forget the cached property; the next event recomputes it."""
        self._cached = None

    def __repr__(self) -> str:
        return f"CachedEnricher(name={self.name!r}, cached={self._cached is not None})"


class HostPathEnricher:
    """Adds ``HostPath``: where the host application lives on disk."""

    PROPERTY_NAME = "HostPath"

    def __init__(self, host: HostEnvironment | None = None) -> None:
        host = host if host is not None else ProcessHost()
        self._cache = CachedEnricher(self.PROPERTY_NAME, lambda: computers.host_path(host))

    def enrich(self, event: LogEvent, factory: PropertyFactory) -> None:
        self._cache.enrich(event, factory)


class HostVersionEnricher:
    """Adds ``HostVersion``: the raw numeric version the host reports."""

    PROPERTY_NAME = "HostVersion"

    def __init__(self, host: HostEnvironment | None = None) -> None:
        host = host if host is not None else ProcessHost()
        self._cache = CachedEnricher(self.PROPERTY_NAME, lambda: computers.host_version(host))

    def enrich(self, event: LogEvent, factory: PropertyFactory) -> None:
        self._cache.enrich(event, factory)


class HostVersionNameEnricher:
    """Adds ``HostVersionName``, e.g. ``"Host 2016"`` or ``"Host 2016 32-bit"``.

    Args:
        host:            Host facts; defaults to ``ProcessHost()``.
        include_bitness: Append the process bitness to the name.
        name:            Label prefix for the version name.
    """

    PROPERTY_NAME = "HostVersionName"

    def __init__(
        self,
        host: HostEnvironment | None = None,
        *,
        include_bitness: bool = True,
        name: str = "Host",
    ) -> None:
        host = host if host is not None else ProcessHost()
        self.include_bitness = include_bitness
        self._cache = CachedEnricher(
            self.PROPERTY_NAME,
            lambda: computers.version_name(host, include_bitness=include_bitness, name=name),
        )

    def enrich(self, event: LogEvent, factory: PropertyFactory) -> None:
        self._cache.enrich(event, factory)


class HostBitnessEnricher:
    """Adds ``HostBitness``: ``"64-bit"`` or ``"32-bit"``."""

    PROPERTY_NAME = "HostBitness"

    def __init__(self, host: HostEnvironment | None = None) -> None:
        host = host if host is not None else ProcessHost()
        self._cache = CachedEnricher(self.PROPERTY_NAME, lambda: computers.bitness(host))

    def enrich(self, event: LogEvent, factory: PropertyFactory) -> None:
        self._cache.enrich(event, factory)
